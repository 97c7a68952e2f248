"""Scene descriptors and the scene registry.

This module provides the SceneRegistry class, which loads, caches and
activates scene assets, and the immutable descriptors it is configured with.
"""

from blinkscape.systems.scene.descriptor import CameraPlacement, SceneDescriptor, load_scene_descriptors
from blinkscape.systems.scene.registry import SceneRegistry

__all__ = ["CameraPlacement", "SceneDescriptor", "SceneRegistry", "load_scene_descriptors"]
