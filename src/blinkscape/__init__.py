"""Blinkscape - blink-controlled scene transitions for webcam-driven 3D experiences.

This package provides the engine behind an experience where the viewer moves
between 3D scenes by keeping their eyes closed:
- Scene registry that loads, caches and activates scene assets
- Background preloading that never blocks the current scene
- Sustained blink detection with an edge-triggered trigger
- Fade transitions with at most one switch in flight
- Gaze-driven camera offset

Quick start:
    # Create a settings.py file in your project root:
    # BLINK_REQUIRED_DURATION_MS = 2000
    # SCENES = [{"id": "lobby", "name": "Lobby", "path": "lobby.glb"}, ...]

    from blinkscape import create_experience

    experience = create_experience(render_graph, camera)
    await experience.start()
    await experience.run(read_blendshapes, render=renderer.render)

Alternative usage:
    from blinkscape.conf import settings

    settings.configure(FADE_DURATION_MS=500)
"""

__version__ = "0.1.0"

from blinkscape.conf import settings
from blinkscape.errors import BlinkscapeError, SceneIndexError, SceneLoadError, TransitionError
from blinkscape.events import EventBus
from blinkscape.experience import Experience
from blinkscape.helpers import create_experience, setup_logging
from blinkscape.systems import (
    ArcadeFadeOverlay,
    ArcadeTransitionCue,
    CameraPlacement,
    GazeCameraController,
    GestureHoldDetector,
    LoadedAsset,
    LocalAssetLoader,
    SceneDescriptor,
    SceneRegistry,
    TransitionController,
    TransitionState,
)
from blinkscape.types import LoadProgress, Vec3

__all__ = [
    "ArcadeFadeOverlay",
    "ArcadeTransitionCue",
    "BlinkscapeError",
    "CameraPlacement",
    "EventBus",
    "Experience",
    "GazeCameraController",
    "GestureHoldDetector",
    "LoadProgress",
    "LoadedAsset",
    "LocalAssetLoader",
    "SceneDescriptor",
    "SceneIndexError",
    "SceneLoadError",
    "SceneRegistry",
    "TransitionController",
    "TransitionError",
    "TransitionState",
    "Vec3",
    "__version__",
    "create_experience",
    "settings",
    "setup_logging",
]
