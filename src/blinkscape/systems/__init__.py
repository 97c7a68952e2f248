"""Systems that make up an experience."""

from blinkscape.systems.assets import LoadedAsset, LocalAssetLoader
from blinkscape.systems.audio import ArcadeTransitionCue
from blinkscape.systems.camera import GazeCameraController, look_orientation
from blinkscape.systems.gesture import GestureHoldDetector
from blinkscape.systems.scene import CameraPlacement, SceneDescriptor, SceneRegistry, load_scene_descriptors
from blinkscape.systems.transition import ArcadeFadeOverlay, TransitionController, TransitionState

__all__ = [
    "ArcadeFadeOverlay",
    "ArcadeTransitionCue",
    "CameraPlacement",
    "GazeCameraController",
    "GestureHoldDetector",
    "LoadedAsset",
    "LocalAssetLoader",
    "SceneDescriptor",
    "SceneRegistry",
    "TransitionController",
    "TransitionState",
    "load_scene_descriptors",
    "look_orientation",
]
