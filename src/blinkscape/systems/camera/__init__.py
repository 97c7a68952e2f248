"""Camera orientation and gaze-driven offset."""

from blinkscape.systems.camera.gaze import GazeCameraController, gaze_direction
from blinkscape.systems.camera.orientation import ZERO_ROTATION, look_orientation

__all__ = ["ZERO_ROTATION", "GazeCameraController", "gaze_direction", "look_orientation"]
