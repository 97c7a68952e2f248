"""Gaze-driven camera offset.

Looking left, right, up or down nudges the camera away from the active scene's
base rotation. The raw eye-look scores are noisy, so the offset eases toward
its target by a fixed fraction each frame (linear interpolation), the same
smoothing the camera manager applies when following a target.

Usage Example:
    gaze = GazeCameraController(camera, smoothing_factor=0.05)

    # Every frame
    gaze.update(signals, base_rotation=registry.base_rotation)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blinkscape.types import Vec3

if TYPE_CHECKING:
    from collections.abc import Mapping

    from blinkscape.types import CameraHandle

logger = logging.getLogger(__name__)

LOOK_IN_LEFT = "eyeLookInLeft"
LOOK_IN_RIGHT = "eyeLookInRight"
LOOK_OUT_LEFT = "eyeLookOutLeft"
LOOK_OUT_RIGHT = "eyeLookOutRight"
LOOK_UP_LEFT = "eyeLookUpLeft"
LOOK_UP_RIGHT = "eyeLookUpRight"
LOOK_DOWN_LEFT = "eyeLookDownLeft"
LOOK_DOWN_RIGHT = "eyeLookDownRight"


def gaze_direction(signals: Mapping[str, float]) -> tuple[float, float]:
    """Reduce eye-look scores to a (horizontal, vertical) direction.

    Positive horizontal means looking right, positive vertical means looking
    down. Missing channels count as 0.

    Args:
        signals: Per-frame channel scores in [0, 1].

    Returns:
        Tuple of (horizontal, vertical), each in [-1, 1].
    """
    look_left = (signals.get(LOOK_IN_LEFT, 0.0) + signals.get(LOOK_OUT_RIGHT, 0.0)) / 2
    look_right = (signals.get(LOOK_OUT_LEFT, 0.0) + signals.get(LOOK_IN_RIGHT, 0.0)) / 2
    look_up = (signals.get(LOOK_UP_LEFT, 0.0) + signals.get(LOOK_UP_RIGHT, 0.0)) / 2
    look_down = (signals.get(LOOK_DOWN_LEFT, 0.0) + signals.get(LOOK_DOWN_RIGHT, 0.0)) / 2
    return look_right - look_left, look_down - look_up


class GazeCameraController:
    """Eases the camera rotation toward where the viewer is looking.

    Attributes:
        camera: Camera whose rotation is written each update.
        smoothing_factor: Fraction of the remaining offset applied per update,
            clamped to (0, 1]. 1.0 disables smoothing.
        rotation_multiplier: Radians of rotation per unit of gaze direction.
        offset: Current smoothed ``(pitch, yaw)`` offset.
    """

    def __init__(
        self,
        camera: CameraHandle,
        smoothing_factor: float = 0.05,
        rotation_multiplier: float = 3.0,
    ) -> None:
        """Initialize the controller with no offset applied."""
        self.camera = camera
        self._smoothing_factor = 0.05
        self.smoothing_factor = smoothing_factor
        self.rotation_multiplier = rotation_multiplier
        self.offset: tuple[float, float] = (0.0, 0.0)

    @property
    def smoothing_factor(self) -> float:
        """Fraction of the remaining offset applied per update."""
        return self._smoothing_factor

    @smoothing_factor.setter
    def smoothing_factor(self, value: float) -> None:
        if value <= 0:
            logger.warning("Smoothing factor %s must be positive, using 0.01", value)
            value = 0.01
        self._smoothing_factor = min(1.0, value)

    def update(self, signals: Mapping[str, float], base_rotation: Vec3) -> Vec3:
        """Advance the smoothed offset one step and apply it to the camera.

        Args:
            signals: Per-frame channel scores.
            base_rotation: Rotation set by the active scene's camera placement.

        Returns:
            The rotation written to the camera.
        """
        horizontal, vertical = gaze_direction(signals)
        target_pitch = vertical * self.rotation_multiplier
        target_yaw = horizontal * self.rotation_multiplier

        pitch, yaw = self.offset
        pitch += (target_pitch - pitch) * self._smoothing_factor
        yaw += (target_yaw - yaw) * self._smoothing_factor
        self.offset = (pitch, yaw)

        rotation = base_rotation.offset(dx=pitch, dy=yaw)
        self.camera.rotation = rotation
        return rotation

    def reset(self) -> None:
        """Drop the accumulated offset."""
        self.offset = (0.0, 0.0)
