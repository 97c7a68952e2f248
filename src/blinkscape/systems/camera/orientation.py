"""Camera orientation math.

Generic look-at helpers build a rotation matrix from an up vector, which flips
or rolls the camera when the target sits straight above or below it. Scenes
here only ever need yaw and pitch, so the angles are computed directly and roll
stays at zero.
"""

import math

from blinkscape.types import Vec3

ZERO_ROTATION = Vec3()


def look_orientation(position: Vec3, target: Vec3) -> Vec3:
    """Compute the rotation that points a camera at a target.

    Args:
        position: Camera position.
        target: Point to face.

    Returns:
        Rotation as ``Vec3(pitch, yaw, roll)`` with roll fixed at 0. A camera
        at ``(0, 0, 5)`` facing the origin gets yaw 0 and pitch 0.
    """
    dx, dy, dz = target - position
    yaw = math.atan2(-dx, -dz)
    pitch = math.atan2(dy, math.hypot(dx, dz))
    return Vec3(pitch, yaw, 0.0)
