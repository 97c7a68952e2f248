"""Static scene configuration records.

A scene descriptor says where a scene's asset lives, how to place it and where
to put the camera when the scene becomes active. Descriptors are built once at
startup from settings and never change afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from blinkscape.types import UNIT_SCALE, Vec3

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraPlacement:
    """Where the camera goes when a scene activates.

    Attributes:
        position: Camera position in world space.
        look_at: Point the camera faces, or None to reset orientation.
    """

    position: Vec3
    look_at: Vec3 | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CameraPlacement:
        """Create a placement from config, accepting ``lookAt`` or ``look_at``."""
        target = data.get("look_at", data.get("lookAt"))
        return cls(
            position=Vec3.from_value(data.get("position")),
            look_at=Vec3.from_value(target) if target is not None else None,
        )


@dataclass(frozen=True)
class SceneDescriptor:
    """Immutable configuration for one loadable scene.

    Attributes:
        id: Unique scene identifier.
        name: Display name.
        locator: Asset locator handed to the asset loader.
        position: Asset position.
        scale: Asset scale.
        rotation: Asset rotation (Euler angles, radians).
        camera: Optional camera placement applied on activation.
        background: Optional opaque background specifier.
    """

    id: str
    name: str
    locator: str
    position: Vec3 = Vec3()
    scale: Vec3 = UNIT_SCALE
    rotation: Vec3 = Vec3()
    camera: CameraPlacement | None = None
    background: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SceneDescriptor:
        """Create a descriptor from a settings entry.

        Args:
            data: Mapping with ``id``, ``name``, ``path`` and optional
                ``position``, ``scale``, ``rotation``, ``camera`` and ``background``.

        Raises:
            KeyError: If ``id`` or ``path`` is missing.
        """
        locator = data.get("path", data.get("locator"))
        if locator is None:
            msg = "path"
            raise KeyError(msg)
        camera = data.get("camera")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            locator=str(locator),
            position=Vec3.from_value(data.get("position")),
            scale=Vec3.from_value(data.get("scale"), UNIT_SCALE),
            rotation=Vec3.from_value(data.get("rotation")),
            camera=CameraPlacement.from_dict(camera) if camera else None,
            background=data.get("background"),
        )


def load_scene_descriptors(entries: Iterable[Mapping[str, Any] | SceneDescriptor]) -> tuple[SceneDescriptor, ...]:
    """Build the ordered, immutable scene list.

    Args:
        entries: Settings mappings or ready-made descriptors.

    Returns:
        Tuple of descriptors in configuration order.

    Raises:
        ValueError: If two scenes share an id.
    """
    descriptors: list[SceneDescriptor] = []
    seen: set[str] = set()
    for entry in entries:
        descriptor = entry if isinstance(entry, SceneDescriptor) else SceneDescriptor.from_dict(entry)
        if descriptor.id in seen:
            msg = f"Duplicate scene id: {descriptor.id!r}"
            raise ValueError(msg)
        seen.add(descriptor.id)
        descriptors.append(descriptor)
    logger.debug("Loaded %d scene descriptors", len(descriptors))
    return tuple(descriptors)
