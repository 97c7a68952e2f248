"""Custom types and collaborator protocols.

The engine never renders, parses assets or plays audio itself. Everything it
drives from the outside is described here as a ``Protocol`` so any renderer,
loader or audio backend with the right shape can be plugged in.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, NamedTuple, Protocol, runtime_checkable


class Vec3(NamedTuple):
    """Three floats used for positions, scales and rotations."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_value(cls, value: Mapping[str, float] | Sequence[float] | None, default: Vec3 | None = None) -> Vec3:
        """Build a vector from a ``{"x", "y", "z"}`` mapping or a 3-sequence.

        Args:
            value: Mapping, sequence or None.
            default: Returned when value is None. Defaults to the zero vector.

        Raises:
            ValueError: If a sequence does not have exactly three items.
        """
        if value is None:
            return default if default is not None else cls()
        if isinstance(value, Mapping):
            return cls(float(value.get("x", 0.0)), float(value.get("y", 0.0)), float(value.get("z", 0.0)))
        items = list(value)
        if len(items) != 3:  # noqa: PLR2004
            msg = f"Expected 3 components, got {len(items)}"
            raise ValueError(msg)
        return cls(float(items[0]), float(items[1]), float(items[2]))

    def __sub__(self, other: object) -> Vec3:
        """Component-wise subtraction."""
        if not isinstance(other, tuple) or len(other) != 3:  # noqa: PLR2004
            return NotImplemented
        return Vec3(self.x - other[0], self.y - other[1], self.z - other[2])

    def offset(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> Vec3:
        """Return a copy shifted by the given deltas."""
        return Vec3(self.x + dx, self.y + dy, self.z + dz)


UNIT_SCALE = Vec3(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class LoadProgress:
    """Byte progress reported by an asset loader."""

    bytes_loaded: int
    bytes_total: int

    @property
    def fraction(self) -> float:
        """Progress in [0, 1]; 0 when the total size is unknown."""
        if self.bytes_total <= 0:
            return 0.0
        return max(0.0, min(1.0, self.bytes_loaded / self.bytes_total))

    @property
    def percent(self) -> float:
        """Progress as a percentage clamped to [0, 100]."""
        return self.fraction * 100.0


ProgressCallback = Callable[[LoadProgress], None]


class TransitionState(Enum):
    """Phases of a fade transition."""

    NONE = auto()
    FADING_OUT = auto()
    SWITCHING = auto()
    FADING_IN = auto()


@runtime_checkable
class AssetHandle(Protocol):
    """A loaded asset. Only its transform and visual root are touched."""

    position: Vec3
    scale: Vec3
    rotation: Vec3

    @property
    def root(self) -> Any:  # noqa: ANN401
        """Object added to or removed from the render graph."""
        ...


class AssetLoader(Protocol):
    """Fetches an asset by locator."""

    async def fetch(self, locator: str, on_progress: ProgressCallback | None = None) -> AssetHandle:
        """Fetch the asset, reporting byte progress when possible."""
        ...


class RenderGraph(Protocol):
    """The scene graph the renderer draws."""

    def attach(self, root: Any) -> None:  # noqa: ANN401
        """Add a visual root."""
        ...

    def detach(self, root: Any) -> None:  # noqa: ANN401
        """Remove a visual root."""
        ...


class CameraHandle(Protocol):
    """Camera with settable position and yaw-pitch-roll rotation.

    ``rotation`` is stored as ``Vec3(pitch, yaw, roll)`` and applied yaw first.
    """

    position: Vec3
    rotation: Vec3


class BackgroundSetter(Protocol):
    """Accepts an opaque background or ambience specifier."""

    def set_background(self, background: Any) -> None:  # noqa: ANN401
        """Apply the background."""
        ...


class TransitionCue(Protocol):
    """Fire-and-forget flourish played after a successful switch."""

    def play(self) -> None:
        """Play the cue."""
        ...


class FadeOverlay(Protocol):
    """Full-screen overlay used to hide the scene switch.

    Animated overlays may also expose a writable ``fade_duration_ms`` and an
    ``update(delta_time)`` method. The transition controller keeps the former
    in step with its own fade wait and Experience.update() calls the latter
    once per frame.
    """

    @property
    def visible(self) -> bool:
        """Whether the overlay is currently covering the scene."""
        ...

    def show(self) -> None:
        """Start fading to opaque."""
        ...

    def hide(self) -> None:
        """Start fading to transparent."""
        ...
