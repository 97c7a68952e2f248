"""Test doubles shared by the test modules."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

from blinkscape.systems.assets import LoadedAsset
from blinkscape.systems.scene import SceneDescriptor, SceneRegistry
from blinkscape.types import Vec3

if TYPE_CHECKING:
    from blinkscape.types import ProgressCallback


class FakeCamera:
    """Camera with plain position and rotation attributes."""

    def __init__(self) -> None:
        self.position = Vec3(0.0, 2.0, 3.0)
        self.rotation = Vec3()


class FakeOverlay:
    """Overlay that records show/hide calls."""

    def __init__(self, *, visible: bool = False) -> None:
        self.visible = visible
        self.calls: list[str] = []

    def show(self) -> None:
        self.visible = True
        self.calls.append("show")

    def hide(self) -> None:
        self.visible = False
        self.calls.append("hide")


class FakeLoader:
    """Asset loader that counts fetches and can fail or stall per locator.

    Attributes:
        fetches: Locators in the order they were fetched.
        failing: Locators that raise OSError.
        gates: Locators that wait on an asyncio.Event before returning.
    """

    def __init__(self) -> None:
        self.fetches: list[str] = []
        self.failing: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}

    async def fetch(self, locator: str, on_progress: ProgressCallback | None = None) -> LoadedAsset:
        self.fetches.append(locator)
        gate = self.gates.get(locator)
        if gate is not None:
            await gate.wait()
        if locator in self.failing:
            msg = f"cannot fetch {locator}"
            raise OSError(msg)
        return LoadedAsset(locator, b"")


def make_descriptors(count: int = 3) -> list[SceneDescriptor]:
    """Build ``count`` simple descriptors with ids scene0, scene1, ..."""
    return [SceneDescriptor(id=f"scene{i}", name=f"Scene {i}", locator=f"scene{i}.glb") for i in range(count)]


def make_registry(
    descriptors: list[SceneDescriptor] | None = None,
    loader: FakeLoader | None = None,
    **kwargs: object,
) -> tuple[SceneRegistry, FakeLoader, MagicMock, FakeCamera]:
    """Build a registry over fakes.

    Returns:
        Tuple of (registry, loader, render graph mock, camera).
    """
    loader = loader or FakeLoader()
    render_graph = MagicMock()
    camera = FakeCamera()
    registry = SceneRegistry(
        descriptors if descriptors is not None else make_descriptors(),
        loader,
        render_graph,
        camera,
        **kwargs,  # type: ignore[arg-type]
    )
    return registry, loader, render_graph, camera
