"""Unit tests for SceneRegistry."""

import asyncio
import math
import unittest
from unittest.mock import MagicMock

import pytest

from blinkscape.errors import SceneIndexError, SceneLoadError
from blinkscape.events import EventBus, SceneLoadedEvent, SceneLoadFailedEvent, SceneSwitchedEvent
from blinkscape.systems.scene import CameraPlacement, SceneDescriptor
from blinkscape.types import LoadProgress, Vec3
from tests.helpers import FakeLoader, make_descriptors, make_registry


class TestSceneRegistryQueries(unittest.TestCase):
    """Unit test class for the registry's pure queries."""

    def setUp(self) -> None:
        """Create a three scene registry."""
        self.registry, _, _, _ = make_registry()

    def test_initial_state(self) -> None:
        """Test nothing is loaded or active after construction."""
        assert self.registry.current_index == -1
        assert self.registry.total_count == 3
        assert self.registry.loaded_count == 0
        assert not any(self.registry.is_loaded(i) for i in range(3))

    def test_is_loaded_out_of_range(self) -> None:
        """Test out-of-range indices are never loaded."""
        assert self.registry.is_loaded(-1) is False
        assert self.registry.is_loaded(3) is False

    def test_descriptor_at(self) -> None:
        """Test descriptor lookup returns None past either end."""
        descriptor = self.registry.descriptor_at(1)
        assert descriptor is not None
        assert descriptor.id == "scene1"
        assert self.registry.descriptor_at(3) is None
        assert self.registry.descriptor_at(-1) is None


class TestSceneRegistryLoading(unittest.IsolatedAsyncioTestCase):
    """Unit test class for load_scene()."""

    def setUp(self) -> None:
        """Create a registry over a fake loader."""
        self.event_bus = MagicMock()
        self.registry, self.loader, self.render_graph, self.camera = make_registry(event_bus=self.event_bus)

    async def test_load_caches_and_fetches_once(self) -> None:
        """Test a second load returns the cached handle without fetching."""
        first = await self.registry.load_scene(1)
        second = await self.registry.load_scene(1)

        assert first is second
        assert self.loader.fetches == ["scene1.glb"]
        assert self.registry.is_loaded(1)
        assert self.registry.asset_at(1) is first

    async def test_load_applies_descriptor_transform(self) -> None:
        """Test position, scale and rotation come from the descriptor."""
        descriptor = SceneDescriptor(
            id="moved",
            name="Moved",
            locator="moved.glb",
            position=Vec3(1, 2, 3),
            scale=Vec3(2, 2, 2),
            rotation=Vec3(0, math.pi, 0),
        )
        registry, _, _, _ = make_registry([descriptor])

        asset = await registry.load_scene(0)

        assert asset.position == Vec3(1, 2, 3)
        assert asset.scale == Vec3(2, 2, 2)
        assert asset.rotation == Vec3(0, math.pi, 0)

    async def test_load_out_of_range_raises(self) -> None:
        """Test bad indices raise SceneIndexError without fetching."""
        with pytest.raises(SceneIndexError) as exc_info:
            await self.registry.load_scene(3)

        assert exc_info.value.index == 3
        assert exc_info.value.total == 3
        assert isinstance(exc_info.value, IndexError)

        with pytest.raises(SceneIndexError):
            await self.registry.load_scene(-1)
        assert self.loader.fetches == []

    async def test_load_failure_leaves_slot_empty_and_is_retryable(self) -> None:
        """Test a failed fetch can be retried."""
        self.loader.failing.add("scene2.glb")

        with pytest.raises(SceneLoadError) as exc_info:
            await self.registry.load_scene(2)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert exc_info.value.locator == "scene2.glb"
        assert self.registry.is_loaded(2) is False

        self.loader.failing.clear()
        asset = await self.registry.load_scene(2)

        assert self.registry.asset_at(2) is asset
        assert self.loader.fetches == ["scene2.glb", "scene2.glb"]

    async def test_concurrent_loads_share_one_fetch(self) -> None:
        """Test overlapping loads of the same index fetch once."""
        gate = asyncio.Event()
        self.loader.gates["scene1.glb"] = gate

        first = asyncio.create_task(self.registry.load_scene(1))
        second = asyncio.create_task(self.registry.load_scene(1))
        await asyncio.sleep(0)
        gate.set()

        a, b = await asyncio.gather(first, second)

        assert a is b
        assert self.loader.fetches == ["scene1.glb"]

    async def test_concurrent_loads_share_failure(self) -> None:
        """Test a waiter sees the same load error and the slot stays retryable."""
        gate = asyncio.Event()
        self.loader.gates["scene1.glb"] = gate
        self.loader.failing.add("scene1.glb")

        first = asyncio.create_task(self.registry.load_scene(1))
        second = asyncio.create_task(self.registry.load_scene(1))
        await asyncio.sleep(0)
        gate.set()

        results = await asyncio.gather(first, second, return_exceptions=True)

        assert all(isinstance(r, SceneLoadError) for r in results)
        assert self.loader.fetches == ["scene1.glb"]
        assert self.registry.is_loaded(1) is False

    async def test_cancelled_caller_does_not_abort_other_waiters(self) -> None:
        """Test cancelling the caller that started a fetch leaves a waiting preload intact."""
        gate = asyncio.Event()
        self.loader.gates["scene0.glb"] = gate

        starter = asyncio.create_task(self.registry.load_scene(0))
        await asyncio.sleep(0)
        preload = asyncio.create_task(self.registry.preload_from(0))
        for _ in range(3):
            await asyncio.sleep(0)

        starter.cancel()
        await asyncio.gather(starter, return_exceptions=True)
        gate.set()
        loaded, failed = await preload

        assert starter.cancelled()
        assert loaded == [0, 1, 2]
        assert failed == []
        assert self.loader.fetches == ["scene0.glb", "scene1.glb", "scene2.glb"]

    async def test_fetch_finishes_after_only_caller_is_cancelled(self) -> None:
        """Test a fetch whose only caller went away still fills the slot."""
        gate = asyncio.Event()
        self.loader.gates["scene1.glb"] = gate

        caller = asyncio.create_task(self.registry.load_scene(1))
        await asyncio.sleep(0)
        caller.cancel()
        await asyncio.gather(caller, return_exceptions=True)

        gate.set()
        asset = await self.registry.load_scene(1)

        assert self.registry.asset_at(1) is asset
        assert self.loader.fetches == ["scene1.glb"]

    async def test_cancel_pending_stops_fetch_and_allows_retry(self) -> None:
        """Test cancel_pending() abandons in-flight fetches and leaves slots retryable."""
        gate = asyncio.Event()
        self.loader.gates["scene1.glb"] = gate

        caller = asyncio.create_task(self.registry.load_scene(1))
        for _ in range(2):
            await asyncio.sleep(0)

        await self.registry.cancel_pending()

        with pytest.raises(asyncio.CancelledError):
            await caller
        assert self.registry.is_loaded(1) is False

        gate.set()
        await self.registry.load_scene(1)
        assert self.loader.fetches == ["scene1.glb", "scene1.glb"]

    async def test_load_publishes_events(self) -> None:
        """Test loaded and failed events are published."""
        await self.registry.load_scene(0)
        self.loader.failing.add("scene1.glb")
        with pytest.raises(SceneLoadError):
            await self.registry.load_scene(1)

        events = [c.args[0] for c in self.event_bus.publish.call_args_list]
        assert events[0] == SceneLoadedEvent(0, "scene0")
        assert isinstance(events[1], SceneLoadFailedEvent)
        assert events[1].index == 1

    async def test_load_forwards_progress_callback(self) -> None:
        """Test the progress callback reaches the loader."""
        loader = MagicMock()
        asset = MagicMock()

        async def fetch(locator, on_progress=None):  # noqa: ANN001, ANN202
            on_progress(LoadProgress(5, 10))
            return asset

        loader.fetch = fetch
        registry, _, _, _ = make_registry(loader=loader)
        seen: list[LoadProgress] = []

        result = await registry.load_scene(0, on_progress=seen.append)

        assert result is asset
        assert seen == [LoadProgress(5, 10)]


class TestSceneRegistrySwitching(unittest.IsolatedAsyncioTestCase):
    """Unit test class for switch_to_scene()."""

    async def asyncSetUp(self) -> None:
        """Create a registry with scenes 0 and 1 loaded."""
        self.cue = MagicMock()
        self.background = MagicMock()
        self.event_bus = EventBus()
        self.switched: list[SceneSwitchedEvent] = []
        self.event_bus.subscribe(SceneSwitchedEvent, self.switched.append)

        descriptors = [
            *make_descriptors(2),
            SceneDescriptor(
                id="tower",
                name="Tower",
                locator="tower.glb",
                camera=CameraPlacement(Vec3(0, 0, 5), look_at=Vec3(0, 0, 0)),
                background="#101820",
            ),
        ]
        self.registry, self.loader, self.render_graph, self.camera = make_registry(
            descriptors,
            background=self.background,
            transition_cue=self.cue,
            event_bus=self.event_bus,
        )
        await self.registry.load_scene(0)
        await self.registry.load_scene(1)

    def test_switch_to_unloaded_scene_is_refused(self) -> None:
        """Test switching to an unloaded scene changes nothing."""
        assert self.registry.switch_to_scene(2) is False
        assert self.registry.current_index == -1
        self.render_graph.attach.assert_not_called()
        self.cue.play.assert_not_called()

    def test_switch_out_of_range_is_refused(self) -> None:
        """Test bad indices return False instead of raising."""
        assert self.registry.switch_to_scene(0)
        assert self.registry.switch_to_scene(7) is False
        assert self.registry.switch_to_scene(-1) is False
        assert self.registry.current_index == 0

    def test_switch_attaches_and_detaches(self) -> None:
        """Test the previous asset is swapped out of the render graph."""
        first = self.registry.asset_at(0)
        second = self.registry.asset_at(1)

        assert self.registry.switch_to_scene(0) is True
        self.render_graph.attach.assert_called_once_with(first.root)
        self.render_graph.detach.assert_not_called()

        assert self.registry.switch_to_scene(1) is True
        self.render_graph.detach.assert_called_once_with(first.root)
        self.render_graph.attach.assert_called_with(second.root)
        assert self.registry.current_index == 1

    def test_switch_publishes_event_and_plays_cue(self) -> None:
        """Test the switch event and the cue."""
        self.registry.switch_to_scene(0)
        self.registry.switch_to_scene(1)

        assert self.switched == [SceneSwitchedEvent(-1, 0, "scene0"), SceneSwitchedEvent(0, 1, "scene1")]
        assert self.cue.play.call_count == 2

    def test_cue_failure_does_not_undo_switch(self) -> None:
        """Test a failing cue is logged and the switch still succeeds."""
        self.cue.play.side_effect = RuntimeError("no audio device")

        assert self.registry.switch_to_scene(1) is True
        assert self.registry.current_index == 1

    async def test_switch_places_camera_with_look_at(self) -> None:
        """Test camera position and computed orientation."""
        await self.registry.load_scene(2)

        assert self.registry.switch_to_scene(2) is True

        assert self.camera.position == Vec3(0, 0, 5)
        pitch, yaw, roll = self.camera.rotation
        assert pitch == pytest.approx(0.0)
        assert yaw == pytest.approx(0.0)
        assert roll == 0.0
        assert self.registry.base_rotation == self.camera.rotation
        self.background.set_background.assert_called_once_with("#101820")

    async def test_switch_without_placement_resets_orientation(self) -> None:
        """Test scenes without a camera placement zero the rotation."""
        await self.registry.load_scene(2)
        self.registry.switch_to_scene(2)

        self.registry.switch_to_scene(0)

        assert self.camera.rotation == Vec3(0, 0, 0)
        assert self.camera.position == Vec3(0, 0, 5)
        assert self.registry.base_rotation == Vec3(0, 0, 0)
        self.background.set_background.assert_called_once()


class TestSceneRegistryPreload(unittest.IsolatedAsyncioTestCase):
    """Unit test class for preload_from()."""

    def setUp(self) -> None:
        """Create a four scene registry."""
        self.registry, self.loader, _, _ = make_registry(make_descriptors(4))

    async def test_preload_loads_remaining_scenes_in_order(self) -> None:
        """Test every scene from the start index is loaded in order."""
        seen: list[int] = []

        loaded, failed = await self.registry.preload_from(1, seen.append)

        assert seen == [1, 2, 3]
        assert loaded == [1, 2, 3]
        assert failed == []
        assert self.loader.fetches == ["scene1.glb", "scene2.glb", "scene3.glb"]
        assert self.registry.is_loaded(0) is False

    async def test_preload_continues_after_failure(self) -> None:
        """Test one failed scene does not stop the batch."""
        self.loader.failing.add("scene2.glb")
        seen: list[int] = []

        loaded, failed = await self.registry.preload_from(1, seen.append)

        assert seen == [1, 3]
        assert loaded == [1, 3]
        assert failed == [2]
        assert self.loader.fetches == ["scene1.glb", "scene2.glb", "scene3.glb"]
        assert self.registry.is_loaded(2) is False

    async def test_preload_is_sequential(self) -> None:
        """Test scene i+1 is not fetched before scene i finishes."""
        gate = asyncio.Event()
        self.loader.gates["scene1.glb"] = gate

        task = asyncio.create_task(self.registry.preload_from(1))
        for _ in range(5):
            await asyncio.sleep(0)
        assert self.loader.fetches == ["scene1.glb"]

        gate.set()
        await task
        assert self.loader.fetches == ["scene1.glb", "scene2.glb", "scene3.glb"]

    async def test_preload_skips_fetch_for_cached_scenes(self) -> None:
        """Test already cached scenes are reported without refetching."""
        await self.registry.load_scene(2)
        seen: list[int] = []

        await self.registry.preload_from(2, seen.append)

        assert seen == [2, 3]
        assert self.loader.fetches == ["scene2.glb", "scene3.glb"]

    async def test_preload_callback_error_does_not_stop_batch(self) -> None:
        """Test a raising callback is logged and the batch continues."""
        callback = MagicMock(side_effect=[ValueError("boom"), None, None])

        loaded, _ = await self.registry.preload_from(1, callback)

        assert loaded == [1, 2, 3]
        assert callback.call_count == 3

    async def test_preload_past_end_is_noop(self) -> None:
        """Test a start index past the last scene loads nothing."""
        assert await self.registry.preload_from(4) == ([], [])
        assert self.loader.fetches == []

    async def test_preload_negative_start_raises(self) -> None:
        """Test a negative start index is a caller bug."""
        with pytest.raises(SceneIndexError):
            await self.registry.preload_from(-1)

    async def test_preload_runs_alongside_switching(self) -> None:
        """Test background preloading does not touch the active scene."""
        await self.registry.load_scene(0)
        self.registry.switch_to_scene(0)
        gate = asyncio.Event()
        self.loader.gates["scene2.glb"] = gate

        task = asyncio.create_task(self.registry.preload_from(1))
        while not self.registry.is_loaded(1):
            await asyncio.sleep(0)

        assert self.registry.switch_to_scene(1) is True
        gate.set()
        await task

        assert self.registry.current_index == 1
        assert self.registry.loaded_count == 4


class TestSceneRegistryLoaderErrors(unittest.IsolatedAsyncioTestCase):
    """Unit test class for unexpected loader exceptions."""

    async def test_unexpected_loader_error_is_wrapped(self) -> None:
        """Test any loader exception surfaces as SceneLoadError."""
        loader = FakeLoader()

        async def broken(locator, on_progress=None):  # noqa: ANN001, ANN202, ARG001
            raise ValueError(locator)

        loader.fetch = broken  # type: ignore[method-assign]
        registry, _, _, _ = make_registry(loader=loader)

        with pytest.raises(SceneLoadError):
            await registry.load_scene(0)
        assert registry.loaded_count == 0
