"""Scene registry: loads, caches and activates scene assets.

This module provides the SceneRegistry class, which owns every loaded scene
asset and the index of the active scene. It handles:
- Fetching scene assets on demand through an external asset loader
- Caching loaded assets forever (there is no eviction)
- Preloading the remaining scenes in the background, one at a time
- Swapping the active asset in the render graph and placing the camera

Loading and switching are deliberately separate. ``switch_to_scene`` never
waits on I/O: it only accepts scenes that are already cached. Callers that
want a fade around the switch go through the TransitionController, which is
also the only guard against two switches overlapping.

Example:
    registry = SceneRegistry(descriptors, loader, render_graph, camera)

    await registry.load_scene(0)
    registry.switch_to_scene(0)

    preload = asyncio.create_task(registry.preload_from(1, on_each_loaded=print))
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import TYPE_CHECKING

from blinkscape.errors import SceneIndexError, SceneLoadError
from blinkscape.events import SceneLoadedEvent, SceneLoadFailedEvent, SceneSwitchedEvent
from blinkscape.systems.camera.orientation import ZERO_ROTATION, look_orientation

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from blinkscape.events import EventBus
    from blinkscape.systems.scene.descriptor import SceneDescriptor
    from blinkscape.types import (
        AssetHandle,
        AssetLoader,
        BackgroundSetter,
        CameraHandle,
        ProgressCallback,
        RenderGraph,
        TransitionCue,
        Vec3,
    )

logger = logging.getLogger(__name__)


class SceneRegistry:
    """Cache and state machine for the configured scenes.

    Every index starts unloaded. ``load_scene`` fills a slot exactly once;
    ``switch_to_scene`` makes a filled slot the active scene. The active index
    is -1 until the first successful switch and afterwards always points at a
    loaded slot.

    The registry performs no locking. It runs on a single asyncio event loop;
    its only suspension point is the asset fetch inside ``load_scene``.

    Attributes:
        loader: Fetches assets by locator.
        render_graph: Receives the active asset's visual root.
        camera: Positioned and oriented on every switch.
        background: Optional background setter.
        transition_cue: Optional flourish played after each switch.
        event_bus: Optional bus for load and switch events.
    """

    def __init__(
        self,
        descriptors: Iterable[SceneDescriptor],
        loader: AssetLoader,
        render_graph: RenderGraph,
        camera: CameraHandle,
        *,
        background: BackgroundSetter | None = None,
        transition_cue: TransitionCue | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the registry with every scene unloaded and none active.

        Args:
            descriptors: Ordered scene configuration. Fixed for the registry's lifetime.
            loader: Asset loader used by load_scene().
            render_graph: Render graph the active asset is attached to.
            camera: Camera placed by switch_to_scene().
            background: Receives each scene's background specifier, if any.
            transition_cue: Played after each successful switch.
            event_bus: Receives SceneLoaded/SceneLoadFailed/SceneSwitched events.
        """
        self._descriptors: tuple[SceneDescriptor, ...] = tuple(descriptors)
        self._loaded: list[AssetHandle | None] = [None] * len(self._descriptors)
        self._pending: dict[int, asyncio.Future[AssetHandle]] = {}
        self._current_index = -1
        self._base_rotation: Vec3 = ZERO_ROTATION

        self.loader = loader
        self.render_graph = render_graph
        self.camera = camera
        self.background = background
        self.transition_cue = transition_cue
        self.event_bus = event_bus

    @property
    def current_index(self) -> int:
        """Index of the active scene, -1 if none is active."""
        return self._current_index

    @property
    def total_count(self) -> int:
        """Number of configured scenes."""
        return len(self._descriptors)

    @property
    def base_rotation(self) -> Vec3:
        """Camera rotation set by the last switch, before any gaze offset."""
        return self._base_rotation

    @property
    def loaded_count(self) -> int:
        """Number of scenes currently cached."""
        return sum(1 for asset in self._loaded if asset is not None)

    def is_loaded(self, index: int) -> bool:
        """Check whether a scene is cached. Out-of-range indices are never loaded."""
        return 0 <= index < len(self._loaded) and self._loaded[index] is not None

    def descriptor_at(self, index: int) -> SceneDescriptor | None:
        """Get a scene's descriptor, or None if the index is out of range."""
        if 0 <= index < len(self._descriptors):
            return self._descriptors[index]
        return None

    def asset_at(self, index: int) -> AssetHandle | None:
        """Get a cached asset without loading it."""
        if 0 <= index < len(self._loaded):
            return self._loaded[index]
        return None

    def _check_index(self, index: int) -> SceneDescriptor:
        if not 0 <= index < len(self._descriptors):
            raise SceneIndexError(index, len(self._descriptors))
        return self._descriptors[index]

    async def load_scene(self, index: int, on_progress: ProgressCallback | None = None) -> AssetHandle:
        """Load a scene's asset, or return it from the cache.

        A cached scene returns immediately without touching the loader. The
        fetch itself runs in its own task, shared by every caller asking for
        the same index while it is in flight. Cancelling a caller only stops
        that caller from waiting; the fetch keeps going for the others.

        Args:
            index: Scene index.
            on_progress: Receives LoadProgress updates from the loader. Only
                used by the call that actually starts the fetch.

        Returns:
            The loaded asset handle.

        Raises:
            SceneIndexError: If index is out of range.
            SceneLoadError: If the fetch failed. The slot stays empty, so a
                later call retries.
        """
        descriptor = self._check_index(index)

        cached = self._loaded[index]
        if cached is not None:
            return cached

        pending = self._pending.get(index)
        if pending is None:
            pending = asyncio.ensure_future(self._load(index, descriptor, on_progress))
            pending.add_done_callback(partial(self._load_done, index))
            self._pending[index] = pending
        else:
            logger.debug("Scene %d already loading, waiting for it", index)

        return await asyncio.shield(pending)

    async def _load(
        self,
        index: int,
        descriptor: SceneDescriptor,
        on_progress: ProgressCallback | None,
    ) -> AssetHandle:
        """Fetch a scene and store it in its slot."""
        asset = await self._fetch(index, descriptor, on_progress)
        self._loaded[index] = asset
        logger.info("Scene %d loaded successfully: %s", index, descriptor.name)
        if self.event_bus:
            self.event_bus.publish(SceneLoadedEvent(index, descriptor.id))
        return asset

    def _load_done(self, index: int, task: asyncio.Future[AssetHandle]) -> None:
        if self._pending.get(index) is task:
            del self._pending[index]
        # Waiters re-raise the failure from shield(); consume it here.
        if not task.cancelled():
            task.exception()

    async def cancel_pending(self) -> None:
        """Cancel every fetch still in flight and wait for them to stop.

        Cancelled slots stay unloaded, so a later load_scene() refetches.
        """
        tasks = list(self._pending.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug("Cancelled %d in-flight scene loads", len(tasks))

    async def _fetch(
        self,
        index: int,
        descriptor: SceneDescriptor,
        on_progress: ProgressCallback | None,
    ) -> AssetHandle:
        """Fetch an asset and apply the descriptor's transform to it."""
        logger.info("Loading scene %d: %s", index, descriptor.name)
        try:
            asset = await self.loader.fetch(descriptor.locator, on_progress)
        except Exception as exc:
            logger.error("Error loading scene %d (%s): %s", index, descriptor.locator, exc)  # noqa: TRY400
            if self.event_bus:
                self.event_bus.publish(SceneLoadFailedEvent(index, descriptor.id, str(exc)))
            raise SceneLoadError(index, descriptor.locator) from exc

        asset.position = descriptor.position
        asset.scale = descriptor.scale
        asset.rotation = descriptor.rotation
        return asset

    def switch_to_scene(self, index: int) -> bool:
        """Make a cached scene the active one.

        Detaches the previous asset, attaches the new one, places the camera,
        applies the background and plays the transition cue. Never loads.

        Must not run while another switch is in progress; the
        TransitionController is the guard for that.

        Args:
            index: Scene index to activate.

        Returns:
            True if the scene is now active, False if the index is out of range
            or the scene is not loaded yet. A False result changes nothing.
        """
        if not 0 <= index < len(self._descriptors):
            logger.error("Invalid scene index: %d", index)
            return False

        asset = self._loaded[index]
        if asset is None:
            logger.warning("Scene %d not loaded yet", index)
            return False

        previous_index = self._current_index
        if previous_index >= 0:
            previous = self._loaded[previous_index]
            if previous is not None:
                self.render_graph.detach(previous.root)
                logger.debug("Removed scene %d from render graph", previous_index)

        self.render_graph.attach(asset.root)
        self._current_index = index

        descriptor = self._descriptors[index]
        self._apply_camera(descriptor)
        if descriptor.background is not None and self.background is not None:
            self.background.set_background(descriptor.background)

        logger.info("Switched to scene %d: %s", index, descriptor.name)
        if self.event_bus:
            self.event_bus.publish(SceneSwitchedEvent(previous_index, index, descriptor.id))
        self._play_cue()
        return True

    def _apply_camera(self, descriptor: SceneDescriptor) -> None:
        """Place the camera and record its rotation as the new base rotation."""
        placement = descriptor.camera
        rotation = ZERO_ROTATION
        if placement is not None:
            self.camera.position = placement.position
            if placement.look_at is not None:
                rotation = look_orientation(placement.position, placement.look_at)

        self.camera.rotation = rotation
        self._base_rotation = rotation

    def _play_cue(self) -> None:
        if self.transition_cue is None:
            return
        try:
            self.transition_cue.play()
        except Exception:
            logger.exception("Transition cue failed")

    async def preload_from(
        self,
        start_index: int,
        on_each_loaded: Callable[[int], None] | None = None,
    ) -> tuple[list[int], list[int]]:
        """Load every scene from start_index to the end, one after another.

        Each load finishes (or fails) before the next one starts. A failed
        load is logged and skipped; the batch itself never raises a load error.
        Safe to run as a background task while scenes are being switched.

        Args:
            start_index: First index to load. Indices past the end are a no-op.
            on_each_loaded: Called with each index that is loaded, including
                scenes that were already cached.

        Returns:
            Tuple of (loaded indices, failed indices).

        Raises:
            SceneIndexError: If start_index is negative.
        """
        if start_index < 0:
            raise SceneIndexError(start_index, len(self._descriptors))

        logger.info("Preloading scenes starting from %d", start_index)
        loaded: list[int] = []
        failed: list[int] = []
        for index in range(start_index, len(self._descriptors)):
            try:
                await self.load_scene(index)
            except SceneLoadError:
                logger.exception("Failed to preload scene %d", index)
                failed.append(index)
                continue

            logger.debug("Preloaded scene %d", index)
            loaded.append(index)
            if on_each_loaded:
                try:
                    on_each_loaded(index)
                except Exception:
                    logger.exception("Preload callback failed for scene %d", index)

        logger.info("Finished preloading scenes (%d loaded, %d failed)", len(loaded), len(failed))
        return loaded, failed
