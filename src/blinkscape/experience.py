"""Experience orchestration.

This module provides the Experience class, which wires the scene registry,
the blink-hold detector, the transition controller and the gaze camera into
the per-frame flow:

1. ``start()`` loads the first scene, shows it, then keeps loading the rest
   in a background task.
2. ``on_frame()`` runs once per frame with the latest face signal scores. It
   eases the camera toward the viewer's gaze and, when a sustained blink
   fires, starts a fade transition to the next scene.
3. ``shutdown()`` cancels whatever is still running.

Nothing here blocks on a slow download: a blink that arrives before the next
scene is loaded is simply refused (and reported through the event bus as a
TransitionRejectedEvent, for a UI that wants to say so).
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from blinkscape.clock import monotonic_ms
from blinkscape.errors import SceneLoadError
from blinkscape.events import BlinkHoldTriggeredEvent, PreloadCompleteEvent

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Mapping
    from typing import Any

    from blinkscape.events import EventBus
    from blinkscape.systems.camera.gaze import GazeCameraController
    from blinkscape.systems.gesture.hold import GestureHoldDetector
    from blinkscape.systems.scene.registry import SceneRegistry
    from blinkscape.systems.transition.controller import TransitionController
    from blinkscape.types import LoadProgress

logger = logging.getLogger(__name__)


class Experience:
    """Per-frame driver for a blink-controlled multi-scene experience.

    Attributes:
        registry: Scene cache and active scene.
        controller: Fade transition controller.
        detector: Blink-hold detector.
        gaze: Optional gaze camera controller.
        event_bus: Optional bus for preload and trigger events.
        loading_percent: Progress of the first scene's download, 0 to 100.
    """

    def __init__(
        self,
        registry: SceneRegistry,
        controller: TransitionController,
        detector: GestureHoldDetector,
        *,
        gaze: GazeCameraController | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the experience. Nothing is loaded until start()."""
        self.registry = registry
        self.controller = controller
        self.detector = detector
        self.gaze = gaze
        self.event_bus = event_bus
        self.loading_percent = 0.0

        self._tasks: set[asyncio.Task[Any]] = set()
        self._preload_task: asyncio.Task[None] | None = None
        self._transition_task: asyncio.Task[bool] | None = None
        self._on_scene_ready: Callable[[int], None] | None = None

    @property
    def preload_task(self) -> asyncio.Task[None] | None:
        """Background preload task, None before start()."""
        return self._preload_task

    @property
    def transition_task(self) -> asyncio.Task[bool] | None:
        """Most recently scheduled transition task."""
        return self._transition_task

    async def start(self, on_scene_ready: Callable[[int], None] | None = None) -> bool:
        """Load and show the first scene, then preload the rest in the background.

        Args:
            on_scene_ready: Called with each index the background preload loads.

        Returns:
            True if the first scene is showing. False if there are no scenes or
            the first scene failed to load.
        """
        if self.registry.total_count == 0:
            logger.error("No scenes configured")
            return False

        self._on_scene_ready = on_scene_ready
        try:
            await self.registry.load_scene(0, on_progress=self._on_initial_progress)
        except SceneLoadError:
            logger.exception("Failed to load the first scene")
            return False

        self.loading_percent = 100.0
        self.registry.switch_to_scene(0)
        if self.registry.total_count > 1:
            self._preload_task = self._spawn(self._preload(1))
        return True

    def _on_initial_progress(self, progress: LoadProgress) -> None:
        self.loading_percent = progress.percent
        logger.debug("%.0f%% loaded", self.loading_percent)

    async def _preload(self, start_index: int) -> None:
        loaded, failed = await self.registry.preload_from(start_index, self._scene_ready)
        if self.event_bus:
            self.event_bus.publish(PreloadCompleteEvent(loaded, failed))

    def _scene_ready(self, index: int) -> None:
        if self._on_scene_ready:
            self._on_scene_ready(index)

    def next_index(self) -> int:
        """Index the next transition goes to, wrapping after the last scene."""
        total = self.registry.total_count
        if total == 0:
            return -1
        return (self.registry.current_index + 1) % total

    def hold_progress(self, now_ms: float | None = None) -> float:
        """Progress of the current blink hold, 0 to 1, for UI feedback."""
        return self.detector.progress(now_ms)

    def on_frame(self, signals: Mapping[str, float], now_ms: float | None = None) -> bool:
        """Process one frame of face signal scores.

        Args:
            signals: Blendshape scores for this frame.
            now_ms: Frame timestamp in milliseconds. Defaults to the clock.

        Returns:
            True if this frame started a transition.
        """
        if self.gaze is not None:
            self.gaze.update(signals, self.registry.base_rotation)

        now = monotonic_ms() if now_ms is None else now_ms
        if not self.detector.sample(signals, now):
            return False

        if self.event_bus:
            self.event_bus.publish(BlinkHoldTriggeredEvent(self.detector.last_hold_ms or 0.0))

        if self.controller.is_transitioning() or (
            self._transition_task is not None and not self._transition_task.done()
        ):
            logger.info("Blink ignored, transition already in progress")
            return False

        next_index = self.next_index()
        logger.info("Blink trigger, transitioning to scene %d", next_index)
        self._transition_task = self._spawn(self.controller.transition_to(next_index))
        return True

    def update(self, delta_time: float) -> None:
        """Advance time-based visuals such as the fade overlay.

        Args:
            delta_time: Seconds since the last frame.
        """
        update_overlay = getattr(self.controller.overlay, "update", None)
        if update_overlay is not None:
            update_overlay(delta_time)

    async def run(
        self,
        read_signals: Callable[[], Mapping[str, float]],
        *,
        frame_interval: float = 1 / 60,
        render: Callable[[], None] | None = None,
        stop: asyncio.Event | None = None,
    ) -> None:
        """Run the frame loop until ``stop`` is set.

        Each frame reads the latest signals, feeds them to on_frame(), advances
        the overlay and calls ``render``. Loading and transitions proceed
        between frames.

        Args:
            read_signals: Returns the latest signal scores.
            frame_interval: Seconds between frames.
            render: Draws the current frame.
            stop: Ends the loop when set. Runs forever if None.
        """
        stop = stop or asyncio.Event()
        last = monotonic_ms()
        while not stop.is_set():
            now = monotonic_ms()
            self.on_frame(read_signals(), now)
            self.update((now - last) / 1000.0)
            last = now
            if render is not None:
                render()
            await asyncio.sleep(frame_interval)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def shutdown(self) -> None:
        """Cancel the preload, any transition and any scene fetch still running."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        await self.registry.cancel_pending()
        logger.debug("Experience shut down (%d tasks cancelled)", len(tasks))
