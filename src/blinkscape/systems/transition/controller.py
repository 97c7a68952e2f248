"""Fade transitions between scenes.

This module provides the TransitionController class, which wraps a scene
switch in a fade to black and back:

    NONE -> FADING_OUT -> SWITCHING -> FADING_IN -> NONE

At most one transition runs at a time. A request that arrives while another
is running is dropped, not queued, and so is a request for a scene that has
not finished loading. Both come back as False so the caller can decide
whether to tell the viewer.

Example:
    controller = TransitionController(registry, overlay, fade_duration_ms=1000)

    if not await controller.transition_to(2):
        show_toast("Scene still loading")
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from blinkscape.errors import TransitionError
from blinkscape.events import (
    TransitionCompletedEvent,
    TransitionFailedEvent,
    TransitionRejectedEvent,
    TransitionStartedEvent,
)
from blinkscape.types import TransitionState

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from blinkscape.events import Event, EventBus
    from blinkscape.systems.scene.registry import SceneRegistry
    from blinkscape.types import FadeOverlay

logger = logging.getLogger(__name__)


class TransitionController:
    """Serializes scene switches behind a fade overlay.

    The controller reads and commands the registry but never holds on to
    scene assets itself.

    Attributes:
        registry: Scene registry the switch is delegated to.
        overlay: Overlay shown during fade-out and hidden during fade-in.
        event_bus: Optional bus for transition events.
    """

    def __init__(
        self,
        registry: SceneRegistry,
        overlay: FadeOverlay,
        *,
        fade_duration_ms: float = 1000,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the controller with no transition in flight.

        Args:
            registry: Scene registry to switch scenes in.
            overlay: Fade overlay to show and hide.
            fade_duration_ms: Length of each fade half, clamped to >= 0. Also
                applied to the overlay when it has a fade_duration_ms of its own.
            sleep: Coroutine function used to wait out each fade, in seconds.
            event_bus: Receives TransitionStarted/Completed/Failed/Rejected events.
        """
        self.registry = registry
        self.overlay = overlay
        self.event_bus = event_bus
        self._sleep = sleep
        self._fade_duration_ms = 1000.0
        self.fade_duration_ms = fade_duration_ms

        self._transitioning = False
        self._state = TransitionState.NONE

    @property
    def fade_duration_ms(self) -> float:
        """Length of the fade-out and of the fade-in, in milliseconds."""
        return self._fade_duration_ms

    @fade_duration_ms.setter
    def fade_duration_ms(self, value: float) -> None:
        self._fade_duration_ms = max(0.0, float(value))
        if hasattr(self.overlay, "fade_duration_ms"):
            self.overlay.fade_duration_ms = self._fade_duration_ms

    @property
    def state(self) -> TransitionState:
        """Current phase of the transition."""
        return self._state

    def is_transitioning(self) -> bool:
        """Check whether a transition is in flight."""
        return self._transitioning

    async def transition_to(self, next_index: int) -> bool:
        """Fade out, switch to a loaded scene and fade back in.

        Args:
            next_index: Scene index to switch to.

        Returns:
            True once the fade-in finished. False if another transition is in
            flight, the scene is not loaded, or the switch failed mid-way. After
            a mid-way failure the overlay is back in its pre-call state.
        """
        if self._transitioning:
            logger.info("Transition already in progress, ignoring request for scene %d", next_index)
            self._publish(TransitionRejectedEvent(next_index, "in_flight"))
            return False

        if not self.registry.is_loaded(next_index):
            logger.warning("Scene %d not loaded yet, cannot transition", next_index)
            self._publish(TransitionRejectedEvent(next_index, "not_loaded"))
            return False

        from_index = self.registry.current_index
        overlay_was_visible = self.overlay.visible
        logger.info("Starting transition to scene %d", next_index)
        self._transitioning = True
        self._publish(TransitionStartedEvent(next_index))

        try:
            self._state = TransitionState.FADING_OUT
            await self._fade_out()

            self._state = TransitionState.SWITCHING
            if not self.registry.switch_to_scene(next_index):
                msg = f"Scene switch to {next_index} failed"
                raise TransitionError(msg)

            self._state = TransitionState.FADING_IN
            await self._fade_in()
        except asyncio.CancelledError:
            self._restore_overlay(overlay_was_visible)
            raise
        except Exception as exc:
            logger.exception("Transition to scene %d failed", next_index)
            self._restore_overlay(overlay_was_visible)
            self._publish(TransitionFailedEvent(next_index, str(exc)))
            return False
        finally:
            self._transitioning = False
            self._state = TransitionState.NONE

        logger.info("Transition complete")
        self._publish(TransitionCompletedEvent(from_index, next_index))
        return True

    async def _fade_out(self) -> None:
        """Cover the scene and wait for the fade to finish."""
        self.overlay.show()
        await self._sleep(self._fade_duration_ms / 1000.0)

    async def _fade_in(self) -> None:
        """Uncover the scene and wait for the fade to finish."""
        self.overlay.hide()
        await self._sleep(self._fade_duration_ms / 1000.0)

    def _restore_overlay(self, visible: bool) -> None:  # noqa: FBT001
        if visible:
            self.overlay.show()
        else:
            self.overlay.hide()

    def _publish(self, event: Event) -> None:
        if self.event_bus:
            self.event_bus.publish(event)
