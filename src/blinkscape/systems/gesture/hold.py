"""Sustained blink detection.

A single frame with both eyes closed means nothing; people blink constantly.
The GestureHoldDetector only fires once both eyes have stayed closed for a
required duration without a single open frame in between.

Detection is edge-triggered: one hold fires at most once. After firing, the
eyes have to open and close again before the next trigger.

Usage Example:
    detector = GestureHoldDetector(threshold=0.5, required_duration_ms=3000)

    # Once per frame with the latest face blendshape scores
    if detector.sample({"eyeBlinkLeft": 0.9, "eyeBlinkRight": 0.8}):
        start_transition()

    # For a progress ring while the eyes are closed
    ring.fill = detector.progress()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from blinkscape.clock import monotonic_ms

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)

BLINK_LEFT = "eyeBlinkLeft"
BLINK_RIGHT = "eyeBlinkRight"


class GestureHoldDetector:
    """Turns per-frame eye-closure scores into a single trigger per hold.

    A channel counts as closed when its score is strictly above the threshold.
    The hold condition is both channels closed at once.

    Not safe to call from more than one place per frame: ``sample`` expects
    non-decreasing timestamps and keeps no lock.

    Attributes:
        left_channel: Signal name read for the left eye.
        right_channel: Signal name read for the right eye.
        last_hold_ms: Duration of the hold that fired most recently.
    """

    def __init__(
        self,
        threshold: float = 0.5,
        required_duration_ms: float = 3000,
        *,
        left_channel: str = BLINK_LEFT,
        right_channel: str = BLINK_RIGHT,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        """Initialize the detector in the idle (not holding) state.

        Args:
            threshold: Closed-eye score threshold, clamped to [0, 1].
            required_duration_ms: Hold length needed to fire, clamped to >= 0.
            left_channel: Signal name for the left eye.
            right_channel: Signal name for the right eye.
            clock: Millisecond clock used when no timestamp is passed.
        """
        self.left_channel = left_channel
        self.right_channel = right_channel
        self._clock = clock
        self._threshold = 0.5
        self._required_duration_ms = 3000.0
        self.threshold = threshold
        self.required_duration_ms = required_duration_ms

        self._holding = False
        self._hold_start: float | None = None
        self.last_hold_ms: float | None = None

    @property
    def threshold(self) -> float:
        """Score a channel must exceed to count as closed."""
        return self._threshold

    @threshold.setter
    def threshold(self, value: float) -> None:
        self._threshold = max(0.0, min(1.0, float(value)))

    @property
    def required_duration_ms(self) -> float:
        """How long the hold must last before it fires."""
        return self._required_duration_ms

    @required_duration_ms.setter
    def required_duration_ms(self, value: float) -> None:
        self._required_duration_ms = max(0.0, float(value))

    @property
    def is_holding(self) -> bool:
        """Whether a hold is currently in progress."""
        return self._holding

    @property
    def hold_start(self) -> float | None:
        """Timestamp the current hold began, None when idle."""
        return self._hold_start

    def sample(self, signals: Mapping[str, float], now_ms: float | None = None) -> bool:
        """Feed one frame of signal scores.

        Args:
            signals: Channel scores for this frame. Missing channels read as 0.
            now_ms: Frame timestamp in milliseconds. Defaults to the clock.

        Returns:
            True exactly once per hold, on the first frame where the hold has
            lasted at least required_duration_ms. False otherwise.
        """
        now = self._clock() if now_ms is None else now_ms
        left_closed = signals.get(self.left_channel, 0.0) > self._threshold
        right_closed = signals.get(self.right_channel, 0.0) > self._threshold

        if left_closed and right_closed:
            if not self._holding or self._hold_start is None:
                self._holding = True
                self._hold_start = now
                logger.debug("Blink detected, starting timer")
                return False

            elapsed = now - self._hold_start
            if elapsed >= self._required_duration_ms:
                logger.info("Blink sustained for %.0fms, triggering", elapsed)
                self.last_hold_ms = elapsed
                self.reset()
                return True
            return False

        if self._holding and self._hold_start is not None:
            logger.debug("Blink ended early after %.0fms", now - self._hold_start)
            self.reset()
        return False

    def progress(self, now_ms: float | None = None) -> float:
        """Fraction of the required duration the current hold has covered.

        Args:
            now_ms: Timestamp in milliseconds. Defaults to the clock.

        Returns:
            0.0 when idle, otherwise elapsed / required_duration_ms capped at 1.0.
            A zero required duration reports 1.0 while holding.
        """
        if not self._holding or self._hold_start is None:
            return 0.0

        now = self._clock() if now_ms is None else now_ms
        elapsed = max(0.0, now - self._hold_start)
        if self._required_duration_ms <= 0:
            return 1.0
        return min(1.0, elapsed / self._required_duration_ms)

    def elapsed_ms(self, now_ms: float | None = None) -> float:
        """Milliseconds the current hold has lasted, 0 when idle."""
        if self._hold_start is None:
            return 0.0
        now = self._clock() if now_ms is None else now_ms
        return max(0.0, now - self._hold_start)

    def reset(self) -> None:
        """Return to idle, dropping any hold in progress."""
        self._holding = False
        self._hold_start = None
