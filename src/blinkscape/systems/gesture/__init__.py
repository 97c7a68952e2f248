"""Gesture hold detection."""

from blinkscape.systems.gesture.hold import BLINK_LEFT, BLINK_RIGHT, GestureHoldDetector

__all__ = ["BLINK_LEFT", "BLINK_RIGHT", "GestureHoldDetector"]
