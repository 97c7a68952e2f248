"""Millisecond clock shared by time-dependent systems."""

import time


def monotonic_ms() -> float:
    """Return a monotonic timestamp in milliseconds."""
    return time.perf_counter() * 1000.0
