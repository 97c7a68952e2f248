"""Audio cues."""

from blinkscape.systems.audio.cue import ArcadeTransitionCue

__all__ = ["ArcadeTransitionCue"]
