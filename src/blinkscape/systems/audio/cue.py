"""Transition sound cue played through Arcade."""

from __future__ import annotations

import logging

import arcade

from blinkscape.constants import asset_path

logger = logging.getLogger(__name__)


class ArcadeTransitionCue:
    """Plays a short sound after each scene switch.

    The sound is loaded on first play and reused afterwards. Playback is
    fire-and-forget; callers treat any exception as non-fatal.

    Attributes:
        sound_file: Asset-relative path of the sound.
        volume: Playback volume, 0.0 to 1.0.
    """

    def __init__(self, sound_file: str, volume: float = 1.0) -> None:
        """Initialize the cue without loading the sound yet."""
        self.sound_file = sound_file
        self.volume = max(0.0, min(1.0, volume))
        self._sound: arcade.Sound | None = None

    def play(self) -> None:
        """Play the cue, loading the sound on first use."""
        if self._sound is None:
            path = asset_path(self.sound_file)
            logger.debug("Loading transition cue: %s", path)
            self._sound = arcade.load_sound(path)
        arcade.play_sound(self._sound, volume=self.volume)
