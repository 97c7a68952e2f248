"""Fade transitions and the arcade fade overlay."""

from blinkscape.systems.transition.controller import TransitionController
from blinkscape.systems.transition.overlay import ArcadeFadeOverlay
from blinkscape.types import TransitionState

__all__ = ["ArcadeFadeOverlay", "TransitionController", "TransitionState"]
