"""Full-window fade overlay drawn with Arcade."""

from __future__ import annotations

import logging

import arcade

logger = logging.getLogger(__name__)


class ArcadeFadeOverlay:
    """Fade overlay that ramps its opacity toward shown or hidden.

    ``show()`` and ``hide()`` only change the target; ``update()`` moves the
    alpha toward it so that a full fade takes ``fade_duration_ms``. Draw it
    last, after the scene.

    Attributes:
        alpha: Current opacity, 0.0 (transparent) to 1.0 (opaque).
        color: RGB fill color.
    """

    def __init__(self, fade_duration_ms: float = 1000, color: tuple[int, int, int] = (0, 0, 0)) -> None:
        """Initialize a hidden, fully transparent overlay."""
        self.fade_duration_ms = max(0.0, float(fade_duration_ms))
        self.color = color
        self.alpha = 0.0
        self._visible = False

    @property
    def visible(self) -> bool:
        """Whether the overlay is shown (or fading toward shown)."""
        return self._visible

    @property
    def target_alpha(self) -> float:
        """Opacity the overlay is fading toward."""
        return 1.0 if self._visible else 0.0

    def show(self) -> None:
        """Start fading to opaque."""
        self._visible = True

    def hide(self) -> None:
        """Start fading to transparent."""
        self._visible = False

    def update(self, delta_time: float) -> None:
        """Advance the fade.

        Args:
            delta_time: Seconds since the last update.
        """
        target = self.target_alpha
        if self.alpha == target:
            return
        if self.fade_duration_ms <= 0:
            self.alpha = target
            return

        step = delta_time * 1000.0 / self.fade_duration_ms
        if self.alpha < target:
            self.alpha = min(target, self.alpha + step)
        else:
            self.alpha = max(target, self.alpha - step)

    def draw(self) -> None:
        """Fill the window with the overlay color at the current opacity."""
        if self.alpha <= 0.0:
            return

        window = arcade.get_window()
        alpha = max(0, min(255, int(self.alpha * 255)))
        arcade.draw_lrbt_rectangle_filled(0, window.width, 0, window.height, (*self.color, alpha))
