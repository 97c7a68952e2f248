"""Django-like settings system for blinkscape.

Usage:
    # In your project's settings.py
    from blinkscape.conf import global_settings

    # Override defaults
    BLINK_REQUIRED_DURATION_MS = 2000
    FADE_DURATION_MS = 750

    # Replace the scene list
    SCENES = [
        {"id": "lobby", "name": "Lobby", "path": "models/lobby.glb"},
        *global_settings.SCENES,
    ]

    # In your code
    from blinkscape.conf import settings

    print(settings.BLINK_REQUIRED_DURATION_MS)  # 2000
"""

import importlib
import logging
import os
from typing import Any

from blinkscape.conf import global_settings

logger = logging.getLogger(__name__)

ENVIRONMENT_VARIABLE = "BLINKSCAPE_SETTINGS_MODULE"


class LazySettings:
    """Lazy settings proxy that loads user settings on first access.

    Settings are loaded from:
    1. global_settings (framework defaults)
    2. The user's settings module (overrides)

    The settings module is named by the BLINKSCAPE_SETTINGS_MODULE environment
    variable, or ``settings`` in the current directory by convention.
    """

    def __init__(self) -> None:
        """Initialize the lazy settings proxy."""
        self._wrapped: Settings | None = None

    def _setup(self) -> None:
        """Load settings from global_settings and the user's settings module."""
        settings_module = os.environ.get(ENVIRONMENT_VARIABLE, "settings")

        self._wrapped = Settings()

        try:
            mod = importlib.import_module(settings_module)
        except ImportError:
            logger.debug("No settings module %r found, using defaults", settings_module)
            return

        for setting in dir(mod):
            if setting.isupper():
                setattr(self._wrapped, setting, getattr(mod, setting))

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Get a setting value, loading settings if not yet loaded."""
        if self._wrapped is None:
            self._setup()
        if self._wrapped is None:
            msg = "Settings could not be loaded"
            raise RuntimeError(msg)
        return getattr(self._wrapped, name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Set a setting value."""
        if name == "_wrapped":
            self.__dict__["_wrapped"] = value
        else:
            if self._wrapped is None:
                self._setup()
            if self._wrapped is None:
                msg = "Settings could not be loaded"
                raise RuntimeError(msg)
            setattr(self._wrapped, name, value)

    def configure(self, **options: Any) -> None:  # noqa: ANN401
        """Manually configure settings (useful for testing).

        Example:
            settings.configure(
                BLINK_REQUIRED_DURATION_MS=100,
                FADE_DURATION_MS=0,
            )
        """
        if self._wrapped is None:
            self._wrapped = Settings()
        for name, value in options.items():
            setattr(self._wrapped, name, value)

    def is_configured(self) -> bool:
        """Check if settings have been loaded."""
        return self._wrapped is not None


class Settings:
    """Container for all settings with attribute access."""

    def __init__(self) -> None:
        """Initialize settings with defaults from global_settings."""
        for setting in dir(global_settings):
            if setting.isupper():
                setattr(self, setting, getattr(global_settings, setting))


# Global singleton instance
settings = LazySettings()

__all__ = ["ENVIRONMENT_VARIABLE", "LazySettings", "Settings", "global_settings", "settings"]
