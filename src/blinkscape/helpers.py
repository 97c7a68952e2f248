"""Helper functions for creating and running an experience.

This module provides high-level functions that build a fully wired
Experience from settings, so a host application only has to supply its
renderer's scene graph and camera.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import arcade
from rich.logging import RichHandler

from blinkscape.conf import settings
from blinkscape.experience import Experience
from blinkscape.systems.assets import LocalAssetLoader
from blinkscape.systems.audio import ArcadeTransitionCue
from blinkscape.systems.camera import GazeCameraController
from blinkscape.systems.gesture import GestureHoldDetector
from blinkscape.systems.scene import SceneRegistry, load_scene_descriptors
from blinkscape.systems.transition import ArcadeFadeOverlay, TransitionController
from blinkscape.types import Vec3

if TYPE_CHECKING:
    from blinkscape.events import EventBus
    from blinkscape.types import AssetLoader, BackgroundSetter, CameraHandle, RenderGraph


def setup_logging(log_level: str = "DEBUG") -> None:
    """Configure logging for the experience.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Side effects:
        - Configures the root logger with RichHandler
        - Sets the specified log level
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )


def setup_resources(assets_handle: str, assets_dir: Path | None = None) -> None:
    """Register an Arcade resource handle for scene assets.

    Args:
        assets_handle: Name of the resource handle to register.
        assets_dir: Directory holding the assets. Defaults to ``assets/`` in
            the current working directory.

    Side effects:
        - Adds resource handle to arcade.resources
    """
    if assets_dir is None:
        assets_dir = Path.cwd() / "assets"
    arcade.resources.add_resource_handle(assets_handle, assets_dir.resolve())


def create_experience(
    render_graph: RenderGraph,
    camera: CameraHandle,
    *,
    loader: AssetLoader | None = None,
    background: BackgroundSetter | None = None,
    event_bus: EventBus | None = None,
    assets_dir: Path | None = None,
) -> Experience:
    """Build an Experience from settings.

    Uses the scene list, blink, fade and gaze settings from your project's
    settings.py (or the module named by BLINKSCAPE_SETTINGS_MODULE).

    Args:
        render_graph: The renderer's scene graph.
        camera: The renderer's camera.
        loader: Asset loader. Defaults to a LocalAssetLoader over the assets directory.
        background: Receives scene background specifiers.
        event_bus: Receives load, switch and transition events.
        assets_dir: Assets directory for the default loader and the sound cue.

    Returns:
        An Experience ready for ``await experience.start()``.

    Side effects:
        - Configures logging via setup_logging()
        - Registers the assets resource handle via setup_resources()
        - Moves the camera to settings.DEFAULT_CAMERA_POSITION
    """
    setup_logging(settings.LOG_LEVEL)
    setup_resources(settings.ASSETS_HANDLE, assets_dir)

    camera.position = Vec3.from_value(settings.DEFAULT_CAMERA_POSITION)

    cue = ArcadeTransitionCue(settings.TRANSITION_CUE_SOUND) if settings.TRANSITION_CUE_SOUND else None
    registry = SceneRegistry(
        load_scene_descriptors(settings.SCENES),
        loader or LocalAssetLoader(settings.ASSETS_HANDLE),
        render_graph,
        camera,
        background=background,
        transition_cue=cue,
        event_bus=event_bus,
    )
    overlay = ArcadeFadeOverlay(settings.FADE_DURATION_MS, settings.OVERLAY_COLOR)
    controller = TransitionController(
        registry,
        overlay,
        fade_duration_ms=settings.FADE_DURATION_MS,
        event_bus=event_bus,
    )
    detector = GestureHoldDetector(
        settings.BLINK_THRESHOLD,
        settings.BLINK_REQUIRED_DURATION_MS,
        left_channel=settings.BLINK_LEFT_CHANNEL,
        right_channel=settings.BLINK_RIGHT_CHANNEL,
    )
    gaze = GazeCameraController(
        camera,
        smoothing_factor=settings.GAZE_SMOOTHING_FACTOR,
        rotation_multiplier=settings.GAZE_ROTATION_MULTIPLIER,
    )
    return Experience(registry, controller, detector, gaze=gaze, event_bus=event_bus)
