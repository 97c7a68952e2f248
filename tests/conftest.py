"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import arcade
import pytest

from blinkscape.conf import settings

if TYPE_CHECKING:
    from collections.abc import Generator

TEST_ASSETS_HANDLE = "test_assets"

SCENE_FILES = {
    "scene_a.glb": b"glTF" + b"a" * 96,
    "scene_b.glb": b"glTF" + b"b" * 2044,
    "empty.glb": b"",
}


@pytest.fixture(scope="session", autouse=True)
def _setup_arcade_resources() -> Generator[Path]:
    """Register a temporary assets directory as an arcade resource handle.

    The directory holds a few small fake scene files so asset_path() and the
    local asset loader work in tests.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        assets_dir = Path(temp_dir)
        for name, data in SCENE_FILES.items():
            (assets_dir / name).write_bytes(data)

        arcade.resources.add_resource_handle(TEST_ASSETS_HANDLE, assets_dir.resolve())
        yield assets_dir


@pytest.fixture(autouse=True)
def configure_test_settings() -> Generator[None]:
    """Configure settings for each test and reset them afterwards.

    Yields:
        None
    """
    settings.configure(
        BLINK_THRESHOLD=0.5,
        BLINK_REQUIRED_DURATION_MS=3000,
        FADE_DURATION_MS=0,
        ASSETS_HANDLE=TEST_ASSETS_HANDLE,
        LOAD_CHUNK_SIZE=512,
        TRANSITION_CUE_SOUND="",
        LOG_LEVEL="DEBUG",
    )
    yield
    settings._wrapped = None
