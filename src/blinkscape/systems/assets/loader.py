"""Local file asset loader.

Reads scene files from the assets directory without blocking the event loop
for long: the file is read in chunks and control is handed back to the loop
after each one, so frames keep rendering while a large scene loads in the
background. The bytes are not parsed; turning them into renderable geometry
is the renderer's business.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from blinkscape.conf import settings
from blinkscape.constants import asset_path
from blinkscape.types import UNIT_SCALE, LoadProgress, Vec3

if TYPE_CHECKING:
    from blinkscape.types import ProgressCallback

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class LoadedAsset:
    """Raw scene asset with a settable transform.

    Attributes:
        locator: Locator the asset was fetched from.
        data: Unparsed file contents.
        position: Asset position.
        scale: Asset scale.
        rotation: Asset rotation.
    """

    locator: str
    data: bytes = field(repr=False)
    position: Vec3 = Vec3()
    scale: Vec3 = UNIT_SCALE
    rotation: Vec3 = Vec3()

    @property
    def root(self) -> LoadedAsset:
        """The asset is its own visual root."""
        return self


class LocalAssetLoader:
    """Loads assets from the directory behind an Arcade resource handle.

    Attributes:
        assets_handle: Resource handle name, None for settings.ASSETS_HANDLE.
        chunk_size: Bytes read before yielding to the event loop.
    """

    def __init__(self, assets_handle: str | None = None, chunk_size: int | None = None) -> None:
        """Initialize the loader.

        Args:
            assets_handle: Resource handle name. Defaults to settings.ASSETS_HANDLE.
            chunk_size: Read size in bytes. Defaults to settings.LOAD_CHUNK_SIZE.
        """
        self.assets_handle = assets_handle
        self.chunk_size = max(1, chunk_size if chunk_size is not None else settings.LOAD_CHUNK_SIZE)

    async def fetch(self, locator: str, on_progress: ProgressCallback | None = None) -> LoadedAsset:
        """Read an asset file.

        Args:
            locator: Path relative to the assets directory.
            on_progress: Called with a LoadProgress after every chunk.

        Returns:
            The loaded asset.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the file cannot be read.
        """
        path = Path(asset_path(locator, self.assets_handle))
        total = path.stat().st_size
        logger.debug("Reading %s (%d bytes)", path, total)

        chunks: list[bytes] = []
        loaded = 0
        with path.open("rb") as fh:
            while chunk := fh.read(self.chunk_size):
                chunks.append(chunk)
                loaded += len(chunk)
                if on_progress:
                    on_progress(LoadProgress(loaded, total))
                await asyncio.sleep(0)

        return LoadedAsset(locator, b"".join(chunks))
