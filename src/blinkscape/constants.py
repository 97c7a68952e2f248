"""Asset path resolution.

Asset locators in scene descriptors are relative to the experience's assets
directory, registered with Arcade as a resource handle (see
helpers.setup_resources).
"""

import arcade

from blinkscape.conf import settings


def asset_path(relative_path: str, assets_handle: str | None = None) -> str:
    """Get the resolved absolute path for an asset file.

    This uses Arcade's resource handle system, which works the same in
    development and in PyInstaller bundles.

    Args:
        relative_path: Path relative to the assets directory (e.g., "scene2.glb",
            "sounds/whoosh.wav"). A leading slash is ignored.
        assets_handle: Name of the resource handle. If None, uses settings.ASSETS_HANDLE.

    Returns:
        Absolute file path as string.

    Example:
        >>> asset_path("/scene2.glb")
        "/absolute/path/to/assets/scene2.glb"
    """
    if assets_handle is None:
        assets_handle = settings.ASSETS_HANDLE

    relative_path = relative_path.lstrip("/")
    handle_path = f":{assets_handle}:/{relative_path}"
    return str(arcade.resources.resolve(handle_path))
