"""Asset loading."""

from blinkscape.systems.assets.loader import LoadedAsset, LocalAssetLoader

__all__ = ["LoadedAsset", "LocalAssetLoader"]
