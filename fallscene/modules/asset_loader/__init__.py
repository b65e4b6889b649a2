"""
Asset Loader
============
Turns an asset source into pixels for the sprite renderer.

Quick start::

    from fallscene.modules.asset_loader import AssetLoader

    loader = AssetLoader(public_dir="public")
    sprite = loader.load("/image.png")
"""
from .loader import AssetLoader, is_url

__all__ = ["AssetLoader", "is_url"]
