"""
#WHERE
    Used by render_engine (RenderEngine) and test_asset_loader.py.

#WHAT
    Resolves an asset source (file path, public-dir path or http(s) URL)
    into an RGBA Pillow image and caches it for the whole render.

#INPUT
    Source string from SimulationConfig.asset_source.

#OUTPUT
    PIL.Image.Image in RGBA mode; intrinsic aspect ratio.
"""

import io
import logging
import os
import threading
import urllib.request
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

from fallscene.shared.errors import AssetLoadError

log = logging.getLogger(__name__)

_URL_SCHEMES = ("http://", "https://")


def is_url(source: str) -> bool:
    return source.lower().startswith(_URL_SCHEMES)


class AssetLoader:
    """Loads and memoises image assets.

    Sources beginning with ``/`` that do not exist on disk are looked up in
    *public_dir*, mirroring how web compositions serve static files.
    """

    def __init__(self, public_dir: Optional[str] = None, timeout: float = 15.0) -> None:
        self.public_dir = public_dir
        self.timeout = timeout
        self._cache: Dict[str, Image.Image] = {}
        self._lock = threading.Lock()

    def resolve(self, source: str) -> str:
        if is_url(source) or os.path.exists(source):
            return source
        if self.public_dir:
            candidate = os.path.join(self.public_dir, source.lstrip("/\\"))
            if os.path.exists(candidate):
                return candidate
        return source

    def load(self, source: str) -> Image.Image:
        with self._lock:
            cached = self._cache.get(source)
        if cached is not None:
            return cached

        image = self._read(self.resolve(source))
        with self._lock:
            self._cache.setdefault(source, image)
        log.info("[M4] loaded asset %s (%dx%d)", source, image.width, image.height)
        return image

    def aspect_ratio(self, source: str) -> float:
        image = self.load(source)
        if not image.width or not image.height:
            return 1.0
        return image.width / image.height

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _read(self, location: str) -> Image.Image:
        try:
            if is_url(location):
                with urllib.request.urlopen(location, timeout=self.timeout) as resp:
                    data = resp.read()
                image = Image.open(io.BytesIO(data))
            else:
                image = Image.open(location)
            image.load()
        except (OSError, UnidentifiedImageError, ValueError) as exc:
            raise AssetLoadError(f"cannot load asset {location!r}: {exc}") from exc
        return image.convert("RGBA")
