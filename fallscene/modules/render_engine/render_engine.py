"""Software sprite renderer.

Draws the visible SceneItems of one frame onto a solid background:

    - Image items : textured quad, width:height follows the texture
    - Model items : flat-shaded proxy quad lit by the scene's ambient and
                     directional lights, or a pre-rendered sprite when
                     ``RenderSettings.model_sprite`` is set

Usage::

    from fallscene.modules.render_engine import RenderEngine, RenderSettings

    engine = RenderEngine(1280, 720, RenderSettings(background_color="#00ff00"))
    rgb = engine.draw(items)            # (720, 1280, 3) uint8
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from fallscene.modules.asset_loader import AssetLoader
from fallscene.modules.config import AssetKind
from fallscene.modules.frame_evaluator import SceneItem
from fallscene.modules.viewport import CameraParams, compute_camera_params
from fallscene.shared.constants import (
    AMBIENT_INTENSITY, DIRECTIONAL_INTENSITY, DIRECTIONAL_POSITION,
)

log = logging.getLogger(__name__)

_UNIT_QUAD = np.array([
    [-0.5, -0.5, 0.0, 1.0],
    [ 0.5, -0.5, 0.0, 1.0],
    [ 0.5,  0.5, 0.0, 1.0],
    [-0.5,  0.5, 0.0, 1.0],
])


@dataclass
class RenderSettings:
    background_color: str = "#00ff00"
    public_dir: Optional[str] = None            # root for "/..." asset paths
    model_color: Tuple[int, int, int] = (150, 150, 160)
    model_sprite: Optional[str] = None          # pre-rendered stand-in for model assets
    resample: int = Image.Resampling.BICUBIC


def model_matrix(position: Sequence[float], scale: Tuple[float, float],
                 rotation_z: float) -> np.ndarray:
    """T · Rz · S for a quad in the z=0 plane."""
    sx, sy = scale
    c, s = math.cos(rotation_z), math.sin(rotation_z)
    mat = np.array([
        [sx * c, -sy * s, 0, 0],
        [sx * s,  sy * c, 0, 0],
        [0,       0,      1, 0],
        [0,       0,      0, 1],
    ], dtype=np.float64)
    mat[:3, 3] = position
    return mat


def lambert_factor(normal=(0.0, 0.0, 1.0)) -> float:
    """Ambient + directional intensity for a surface facing *normal*."""
    light = np.asarray(DIRECTIONAL_POSITION, dtype=np.float64)
    light /= np.linalg.norm(light)
    n_dot_l = max(0.0, float(np.dot(normal, light)))
    return AMBIENT_INTENSITY + DIRECTIONAL_INTENSITY * n_dot_l


class RenderEngine:
    """Rasterises SceneItems for a fixed output resolution."""

    def __init__(self, width: int, height: int,
                 settings: Optional[RenderSettings] = None,
                 loader: Optional[AssetLoader] = None) -> None:
        self.width = width
        self.height = height
        self._s = settings or RenderSettings()
        self.camera: CameraParams = compute_camera_params(width, height)
        self.loader = loader or AssetLoader(public_dir=self._s.public_dir)
        self._background = ImageColor.getrgb(self._s.background_color)[:3]
        self._ppu = self.camera.pixels_per_unit(height)
        self._sprite_cache: Dict[Tuple[str, int, int], Image.Image] = {}
        self._model_rgb = self._shade(self._s.model_color)

    # ── Public API ────────────────────────────────────────────────────────────

    def blank(self) -> Image.Image:
        return Image.new("RGB", (self.width, self.height), self._background)

    def draw(self, items: List[SceneItem]) -> np.ndarray:
        """Draw *items* in order (later on top); returns (H, W, 3) uint8."""
        canvas = self.blank()
        for item in items:
            if item.asset.kind == AssetKind.MODEL and self._s.model_sprite is None:
                self._draw_proxy(canvas, item)
            else:
                source = item.asset.source
                if item.asset.kind == AssetKind.MODEL:
                    source = self._s.model_sprite
                self._draw_sprite(canvas, item, source)
        return np.array(canvas, dtype=np.uint8)

    # ── Drawing ───────────────────────────────────────────────────────────────

    def _draw_sprite(self, canvas: Image.Image, item: SceneItem, source: str) -> None:
        aspect = self.loader.aspect_ratio(source)
        w_px = max(1, round(item.scale * aspect * self._ppu))
        h_px = max(1, round(item.scale * self._ppu))
        sprite = self._sized_sprite(source, w_px, h_px)
        if item.rotation:
            sprite = sprite.rotate(math.degrees(item.rotation), resample=self._s.resample,
                                   expand=True)

        cx, cy = self.camera.project([item.position], self.width, self.height)[0]
        left = int(round(cx - sprite.width / 2))
        top = int(round(cy - sprite.height / 2))
        if (left >= self.width or top >= self.height
                or left + sprite.width <= 0 or top + sprite.height <= 0):
            return
        canvas.paste(sprite, (left, top), sprite)

    def _draw_proxy(self, canvas: Image.Image, item: SceneItem) -> None:
        mat = model_matrix(item.position, (item.scale, item.scale), item.rotation)
        corners = (_UNIT_QUAD @ mat.T)[:, :3]
        pts = self.camera.project(corners, self.width, self.height)
        xs, ys = pts[:, 0], pts[:, 1]
        if xs.max() < 0 or ys.max() < 0 or xs.min() >= self.width or ys.min() >= self.height:
            return
        ImageDraw.Draw(canvas).polygon([tuple(p) for p in pts.tolist()], fill=self._model_rgb)

    def _sized_sprite(self, source: str, w_px: int, h_px: int) -> Image.Image:
        key = (source, w_px, h_px)
        sprite = self._sprite_cache.get(key)
        if sprite is None:
            sprite = self.loader.load(source).resize((w_px, h_px), self._s.resample)
            self._sprite_cache[key] = sprite
        return sprite

    @staticmethod
    def _shade(color: Tuple[int, int, int]) -> Tuple[int, int, int]:
        k = lambert_factor()
        return tuple(int(min(255, round(c * k))) for c in color)
