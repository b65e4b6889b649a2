"""
#WHERE
    Entry point of the whole system: called by main.py, examples/ and
    test_pipeline.py.

#WHAT
    End-to-end render: config → M1 viewport → M2 spawn plan → per frame
    M3 evaluate → M5 draw (M4 loads assets on demand) → MP4.

#INPUT
    SimulationConfig, CompositionConfig.

#OUTPUT
    Dict with video path, frame count, plan size and per-stage timings.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, Iterator, List, Optional

import numpy as np

from fallscene.modules.config import CompositionConfig, SimulationConfig
from fallscene.modules.frame_evaluator import SceneItem, visible_items
from fallscene.modules.render_engine import RenderEngine, RenderSettings
from fallscene.modules.spawn_planner import SpawnPlan, SpawnPlanCache, default_cache
from fallscene.modules.viewport import (
    CameraParams, ViewportGeometry, compute_camera_params, compute_geometry,
)
from fallscene.shared.mem_profile import RenderProfile, peak_rss
from fallscene.shared.video_io import write_video

log = logging.getLogger(__name__)


class FallingScenePipeline:
    """SimulationConfig → MP4.  Resolves geometry and the spawn plan on first use."""

    def __init__(self, config: Optional[SimulationConfig] = None,
                 composition: Optional[CompositionConfig] = None,
                 public_dir: Optional[str] = None,
                 model_sprite: Optional[str] = None,
                 plan_cache: Optional[SpawnPlanCache] = None) -> None:
        self.config = config or SimulationConfig()
        self.composition = composition or CompositionConfig()
        self.public_dir = public_dir
        self.model_sprite = model_sprite
        self._plan_cache = plan_cache or default_cache
        self._is_setup = False
        self._renderer: Optional[RenderEngine] = None
        self.geometry: Optional[ViewportGeometry] = None
        self.camera: Optional[CameraParams] = None
        self.plan: SpawnPlan = ()

    def setup(self) -> None:
        self.config.validate()
        comp = self.composition.validate()

        self.geometry = compute_geometry(comp.width, comp.height, self.config.item_scale)
        self.camera = compute_camera_params(comp.width, comp.height)
        log.info("[M1] viewport %dx%d  half_width=%.3f  x_range=%.3f  fov=%.2f°",
                 comp.width, comp.height, self.geometry.half_width,
                 self.geometry.x_range, self.geometry.fov_degrees)

        self.plan = self._plan_cache.get(self.config.seed, self.config.spawn_count,
                                         comp.total_frames, self.geometry.x_range)
        log.info("[M2] %d spawns over %d frames (seed=%d)",
                 len(self.plan), comp.total_frames, self.config.seed)
        self._is_setup = True

    @property
    def renderer(self) -> RenderEngine:
        if self._renderer is None:
            settings = RenderSettings(
                background_color=self.config.background_color,
                public_dir=self.public_dir,
                model_sprite=self.model_sprite,
            )
            self._renderer = RenderEngine(self.composition.width, self.composition.height,
                                          settings)
        return self._renderer

    def _check_frame(self, frame: int) -> None:
        if not 0 <= frame < self.composition.total_frames:
            raise ValueError(f"frame {frame} outside [0, {self.composition.total_frames})")

    def frame_items(self, frame: int) -> List[SceneItem]:
        if not self._is_setup:
            self.setup()
        self._check_frame(frame)
        return visible_items(self.plan, frame, self.composition.fps, self.config, self.geometry)

    def render_frame(self, frame: int) -> np.ndarray:
        items = self.frame_items(frame)
        return self.renderer.draw(items)

    def render_frames(self, frames: Iterable[int]) -> List[np.ndarray]:
        """Render any subset of frames, in any order."""
        return list(self.iter_frames(frames))

    def iter_frames(self, frames: Iterable[int]) -> Iterator[np.ndarray]:
        for frame in frames:
            yield self.render_frame(frame)

    @peak_rss
    def run(self, output_name: str = "falling_objects") -> Dict[str, Any]:
        comp = self.composition
        profile = RenderProfile()
        with profile.stage("plan") as counts:
            if not self._is_setup:
                self.setup()
            counts["spawns"] = len(self.plan)

        output_path = os.path.join(comp.output_dir, "videos", f"{output_name}.mp4")
        with profile.stage("render", frames=comp.total_frames):
            video_path = write_video(self.iter_frames(range(comp.total_frames)),
                                     output_path, fps=comp.fps)
        render = profile["render"]
        log.info("[M5] %d frames (%.1fs of video) rendered in %.2fs, %.1f ms/frame",
                 comp.total_frames, comp.duration, render.seconds, render.per_frame_ms)

        return {
            "video_path": video_path,
            "frame_count": comp.total_frames,
            "spawn_count": len(self.plan),
            "config": self.config.to_dict(),
            "timings": profile.timings,
            "stages": profile.stages,
        }
