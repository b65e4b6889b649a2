"""
#WHERE
    Used by pipeline.py (frame_items / render_frame), the demo script and
    test_frame_evaluator.py.

#WHAT
    Per-frame kinematics.  Every record is evaluated from the absolute time
    since its spawn frame, so any frame can be computed directly, in any
    order, without replaying earlier frames.

#INPUT
    SpawnPlan, frame index, fps, fall_speed, x_range.

#OUTPUT
    FrameState per record, or SceneItem per visible record.
"""

import logging
import math
from typing import List, Optional

from fallscene.modules.config import SimulationConfig
from fallscene.modules.spawn_planner import SpawnPlan, SpawnRecord
from fallscene.modules.viewport import ViewportGeometry
from fallscene.shared.constants import (
    FALL_SPEED_FACTOR, ROTATION_FACTOR, Y_END, Y_START,
)
from fallscene.shared.errors import DegenerateViewport, report_once
from .models import HIDDEN, FrameState, SceneItem

log = logging.getLogger(__name__)


def _check_fps(fps) -> None:
    if fps <= 0:
        report_once(("fps", fps), "fps=%s is not positive; frames have no duration", fps)
        raise DegenerateViewport(f"fps must be positive, got {fps}")


def fall_height(elapsed: float, fall_speed: float) -> float:
    return Y_START - fall_speed * elapsed * FALL_SPEED_FACTOR


def evaluate_record(record: SpawnRecord, frame: int, fps: float,
                    fall_speed: float, x_range: float) -> FrameState:
    dt_frames = frame - record.spawn_frame
    if dt_frames < 0:
        return HIDDEN

    t_sec = dt_frames / fps
    y = fall_height(t_sec, fall_speed)
    if y < Y_END:
        return HIDDEN

    x = max(-x_range, min(x_range, record.x0 + record.drift * t_sec))
    rotation = record.rotation_speed * t_sec * ROTATION_FACTOR
    return FrameState(visible=True, x=x, y=y, rotation=rotation)


def evaluate_frame(plan: SpawnPlan, frame: int, fps: float,
                   fall_speed: float, x_range: float) -> List[FrameState]:
    """One FrameState per record, hidden ones included, in plan order."""
    _check_fps(fps)
    return [evaluate_record(r, frame, fps, fall_speed, x_range) for r in plan]


def visible_items(plan: SpawnPlan, frame: int, fps: float,
                  config: SimulationConfig, geometry: ViewportGeometry) -> List[SceneItem]:
    states = evaluate_frame(plan, frame, fps, config.fall_speed, geometry.x_range)
    asset = config.asset
    items = [
        SceneItem(index=i, asset=asset, position=(s.x, s.y, 0.0),
                  rotation=s.rotation, scale=config.item_scale)
        for i, s in enumerate(states) if s.visible
    ]
    log.debug("[M3] frame %d: %d/%d visible", frame, len(items), len(plan))
    return items


def exit_frame(record: SpawnRecord, fps: float, fall_speed: float) -> Optional[int]:
    """Last frame on which *record* is visible.

    None if it never leaves, or if the exit lies beyond any representable
    frame (vanishingly small or NaN fall_speed).
    """
    _check_fps(fps)
    if fall_speed <= 0:
        return None
    frames_to_exit = (Y_START - Y_END) * fps / (fall_speed * FALL_SPEED_FACTOR)
    if not math.isfinite(frames_to_exit):
        return None
    dt = math.floor(frames_to_exit)
    # settle float rounding against the exact visibility predicate
    while dt > 0 and fall_height(dt / fps, fall_speed) < Y_END:
        dt -= 1
    while fall_height((dt + 1) / fps, fall_speed) >= Y_END:
        dt += 1
    return record.spawn_frame + dt
