"""
#WHERE
    Imported by pipeline.py, demo scripts and tests.

#WHAT
    Frame Evaluator: stateless per-frame position / rotation / visibility.

#INPUT
    SpawnPlan, frame, fps, motion parameters.

#OUTPUT
    FrameState list, SceneItem list.
"""

from .models import FrameState, SceneItem, HIDDEN
from .evaluator import (
    evaluate_record, evaluate_frame, visible_items, exit_frame, fall_height,
)

__all__ = [
    "FrameState", "SceneItem", "HIDDEN",
    "evaluate_record", "evaluate_frame", "visible_items", "exit_frame",
    "fall_height",
]
