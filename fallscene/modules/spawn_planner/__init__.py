"""
#WHERE
    Imported by pipeline.py, frame_evaluator, demo scripts and tests.

#WHAT
    Spawn Planner: seeded xorshift32 stream and the one-shot spawn plan
    derived from it.

#INPUT
    seed, spawn_count, total_frames, x_range.

#OUTPUT
    SpawnPlan (tuple of SpawnRecord sorted by spawn_frame).
"""

from .rng import Xorshift32
from .models import SpawnRecord, SpawnPlan
from .planner import plan_spawns, SpawnPlanCache, default_cache

__all__ = [
    "Xorshift32", "SpawnRecord", "SpawnPlan",
    "plan_spawns", "SpawnPlanCache", "default_cache",
]
