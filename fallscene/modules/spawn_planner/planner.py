"""
#WHERE
    Used by pipeline.py (FallingScenePipeline.setup), the demo script and
    test_spawn_planner.py.

#WHAT
    Spawn planner: spreads spawn_count items evenly across the timeline
    with ±15 % jitter, gives each a start x, spin and drift, and sorts them
    by spawn frame.  SpawnPlanCache memoises plans per input tuple.

#INPUT
    seed, spawn_count, total_frames, x_range (from ViewportGeometry).

#OUTPUT
    SpawnPlan: immutable tuple of SpawnRecord, ascending spawn_frame.
"""

import logging
import math
import threading
from collections import OrderedDict
from typing import List, Tuple

from fallscene.shared.constants import (
    MAX_DRIFT, MAX_ROTATION_SPEED, PLAN_CACHE_SIZE, SPAWN_JITTER,
)
from fallscene.shared.errors import report_once
from .models import SpawnPlan, SpawnRecord
from .rng import Xorshift32

log = logging.getLogger(__name__)

PlanKey = Tuple[int, int, int, float]


def plan_spawns(seed: int, spawn_count: int, total_frames: int, x_range: float) -> SpawnPlan:
    """Deterministic spawn plan.

    One xorshift32 stream, four draws per slot in the order jitter, x0,
    rotation speed, drift.  The draw order and the stable sort are both part
    of the output contract.
    """
    if total_frames < 1:
        report_once(("total_frames", total_frames),
                    "total_frames=%s is not positive; planning against 1 frame", total_frames)
        total_frames = 1

    rng = Xorshift32(seed)
    last_frame = total_frames - 1
    records: List[SpawnRecord] = []
    for i in range(max(0, spawn_count)):
        t = i / spawn_count
        jitter = (rng() - 0.5) * SPAWN_JITTER
        spawn_frame = max(0, min(last_frame, math.floor((t + jitter) * total_frames)))
        x0 = (rng() * 2 - 1) * x_range
        rotation_speed = (rng() * 2 - 1) * MAX_ROTATION_SPEED
        drift = (rng() * 2 - 1) * MAX_DRIFT
        records.append(SpawnRecord(spawn_frame, x0, rotation_speed, drift))

    # sorted() is stable: equal spawn frames keep generation order
    plan = tuple(sorted(records, key=lambda r: r.spawn_frame))
    log.debug("[M2] planned %d spawns (seed=%d, frames=%d, x_range=%.3f)",
              len(plan), seed, total_frames, x_range)
    return plan


class SpawnPlanCache:
    """Bounded LRU of spawn plans keyed by (seed, spawn_count, total_frames, x_range)."""

    def __init__(self, maxsize: int = PLAN_CACHE_SIZE) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be positive")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._plans: "OrderedDict[PlanKey, SpawnPlan]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, seed: int, spawn_count: int, total_frames: int, x_range: float) -> SpawnPlan:
        key = (seed, spawn_count, total_frames, x_range)
        with self._lock:
            plan = self._plans.get(key)
            if plan is not None:
                self._plans.move_to_end(key)
                self.hits += 1
                return plan

        plan = plan_spawns(*key)

        with self._lock:
            self.misses += 1
            self._plans[key] = plan
            self._plans.move_to_end(key)
            while len(self._plans) > self.maxsize:
                self._plans.popitem(last=False)
        return plan

    def clear(self) -> None:
        with self._lock:
            self._plans.clear()
            self.hits = self.misses = 0

    def __len__(self) -> int:
        return len(self._plans)

    def __contains__(self, key: PlanKey) -> bool:
        return key in self._plans


default_cache = SpawnPlanCache()
