"""Per-stage render profiling.

``RenderProfile.stage(name, **counts)`` times one pipeline stage (plan,
render + encode) and records how much the traced Python heap grew and
peaked while it ran, together with the frame / spawn counts it handled.
``@peak_rss`` samples the process RSS of a whole run through
``memory-profiler`` when ``PROFILE_MEMORY=1`` is set.

Usage::

    profile = RenderProfile()
    with profile.stage("plan", spawns=80):
        pipeline.setup()
    profile.timings        # {"plan": 0.0012}

    # Linux / macOS:
    #   PROFILE_MEMORY=1 python main.py --spawn-count 500
"""
from __future__ import annotations

import contextlib
import functools
import logging
import os
import time
import tracemalloc
from dataclasses import dataclass, field
from typing import Dict, Generator, List

log = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def profiling_enabled() -> bool:
    return os.environ.get("PROFILE_MEMORY", "0").strip().lower() in _TRUTHY


@dataclass
class StageStats:
    name: str
    seconds: float
    heap_kb: float                  # net traced-heap change across the stage
    peak_kb: float                  # traced-heap peak above the starting level
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def per_frame_ms(self) -> float:
        frames = self.counts.get("frames", 0)
        return self.seconds * 1000 / frames if frames else 0.0


class RenderProfile:
    """Collects StageStats for one pipeline run.  Stages do not nest."""

    def __init__(self) -> None:
        self.stages: List[StageStats] = []

    @contextlib.contextmanager
    def stage(self, name: str, **counts: int) -> Generator[Dict[str, int], None, None]:
        """Profile the enclosed block; the yielded dict may be updated with counts."""
        started = not tracemalloc.is_tracing()
        if started:
            tracemalloc.start()
        tracemalloc.reset_peak()
        base, _ = tracemalloc.get_traced_memory()
        t0 = time.perf_counter()
        try:
            yield counts
        finally:
            seconds = time.perf_counter() - t0
            current, peak = tracemalloc.get_traced_memory()
            if started:
                tracemalloc.stop()
            stats = StageStats(name, seconds, (current - base) / 1024,
                               max(0, peak - base) / 1024, dict(counts))
            self.stages.append(stats)
            log.info("[mem] %-14s %7.2fs  heap %+.0f KB  peak +%.0f KB  %s",
                     name, seconds, stats.heap_kb, stats.peak_kb,
                     " ".join(f"{k}={v}" for k, v in sorted(stats.counts.items())))

    @property
    def timings(self) -> Dict[str, float]:
        return {s.name: s.seconds for s in self.stages}

    def __getitem__(self, name: str) -> StageStats:
        for stats in self.stages:
            if stats.name == name:
                return stats
        raise KeyError(name)


def peak_rss(fn):
    """Record the peak RSS (MiB) of *fn* when ``PROFILE_MEMORY=1``.

    A dict result gets a ``peak_rss_mib`` entry.  Without the env var the
    function is returned as is.
    """
    if not profiling_enabled():
        return fn

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            from memory_profiler import memory_usage  # type: ignore[import-untyped]
        except ImportError:
            log.warning("[mem] PROFILE_MEMORY=1 but 'memory-profiler' is not installed; "
                        "%s runs unmeasured", fn.__qualname__)
            return fn(*args, **kwargs)

        peak, result = memory_usage((fn, args, kwargs), max_usage=True, retval=True,
                                    interval=0.1)
        if isinstance(peak, (list, tuple)):     # older memory-profiler releases
            peak = max(peak)
        log.info("[mem] %s peak RSS %.1f MiB", fn.__qualname__, peak)
        if isinstance(result, dict):
            result["peak_rss_mib"] = float(peak)
        return result

    return wrapper
