"""
#WHERE
    Imported by pipeline.py, every module under fallscene/modules, main.py
    and the tests.

#WHAT
    Shared constants, error types, memory profiling and video writing.

#INPUT
    None (constants and helpers).

#OUTPUT
    Exception classes, report_once(), write_video(), profiling helpers.
"""

from .errors import (
    FallsceneError,
    InvalidConfiguration,
    DegenerateViewport,
    AssetLoadError,
    report_once,
)
from .mem_profile import RenderProfile, StageStats, peak_rss
from .video_io import write_video

__all__ = [
    "FallsceneError",
    "InvalidConfiguration",
    "DegenerateViewport",
    "AssetLoadError",
    "report_once",
    "RenderProfile",
    "StageStats",
    "peak_rss",
    "write_video",
]
