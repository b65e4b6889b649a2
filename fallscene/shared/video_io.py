"""
#WHERE
    Used by pipeline.py (FallingScenePipeline.run) and the demo script for
    writing output videos.

#WHAT
    Thin wrapper around imageio for H.264 video writing.
    Keeps the codec/fps/makedirs boilerplate in one place.

#INPUT
    Iterable of RGB uint8 frames (H, W, 3), output path, fps.

#OUTPUT
    MP4 file on disk.
"""

import logging
import os
from typing import Iterable

import numpy as np

log = logging.getLogger(__name__)


def write_video(frames: Iterable[np.ndarray], output_path: str, fps: int = 30) -> str:
    """Write RGB uint8 frames to an H.264 MP4.

    Frames are consumed lazily, so a generator keeps only one frame in memory.
    Returns the absolute path of the written file.
    """
    import imageio

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    writer = imageio.get_writer(output_path, fps=fps, codec="libx264",
                                quality=8, macro_block_size=16)
    count = 0
    try:
        for frame in frames:
            writer.append_data(frame)
            count += 1
    finally:
        writer.close()
    log.info("Video saved: %s (%d frames, %d fps)", output_path, count, fps)
    return os.path.abspath(output_path)
