"""
#WHERE
    Imported by pipeline.py, frame_evaluator, render_engine and tests.

#WHAT
    Viewport Mapper: converts output pixel size into world half-extents,
    the horizontal spawn range and the camera field of view.

#INPUT
    Pixel width / height, item scale.

#OUTPUT
    ViewportGeometry, CameraParams.
"""

from .geometry import ViewportGeometry, compute_geometry, fov_for_half_height
from .camera import CameraParams, compute_camera_params, look_at, perspective

__all__ = [
    "ViewportGeometry", "compute_geometry", "fov_for_half_height",
    "CameraParams", "compute_camera_params", "look_at", "perspective",
]
