"""World ↔ pixel mapping for a camera-facing plane at z=0."""

import logging
import math
from dataclasses import dataclass
from functools import lru_cache

from fallscene.shared.constants import (
    CAMERA_DISTANCE, HALF_HEIGHT, MARGIN_PER_SCALE, MIN_MARGIN,
)
from fallscene.shared.errors import DegenerateViewport, report_once

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ViewportGeometry:
    half_height: float
    half_width: float
    margin: float
    x_range: float
    fov_degrees: float

    @property
    def aspect(self) -> float:
        return self.half_width / self.half_height


def fov_for_half_height(half_height: float = HALF_HEIGHT,
                        distance: float = CAMERA_DISTANCE) -> float:
    """Vertical FOV (degrees) that shows ±half_height at *distance*."""
    return 2 * math.atan(half_height / distance) * 180 / math.pi


def check_dimensions(width, height) -> None:
    if width <= 0 or height <= 0:
        report_once(("viewport", width, height),
                    "Degenerate viewport %sx%s: dimensions must be positive", width, height)
        raise DegenerateViewport(f"viewport {width}x{height} has no area")


@lru_cache(maxsize=64)
def compute_geometry(width: int, height: int, item_scale: float) -> ViewportGeometry:
    """Half-extents, horizontal spawn range and FOV for a *width*x*height* frame.

    *item_scale* only widens the edge margin; the FOV depends on nothing but
    the fixed camera distance.
    """
    check_dimensions(width, height)

    half_width = HALF_HEIGHT * (width / height)
    margin = max(MIN_MARGIN, item_scale * MARGIN_PER_SCALE)
    x_range = max(0.0, half_width - margin)
    if x_range == 0.0:
        log.debug("Viewport %dx%d too narrow for scale %.2f: items spawn at x=0",
                  width, height, item_scale)

    return ViewportGeometry(
        half_height=HALF_HEIGHT,
        half_width=half_width,
        margin=margin,
        x_range=x_range,
        fov_degrees=fov_for_half_height(),
    )
