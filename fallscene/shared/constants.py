"""
#WHERE
    Imported by pipeline.py and every module under fallscene/modules;
    single source of truth for world constants, parameter bounds and
    composition defaults.

#WHAT
    Centralised constants shared by the planner, evaluator, viewport
    mapper and renderer.  Edit here, not in individual module files.

#INPUT / #OUTPUT
    Pure constants: no I/O.
"""

import math

# ── World / camera ───────────────────────────────────────────────────────

HALF_HEIGHT: float = 5.0          # visible half-height at z=0, world units
CAMERA_DISTANCE: float = 10.0     # camera sits at (0, 0, CAMERA_DISTANCE)
CAMERA_NEAR: float = 0.1
CAMERA_FAR: float = 1000.0
MIN_MARGIN: float = 0.2           # horizontal keep-out at the frame edge
MARGIN_PER_SCALE: float = 0.5

# ── Motion ───────────────────────────────────────────────────────────────

Y_START: float = 5.0              # items appear at the top edge
Y_END: float = -5.5               # despawn once below this
FALL_SPEED_FACTOR: float = 2.5    # fall_speed → world units / second
ROTATION_FACTOR: float = 0.5      # rotation_speed is halved when applied
SPAWN_JITTER: float = 0.3         # ±0.15 of the timeline
MAX_ROTATION_SPEED: float = math.pi
MAX_DRIFT: float = 0.2

# ── Lighting (used by proxy model shading) ───────────────────────────────

AMBIENT_INTENSITY: float = 1.2
DIRECTIONAL_INTENSITY: float = 0.6
DIRECTIONAL_POSITION = (3.0, 5.0, 2.0)

# ── Parameter bounds ─────────────────────────────────────────────────────

SPAWN_COUNT_RANGE = (1, 500)
SEED_RANGE = (0, 1_000_000)
FALL_SPEED_RANGE = (0.01, 10.0)
ITEM_SCALE_RANGE = (0.01, 5.0)

# ── Composition defaults ─────────────────────────────────────────────────

DEFAULT_FPS: int = 30
DEFAULT_TOTAL_FRAMES: int = 300
DEFAULT_VIDEO_WIDTH: int = 1280
DEFAULT_VIDEO_HEIGHT: int = 720
DEFAULT_OUTPUT_DIR = "outputs"

# ── Caching ──────────────────────────────────────────────────────────────

PLAN_CACHE_SIZE: int = 32
