from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class SpawnRecord:
    spawn_frame: int
    x0: float
    rotation_speed: float   # rad/s before ROTATION_FACTOR
    drift: float            # world units / s


SpawnPlan = Tuple[SpawnRecord, ...]
