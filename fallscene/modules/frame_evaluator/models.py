from dataclasses import dataclass
from typing import Tuple

from fallscene.modules.config import AssetRef


@dataclass(frozen=True, slots=True)
class FrameState:
    visible: bool
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0


HIDDEN = FrameState(visible=False)


@dataclass(frozen=True, slots=True)
class SceneItem:
    """One visible item, ready for a renderer."""
    index: int
    asset: AssetRef
    position: Tuple[float, float, float]
    rotation: float
    scale: float
