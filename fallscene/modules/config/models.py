"""
#WHERE
    Used by pipeline.py, main.py, frame_evaluator (SceneItem carries an
    AssetRef), render_engine, and test_config.py.

#WHAT
    Parameter schema for a falling-objects render: what to draw
    (SimulationConfig) and the video it is drawn into (CompositionConfig).
    Validation lives here so the simulation core can assume sane ranges.

#INPUT
    Keyword arguments, or a plain dict via SimulationConfig.from_dict().

#OUTPUT
    Frozen dataclass instances; InvalidConfiguration on bad values.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Mapping

from fallscene.shared.constants import (
    DEFAULT_FPS, DEFAULT_OUTPUT_DIR, DEFAULT_TOTAL_FRAMES,
    DEFAULT_VIDEO_HEIGHT, DEFAULT_VIDEO_WIDTH, FALL_SPEED_RANGE,
    ITEM_SCALE_RANGE, SEED_RANGE, SPAWN_COUNT_RANGE,
)
from fallscene.shared.errors import InvalidConfiguration


class AssetKind(str, Enum):
    IMAGE = "image"
    MODEL = "model"


@dataclass(frozen=True, slots=True)
class AssetRef:
    """Tagged asset handle passed through the core untouched."""
    kind: AssetKind
    source: str


def _check_int(problems: List[str], name: str, value: Any, bounds) -> None:
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        problems.append(f"{name} must be an integer, got {value!r}")
    elif not lo <= value <= hi:
        problems.append(f"{name} must be in [{lo}, {hi}], got {value}")


def _check_float(problems: List[str], name: str, value: Any, bounds) -> None:
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        problems.append(f"{name} must be a number, got {value!r}")
    elif not lo <= value <= hi:
        problems.append(f"{name} must be in [{lo}, {hi}], got {value}")


@dataclass(frozen=True)
class SimulationConfig:
    background_color: str = "#00ff00"
    asset_kind: AssetKind = AssetKind.IMAGE
    asset_source: str = "/image.png"
    spawn_count: int = 50
    seed: int = 42
    fall_speed: float = 1.5
    item_scale: float = 0.8

    @property
    def asset(self) -> AssetRef:
        return AssetRef(AssetKind(self.asset_kind), self.asset_source)

    def validate(self) -> "SimulationConfig":
        """Raise InvalidConfiguration listing every bad field; return self."""
        from PIL import ImageColor

        problems: List[str] = []
        try:
            ImageColor.getrgb(self.background_color)
        except (ValueError, AttributeError, TypeError):
            problems.append(f"background_color is not a colour: {self.background_color!r}")

        try:
            AssetKind(self.asset_kind)
        except ValueError:
            problems.append(f"asset_kind must be one of "
                            f"{[k.value for k in AssetKind]}, got {self.asset_kind!r}")

        if not isinstance(self.asset_source, str) or not self.asset_source.strip():
            problems.append("asset_source must be a non-empty string")

        _check_int(problems, "spawn_count", self.spawn_count, SPAWN_COUNT_RANGE)
        _check_int(problems, "seed", self.seed, SEED_RANGE)
        _check_float(problems, "fall_speed", self.fall_speed, FALL_SPEED_RANGE)
        _check_float(problems, "item_scale", self.item_scale, ITEM_SCALE_RANGE)

        if problems:
            raise InvalidConfiguration(problems)
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """Build and validate a config; missing keys take their defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfiguration([f"unknown parameter: {k}" for k in unknown])

        values: Dict[str, Any] = dict(data)
        if "asset_kind" in values and not isinstance(values["asset_kind"], AssetKind):
            try:
                values["asset_kind"] = AssetKind(str(values["asset_kind"]).lower())
            except ValueError:
                pass  # reported by validate()
        return cls(**values).validate()

    def to_dict(self) -> Dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["asset_kind"] = AssetKind(self.asset_kind).value
        return out

    def with_overrides(self, **changes: Any) -> "SimulationConfig":
        return replace(self, **changes)


@dataclass(frozen=True)
class CompositionConfig:
    fps: int = DEFAULT_FPS
    total_frames: int = DEFAULT_TOTAL_FRAMES
    width: int = DEFAULT_VIDEO_WIDTH
    height: int = DEFAULT_VIDEO_HEIGHT
    output_dir: str = field(default=DEFAULT_OUTPUT_DIR, compare=False)

    @property
    def duration(self) -> float:
        return self.total_frames / self.fps if self.fps > 0 else 0.0

    def validate(self) -> "CompositionConfig":
        problems: List[str] = []
        for name in ("fps", "total_frames", "width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                problems.append(f"{name} must be a positive integer, got {value!r}")
        if problems:
            raise InvalidConfiguration(problems)
        return self


# Props of the 1280x720 showcase composition.
SHOWCASE_PRESET = SimulationConfig(
    background_color="#00ff00",
    asset_kind=AssetKind.IMAGE,
    asset_source="https://cdn-icons-png.flaticon.com/512/6978/6978281.png",
    spawn_count=80,
    seed=42,
    fall_speed=1.4,
    item_scale=1.2,
)

PRESETS: Dict[str, SimulationConfig] = {
    "default": SimulationConfig(),
    "showcase": SHOWCASE_PRESET,
}
