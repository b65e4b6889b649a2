"""
#WHERE
    Imported by pipeline.py, main.py, frame_evaluator, render_engine and tests.

#WHAT
    Config Module: parameter schema, composition settings and presets.

#INPUT
    User-supplied parameters (CLI flags, dicts).

#OUTPUT
    Validated SimulationConfig / CompositionConfig.
"""

from .models import (
    AssetKind, AssetRef, SimulationConfig, CompositionConfig,
    SHOWCASE_PRESET, PRESETS,
)

__all__ = [
    "AssetKind", "AssetRef", "SimulationConfig", "CompositionConfig",
    "SHOWCASE_PRESET", "PRESETS",
]
