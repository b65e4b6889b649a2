"""
Render Engine
=============
Software sprite rasteriser for evaluated frames.

Quick start::

    from fallscene.modules.render_engine import RenderEngine, RenderSettings

    engine = RenderEngine(1280, 720, RenderSettings(background_color="#00ff00"))
    rgb = engine.draw(items)
"""
from .render_engine import RenderEngine, RenderSettings, lambert_factor, model_matrix

__all__ = ["RenderEngine", "RenderSettings", "lambert_factor", "model_matrix"]
