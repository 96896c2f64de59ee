"""Rendering surfaces for pie frames.

- svg: SVG documents built with ElementTree
- raster: half-block terminal raster as rich Text
"""

from taskpie.render.raster import Viewport, rasterize, to_rich_text
from taskpie.render.svg import build_svg, render_svg

__all__ = [
    "Viewport",
    "rasterize",
    "to_rich_text",
    "build_svg",
    "render_svg",
]
