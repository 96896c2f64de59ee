"""Terminal rendering surface.

Samples a frame on a character grid using half-block glyphs: every cell
holds two square-ish pixels, the upper one drawn as the foreground of
"▀" and the lower one as its background. Each pixel is classified with
``locate`` and shaded by slice, completion and layer opacity.
"""

from dataclasses import dataclass

from rich.color import Color
from rich.style import Style
from rich.text import Text

from taskpie.domain.pie import AnimatedLayers, locate

RGB = tuple[int, int, int]

BACKGROUND: RGB = (24, 24, 24)
HUB: RGB = (68, 68, 68)
PENDING: tuple[RGB, RGB] = ((85, 85, 85), (110, 110, 110))
COMPLETED: tuple[RGB, RGB] = ((0, 100, 0), (0, 130, 0))
SELECTED: RGB = (200, 160, 40)
UPPER_HALF = "▀"


def blend(color: RGB, background: RGB, opacity: float) -> RGB:
    """Composite ``color`` over ``background`` at ``opacity``."""
    opacity = min(max(opacity, 0.0), 1.0)
    r, g, b = (round(bg + (fg - bg) * opacity) for fg, bg in zip(color, background))
    return (r, g, b)


@dataclass(frozen=True)
class Viewport:
    """Maps terminal cells onto pie units (center at the origin)."""

    columns: int
    rows: int
    view_size: float = 220.0

    @property
    def pixel_height(self) -> int:
        return self.rows * 2

    @property
    def unit(self) -> float:
        """Pie units per pixel; the pie fits the shorter side."""
        return self.view_size / max(min(self.columns, self.pixel_height), 1)

    def to_pie(self, px: float, py: float) -> tuple[float, float]:
        """Pixel coordinates (pixel centers at +0.5) to pie units."""
        x = (px + 0.5 - self.columns / 2) * self.unit
        y = (py + 0.5 - self.pixel_height / 2) * self.unit
        return x, y

    def cell_to_pie(self, column: int, row: int) -> tuple[float, float]:
        """Center of a terminal cell in pie units, for mouse clicks."""
        x = (column + 0.5 - self.columns / 2) * self.unit
        y = (2 * row + 1 - self.pixel_height / 2) * self.unit
        return x, y


def pixel_color(layers: AnimatedLayers, x: float, y: float) -> RGB:
    """Color of the frame at pie coordinates ``(x, y)``."""
    kind, ring, index = locate(layers, x, y)
    if kind == "ring" and ring is not None and index is not None:
        task = ring.tasks[index]
        if task.id == ring.selected_id:
            base = SELECTED
        else:
            palette = COMPLETED if task.completed else PENDING
            base = palette[index % 2]
        return blend(base, BACKGROUND, ring.opacity)
    if kind == "previous_hub" and layers.previous_hub is not None:
        return blend(HUB, BACKGROUND, layers.previous_hub.opacity)
    if kind == "hub" and layers.hub is not None:
        return blend(HUB, BACKGROUND, layers.hub.opacity)
    return BACKGROUND


def rasterize(layers: AnimatedLayers, viewport: Viewport) -> list[list[RGB]]:
    """Sample the frame into a ``pixel_height x columns`` grid of colors."""
    return [
        [pixel_color(layers, *viewport.to_pie(px, py)) for px in range(viewport.columns)]
        for py in range(viewport.pixel_height)
    ]


def to_rich_text(layers: AnimatedLayers, viewport: Viewport) -> Text:
    """Render the frame as rich Text, one half-block glyph per cell."""
    text = Text(no_wrap=True, overflow="crop")
    if layers.is_empty:
        text.append("No tasks yet", style="dim")
        return text

    pixels = rasterize(layers, viewport)
    styles: dict[tuple[RGB, RGB], Style] = {}
    for row in range(viewport.rows):
        upper, lower = pixels[2 * row], pixels[2 * row + 1]
        for top, bottom in zip(upper, lower):
            style = styles.get((top, bottom))
            if style is None:
                style = Style(color=Color.from_rgb(*top), bgcolor=Color.from_rgb(*bottom))
                styles[(top, bottom)] = style
            text.append(UPPER_HALF, style=style)
        if row < viewport.rows - 1:
            text.append("\n")
    return text
