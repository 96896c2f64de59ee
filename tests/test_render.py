"""Tests for the SVG and terminal rendering surfaces."""

from taskpie.domain.animation import FrameScheduler, ManualClock, PieAnimator
from taskpie.domain.pie import AnimatedLayers, describe_ring
from taskpie.render import Viewport, build_svg, rasterize, render_svg, to_rich_text
from taskpie.render.raster import (
    BACKGROUND,
    HUB,
    PENDING,
    SELECTED,
    blend,
    pixel_color,
)
from taskpie.render.svg import COMPLETED_FILL, PENDING_FILL

from .conftest import make_task


def _rest(forest, path) -> AnimatedLayers:
    return PieAnimator(FrameScheduler(), ManualClock()).frame(forest, path)


def _group(root, css_class):
    return next(g for g in root.findall("g") if g.get("class") == css_class)


# =============================================================================
# SVG
# =============================================================================


def test_empty_frame_shows_a_placeholder() -> None:
    root = build_svg(AnimatedLayers.empty())
    assert root.tag == "svg"
    assert root.find("text").text == "No tasks yet"


def test_svg_is_centred_on_the_origin(single_root) -> None:
    root = build_svg(_rest(single_root, (1,)), size=220)
    assert root.get("viewBox") == "-110.0 -110.0 220 220"


def test_layers_paint_hub_then_rings(single_root) -> None:
    root = build_svg(_rest(single_root, (1, 3)))
    assert [g.get("class") for g in root.findall("g")] == ["parent", "current", "children"]


def test_ring_slices_carry_ids_fills_and_selection(single_root) -> None:
    root = build_svg(_rest(single_root, (1, 3)))
    current = _group(root, "current")

    assert current.get("transform") == "rotate(-225)"
    slices = current.findall("g")
    assert [s.get("data-task-id") for s in slices] == ["2", "3"]

    small, large = (s.find("path") for s in slices)
    assert small.get("fill") == PENDING_FILL
    assert small.get("class") is None
    assert large.get("class") == "selected"
    assert large.get("stroke-width") == "3"
    assert [s.find("text").text for s in slices] == ["Small", "Large"]


def test_labels_are_counter_rotated(single_root) -> None:
    root = build_svg(_rest(single_root, (1, 3)))
    label = _group(root, "current").find("g/text")
    assert label.get("transform").startswith("rotate(225 ")


def test_completed_tasks_are_green() -> None:
    forest = [make_task(1, "Done", completed=True), make_task(2, "Open")]
    current = _group(build_svg(_rest(forest, ())), "current")
    fills = [s.find("path").get("fill") for s in current.findall("g")]
    assert fills == [COMPLETED_FILL, PENDING_FILL]


def test_full_circle_slice_is_drawn_as_a_ring(single_root) -> None:
    current = _group(build_svg(_rest(single_root, (1,))), "current")
    path = current.find("g/path")
    assert path.get("d") == describe_ring(0, 0, 28.0, 70.0)
    assert path.get("fill-rule") == "evenodd"


def test_render_svg_returns_a_document(single_root) -> None:
    text = render_svg(_rest(single_root, (1,)))
    assert text.startswith("<svg")
    assert 'xmlns="http://www.w3.org/2000/svg"' in text
    assert "Small" in text


# =============================================================================
# Terminal raster
# =============================================================================


def test_viewport_maps_cells_to_pie_units() -> None:
    viewport = Viewport(columns=40, rows=20, view_size=220)
    assert viewport.pixel_height == 40
    assert viewport.unit == 5.5
    assert viewport.to_pie(0, 0) == (-107.25, -107.25)
    assert viewport.cell_to_pie(20, 10) == (2.75, 5.5)


def test_blend_clamps_opacity() -> None:
    assert blend((100, 100, 100), (0, 0, 0), 0.5) == (50, 50, 50)
    assert blend((100, 100, 100), (0, 0, 0), 2.0) == (100, 100, 100)
    assert blend((100, 100, 100), (10, 10, 10), -1.0) == (10, 10, 10)


def test_pixel_colors(forest) -> None:
    layers = _rest(forest, (1,))
    assert pixel_color(layers, 0.0, 0.0) == HUB
    assert pixel_color(layers, 50.0, 0.0) == SELECTED
    assert pixel_color(layers, 200.0, 0.0) == BACKGROUND


def test_rasterize_samples_every_pixel(forest) -> None:
    viewport = Viewport(columns=40, rows=20)
    pixels = rasterize(_rest(forest, ()), viewport)

    assert len(pixels) == 40
    assert all(len(row) == 40 for row in pixels)
    assert pixels[0][0] == BACKGROUND
    assert pixels[20][20] == PENDING[0]


def test_to_rich_text_uses_one_glyph_per_cell(forest) -> None:
    text = to_rich_text(_rest(forest, ()), Viewport(columns=30, rows=12))
    lines = text.plain.split("\n")
    assert len(lines) == 12
    assert all(line == "▀" * 30 for line in lines)


def test_to_rich_text_placeholder_for_an_empty_forest() -> None:
    text = to_rich_text(AnimatedLayers.empty(), Viewport(columns=30, rows=12))
    assert text.plain == "No tasks yet"
