"""SVG rendering surface.

Converts one ``AnimatedLayers`` frame into an SVG document. Rings are
drawn as groups rotated by the ring rotation; labels are counter-rotated
about their own anchor so text stays upright.
"""

import xml.etree.ElementTree as ET

from taskpie.domain.pie import (
    FULL_CIRCLE,
    AnimatedLayers,
    HubLayer,
    RingLayer,
    describe_ring,
    describe_ring_arc,
    polar_to_cartesian,
)

###############################################################################
# Constants
###############################################################################
COMPLETED_FILL = "#006400"
PENDING_FILL = "#555"
HUB_FILL = "#444"
STROKE_COLOR = "#000"
LABEL_COLOR = "#fff"
SELECTED_STROKE_WIDTH = "3"
DEFAULT_STROKE_WIDTH = "1"
DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_FONT_SIZE = "8"
DEFAULT_SIZE = 220


###############################################################################
# SVG Element Creation Utilities
###############################################################################
def get_svg_root(size: float) -> ET.Element:
    """SVG root centred on the origin so pie units map straight onto it."""
    half = size / 2
    data = {
        "viewBox": f"{-half} {-half} {size} {size}",
        "version": "1.1",
        "xmlns": "http://www.w3.org/2000/svg",
        "width": str(size),
        "height": str(size),
        "class": "pie",
    }
    return ET.Element("svg", data)


def _num(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".") or "0"


def _fill(completed: bool) -> str:
    return COMPLETED_FILL if completed else PENDING_FILL


def add_hub(parent: ET.Element, hub: HubLayer, css_class: str) -> None:
    group = ET.SubElement(
        parent, "g", {"class": css_class, "opacity": _num(hub.opacity)}
    )
    ET.SubElement(
        group,
        "circle",
        {"cx": "0", "cy": "0", "r": _num(hub.radius), "fill": HUB_FILL, "stroke": STROKE_COLOR},
    )
    if hub.label:
        label = ET.SubElement(
            group,
            "text",
            {
                "x": "0",
                "y": "0",
                "text-anchor": "middle",
                "dominant-baseline": "middle",
                "font-size": DEFAULT_FONT_SIZE,
                "font-family": DEFAULT_FONT_FAMILY,
                "fill": LABEL_COLOR,
            },
        )
        label.text = hub.label


def add_ring(parent: ET.Element, ring: RingLayer, css_class: str, labels: bool = True) -> None:
    """Add one ring: a rotated group with a path (and label) per slice."""
    group = ET.SubElement(
        parent,
        "g",
        {
            "class": css_class,
            "transform": f"rotate({_num(ring.rotation_deg)})",
            "opacity": _num(ring.opacity),
        },
    )
    inner, outer = ring.radii.inner, ring.radii.outer
    for task, span in zip(ring.tasks, ring.angles):
        if span.span >= FULL_CIRCLE - 1e-9:
            d = describe_ring(0, 0, inner, outer)
        else:
            d = describe_ring_arc(0, 0, inner, outer, span.start, span.end)
        selected = task.id == ring.selected_id
        slice_group = ET.SubElement(group, "g", {"data-task-id": str(task.id)})
        ET.SubElement(
            slice_group,
            "path",
            {
                "d": d,
                "fill": _fill(task.completed),
                "fill-rule": "evenodd",
                "stroke": STROKE_COLOR,
                "stroke-width": SELECTED_STROKE_WIDTH if selected else DEFAULT_STROKE_WIDTH,
                **({"class": "selected"} if selected else {}),
            },
        )
        if not labels:
            continue
        pos = polar_to_cartesian(0, 0, (inner + outer) / 2, span.mid)
        text = ET.SubElement(
            slice_group,
            "text",
            {
                "x": _num(pos.x),
                "y": _num(pos.y),
                "text-anchor": "middle",
                "dominant-baseline": "middle",
                "font-size": DEFAULT_FONT_SIZE,
                "font-family": DEFAULT_FONT_FAMILY,
                "fill": LABEL_COLOR,
                "transform": f"rotate({_num(-ring.rotation_deg)} {_num(pos.x)} {_num(pos.y)})",
            },
        )
        text.text = task.name


###############################################################################
# Document
###############################################################################
def build_svg(layers: AnimatedLayers, size: float = DEFAULT_SIZE) -> ET.Element:
    """Build the SVG element tree for one frame."""
    root = get_svg_root(size)
    if layers.is_empty:
        empty = ET.SubElement(
            root,
            "text",
            {"x": "0", "y": "0", "text-anchor": "middle", "font-family": DEFAULT_FONT_FAMILY},
        )
        empty.text = "No tasks yet"
        return root

    # Paint order: hubs under the rings, outgoing rings under live ones.
    if layers.hub is not None:
        add_hub(root, layers.hub, "parent")
    if layers.previous_hub is not None:
        add_hub(root, layers.previous_hub, "previous-parent")
    if layers.previous is not None:
        add_ring(root, layers.previous, "previous")
    if layers.current is not None:
        add_ring(root, layers.current, "current")
    if layers.child is not None:
        add_ring(root, layers.child, "children")
    if layers.fading_child is not None:
        add_ring(root, layers.fading_child, "fading-children", labels=False)
    return root


def render_svg(layers: AnimatedLayers, size: float = DEFAULT_SIZE) -> str:
    """Render one frame as an SVG document string."""
    root = build_svg(layers, size)
    ET.indent(root)
    return ET.tostring(root, encoding="unicode")

