"""Primitive extractor: icon markup string -> list[Shape].

A regex tag scan, not an XML parser. Only svg, g, rect, circle, line and
path are understood; everything else is skipped. Presentation attributes on
enclosing svg/g elements are inherited by the primitives inside them.
"""

from __future__ import annotations

import logging
import re

from iconforge.models.shapes import Bounds, DecorationKind, Role, Shape, ShapeKind, Stroke
from iconforge.utils.geometry import line_angle, path_bounds

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<(/?)([A-Za-z][\w:-]*)((?:[^>\"']|\"[^\"]*\"|'[^']*')*?)(/?)>")
_ATTR_RE = re.compile(r"""(\w[\w:-]*)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_VIEWBOX_RE = re.compile(r"""viewBox\s*=\s*(?:"([^"]*)"|'([^']*)')""")

_CONTAINERS = {"svg", "g"}
_PRIMITIVES = {"rect": ShapeKind.RECT, "circle": ShapeKind.CIRCLE, "line": ShapeKind.LINE, "path": ShapeKind.PATH}

# Inheritable presentation attributes
_INHERITED = ("stroke", "stroke-width", "fill", "stroke-linecap", "class", "data-role")

# Coordinate attributes checked for pixel-grid snapping
COORDINATE_ATTRS = ("x", "y", "x1", "x2", "y1", "y2", "width", "height", "cx", "cy", "r")

_DEFAULT_STROKE_WIDTH = 2.0
_DEFAULT_STROKE_COLOR = "#000000"
_DEFAULT_FILL = "none"


def extract_shapes(document: str) -> list[Shape]:
    """Extract every supported primitive from an icon document. Never raises."""
    if not isinstance(document, str) or not document.strip():
        logger.warning("Extraction degraded: empty or non-string document")
        return []

    shapes: list[Shape] = []
    # One frame of inherited attributes per open svg/g element
    stack: list[dict[str, str]] = [{}]

    for match in _TAG_RE.finditer(document):
        closing, tag, attr_text, self_closing = match.groups()
        tag = tag.lower()

        if tag in _CONTAINERS:
            if closing:
                if len(stack) > 1:
                    stack.pop()
            elif not self_closing:
                attrs = _extract_attrs(attr_text)
                frame = dict(stack[-1])
                frame.update({k: v for k, v in attrs.items() if k in _INHERITED})
                stack.append(frame)
            continue

        kind = _PRIMITIVES.get(tag)
        if kind is None or closing:
            continue

        attrs = {**stack[-1], **_extract_attrs(attr_text)}
        element_id = f"E{len(shapes) + 1}"
        try:
            shape = _build_shape(kind, attrs, element_id)
        except ValueError as e:
            logger.warning("Skipping <%s> at offset %d: %s", tag, match.start(), e)
            continue
        shapes.append(shape)

    if not shapes:
        logger.warning("Extraction degraded: no drawable primitives found")
    else:
        logger.debug("Extracted %d shapes", len(shapes))
    return shapes


def extract_viewbox(document: str) -> str | None:
    """The declared viewBox with whitespace normalized, or None."""
    if not isinstance(document, str):
        return None
    m = _VIEWBOX_RE.search(document)
    if not m:
        return None
    value = m.group(1) if m.group(1) is not None else m.group(2)
    return " ".join(value.replace(",", " ").split())


def _extract_attrs(tag_text: str) -> dict[str, str]:
    """Extract key attributes from an SVG tag string."""
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(tag_text):
        attrs[m.group(1)] = m.group(2) if m.group(2) is not None else m.group(3)
    return attrs


def _build_shape(kind: ShapeKind, attrs: dict[str, str], element_id: str) -> Shape:
    # Absent attributes default to 0; present but unparseable ones raise ValueError
    numeric = {name: float(attrs[name]) for name in COORDINATE_ATTRS if name in attrs}

    corner_radius = None
    angle = None
    path_data = None

    if kind == ShapeKind.RECT:
        bounds = Bounds(
            x=numeric.get("x", 0.0),
            y=numeric.get("y", 0.0),
            width=numeric.get("width", 0.0),
            height=numeric.get("height", 0.0),
        )
        radius = attrs.get("rx", attrs.get("ry"))
        if radius is not None:
            corner_radius = float(radius)
    elif kind == ShapeKind.CIRCLE:
        cx, cy, r = numeric.get("cx", 0.0), numeric.get("cy", 0.0), numeric.get("r", 0.0)
        bounds = Bounds(x=cx - r, y=cy - r, width=2 * r, height=2 * r)
    elif kind == ShapeKind.LINE:
        x1, y1 = numeric.get("x1", 0.0), numeric.get("y1", 0.0)
        x2, y2 = numeric.get("x2", 0.0), numeric.get("y2", 0.0)
        bounds = Bounds(x=min(x1, x2), y=min(y1, y2), width=abs(x2 - x1), height=abs(y2 - y1))
        angle = line_angle(x1, y1, x2, y2)
    else:
        path_data = attrs.get("d", "")
        bounds = path_bounds(path_data)

    role, decoration_kind = _infer_role(attrs)

    return Shape(
        kind=kind,
        bounds=bounds,
        stroke=_build_stroke(attrs),
        fill=attrs.get("fill", _DEFAULT_FILL).strip(),
        corner_radius=corner_radius,
        angle=angle,
        role=role,
        decoration_kind=decoration_kind,
        numeric_attributes=numeric,
        path_data=path_data,
        element_id=element_id,
    )


def _build_stroke(attrs: dict[str, str]) -> Stroke | None:
    color = attrs.get("stroke", _DEFAULT_STROKE_COLOR).strip()
    if color.lower() == "none":
        return None
    width = attrs.get("stroke-width")
    return Stroke(
        width=float(width.replace("px", "")) if width is not None else _DEFAULT_STROKE_WIDTH,
        color=color,
        linecap=attrs.get("stroke-linecap", "butt").strip(),
    )


def _infer_role(attrs: dict[str, str]) -> tuple[Role, DecorationKind | None]:
    """Role from class tokens and data-role; untagged shapes are primary."""
    tokens = set(attrs.get("class", "").lower().split())
    tokens.update(attrs.get("data-role", "").lower().split())

    if "sparkle" in tokens:
        return Role.DECORATION, DecorationKind.SPARKLE
    if "dot" in tokens:
        return Role.DECORATION, DecorationKind.DOT
    if "decoration" in tokens:
        return Role.DECORATION, None
    if "supporting" in tokens:
        return Role.SUPPORTING, None
    return Role.PRIMARY, None
