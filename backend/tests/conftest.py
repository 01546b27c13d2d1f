"""Shared test fixtures."""

from __future__ import annotations

import pytest

from iconforge.models.shapes import Bounds, DecorationKind, Role, Shape, ShapeKind, Stroke
from iconforge.utils.geometry import path_bounds


# Reference icons on the 24dp grid

VALID_RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <rect x="4" y="4" width="16" height="16" rx="2" stroke="#000000" stroke-width="2" fill="none"/>
</svg>'''

THICK_RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <rect x="4" y="4" width="16" height="16" rx="2" stroke="#000000" stroke-width="3" fill="none"/>
</svg>'''

SPARKLES_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" stroke="#000000" stroke-width="2" fill="none">
  <rect x="6" y="6" width="12" height="12" rx="2"/>
  <g class="sparkle">
    <path d="M3 3 L5 5 M5 3 L3 5"/>
    <path d="M19 3 L21 5 M21 3 L19 5"/>
    <path d="M3 19 L5 21 M5 19 L3 21"/>
    <path d="M19 19 L21 21 M21 19 L19 21"/>
    <path d="M11 19 L13 21 M13 19 L11 21"/>
  </g>
</svg>'''

# Stroke on the root element, lines and a circle, all inherited
FOLDER_ADD_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" stroke="#000000" stroke-width="2">
  <path d="M4 6 L10 6 L12 8 L20 8 L20 18 L4 18 Z"/>
  <g data-role="supporting">
    <line x1="12" y1="11" x2="12" y2="15"/>
    <line x1="10" y1="13" x2="14" y2="13"/>
  </g>
</svg>'''

MESSY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 32 32">
  <defs>
    <linearGradient id="g1"><stop offset="0" stop-color="#ff0000"/></linearGradient>
  </defs>
  <rect x="4.5" y="4" width="16" height="16" stroke="#333333" stroke-width="1.5" fill="url(#g1)"/>
  <circle cx="12" cy="12" r="0.5" stroke-width="3" filter="url(#shadow)"/>
</svg>'''

SETTINGS_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" stroke="#000000" stroke-width="2" fill="none">
  <path d="M12.22 2h-.44a2 2 0 0 0-2 2v.18a2 2 0 0 1-1 1.73l-.43.25a2 2 0 0 1-2 0l-.15-.08a2 2 0 0 0-2.73.73l-.22.38a2 2 0 0 0 .73 2.73l.15.1a2 2 0 0 1 1 1.72v.51a2 2 0 0 1-1 1.74l-.15.09a2 2 0 0 0-.73 2.73l.22.38a2 2 0 0 0 2.73.73l.15-.08a2 2 0 0 1 2 0l.43.25a2 2 0 0 1 1 1.73V20a2 2 0 0 0 2 2h.44a2 2 0 0 0 2-2v-.18a2 2 0 0 1 1-1.73l.43-.25a2 2 0 0 1 2 0l.15.08a2 2 0 0 0 2.73-.73l.22-.39a2 2 0 0 0-.73-2.73l-.15-.08a2 2 0 0 1-1-1.74v-.5a2 2 0 0 1 1-1.74l.15-.09a2 2 0 0 0 .73-2.73l-.22-.38a2 2 0 0 0-2.73-.73l-.15.08a2 2 0 0 1-2 0l-.43-.25a2 2 0 0 1-1-1.73V4a2 2 0 0 0-2-2z"/>
</svg>'''


def make_rect(
    x: float = 4,
    y: float = 4,
    width: float = 16,
    height: float = 16,
    *,
    stroke_width: float = 2,
    color: str = "#000000",
    role: Role = Role.PRIMARY,
    decoration_kind: DecorationKind | None = None,
    corner_radius: float | None = None,
    fill: str = "none",
    element_id: str = "E1",
) -> Shape:
    """A rect shape as the extractor would produce it."""
    return Shape(
        kind=ShapeKind.RECT,
        bounds=Bounds(x=x, y=y, width=width, height=height),
        stroke=Stroke(width=stroke_width, color=color),
        fill=fill,
        corner_radius=corner_radius,
        role=role,
        decoration_kind=decoration_kind,
        numeric_attributes={"x": x, "y": y, "width": width, "height": height},
        element_id=element_id,
    )


def make_path(d: str, *, role: Role = Role.PRIMARY, element_id: str = "E1") -> Shape:
    return Shape(
        kind=ShapeKind.PATH,
        bounds=path_bounds(d),
        stroke=Stroke(),
        role=role,
        path_data=d,
        element_id=element_id,
    )


@pytest.fixture
def valid_rect_svg() -> str:
    return VALID_RECT_SVG


@pytest.fixture
def sparkles_svg() -> str:
    return SPARKLES_SVG


@pytest.fixture
def folder_add_svg() -> str:
    return FOLDER_ADD_SVG
