"""Deterministic document rewrites.

Regex splices over the original markup: untouched text stays byte-identical.
Used to repair icons without another generation round, and to derive
stroke-adjusted variants for small render sizes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence

from iconforge.models.issues import ValidationResult
from iconforge.svg.parser import COORDINATE_ATTRS
from iconforge.utils.geometry import js_round

logger = logging.getLogger(__name__)

CANONICAL_VIEWBOX = "0 0 24 24"
CANONICAL_STROKE_WIDTH = 2

_STROKE_WIDTH_RE = re.compile(r'stroke-width\s*=\s*"([^"]*)"')
_VIEWBOX_RE = re.compile(r'viewBox\s*=\s*"[^"]*"')
_SVG_OPEN_RE = re.compile(r"<svg\b", re.IGNORECASE)
_COORD_RE = re.compile(r'(?<![\w-])(' + "|".join(COORDINATE_ATTRS) + r')\s*=\s*"(-?\d*\.\d+)"')

_EFFECT_BLOCK_RE = re.compile(
    r"<(defs|linearGradient|radialGradient|filter|mask|clipPath|pattern)\b[^>]*?(?:/>|>.*?</\1\s*>)",
    re.IGNORECASE | re.DOTALL,
)
_EFFECT_ATTR_RE = re.compile(r'\s(?:filter|mask|clip-path)\s*=\s*"[^"]*"', re.IGNORECASE)
_URL_FILL_RE = re.compile(r'fill\s*=\s*"url\([^)]*\)"', re.IGNORECASE)
_URL_STROKE_RE = re.compile(r'stroke\s*=\s*"url\([^)]*\)"', re.IGNORECASE)
_DISTORTING_TRANSFORM_RE = re.compile(
    r'\stransform\s*=\s*"[^"]*(?:skew|perspective|matrix3d|rotate[XY]|translate3d)[^"]*"',
    re.IGNORECASE,
)
_SHADOW_STYLE_RE = re.compile(r"(?:filter\s*:\s*)?drop-shadow\([^)]*\)\s*;?", re.IGNORECASE)


def enforce_stroke_width(document: str, width: float = CANONICAL_STROKE_WIDTH) -> str:
    """Force every stroke-width attribute to the canonical value."""
    return _STROKE_WIDTH_RE.sub(f'stroke-width="{width:g}"', document)


def enforce_viewbox(document: str, viewbox: str = CANONICAL_VIEWBOX) -> str:
    """Replace the viewBox, or declare one on the root element when missing."""
    if _VIEWBOX_RE.search(document):
        return _VIEWBOX_RE.sub(f'viewBox="{viewbox}"', document)
    return _SVG_OPEN_RE.sub(f'<svg viewBox="{viewbox}"', document, count=1)


def strip_effects(document: str) -> str:
    """Remove gradients, filters, masks, clip paths, shadows and 3D transforms."""
    result = _EFFECT_BLOCK_RE.sub("", document)
    result = _EFFECT_ATTR_RE.sub("", result)
    result = _URL_FILL_RE.sub('fill="none"', result)
    result = _URL_STROKE_RE.sub('stroke="#000000"', result)
    result = _DISTORTING_TRANSFORM_RE.sub("", result)
    return _SHADOW_STYLE_RE.sub("", result)


def round_coordinates(document: str) -> str:
    """Round non-integer coordinate attributes to the nearest integer."""

    def _round(m: re.Match[str]) -> str:
        return f'{m.group(1)}="{js_round(float(m.group(2)))}"'

    return _COORD_RE.sub(_round, document)


# Fix name -> rewrite
AUTO_FIXES: dict[str, Callable[[str], str]] = {
    "enforce_stroke_width": enforce_stroke_width,
    "enforce_viewbox": enforce_viewbox,
    "strip_effects": strip_effects,
    "round_coordinates": round_coordinates,
}

# Rule id -> fix that clears it
FIX_FOR_RULE: dict[str, str] = {
    "stroke.width": "enforce_stroke_width",
    "geometry.viewbox": "enforce_viewbox",
    "perspective.effects": "strip_effects",
    "geometry.snapping": "round_coordinates",
}


def fixes_for(rule_ids: Iterable[str]) -> list[str]:
    """Names of the fixes applicable to the given rule ids, in fix order."""
    wanted = {FIX_FOR_RULE[r] for r in rule_ids if r in FIX_FOR_RULE}
    return [name for name in AUTO_FIXES if name in wanted]


def apply_auto_fixes(document: str, result: ValidationResult) -> tuple[str, list[str]]:
    """Apply every fix mapped to the result's issues. Returns (document, applied)."""
    applied: list[str] = []
    for name in fixes_for(result.rule_ids()):
        fixed = AUTO_FIXES[name](document)
        if fixed != document:
            applied.append(name)
            document = fixed
    if applied:
        logger.info("Applied auto-fixes: %s", ", ".join(applied))
    return document, applied


def optimize_for_size(document: str, size: int, canvas: float = 24.0) -> str:
    """Scale stroke widths down for small renders, never below 1.5."""
    if size > 20:
        return document

    def _scale(m: re.Match[str]) -> str:
        try:
            current = float(m.group(1))
        except ValueError:
            current = float(CANONICAL_STROKE_WIDTH)
        return f'stroke-width="{max(1.5, current * size / canvas):g}"'

    return _STROKE_WIDTH_RE.sub(_scale, document)


def generate_size_variants(document: str, sizes: Sequence[int] = (16, 20, 24, 32, 48)) -> dict[int, str]:
    return {size: optimize_for_size(document, size) for size in sizes}
