"""Set consistency validator.

Compares a candidate icon against the visual language of its sibling set:
stroke weight, corner radius, element count and style, plus metaphor
collisions by name.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Sequence

from iconforge.models.icon_set import (
    ConsistencyResult,
    IconSetStats,
    IconSummary,
    SetProfile,
    SiblingIcon,
    ValueRange,
)
from iconforge.models.shapes import Shape, ShapeKind
from iconforge.svg.parser import extract_shapes
from iconforge.utils.geometry import value_range

logger = logging.getLogger(__name__)

VIOLATION_PENALTY = 15
MAX_DOMINANT_STYLES = 3
MAX_COMMON_METAPHORS = 10

KNOWN_METAPHORS = ("add", "delete", "edit", "save", "user", "folder", "file", "home", "search", "settings")

METAPHOR_SYNONYMS: dict[str, tuple[str, ...]] = {
    "add": ("create", "new", "plus"),
    "delete": ("remove", "trash", "bin"),
    "edit": ("modify", "change", "update"),
    "user": ("person", "profile", "account"),
    "folder": ("directory", "collection"),
    "file": ("document", "page"),
}


def summarize_icon(icon: Sequence[Shape] | str) -> IconSummary:
    """Stroke weight, corner radius, element count and style of one icon."""
    shapes = extract_shapes(icon) if isinstance(icon, str) else list(icon)
    if not shapes:
        return IconSummary()

    strokes = [s.stroke.width for s in shapes if s.stroke is not None]
    radii = [s.corner_radius for s in shapes if s.corner_radius is not None]
    return IconSummary(
        stroke_weight=value_range(strokes)[2],
        corner_radius=value_range(radii)[2],
        complexity=len(shapes),
        style=classify_style(shapes),
    )


def classify_style(shapes: Sequence[Shape]) -> str:
    has_strokes = any(s.stroke is not None for s in shapes)
    has_fills = any(s.fill.lower() not in ("none", "transparent") for s in shapes)
    has_rounding = any(s.corner_radius is not None or s.kind == ShapeKind.CIRCLE for s in shapes)

    if has_strokes and not has_fills:
        return "outlined"
    if has_fills and not has_strokes:
        return "filled"
    if has_rounding:
        return "rounded"
    return "geometric"


def analyze_icon_set(icons: Sequence[SiblingIcon]) -> IconSetStats:
    """Aggregate the sibling set. Zero stroke weights and radii are left out."""
    strokes: list[float] = []
    radii: list[float] = []
    complexities: list[float] = []
    styles: list[str] = []
    metaphors: list[str] = []

    for icon in icons:
        summary = summarize_icon(icon.svg)
        if summary.stroke_weight > 0:
            strokes.append(summary.stroke_weight)
        if summary.corner_radius > 0:
            radii.append(summary.corner_radius)
        complexities.append(summary.complexity)
        styles.append(summary.style)
        metaphor = extract_metaphor(icon.name)
        if metaphor:
            metaphors.append(metaphor)

    stats = IconSetStats(
        stroke_weight=_range(strokes),
        corner_radius=_range(radii),
        complexity=_range(complexities),
        dominant_styles=[style for style, _ in Counter(styles).most_common(MAX_DOMINANT_STYLES)],
        common_metaphors=[m for m, _ in Counter(metaphors).most_common(MAX_COMMON_METAPHORS)],
        visual_language=_visual_language(styles, radii),
        icon_names=[icon.name for icon in icons],
    )
    logger.debug("Icon set: %d icons, styles %s", len(icons), stats.dominant_styles)
    return stats


def validate_against_set(
    candidate: Sequence[Shape] | str,
    set_stats: IconSetStats,
    profile: SetProfile | None = None,
    name: str | None = None,
) -> ConsistencyResult:
    """Check a candidate icon against its set's averages and sibling names.

    A scalar the set has no data for (average 0) is not compared.
    """
    profile = profile or SetProfile()
    summary = summarize_icon(candidate)
    violations: list[str] = []
    recommendations: list[str] = []

    stroke_avg = set_stats.stroke_weight.avg
    if stroke_avg > 0 and abs(summary.stroke_weight - stroke_avg) > profile.stroke_tolerance:
        violations.append(
            f"Stroke weight ({summary.stroke_weight:g}dp) differs from set average ({stroke_avg:.1f}dp)"
        )
        recommendations.append(f"Adjust stroke weight to {stroke_avg:.1f}dp")

    radius_avg = set_stats.corner_radius.avg
    if radius_avg > 0 and abs(summary.corner_radius - radius_avg) > profile.corner_radius_tolerance:
        violations.append(
            f"Corner radius ({summary.corner_radius:g}dp) differs from set average ({radius_avg:.1f}dp)"
        )
        recommendations.append(f"Adjust corner radius to {radius_avg:.1f}dp")

    complexity_avg = set_stats.complexity.avg
    if set_stats.complexity.max > 0 and abs(summary.complexity - complexity_avg) > profile.complexity_tolerance:
        violations.append(
            f"Icon complexity ({summary.complexity}) differs significantly from set average ({complexity_avg:.1f})"
        )
        recommendations.append(
            "Simplify icon geometry" if summary.complexity > complexity_avg else "Add more detail for consistency"
        )

    if set_stats.dominant_styles and summary.style not in set_stats.dominant_styles:
        violations.append(
            f"Visual style ({summary.style}) doesn't match set's dominant styles "
            f"({', '.join(set_stats.dominant_styles)})"
        )
        recommendations.append(f"Adjust to match {set_stats.dominant_styles[0]} style")

    brand = profile.brand_guidelines
    if brand is not None:
        if abs(summary.stroke_weight - brand.stroke_weight) > 0.25:
            violations.append(f"Stroke weight doesn't match brand guidelines ({brand.stroke_weight:g}dp)")
        if abs(summary.corner_radius - brand.corner_radius) > 0.5:
            violations.append(f"Corner radius doesn't match brand guidelines ({brand.corner_radius:g}dp)")
        if brand.visual_style not in summary.style:
            violations.append(f"Visual style doesn't match brand guidelines ({brand.visual_style})")

    conflicts = metaphor_conflicts(name, set_stats.icon_names)
    result = ConsistencyResult(
        is_consistent=not violations and not conflicts,
        consistency_score=max(0, 100 - VIOLATION_PENALTY * len(violations)),
        violations=violations,
        recommendations=recommendations,
        metaphor_conflicts=conflicts,
        visual_similarity=visual_similarity(summary, set_stats),
    )
    logger.info(
        "Set consistency: score %d, %d violations, %d metaphor conflicts",
        result.consistency_score,
        len(violations),
        len(conflicts),
    )
    return result


def visual_similarity(summary: IconSummary, set_stats: IconSetStats) -> float:
    similarity = 100.0
    if set_stats.stroke_weight.avg > 0:
        similarity -= abs(summary.stroke_weight - set_stats.stroke_weight.avg) * 10
    if set_stats.corner_radius.avg > 0:
        similarity -= abs(summary.corner_radius - set_stats.corner_radius.avg) * 5
    if set_stats.complexity.max > 0:
        similarity -= abs(summary.complexity - set_stats.complexity.avg) * 3
    if set_stats.dominant_styles and summary.style not in set_stats.dominant_styles:
        similarity -= 20
    return round(max(0.0, min(100.0, similarity)), 2)


# ---------------------------------------------------------------------------
# Metaphors
# ---------------------------------------------------------------------------


def extract_metaphor(name: str | None) -> str | None:
    """A known metaphor word from the name, else its first word."""
    words = [w for w in re.split(r"[\s_\-]+", (name or "").lower()) if w]
    for word in words:
        if word in KNOWN_METAPHORS:
            return word
    return words[0] if words else None


def similar_metaphors(a: str, b: str) -> bool:
    if a == b:
        return True
    for primary, synonyms in METAPHOR_SYNONYMS.items():
        if (primary == a and b in synonyms) or (primary == b and a in synonyms):
            return True
    return False


def metaphor_conflicts(name: str | None, sibling_names: Sequence[str]) -> list[str]:
    metaphor = extract_metaphor(name)
    if metaphor is None:
        return []
    conflicts: list[str] = []
    for sibling in sibling_names:
        existing = extract_metaphor(sibling)
        if existing and similar_metaphors(metaphor, existing):
            conflicts.append(f'Similar to existing icon "{sibling}" ({existing})')
    return conflicts


# ---------------------------------------------------------------------------
# Set-wide recommendations
# ---------------------------------------------------------------------------


def set_recommendations(stats: IconSetStats, target_style: str = "generic") -> list[str]:
    """How to tighten a set's own consistency, optionally toward a design system."""
    recommendations: list[str] = []
    sw, cr, cx = stats.stroke_weight, stats.corner_radius, stats.complexity

    if sw.max - sw.min > 1:
        recommendations.append(f"Standardize stroke weights (current range: {sw.min:g}-{sw.max:g}dp)")
    if cr.max - cr.min > 2:
        recommendations.append(f"Standardize corner radii (current range: {cr.min:g}-{cr.max:g}dp)")
    if cx.max - cx.min > 5:
        recommendations.append(f"Balance icon complexity (current range: {cx.min:g}-{cx.max:g} elements)")

    if target_style == "material":
        if sw.avg != 2:
            recommendations.append("Use 2dp stroke weight for Material Design consistency")
        if cr.avg != 2:
            recommendations.append("Use 2dp corner radius for Material Design consistency")
    elif target_style == "carbon":
        if not stats.dominant_styles or stats.dominant_styles[0] != "outlined":
            recommendations.append("Use outlined style for Carbon Design consistency")
    return recommendations


def _range(values: list[float]) -> ValueRange:
    low, high, avg = value_range(values)
    return ValueRange(min=low, max=high, avg=avg)


def _visual_language(styles: list[str], radii: list[float]) -> str:
    geometric = sum(1 for s in styles if s in ("geometric", "outlined"))
    rounded = sum(1 for s in styles if s == "rounded")
    avg_radius = value_range(radii)[2]
    if avg_radius > 2 or rounded > geometric:
        return "rounded"
    if geometric > rounded * 2:
        return "geometric"
    return "mixed"
