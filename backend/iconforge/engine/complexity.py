"""Complexity scorer.

Five weighted factors, each normalized to [0, 1]:

    element count        0.30
    metaphor clarity     0.25
    visual balance       0.20
    small-size reading   0.15
    stroke complexity    0.10

The weighted sum is the complexity score. Thresholds 0.4 / 0.7 split it into
low / medium / high. The factor increments are empirical constants.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

import numpy as np

from iconforge.models.complexity import (
    Alternative,
    ComplexityAnalysis,
    FeedbackItem,
    QualityMetrics,
    SimplificationSuggestion,
)
from iconforge.models.shapes import Role, Shape, ShapeKind
from iconforge.utils.geometry import areas, find_overlaps, whitespace_ratio

logger = logging.getLogger(__name__)

WEIGHTS = {
    "element_count": 0.30,
    "metaphor_clarity": 0.25,
    "visual_balance": 0.20,
    "small_size_readability": 0.15,
    "stroke_complexity": 0.10,
}

LOW_THRESHOLD = 0.4
MEDIUM_THRESHOLD = 0.7

MIN_DESCRIPTION_LENGTH = 10
MIN_WHITESPACE_RATIO = 0.3

_COMMAND_RE = re.compile(r"[MLHVCSQTA]", re.IGNORECASE)
_CURVE_RE = re.compile(r"[CSQ]", re.IGNORECASE)
_STRAIGHT_RE = re.compile(r"[MLH]", re.IGNORECASE)

# Glyph names for common metaphors in two public icon systems
MATERIAL_GLYPHS = {
    "add": "add_circle_outline",
    "edit": "edit",
    "delete": "delete_outline",
    "save": "save",
    "copy": "content_copy",
    "user": "person_outline",
    "settings": "settings",
    "file": "description",
    "folder": "folder_outline",
}

CARBON_GLYPHS = {
    "add": "add",
    "edit": "edit",
    "delete": "trash-can",
    "save": "save",
    "copy": "copy",
    "user": "user",
    "settings": "settings",
    "file": "document",
    "folder": "folder",
}


def analyze_complexity(
    shapes: Sequence[Shape],
    description: str | None = None,
    name: str | None = None,
) -> ComplexityAnalysis:
    """Score how complex an icon is and suggest alternatives. Pure; never raises."""
    shapes = list(shapes)
    factors = {
        "element_count": _element_count_factor(shapes),
        "metaphor_clarity": _metaphor_clarity_factor(shapes, description),
        "visual_balance": _visual_balance_factor(shapes),
        "small_size_readability": _readability_factor(shapes),
        "stroke_complexity": _stroke_complexity_factor(shapes),
    }
    score = float(np.clip(sum(WEIGHTS[k] * v for k, v in factors.items()), 0.0, 1.0))
    score = round(score, 4)

    flags = _flags(shapes)
    rating = _rating(score)
    # Competing metaphors always need attention, whatever the other factors say
    if "Multiple competing metaphors" in flags and rating == "low":
        rating = "medium"

    analysis = ComplexityAnalysis(
        score=score,
        rating=rating,
        flags=flags,
        factors=factors,
        recommend_simplification=score > MEDIUM_THRESHOLD,
        alternatives=_alternatives(score, name),
        feedback=_feedback(score, flags),
    )
    logger.info("Complexity: score %.3f (%s), %d flags", score, rating, len(flags))
    return analysis


def command_count(shapes: Sequence[Shape], pattern: re.Pattern[str] = _COMMAND_RE) -> int:
    return sum(len(pattern.findall(s.path_data or "")) for s in shapes if s.kind == ShapeKind.PATH)


# ---------------------------------------------------------------------------
# Factors
# ---------------------------------------------------------------------------


def _element_count_factor(shapes: list[Shape]) -> float:
    main = sum(1 for s in shapes if not s.is_decoration)
    decorative = len(shapes) - main
    score = 0.0
    if main > 3:
        score += 0.3
    if main > 5:
        score += 0.4
    if decorative > 2:
        score += 0.2
    if decorative > 4:
        score += 0.3
    return min(score, 1.0)


def _metaphor_clarity_factor(shapes: list[Shape], description: str | None) -> float:
    score = 0.0
    if sum(1 for s in shapes if s.role == Role.PRIMARY) > 1:
        score += 0.4
    if not description or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        score += 0.3
    if len({s.kind for s in shapes}) > 4:
        score += 0.2
    return min(score, 1.0)


def _visual_balance_factor(shapes: list[Shape]) -> float:
    if not shapes:
        return 0.0
    score = 0.0
    a = areas(shapes)
    mean = float(np.mean(a))
    if np.any((a > mean * 3) | (a < mean * 0.3)):
        score += 0.3
    if len(find_overlaps([s for s in shapes if not s.is_decoration])) > 2:
        score += 0.4
    return min(score, 1.0)


def _readability_factor(shapes: list[Shape]) -> float:
    score = 0.0
    if any(s.bounds.min_dimension < 2 for s in shapes):
        score += 0.5
    if sum(1 for s in shapes if s.bounds.min_dimension < 4) > 2:
        score += 0.3
    return min(score, 1.0)


def _stroke_complexity_factor(shapes: list[Shape]) -> float:
    score = 0.0
    commands = command_count(shapes)
    if commands > 20:
        score += 0.3
    if commands > 40:
        score += 0.4
    if command_count(shapes, _CURVE_RE) > command_count(shapes, _STRAIGHT_RE):
        score += 0.2
    return min(score, 1.0)


def _rating(score: float) -> str:
    if score <= LOW_THRESHOLD:
        return "low"
    if score <= MEDIUM_THRESHOLD:
        return "medium"
    return "high"


# ---------------------------------------------------------------------------
# Flags, alternatives, feedback
# ---------------------------------------------------------------------------


def _flags(shapes: list[Shape]) -> list[str]:
    flags: list[str] = []
    main = [s for s in shapes if not s.is_decoration]
    primaries = sum(1 for s in shapes if s.role == Role.PRIMARY)

    if len(main) > 3:
        flags.append("Too many main elements")
    if len(main) > 5:
        flags.append("Excessive element count")
    if any(s.bounds.min_dimension < 2 for s in shapes):
        flags.append("Elements too small for 16dp scaling")
    if primaries > 1:
        flags.append("Multiple competing metaphors")
    if primaries == 0:
        flags.append("No clear primary element")
    if len(find_overlaps(main)) > 2:
        flags.append("Too many overlapping elements")
    if command_count(shapes) > 30:
        flags.append("Stroke paths too complex")
    if shapes and whitespace_ratio(shapes) < MIN_WHITESPACE_RATIO:
        flags.append("Insufficient whitespace")
    return flags


def match_design_system(name: str | None) -> dict[str, str]:
    """Closest Material and Carbon glyph names for an icon name, if any."""
    matches: dict[str, str] = {}
    for token in re.split(r"[\s_\-]+", (name or "").lower()):
        if token in MATERIAL_GLYPHS and "material" not in matches:
            matches["material"] = MATERIAL_GLYPHS[token]
        if token in CARBON_GLYPHS and "carbon" not in matches:
            matches["carbon"] = CARBON_GLYPHS[token]
    return matches


def _alternatives(score: float, name: str | None) -> list[Alternative]:
    alternatives: list[Alternative] = []
    if score > MEDIUM_THRESHOLD:
        alternatives.append(
            Alternative(
                type="simplified",
                title="Simplified Version",
                description="Auto-generate using only core metaphor",
                action="regenerate_simplified",
                confidence=0.9,
            )
        )
    if score > LOW_THRESHOLD:
        glyphs = match_design_system(name)
        alternatives.append(
            Alternative(
                type="material_style",
                title="Material Design Style",
                description="Use Google Material icon patterns",
                action="apply_material_style",
                confidence=0.8,
                reference=glyphs.get("material"),
            )
        )
        alternatives.append(
            Alternative(
                type="carbon_style",
                title="IBM Carbon Style",
                description="Use IBM Carbon icon patterns",
                action="apply_carbon_style",
                confidence=0.8,
                reference=glyphs.get("carbon"),
            )
        )
    alternatives.append(
        Alternative(
            type="custom_refinement",
            title="Custom Refinement",
            description="Provide text instructions for modifications",
            action="accept_text_refinement",
            confidence=0.7,
        )
    )
    return alternatives


_FLAG_FEEDBACK = {
    "Too many main elements": ("Consider combining elements into a single unified shape", "warning"),
    "Elements too small for 16dp scaling": ("Increase minimum element size to 2dp for better scaling", "error"),
    "Multiple competing metaphors": (
        "Choose one primary metaphor and make supporting elements secondary",
        "warning",
    ),
    "Insufficient whitespace": ("Add more whitespace around elements for better clarity", "warning"),
}


def _feedback(score: float, flags: list[str]) -> list[FeedbackItem]:
    if score <= LOW_THRESHOLD:
        items = [FeedbackItem(type="success", message="Icon complexity is optimal for UI use", severity="info")]
    elif score <= MEDIUM_THRESHOLD:
        items = [
            FeedbackItem(
                type="warning",
                message="Icon may be slightly complex for small sizes (16dp and below)",
                severity="warning",
            )
        ]
    else:
        items = [
            FeedbackItem(type="error", message="Icon is too complex for clarity at small sizes", severity="error")
        ]

    for flag in flags:
        if flag in _FLAG_FEEDBACK:
            message, severity = _FLAG_FEEDBACK[flag]
            items.append(FeedbackItem(type="suggestion", message=message, severity=severity))
    return items


# ---------------------------------------------------------------------------
# Quality and simplification
# ---------------------------------------------------------------------------


def simplification_suggestions(shapes: Sequence[Shape]) -> list[SimplificationSuggestion]:
    shapes = list(shapes)
    suggestions: list[SimplificationSuggestion] = []
    decorative = sum(1 for s in shapes if s.is_decoration)
    if decorative:
        suggestions.append(
            SimplificationSuggestion(
                type="remove_decorations",
                description=f"Remove {decorative} decorative elements",
                impact="medium",
            )
        )
    if find_overlaps(shapes):
        suggestions.append(
            SimplificationSuggestion(
                type="combine_overlapping",
                description="Combine overlapping elements into single shapes",
                impact="high",
            )
        )
    suggestions.append(
        SimplificationSuggestion(
            type="simplify_paths",
            description="Convert complex curves to simple geometric shapes",
            impact="medium",
        )
    )
    return suggestions


def assess_quality(shapes: Sequence[Shape]) -> QualityMetrics:
    """Four 0-50 sub-scores; an empty icon scores zero everywhere."""
    shapes = list(shapes)
    if not shapes:
        return QualityMetrics()

    clarity = 0
    main = sum(1 for s in shapes if not s.is_decoration)
    if main <= 3:
        clarity += 25
    if main <= 2:
        clarity += 25

    widths = {s.stroke_width for s in shapes}
    consistency = 50 if widths == {2.0} else 0

    scalability = 0
    min_size = min(s.bounds.min_dimension for s in shapes)
    if min_size >= 2:
        scalability += 25
    if min_size >= 4:
        scalability += 25

    black = all(s.stroke is not None and s.stroke.color in ("#000000", "black") for s in shapes)
    accessibility = 50 if black else 0

    return QualityMetrics(
        clarity=clarity,
        consistency=consistency,
        scalability=scalability,
        accessibility=accessibility,
    )
