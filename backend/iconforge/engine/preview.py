"""Multi-size preview validator.

Estimates how an icon holds up when rendered at each target size. Nothing is
rasterized: every check works from the extracted shapes scaled by
size / canvas.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

import numpy as np

from iconforge.config import get_settings
from iconforge.engine.profiles import DesignProfile, resolve_profile
from iconforge.models.preview import MultiSizeResult, SizeResult
from iconforge.models.shapes import Shape, ShapeKind
from iconforge.utils.geometry import js_round

logger = logging.getLogger(__name__)

STROKE_PENALTY = 20
PATH_PENALTY = 15
SMALL_ELEMENT_PENALTY = 10
DENSITY_PENALTY = 10

MIN_CLARITY = 60
MAX_FLAGS = 2
MAX_DENSITY = 8
MIN_RENDERED_DIMENSION = 2.0

_COMMAND_RE = re.compile(r"[MLHVCSQTAZ]", re.IGNORECASE)


def min_stroke_ratio(size: int) -> float:
    """Minimum stroke width as a percentage of the render size."""
    if size <= 16:
        return 10.0
    if size <= 20:
        return 8.0
    return 3.0


def max_path_commands(size: int) -> int:
    if size <= 16:
        return 10
    if size <= 20:
        return 15
    if size <= 24:
        return 20
    if size <= 32:
        return 30
    return 40


def validate_at_size(
    shapes: Sequence[Shape],
    size: int,
    profile: DesignProfile | str | None = None,
) -> SizeResult:
    """Clarity estimate for one render size. Pure function of (shapes, size)."""
    shapes = list(shapes)
    if not shapes:
        return SizeResult(
            size=size,
            is_recognizable=False,
            clarity=0,
            issues=["No drawable elements"],
            recommendations=["Fix SVG structure"],
        )

    canvas = resolve_profile(profile).canvas_size
    scale = size / canvas
    issues: list[str] = []
    clarity = 100

    widths = [s.stroke.width for s in shapes if s.stroke is not None]
    if widths:
        ratio = float(np.mean(widths)) / size * 100
        if ratio < min_stroke_ratio(size):
            issues.append(f"Stroke too thin for {size}px ({ratio:.1f}% of size)")
            clarity -= STROKE_PENALTY

    ceiling = max_path_commands(size)
    for shape in shapes:
        if shape.kind != ShapeKind.PATH:
            continue
        commands = len(_COMMAND_RE.findall(shape.path_data or ""))
        if commands > ceiling:
            issues.append(f"Path {shape.element_id} too complex for {size}px ({commands} commands)")
            clarity -= PATH_PENALTY

    for shape in shapes:
        rendered = shape.bounds.min_dimension * scale
        if rendered < MIN_RENDERED_DIMENSION:
            issues.append(f"{shape.label} may disappear at {size}px ({rendered:.1f}px)")
            clarity -= SMALL_ELEMENT_PENALTY

    structural = sum(1 for s in shapes if not s.is_decoration)
    if structural > MAX_DENSITY:
        issues.append(f"Too many elements for {size}px ({structural})")
        clarity -= DENSITY_PENALTY

    clarity = max(0, clarity)
    return SizeResult(
        size=size,
        is_recognizable=clarity >= MIN_CLARITY and len(issues) <= MAX_FLAGS,
        clarity=clarity,
        issues=issues,
        recommendations=_size_recommendations(size, issues),
    )


def validate_at_sizes(
    shapes: Sequence[Shape],
    sizes: Sequence[int] | None = None,
    profile: DesignProfile | str | None = None,
) -> MultiSizeResult:
    """Validate every size independently and aggregate."""
    sizes = list(sizes) if sizes is not None else list(get_settings().preview_sizes)
    results = [validate_at_size(shapes, size, profile) for size in sizes]
    if not results:
        return MultiSizeResult()

    mean_clarity = sum(r.clarity for r in results) / len(results)
    result = MultiSizeResult(
        overall_score=js_round(mean_clarity),
        passed_sizes=[r.size for r in results if r.is_recognizable],
        failed_sizes=[r.size for r in results if not r.is_recognizable],
        results=results,
        recommendations=_aggregate_recommendations(results, mean_clarity),
    )
    logger.info(
        "Preview: overall %d, passed %s, failed %s",
        result.overall_score,
        result.passed_sizes,
        result.failed_sizes,
    )
    return result


def _size_recommendations(size: int, issues: list[str]) -> list[str]:
    recommendations: list[str] = []
    if size <= 16:
        recommendations += ["Use bold, simple shapes", "Avoid fine details", "Ensure minimum 2px stroke width"]
    elif size <= 20:
        recommendations += ["Keep shapes simple but can include basic details", "Use consistent stroke weights"]
    elif size >= 32:
        recommendations += ["Can include more detailed elements", "Ensure visual hierarchy is clear"]

    if any(i.startswith("Stroke too thin") for i in issues):
        recommendations.append("Increase stroke weight to at least 2px")
    if any(i.startswith("Path ") for i in issues):
        recommendations += ["Simplify path geometry", "Use basic shapes instead of complex paths"]
    return recommendations


def _aggregate_recommendations(results: list[SizeResult], mean_clarity: float) -> list[str]:
    recommendations: list[str] = []
    if any(r.size <= 20 and not r.is_recognizable for r in results):
        recommendations += [
            "Simplify geometry for better small-size recognition",
            "Increase stroke weight for sizes 16px and 20px",
            "Reduce number of visual elements",
        ]
    if any(r.size > 20 and not r.is_recognizable for r in results):
        recommendations += [
            "Ensure consistent visual balance at larger sizes",
            "Consider adding subtle details for large sizes",
        ]
    if mean_clarity < 80:
        recommendations.append("Consider redesigning for better overall clarity")
    return recommendations
