"""Stroke width, color and corner radius. Shapes with stroke="none" are skipped."""

from __future__ import annotations

from iconforge.engine.context import RuleContext
from iconforge.engine.registry import Scope, rule
from iconforge.models.issues import Category, Severity
from iconforge.models.shapes import Shape, ShapeKind


@rule(id="stroke.width", scope=Scope.SHAPE, severity=Severity.CRITICAL, category=Category.STROKE)
def stroke_width(ctx: RuleContext, shape: Shape) -> list[str]:
    if shape.stroke is None or shape.stroke.width == ctx.profile.stroke_width:
        return []
    return [f"Invalid stroke width: {shape.stroke.width:g}. Must be {ctx.profile.stroke_width:g}dp."]


@rule(id="stroke.color", scope=Scope.SHAPE, severity=Severity.WARNING, category=Category.STROKE)
def stroke_color(ctx: RuleContext, shape: Shape) -> list[str]:
    if shape.stroke is None or shape.stroke.color in ctx.profile.stroke_colors:
        return []
    allowed = " or ".join(ctx.profile.stroke_colors)
    return [f"Invalid stroke color: {shape.stroke.color}. Must be {allowed}."]


@rule(
    id="stroke.corner_radius",
    scope=Scope.SHAPE,
    severity=Severity.WARNING,
    category=Category.STROKE,
    kinds={ShapeKind.RECT},
)
def corner_radius(ctx: RuleContext, shape: Shape) -> list[str]:
    if shape.corner_radius is None or shape.corner_radius in ctx.profile.corner_radii:
        return []
    return [
        f"Invalid corner radius: {shape.corner_radius:g}. "
        "Must be 2dp for outer corners or 0dp for inner corners."
    ]
