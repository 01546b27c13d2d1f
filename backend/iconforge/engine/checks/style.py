"""Per-shape geometry style: angles, pixel snapping, fills, size, path length."""

from __future__ import annotations

from iconforge.engine.context import RuleContext
from iconforge.engine.registry import Scope, rule
from iconforge.models.issues import Category, Severity
from iconforge.models.shapes import Shape, ShapeKind


@rule(
    id="geometry.angle",
    scope=Scope.SHAPE,
    severity=Severity.WARNING,
    category=Category.GEOMETRY,
    kinds={ShapeKind.LINE},
)
def angle(ctx: RuleContext, shape: Shape) -> list[str]:
    if shape.angle is None or shape.angle in ctx.profile.allowed_angles:
        return []
    allowed = ", ".join(str(a) for a in ctx.profile.allowed_angles)
    return [f"Invalid angle: {shape.angle}°. Must be one of: {allowed}"]


@rule(id="geometry.snapping", scope=Scope.SHAPE, severity=Severity.CRITICAL, category=Category.GEOMETRY)
def snapping(ctx: RuleContext, shape: Shape) -> list[str]:
    return [
        f"Subpixel value detected in {attr}: {value:g}. All coordinates must be integers."
        for attr, value in shape.numeric_attributes.items()
        if not float(value).is_integer()
    ]


@rule(id="perspective.fill", scope=Scope.SHAPE, severity=Severity.WARNING, category=Category.PERSPECTIVE)
def fill(ctx: RuleContext, shape: Shape) -> list[str]:
    if shape.fill.lower() in ctx.profile.fill_whitelist:
        return []
    return [f"Invalid fill: {shape.fill}. Must be 'none', 'transparent', or '#ffffff'."]


@rule(id="accessibility.min_size", scope=Scope.SHAPE, severity=Severity.CRITICAL, category=Category.ACCESSIBILITY)
def min_size(ctx: RuleContext, shape: Shape) -> list[str]:
    b = shape.bounds
    minimum = ctx.profile.min_dimension
    if b.min_dimension < minimum:
        return [
            f"Element too small: {b.width:g}x{b.height:g}. "
            f"Minimum size is {minimum:g}x{minimum:g}dp for 16dp scalability."
        ]
    return []


@rule(
    id="composition.path_complexity",
    scope=Scope.SHAPE,
    severity=Severity.INFO,
    category=Category.COMPOSITION,
    kinds={ShapeKind.PATH},
)
def path_complexity(ctx: RuleContext, shape: Shape) -> list[str]:
    length = len(shape.path_data or "")
    if length > ctx.profile.max_path_length:
        return [f"Path too complex: {length} characters. Consider simplifying for better performance."]
    return []
