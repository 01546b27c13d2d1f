"""Canvas fit and live-area padding."""

from __future__ import annotations

from iconforge.engine.context import RuleContext
from iconforge.engine.registry import Scope, rule
from iconforge.models.issues import Category, Severity
from iconforge.models.shapes import Shape


def _describe(shape: Shape) -> str:
    b = shape.bounds
    return f"x={b.x:g}, y={b.y:g}, width={b.width:g}, height={b.height:g}"


@rule(id="geometry.canvas", scope=Scope.SHAPE, severity=Severity.CRITICAL, category=Category.GEOMETRY)
def canvas_fit(ctx: RuleContext, shape: Shape) -> list[str]:
    b = shape.bounds
    size = ctx.profile.canvas_size
    if b.x < 0 or b.y < 0 or b.x2 > size or b.y2 > size:
        return [f"Shape exceeds canvas bounds ({size:g}dp): {_describe(shape)}"]
    return []


@rule(id="geometry.live_area", scope=Scope.SHAPE, severity=Severity.WARNING, category=Category.GEOMETRY)
def live_area(ctx: RuleContext, shape: Shape) -> list[str]:
    b = shape.bounds
    low, high = ctx.profile.live_area
    if b.x < low or b.y < low or b.x2 > high or b.y2 > high:
        return [f"Shape violates live area padding ({high - low:g}dp live area): {_describe(shape)}"]
    return []
