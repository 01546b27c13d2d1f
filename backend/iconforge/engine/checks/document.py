"""Document-level canvas declaration."""

from __future__ import annotations

from iconforge.engine.context import RuleContext
from iconforge.engine.registry import Scope, rule
from iconforge.models.issues import Category, Severity


@rule(
    id="geometry.viewbox",
    scope=Scope.DOCUMENT,
    severity=Severity.CRITICAL,
    category=Category.GEOMETRY,
    description="Canvas declaration must be the canonical viewBox",
)
def viewbox(ctx: RuleContext) -> list[str]:
    if ctx.viewbox == ctx.profile.viewbox:
        return []
    found = f'"{ctx.viewbox}"' if ctx.viewbox is not None else "missing"
    return [f'Invalid viewBox: {found}. Icon must use viewBox="{ctx.profile.viewbox}".']
