"""Set-level composition: decoration budgets, element hierarchy, overlap."""

from __future__ import annotations

from iconforge.engine.context import RuleContext
from iconforge.engine.registry import Scope, rule
from iconforge.models.issues import Category, Severity
from iconforge.models.shapes import DecorationKind, Role
from iconforge.utils.geometry import find_overlaps


def _count_decorations(ctx: RuleContext, kind: DecorationKind) -> int:
    return sum(1 for s in ctx.shapes if s.is_decoration and s.decoration_kind == kind)


@rule(id="decoration.sparkles", scope=Scope.SET, severity=Severity.WARNING, category=Category.DECORATION)
def sparkles(ctx: RuleContext) -> list[str]:
    count = _count_decorations(ctx, DecorationKind.SPARKLE)
    if count > ctx.profile.max_sparkles:
        return [f"Too many sparkles: {count}. Maximum allowed: {ctx.profile.max_sparkles}."]
    return []


@rule(id="decoration.dots", scope=Scope.SET, severity=Severity.WARNING, category=Category.DECORATION)
def dots(ctx: RuleContext) -> list[str]:
    count = _count_decorations(ctx, DecorationKind.DOT)
    if count > ctx.profile.max_dots:
        return [f"Too many dots: {count}. Maximum allowed: {ctx.profile.max_dots}."]
    return []


@rule(id="composition.primary", scope=Scope.SET, severity=Severity.CRITICAL, category=Category.COMPOSITION)
def primary(ctx: RuleContext) -> list[str]:
    count = len(ctx.with_role(Role.PRIMARY))
    if count == 0:
        return ["No primary element found. Icon must have at least one primary shape."]
    if count > 1:
        return [f"Too many primary elements: {count}. Maximum allowed: 1."]
    return []


@rule(id="composition.supporting", scope=Scope.SET, severity=Severity.WARNING, category=Category.COMPOSITION)
def supporting(ctx: RuleContext) -> list[str]:
    count = len(ctx.with_role(Role.SUPPORTING))
    if count > ctx.profile.max_supporting:
        return [f"Too many supporting elements: {count}. Maximum allowed: {ctx.profile.max_supporting}."]
    return []


@rule(id="composition.overlap", scope=Scope.SET, severity=Severity.WARNING, category=Category.COMPOSITION)
def overlap(ctx: RuleContext) -> list[str]:
    pairs = find_overlaps(ctx.structural_shapes)
    if not pairs:
        return []
    return [f"Element overlaps detected: {len(pairs)} overlapping pairs may cause clarity issues."]
