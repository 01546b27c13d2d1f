"""Rule registry. Every rule is a standalone function registered via decorator.

Usage:
    @rule(id="stroke.width", scope=Scope.SHAPE, severity=Severity.CRITICAL, category=Category.STROKE)
    def stroke_width(ctx: RuleContext, shape: Shape) -> list[str]:
        if shape.stroke_width != ctx.profile.stroke_width:
            return [f"Invalid stroke width {shape.stroke_width:g}"]
        return []

Document and set rules take only the context. A rule returns one message per
finding; the runner turns each message into an Issue carrying the rule's
severity and category. Adding a rule = one decorated function in checks/.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from iconforge.models.issues import Category, Issue, Severity
from iconforge.models.shapes import ShapeKind

if TYPE_CHECKING:
    from iconforge.engine.context import RuleContext

logger = logging.getLogger(__name__)


class Scope(enum.IntEnum):
    DOCUMENT = 0
    SHAPE = 1
    SET = 2


@dataclass
class RuleSpec:
    id: str
    scope: Scope
    fn: Callable[..., list[str]]
    severity: Severity
    category: Category
    kinds: set[ShapeKind] | None = None  # shape rules only; None = every kind
    tags: set[str] = field(default_factory=set)
    description: str = ""

    def applies_to(self, kind: ShapeKind) -> bool:
        return self.kinds is None or kind in self.kinds


class RuleRegistry:
    """Registry of rule checks, kept in registration order."""

    def __init__(self) -> None:
        self._rules: dict[str, RuleSpec] = {}

    def register(self, spec: RuleSpec) -> None:
        if spec.id in self._rules:
            raise ValueError(f"Duplicate rule ID: {spec.id}")
        self._rules[spec.id] = spec
        logger.debug("Registered rule %s (%s)", spec.id, spec.scope.name)

    def get(self, rule_id: str) -> RuleSpec:
        return self._rules[rule_id]

    def all(self) -> list[RuleSpec]:
        return list(self._rules.values())

    def select(self, scope: Scope, include_tags: set[str] | None = None) -> list[RuleSpec]:
        """Rules of one scope. Tagged rules run only when a tag is requested."""
        include_tags = include_tags or set()
        return [
            s for s in self._rules.values()
            if s.scope == scope and (not s.tags or s.tags & include_tags)
        ]

    def run(self, ctx: RuleContext, include_tags: set[str] | None = None) -> list[Issue]:
        """Document rules, then every shape through each shape rule, then set rules."""
        issues: list[Issue] = []

        for spec in self.select(Scope.DOCUMENT, include_tags):
            issues.extend(_to_issues(spec, spec.fn(ctx)))

        shape_rules = self.select(Scope.SHAPE, include_tags)
        for shape in ctx.shapes:
            for spec in shape_rules:
                if spec.applies_to(shape.kind):
                    issues.extend(_to_issues(spec, spec.fn(ctx, shape), shape.element_id))

        for spec in self.select(Scope.SET, include_tags):
            issues.extend(_to_issues(spec, spec.fn(ctx)))

        return issues

    @property
    def count(self) -> int:
        return len(self._rules)


def _to_issues(spec: RuleSpec, messages: list[str], element_id: str | None = None) -> list[Issue]:
    return [
        Issue(
            severity=spec.severity,
            rule_id=spec.id,
            message=message,
            category=spec.category,
            element_id=element_id,
        )
        for message in messages
    ]


# Module-level singleton
_registry = RuleRegistry()


def get_registry() -> RuleRegistry:
    return _registry


def rule(
    *,
    id: str,
    scope: Scope,
    severity: Severity,
    category: Category,
    kinds: set[ShapeKind] | None = None,
    tags: set[str] | None = None,
    description: str = "",
):
    """Decorator to register a rule check."""

    def decorator(fn: Callable[..., list[str]]):
        spec = RuleSpec(
            id=id,
            scope=scope,
            fn=fn,
            severity=severity,
            category=category,
            kinds=kinds,
            tags=tags or set(),
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
