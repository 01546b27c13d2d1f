"""Geometry & style rule validator."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import iconforge.engine.checks  # noqa: F401  (registers rule checks)
from iconforge.engine.context import RuleContext
from iconforge.engine.profiles import DesignProfile, resolve_profile
from iconforge.engine.registry import RuleRegistry, get_registry
from iconforge.models.issues import Issue, Severity, ValidationResult, ValidationSummary
from iconforge.models.shapes import Shape

logger = logging.getLogger(__name__)

CRITICAL_PENALTY = 20
WARNING_PENALTY = 10


def validate_geometry(
    shapes: Sequence[Shape],
    doc_viewbox: str | None,
    profile: DesignProfile | str | None = None,
    registry: RuleRegistry | None = None,
) -> ValidationResult:
    """Check every shape and the shape set against the profile's geometry rules.

    Warnings and info never block validity; any Critical issue does.
    An empty shape set is reported through the hierarchy rule, not raised.
    """
    resolved = resolve_profile(profile)
    ctx = RuleContext(shapes=list(shapes), profile=resolved, viewbox=doc_viewbox)
    issues = (registry or get_registry()).run(ctx)

    result = build_result(issues, resolved.name, score=geometry_score(issues))
    logger.info(
        "Geometry validation (%s): %d shapes, %s, score %d",
        resolved.name,
        len(ctx.shapes),
        result.summary.status,
        result.score,
    )
    return result


def geometry_score(issues: Sequence[Issue]) -> int:
    critical = sum(1 for i in issues if i.severity == Severity.CRITICAL)
    warnings = sum(1 for i in issues if i.severity == Severity.WARNING)
    return max(0, 100 - CRITICAL_PENALTY * critical - WARNING_PENALTY * warnings)


def build_result(
    issues: list[Issue],
    profile_name: str,
    score: int,
    compliance: dict[str, bool] | None = None,
) -> ValidationResult:
    summary = ValidationSummary.from_issues(issues)
    for issue in issues:
        logger.debug("  [%s] %s: %s", issue.severity.value, issue.rule_id, issue.message)
    return ValidationResult(
        is_valid=summary.critical == 0,
        issues=issues,
        summary=summary,
        score=score,
        compliance=compliance or {},
        profile=profile_name,
    )
