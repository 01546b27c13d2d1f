"""Design-system compliance validator.

Runs every geometry rule plus the document and metadata rules tagged
"compliance", then scores the result against six compliance checks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from iconforge.engine.context import RuleContext
from iconforge.engine.geometry_validator import build_result
from iconforge.engine.profiles import DesignProfile, resolve_profile
from iconforge.engine.registry import RuleRegistry, get_registry
from iconforge.models.issues import Category, Issue, Severity, ValidationResult
from iconforge.models.metadata import IconMetadata
from iconforge.svg.parser import extract_shapes, extract_viewbox
from iconforge.utils.geometry import js_round

logger = logging.getLogger(__name__)

# Compliance check -> issue categories that can fail it
COMPLIANCE_CHECKS: dict[str, tuple[Category, ...]] = {
    "geometry": (Category.GEOMETRY,),
    "stroke": (Category.STROKE,),
    "perspective": (Category.PERSPECTIVE,),
    "composition": (Category.COMPOSITION, Category.DECORATION),
    "accessibility": (Category.ACCESSIBILITY,),
    "semantics": (Category.SEMANTICS,),
}

CRITICAL_PENALTY = 20
WARNING_PENALTY = 5


def validate_compliance(
    document: str,
    metadata: IconMetadata | Mapping | None,
    profile: DesignProfile | str | None = "windchill",
    registry: RuleRegistry | None = None,
) -> ValidationResult:
    """Validate an icon document and its metadata against a design system."""
    resolved = resolve_profile(profile)
    meta = _coerce_metadata(metadata)
    ctx = RuleContext(
        shapes=extract_shapes(document),
        profile=resolved,
        viewbox=extract_viewbox(document),
        document=document if isinstance(document, str) else "",
        metadata=meta,
    )
    issues = (registry or get_registry()).run(ctx, include_tags={"compliance"})

    compliance = compliance_map(issues)
    result = build_result(issues, resolved.name, score=compliance_score(compliance, issues), compliance=compliance)
    logger.info(
        "Compliance validation (%s): %s, score %d, %d/%d checks passed",
        resolved.name,
        result.summary.status,
        result.score,
        sum(compliance.values()),
        len(compliance),
    )
    return result


def compliance_map(issues: list[Issue]) -> dict[str, bool]:
    """A check passes when no Critical issue falls in its categories."""
    failed = {i.category for i in issues if i.severity == Severity.CRITICAL}
    return {
        name: not any(c in failed for c in categories)
        for name, categories in COMPLIANCE_CHECKS.items()
    }


def compliance_score(compliance: dict[str, bool], issues: list[Issue]) -> int:
    critical = sum(1 for i in issues if i.severity == Severity.CRITICAL)
    warnings = sum(1 for i in issues if i.severity == Severity.WARNING)
    passed_fraction = sum(compliance.values()) / len(compliance) if compliance else 1.0
    raw = passed_fraction * 100 - CRITICAL_PENALTY * critical - WARNING_PENALTY * warnings
    return max(0, js_round(raw))


def _coerce_metadata(metadata: IconMetadata | Mapping | None) -> IconMetadata | None:
    if metadata is None or isinstance(metadata, IconMetadata):
        return metadata
    # Unknown keys are ignored; non-string values fail the required-field rule
    clean = {k: v for k, v in dict(metadata).items() if isinstance(v, str)}
    return IconMetadata.model_validate(clean)
