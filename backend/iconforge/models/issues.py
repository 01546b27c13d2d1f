"""Validation issue records shared by every validator."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class Severity(str, enum.Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        """Lower rank sorts first; critical issues lead every listing."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.CRITICAL: 0, Severity.WARNING: 1, Severity.INFO: 2}


class Category(str, enum.Enum):
    GEOMETRY = "geometry"
    STROKE = "stroke"
    PERSPECTIVE = "perspective"
    COMPOSITION = "composition"
    ACCESSIBILITY = "accessibility"
    SEMANTICS = "semantics"
    DECORATION = "decoration"


class Issue(BaseModel):
    severity: Severity
    rule_id: str
    message: str
    category: Category
    element_id: str | None = None


class ValidationSummary(BaseModel):
    critical: int = 0
    warnings: int = 0
    info: int = 0
    total: int = 0
    status: str = "PASSED"  # FAILED, WARNING, PASSED

    @classmethod
    def from_issues(cls, issues: list[Issue]) -> ValidationSummary:
        critical = sum(1 for i in issues if i.severity == Severity.CRITICAL)
        warnings = sum(1 for i in issues if i.severity == Severity.WARNING)
        info = sum(1 for i in issues if i.severity == Severity.INFO)
        if critical:
            status = "FAILED"
        elif warnings:
            status = "WARNING"
        else:
            status = "PASSED"
        return cls(critical=critical, warnings=warnings, info=info, total=len(issues), status=status)


class ValidationResult(BaseModel):
    """Output of the geometry and compliance validators."""

    is_valid: bool = True
    issues: list[Issue] = Field(default_factory=list)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)
    score: int = 100
    # Compliance check name -> passed. Empty for plain geometry validation.
    compliance: dict[str, bool] = Field(default_factory=dict)
    profile: str = "generic"

    def rule_ids(self) -> list[str]:
        return [i.rule_id for i in self.issues]

    def issues_for(self, rule_id: str) -> list[Issue]:
        return [i for i in self.issues if i.rule_id == rule_id]
