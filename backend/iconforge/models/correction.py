"""Correction directive models used as retry context for regeneration."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from iconforge.models.issues import Severity, ValidationSummary


class Priority(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Correction(BaseModel):
    rule_id: str
    instruction: str
    example: str = ""
    severity: Severity = Severity.WARNING


class CorrectionDirective(BaseModel):
    corrections: list[Correction] = Field(default_factory=list)
    priority: Priority = Priority.LOW
    attempt: int = 2  # generation attempt this directive drives
    auto_fixes: list[str] = Field(default_factory=list)
    summary: ValidationSummary = Field(default_factory=ValidationSummary)

    @property
    def critical(self) -> list[Correction]:
        return [c for c in self.corrections if c.severity == Severity.CRITICAL]

    @property
    def warnings(self) -> list[Correction]:
        return [c for c in self.corrections if c.severity == Severity.WARNING]

    @property
    def suggestions(self) -> list[Correction]:
        return [c for c in self.corrections if c.severity == Severity.INFO]
