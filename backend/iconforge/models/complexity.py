"""Complexity scoring output model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Alternative(BaseModel):
    """A ranked remediation suggestion offered alongside a complexity rating."""

    type: str  # simplified, material_style, carbon_style, custom_refinement
    title: str
    description: str = ""
    action: str = ""
    confidence: float = 0.0
    reference: str | None = None  # matching glyph name in the named design system


class FeedbackItem(BaseModel):
    type: str  # success, warning, error, suggestion
    message: str
    severity: str = "info"


class SimplificationSuggestion(BaseModel):
    type: str
    description: str
    impact: str = "medium"


class ComplexityAnalysis(BaseModel):
    score: float = 0.0
    rating: str = "low"  # low, medium, high
    flags: list[str] = Field(default_factory=list)
    # Normalized [0, 1] value of each weighted factor
    factors: dict[str, float] = Field(default_factory=dict)
    recommend_simplification: bool = False
    alternatives: list[Alternative] = Field(default_factory=list)
    feedback: list[FeedbackItem] = Field(default_factory=list)


class QualityMetrics(BaseModel):
    clarity: int = 0
    consistency: int = 0
    scalability: int = 0
    accessibility: int = 0

    @property
    def total(self) -> int:
        return self.clarity + self.consistency + self.scalability + self.accessibility
