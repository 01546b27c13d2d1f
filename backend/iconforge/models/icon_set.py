"""Icon-set consistency models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ValueRange(BaseModel):
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0


class SiblingIcon(BaseModel):
    svg: str
    name: str
    category: str = ""


class IconSummary(BaseModel):
    stroke_weight: float = 0.0
    corner_radius: float = 0.0
    complexity: int = 0  # drawable element count
    style: str = "unknown"  # outlined, filled, rounded, geometric


class IconSetStats(BaseModel):
    """Aggregate over a sibling set. Recomputed on demand, never persisted."""

    stroke_weight: ValueRange = Field(default_factory=ValueRange)
    corner_radius: ValueRange = Field(default_factory=ValueRange)
    complexity: ValueRange = Field(default_factory=ValueRange)
    dominant_styles: list[str] = Field(default_factory=list)
    common_metaphors: list[str] = Field(default_factory=list)
    visual_language: str = "mixed"  # geometric, rounded, mixed
    icon_names: list[str] = Field(default_factory=list)


class BrandGuidelines(BaseModel):
    stroke_weight: float = 2.0
    corner_radius: float = 2.0
    visual_style: str = "outlined"


class SetProfile(BaseModel):
    """Tolerances used when comparing a candidate against set averages."""

    stroke_tolerance: float = 0.5
    corner_radius_tolerance: float = 1.0
    complexity_tolerance: float = 3.0
    brand_guidelines: BrandGuidelines | None = None


class ConsistencyResult(BaseModel):
    is_consistent: bool = True
    consistency_score: int = 100
    violations: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    metaphor_conflicts: list[str] = Field(default_factory=list)
    visual_similarity: float = 100.0
