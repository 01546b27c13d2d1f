"""Multi-size preview validation models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SizeResult(BaseModel):
    size: int
    is_recognizable: bool = True
    clarity: int = 100  # 0-100
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class MultiSizeResult(BaseModel):
    overall_score: int = 0
    passed_sizes: list[int] = Field(default_factory=list)
    failed_sizes: list[int] = Field(default_factory=list)
    results: list[SizeResult] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
