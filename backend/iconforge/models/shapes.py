"""Geometric primitives extracted from an icon document."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class ShapeKind(str, enum.Enum):
    RECT = "rect"
    CIRCLE = "circle"
    LINE = "line"
    PATH = "path"


class Role(str, enum.Enum):
    PRIMARY = "primary"
    SUPPORTING = "supporting"
    DECORATION = "decoration"


class DecorationKind(str, enum.Enum):
    SPARKLE = "sparkle"
    DOT = "dot"


class Bounds(BaseModel):
    """Axis-aligned bounding box in document units."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = Field(default=0.0, ge=0.0)
    height: float = Field(default=0.0, ge=0.0)

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def min_dimension(self) -> float:
        return min(self.width, self.height)


class Stroke(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float = 2.0
    color: str = "#000000"
    linecap: str = "butt"


class Shape(BaseModel):
    """One primitive. Immutable once extracted."""

    model_config = ConfigDict(frozen=True)

    kind: ShapeKind
    bounds: Bounds
    stroke: Stroke | None = None  # None when stroke="none"
    fill: str = "none"
    corner_radius: float | None = None  # rect only
    angle: int | None = None  # line only, degrees in [0, 180)
    role: Role = Role.PRIMARY
    decoration_kind: DecorationKind | None = None
    # Coordinate attributes as written, e.g. {"x": 4.0, "width": 16.0}
    numeric_attributes: dict[str, float] = Field(default_factory=dict)
    path_data: str | None = None  # path only
    element_id: str = ""  # E1, E2, ... in document order

    @property
    def is_decoration(self) -> bool:
        return self.role == Role.DECORATION

    @property
    def stroke_width(self) -> float:
        return self.stroke.width if self.stroke is not None else 0.0

    @property
    def label(self) -> str:
        return f"{self.kind.value} {self.element_id}".strip()
