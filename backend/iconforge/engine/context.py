"""Rule context: the read-only inputs every rule check receives."""

from __future__ import annotations

from dataclasses import dataclass

from iconforge.engine.profiles import DesignProfile
from iconforge.models.metadata import IconMetadata
from iconforge.models.shapes import Role, Shape


@dataclass
class RuleContext:
    shapes: list[Shape]
    profile: DesignProfile
    viewbox: str | None = None
    # Raw markup and metadata; only the compliance validator supplies these
    document: str = ""
    metadata: IconMetadata | None = None

    @property
    def structural_shapes(self) -> list[Shape]:
        """Primary and supporting shapes, i.e. everything but decoration."""
        return [s for s in self.shapes if not s.is_decoration]

    def with_role(self, role: Role) -> list[Shape]:
        return [s for s in self.shapes if s.role == role]
