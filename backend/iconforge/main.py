"""Engine factory and logging setup."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import BaseModel

from iconforge.config import Settings, get_settings
from iconforge.engine.complexity import analyze_complexity
from iconforge.engine.compliance import validate_compliance
from iconforge.engine.corrections import synthesize
from iconforge.engine.geometry_validator import validate_geometry
from iconforge.engine.icon_set import analyze_icon_set, validate_against_set
from iconforge.engine.orchestrator import GenerationOutcome, Generator, RegenerationLoop
from iconforge.engine.preview import validate_at_sizes
from iconforge.engine.profiles import DesignProfile, get_profile
from iconforge.models.complexity import ComplexityAnalysis
from iconforge.models.correction import CorrectionDirective
from iconforge.models.icon_set import ConsistencyResult, SetProfile, SiblingIcon
from iconforge.models.issues import ValidationResult
from iconforge.models.metadata import IconMetadata
from iconforge.models.preview import MultiSizeResult
from iconforge.models.shapes import Shape
from iconforge.svg.parser import extract_shapes, extract_viewbox

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.iconforge_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


class EvaluationReport(BaseModel):
    """Everything the engine knows about one candidate document."""

    shapes: list[Shape]
    viewbox: str | None = None
    geometry: ValidationResult
    complexity: ComplexityAnalysis
    preview: MultiSizeResult
    directive: CorrectionDirective | None = None

    @property
    def is_valid(self) -> bool:
        return self.geometry.is_valid


class ComplianceEngine:
    """The validators bound to one profile and preview size list.

    Compliance checks run against their own profile, since the geometry
    profile may leave the metadata enumerations open.
    """

    def __init__(
        self,
        profile: DesignProfile,
        preview_sizes: Sequence[int],
        max_attempts: int = 2,
        compliance_profile: DesignProfile | None = None,
    ) -> None:
        self.profile = profile
        self.compliance_profile = compliance_profile or get_profile("windchill")
        self.preview_sizes = list(preview_sizes)
        self.max_attempts = max_attempts

    def evaluate(
        self,
        document: str,
        description: str | None = None,
        name: str | None = None,
        attempt: int = 1,
    ) -> EvaluationReport:
        shapes = extract_shapes(document)
        viewbox = extract_viewbox(document)
        geometry = validate_geometry(shapes, viewbox, self.profile)
        return EvaluationReport(
            shapes=shapes,
            viewbox=viewbox,
            geometry=geometry,
            complexity=analyze_complexity(shapes, description=description, name=name),
            preview=validate_at_sizes(shapes, self.preview_sizes, self.profile),
            directive=synthesize(geometry, attempt=attempt),
        )

    def validate(self, document: str) -> ValidationResult:
        return validate_geometry(extract_shapes(document), extract_viewbox(document), self.profile)

    def check_compliance(self, document: str, metadata: IconMetadata | dict) -> ValidationResult:
        return validate_compliance(document, metadata, self.compliance_profile)

    def check_against_set(
        self,
        document: str,
        siblings: Sequence[SiblingIcon],
        name: str | None = None,
        set_profile: SetProfile | None = None,
    ) -> ConsistencyResult:
        return validate_against_set(document, analyze_icon_set(siblings), set_profile, name=name)

    def generate(self, prompt: str, generator: Generator) -> GenerationOutcome:
        """Drive an external generator through the bounded regeneration loop."""
        loop = RegenerationLoop(generator, self.validate, max_attempts=self.max_attempts)
        return loop.run(prompt)


def create_engine(settings: Settings | None = None) -> ComplianceEngine:
    settings = settings or get_settings()
    profile = get_profile(settings.iconforge_profile)
    logger.info("IconForge engine: profile %s v%s (%s)", profile.name, profile.version, settings.iconforge_env)
    return ComplianceEngine(
        profile=profile,
        preview_sizes=settings.preview_sizes,
        max_attempts=settings.max_generation_attempts,
        compliance_profile=get_profile(settings.iconforge_compliance_profile),
    )
