"""Regeneration loop: generate, validate, repair or re-prompt, accept.

The generator is injected (a callable that takes a prompt and an optional
correction directive and returns a document); the engine itself does no I/O.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from iconforge.config import get_settings
from iconforge.engine.corrections import synthesize
from iconforge.models.correction import CorrectionDirective
from iconforge.models.issues import ValidationResult
from iconforge.svg.autofix import apply_auto_fixes

logger = logging.getLogger(__name__)

Generator = Callable[[str, CorrectionDirective | None], str]
Validator = Callable[[str], ValidationResult]


class GenerationState(str, enum.Enum):
    GENERATED = "generated"
    VALIDATED = "validated"
    CORRECTION_ISSUED = "correction_issued"
    REGENERATED = "regenerated"
    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


@dataclass
class Candidate:
    attempt: int
    document: str
    result: ValidationResult
    auto_fixes: list[str] = field(default_factory=list)


@dataclass
class GenerationOutcome:
    state: GenerationState
    best: Candidate
    candidates: list[Candidate] = field(default_factory=list)
    directives: list[CorrectionDirective] = field(default_factory=list)
    history: list[GenerationState] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.state == GenerationState.ACCEPTED

    @property
    def attempts(self) -> int:
        return len(self.candidates)


class RegenerationLoop:
    """Bounded generate/validate/correct loop.

    Deterministic auto-fixes are tried before spending another generation.
    When the budget runs out the best-scoring candidate is returned with its
    issues attached.
    """

    def __init__(
        self,
        generate: Generator,
        validate: Validator,
        max_attempts: int | None = None,
        auto_fix: bool = True,
    ) -> None:
        self.generate = generate
        self.validate = validate
        self.max_attempts = max_attempts if max_attempts is not None else get_settings().max_generation_attempts
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        self.auto_fix = auto_fix

    def run(self, prompt: str) -> GenerationOutcome:
        history: list[GenerationState] = []
        candidates: list[Candidate] = []
        directives: list[CorrectionDirective] = []
        directive: CorrectionDirective | None = None

        for attempt in range(1, self.max_attempts + 1):
            document = self.generate(prompt, directive)
            history.append(GenerationState.GENERATED if attempt == 1 else GenerationState.REGENERATED)

            result = self.validate(document)
            history.append(GenerationState.VALIDATED)
            candidate = Candidate(attempt=attempt, document=document, result=result)
            candidates.append(candidate)

            if not result.is_valid and self.auto_fix:
                candidate = self._try_auto_fix(candidate) or candidate
                candidates[-1] = candidate

            if candidate.result.is_valid:
                history.append(GenerationState.ACCEPTED)
                logger.info("Accepted attempt %d (score %d)", attempt, candidate.result.score)
                return GenerationOutcome(GenerationState.ACCEPTED, candidate, candidates, directives, history)

            if attempt == self.max_attempts:
                break

            directive = synthesize(candidate.result, attempt=attempt)
            if directive is not None:
                directives.append(directive)
            history.append(GenerationState.CORRECTION_ISSUED)

        history.append(GenerationState.EXHAUSTED)
        best = max(candidates, key=lambda c: c.result.score)
        logger.warning(
            "Regeneration exhausted after %d attempts; best attempt %d scored %d",
            len(candidates),
            best.attempt,
            best.result.score,
        )
        return GenerationOutcome(GenerationState.EXHAUSTED, best, candidates, directives, history)

    def _try_auto_fix(self, candidate: Candidate) -> Candidate | None:
        fixed, applied = apply_auto_fixes(candidate.document, candidate.result)
        if not applied:
            return None
        result = self.validate(fixed)
        if result.score < candidate.result.score and not result.is_valid:
            return None
        logger.debug("Auto-fixes %s moved score %d -> %d", applied, candidate.result.score, result.score)
        return Candidate(attempt=candidate.attempt, document=fixed, result=result, auto_fixes=applied)
