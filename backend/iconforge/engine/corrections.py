"""Correction synthesizer: turns a failed validation into retry context."""

from __future__ import annotations

import logging

from iconforge.models.correction import Correction, CorrectionDirective, Priority
from iconforge.models.issues import Category, Issue, Severity, ValidationResult
from iconforge.svg.autofix import fixes_for

logger = logging.getLogger(__name__)

# Category -> rule id -> (instruction, worked example)
CORRECTION_TEMPLATES: dict[Category, dict[str, tuple[str, str]]] = {
    Category.GEOMETRY: {
        "geometry.viewbox": (
            'Ensure the SVG uses exactly viewBox="0 0 24 24"',
            '<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">',
        ),
        "geometry.snapping": (
            "Round all coordinate values to integers (no decimals)",
            '<rect x="4" y="6" width="16" height="12" stroke-width="2"/>',
        ),
        "geometry.live_area": (
            "Position all elements within the 20x20dp live area (2dp padding from edges)",
            "<!-- Keep all elements within x=2-22, y=2-22 -->",
        ),
        "geometry.canvas": (
            "Keep every element inside the 24x24dp canvas",
            '<rect x="2" y="2" width="20" height="20" stroke-width="2"/>',
        ),
        "geometry.angle": (
            "Draw lines only at 0, 15, 30, 45, 60, 90, 120, 135, 150 or 180 degrees",
            '<line x1="4" y1="20" x2="20" y2="4" stroke-width="2"/>',
        ),
    },
    Category.STROKE: {
        "stroke.width": (
            'Set all stroke-width attributes to exactly "2"',
            '<path stroke-width="2" stroke="#000000" fill="none"/>',
        ),
        "stroke.color": (
            'Use stroke="#000000" or stroke="black" for all elements',
            '<circle stroke="#000000" fill="none"/>',
        ),
        "stroke.corner_radius": (
            'Use rx="2" ry="2" for outer corners, rx="0" ry="0" for inner corners',
            '<rect rx="2" ry="2" stroke-width="2"/>',
        ),
    },
    Category.PERSPECTIVE: {
        "perspective.effects": (
            "Remove all gradients, filters, shadows, and 3D effects",
            "<!-- Use only stroke and fill, no gradients or filters -->",
        ),
        "perspective.fill": (
            'Use only solid fills or fill="none"',
            '<rect fill="none" stroke="#000000" stroke-width="2"/>',
        ),
    },
    Category.COMPOSITION: {
        "composition.primary": (
            "Use exactly one primary element that carries the core metaphor",
            '<rect class="primary" x="4" y="4" width="16" height="16" rx="2"/>',
        ),
        "composition.supporting": (
            "Simplify to maximum 3 main elements (1 primary + 2 supporting)",
            "",
        ),
        "composition.overlap": (
            "Separate overlapping elements or merge them into one shape",
            "",
        ),
    },
}

_RULE_TEMPLATES = {rule_id: t for table in CORRECTION_TEMPLATES.values() for rule_id, t in table.items()}


def synthesize(result: ValidationResult, attempt: int = 1) -> CorrectionDirective | None:
    """Build the correction directive for a failed validation.

    Returns None when the result is valid. `attempt` is the generation that
    produced `result`; the directive drives the next one.
    """
    if result.is_valid:
        return None

    ordered = sorted(result.issues, key=lambda i: i.severity.rank)
    corrections = [_correction(issue) for issue in ordered]
    directive = CorrectionDirective(
        corrections=corrections,
        priority=determine_priority(result.issues),
        attempt=attempt + 1,
        auto_fixes=fixes_for(result.rule_ids()),
        summary=result.summary,
    )
    logger.info(
        "Correction directive for attempt %d: %d corrections, priority %s, auto-fixes %s",
        directive.attempt,
        len(corrections),
        directive.priority.value,
        directive.auto_fixes or "none",
    )
    return directive


def determine_priority(issues: list[Issue]) -> Priority:
    if any(i.severity == Severity.CRITICAL for i in issues):
        return Priority.HIGH
    if sum(1 for i in issues if i.severity == Severity.WARNING) > 2:
        return Priority.MEDIUM
    return Priority.LOW


def _correction(issue: Issue) -> Correction:
    template = _RULE_TEMPLATES.get(issue.rule_id)
    if template is None:
        return Correction(rule_id=issue.rule_id, instruction=f"Fix: {issue.message}", severity=issue.severity)
    instruction, example = template
    return Correction(rule_id=issue.rule_id, instruction=instruction, example=example, severity=issue.severity)


VALIDATION_REQUIREMENTS = "\n".join(
    [
        "VALIDATION REQUIREMENTS:",
        '- ViewBox must be exactly "0 0 24 24"',
        '- All stroke-width values must be exactly "2"',
        "- All coordinates must be integers",
        "- No gradients, filters, shadows, or 3D effects",
        "- All elements within 20x20dp live area (2dp padding)",
        "- Use only basic SVG elements (rect, circle, line, path)",
        '- Stroke color must be "#000000" or "black"',
    ]
)


def build_reprompt(original_prompt: str, directive: CorrectionDirective) -> str:
    """Render the directive as extra context for the next generation request."""
    summary = directive.summary
    sections = [
        original_prompt.rstrip(),
        "CRITICAL CORRECTIONS REQUIRED:\n"
        f"The previous icon generation failed validation with {summary.critical} critical issues "
        f"and {summary.warnings} warnings.",
    ]

    mandatory = _bullets(directive.critical)
    if mandatory:
        sections.append(f"MANDATORY FIXES:\n{mandatory}")
    recommended = _bullets(directive.warnings)
    if recommended:
        sections.append(f"RECOMMENDED IMPROVEMENTS:\n{recommended}")
    examples = "\n".join(dict.fromkeys(c.example for c in directive.corrections if c.example))
    if examples:
        sections.append(f"EXAMPLES:\n{examples}")

    sections.append(VALIDATION_REQUIREMENTS)
    sections.append(
        f"This is attempt {directive.attempt}. Please regenerate the icon with these corrections applied. "
        "Return ONLY the corrected SVG with no additional text."
    )
    return "\n\n".join(sections)


def _bullets(corrections: list[Correction]) -> str:
    # Several issues of one rule share an instruction; list it once
    return "\n".join(f"- {text}" for text in dict.fromkeys(c.instruction for c in corrections))
