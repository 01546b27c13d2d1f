"""Design-system compliance checks over the raw document and its metadata.

These rules carry the "compliance" tag, so plain geometry validation skips
them; validate_compliance runs them alongside the geometry rules.
"""

from __future__ import annotations

import re

from iconforge.engine.context import RuleContext
from iconforge.engine.registry import Scope, rule
from iconforge.models.issues import Category, Severity

COMPLIANCE = {"compliance"}

# Inside a transform or style attribute value, before the closing quote
_TRANSFORM_VALUE = r"""\b(?:transform|style)\s*=\s*(?:"[^"]*|'[^']*)"""

# Effect name -> pattern over the raw markup
FORBIDDEN_EFFECTS: dict[str, re.Pattern[str]] = {
    "linear gradient": re.compile(r"<linearGradient\b", re.IGNORECASE),
    "radial gradient": re.compile(r"<radialGradient\b", re.IGNORECASE),
    "filter": re.compile(r"<filter\b|\bfilter\s*=", re.IGNORECASE),
    "mask": re.compile(r"<mask\b|\bmask\s*=", re.IGNORECASE),
    "clip-path": re.compile(r"<clipPath\b|\bclip-path\s*=", re.IGNORECASE),
    "drop-shadow": re.compile(r"drop-shadow", re.IGNORECASE),
    "pattern": re.compile(r"<pattern\b", re.IGNORECASE),
    "skew transform": re.compile(_TRANSFORM_VALUE + r"skew", re.IGNORECASE),
    "perspective or 3D transform": re.compile(
        _TRANSFORM_VALUE + r"(?:perspective|matrix3d|rotate[XY]\(|translate3d)",
        re.IGNORECASE,
    ),
}

_STRUCTURE_RE = re.compile(r"<svg\b.*</svg\s*>", re.IGNORECASE | re.DOTALL)
_ROUND_CAP_RE = re.compile(r'stroke-linecap\s*=\s*"round"', re.IGNORECASE)
_TITLE_RE = re.compile(r"<title\b|aria-label\s*=", re.IGNORECASE)
_MEANING_COLOR_RE = re.compile(r"\b(?:red|green)\b|#ff0000\b|#00ff00\b", re.IGNORECASE)

_FIELD_LABELS = {
    "domain": "Domain",
    "function": "Function",
    "user_role": "User role",
    "icon_type": "Icon type",
}


@rule(
    id="geometry.structure",
    scope=Scope.DOCUMENT,
    severity=Severity.CRITICAL,
    category=Category.GEOMETRY,
    tags=COMPLIANCE,
)
def structure(ctx: RuleContext) -> list[str]:
    if _STRUCTURE_RE.search(ctx.document or ""):
        return []
    return ["Invalid SVG structure: document must be a single <svg> ... </svg> element."]


@rule(
    id="semantics.metadata",
    scope=Scope.DOCUMENT,
    severity=Severity.CRITICAL,
    category=Category.SEMANTICS,
    tags=COMPLIANCE,
)
def metadata_fields(ctx: RuleContext) -> list[str]:
    meta = ctx.metadata
    profile = ctx.profile
    enumerations = {
        "domain": profile.domains,
        "user_role": profile.user_roles,
        "icon_type": profile.icon_types,
    }
    messages: list[str] = []
    for name in profile.required_metadata:
        value = (getattr(meta, name, "") or "").strip() if meta is not None else ""
        label = _FIELD_LABELS.get(name, name)
        allowed = enumerations.get(name, ())
        if not value:
            hint = f" ({', '.join(allowed)})" if allowed else ""
            messages.append(f"{label} is required{hint}")
        elif allowed and value not in allowed:
            messages.append(f"Invalid {label.lower()}: {value}")
    return messages


@rule(
    id="semantics.description",
    scope=Scope.DOCUMENT,
    severity=Severity.WARNING,
    category=Category.SEMANTICS,
    tags=COMPLIANCE,
)
def description(ctx: RuleContext) -> list[str]:
    if ctx.metadata is not None and ctx.metadata.description.strip():
        return []
    return ["Missing description: add a short statement of what the icon represents."]


@rule(
    id="semantics.naming",
    scope=Scope.DOCUMENT,
    severity=Severity.WARNING,
    category=Category.SEMANTICS,
    tags=COMPLIANCE,
)
def naming(ctx: RuleContext) -> list[str]:
    meta = ctx.metadata
    if meta is None or not meta.function.strip():
        return []
    messages: list[str] = []
    name = re.sub(r"\s+", "_", meta.function.strip())
    if not re.match(ctx.profile.naming_pattern, name):
        messages.append("Use snake_case naming convention (e.g., add_workspace)")
    if meta.icon_type == "composite" and len(name.split("_")) < 2:
        messages.append("Composite icons should use action_object naming")
    return messages


@rule(
    id="perspective.effects",
    scope=Scope.DOCUMENT,
    severity=Severity.CRITICAL,
    category=Category.PERSPECTIVE,
    tags=COMPLIANCE,
)
def effects(ctx: RuleContext) -> list[str]:
    return [
        f"Forbidden effect: {effect}. Icons must be flat, without gradients, filters or 3D."
        for effect, pattern in FORBIDDEN_EFFECTS.items()
        if pattern.search(ctx.document or "")
    ]


@rule(
    id="stroke.linecap",
    scope=Scope.DOCUMENT,
    severity=Severity.WARNING,
    category=Category.STROKE,
    tags=COMPLIANCE,
)
def linecap(ctx: RuleContext) -> list[str]:
    preferred = ctx.profile.preferred_linecap
    if preferred and preferred != "round" and _ROUND_CAP_RE.search(ctx.document or ""):
        return [f"Use {preferred} stroke endings instead of round caps."]
    return []


@rule(
    id="accessibility.title",
    scope=Scope.DOCUMENT,
    severity=Severity.INFO,
    category=Category.ACCESSIBILITY,
    tags=COMPLIANCE,
)
def title(ctx: RuleContext) -> list[str]:
    if _TITLE_RE.search(ctx.document or ""):
        return []
    return ["Consider adding aria-label or title for accessibility"]


@rule(
    id="accessibility.color",
    scope=Scope.DOCUMENT,
    severity=Severity.INFO,
    category=Category.ACCESSIBILITY,
    tags=COMPLIANCE,
)
def color_meaning(ctx: RuleContext) -> list[str]:
    if _MEANING_COLOR_RE.search(ctx.document or ""):
        return ["Avoid using color alone to convey meaning"]
    return []


@rule(
    id="composition.density",
    scope=Scope.SET,
    severity=Severity.WARNING,
    category=Category.COMPOSITION,
    tags=COMPLIANCE,
)
def density(ctx: RuleContext) -> list[str]:
    if len(ctx.shapes) > ctx.profile.max_elements:
        return [f"Icon may be too complex: {len(ctx.shapes)} elements - consider simplification"]
    return []
