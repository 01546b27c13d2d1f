"""IconForge compliance engine: rule registry, validators and scorers."""

from iconforge.engine.registry import rule, Scope, get_registry
from iconforge.engine.profiles import DesignProfile, get_profile, load_profile
from iconforge.engine.geometry_validator import validate_geometry
from iconforge.engine.complexity import analyze_complexity, assess_quality, simplification_suggestions
from iconforge.engine.compliance import validate_compliance
from iconforge.engine.preview import validate_at_size, validate_at_sizes
from iconforge.engine.corrections import build_reprompt, synthesize
from iconforge.engine.icon_set import analyze_icon_set, summarize_icon, validate_against_set
from iconforge.engine.orchestrator import GenerationState, RegenerationLoop

__all__ = [
    "rule",
    "Scope",
    "get_registry",
    "DesignProfile",
    "get_profile",
    "load_profile",
    "validate_geometry",
    "analyze_complexity",
    "assess_quality",
    "simplification_suggestions",
    "validate_compliance",
    "validate_at_size",
    "validate_at_sizes",
    "build_reprompt",
    "synthesize",
    "analyze_icon_set",
    "summarize_icon",
    "validate_against_set",
    "GenerationState",
    "RegenerationLoop",
]
