"""Design profiles: named, versioned rule tables.

Profiles are frozen pydantic models built once per process. The "generic"
profile carries the base geometry rules; "windchill" layers the enterprise
metadata enumerations on top of the same geometry.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from iconforge.config import get_settings
from iconforge.errors import ProfileError

logger = logging.getLogger(__name__)

PROFILE_VERSION = "2025.2"


class DesignProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    version: str = PROFILE_VERSION

    # Canvas
    viewbox: str = "0 0 24 24"
    canvas_size: float = 24.0
    live_area_padding: float = 2.0

    # Stroke
    stroke_width: float = 2.0
    stroke_colors: tuple[str, ...] = ("#000000", "black")
    corner_radii: tuple[float, ...] = (0.0, 2.0)

    # Geometry
    allowed_angles: tuple[int, ...] = (0, 15, 30, 45, 60, 90, 120, 135, 150, 180)
    fill_whitelist: tuple[str, ...] = ("none", "transparent", "#ffffff", "white")
    min_dimension: float = 2.0
    max_path_length: int = 200

    # Composition
    max_sparkles: int = 3
    max_dots: int = 5
    max_supporting: int = 2
    max_elements: int = 8

    # Metadata enumerations; an empty tuple accepts any non-empty value
    domains: tuple[str, ...] = ()
    user_roles: tuple[str, ...] = ()
    icon_types: tuple[str, ...] = ()
    required_metadata: tuple[str, ...] = ("domain", "function", "user_role", "icon_type")
    naming_pattern: str = r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$"
    preferred_linecap: str | None = None

    @property
    def live_area(self) -> tuple[float, float]:
        return (self.live_area_padding, self.canvas_size - self.live_area_padding)


_BUILTIN: dict[str, dict] = {
    "generic": {"name": "generic"},
    "windchill": {
        "name": "windchill",
        "domains": ("CAD", "BOM", "workflow", "document", "change", "manufacturing"),
        "user_roles": ("engineer", "planner", "admin", "operator", "designer"),
        "icon_types": ("object", "action", "status", "navigation", "composite"),
        "preferred_linecap": "square",
    },
}


def available_profiles() -> list[str]:
    return sorted(_BUILTIN)


@functools.lru_cache(maxsize=None)
def get_profile(name: str) -> DesignProfile:
    """Return the named profile. Raises ProfileError for unknown names.

    When ICONFORGE_PROFILE_PATH is set, the file replaces the configured
    default profile.
    """
    settings = get_settings()
    if settings.iconforge_profile_path and name == settings.iconforge_profile:
        logger.info("Loading profile %r from %s", name, settings.iconforge_profile_path)
        return load_profile(settings.iconforge_profile_path)

    data = _BUILTIN.get(name)
    if data is None:
        raise ProfileError(f"Unknown design profile: {name!r} (available: {', '.join(available_profiles())})")
    return DesignProfile(**data)


def load_profile(path: str | Path) -> DesignProfile:
    """Validate a JSON file into a DesignProfile."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ProfileError(f"Cannot read profile file {path}: {e}") from e
    try:
        return DesignProfile.model_validate_json(raw)
    except ValidationError as e:
        raise ProfileError(f"Invalid profile file {path}: {e}") from e


def resolve_profile(profile: DesignProfile | str | None) -> DesignProfile:
    """Accept a profile object, a profile name, or None for the configured default."""
    if isinstance(profile, DesignProfile):
        return profile
    return get_profile(profile or get_settings().iconforge_profile)
