"""Design-system metadata supplied with an icon for compliance validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IconMetadata(BaseModel):
    """Accepts both snake_case and the camelCase keys used by front ends."""

    model_config = ConfigDict(populate_by_name=True)

    domain: str = ""
    function: str = ""
    user_role: str = Field(default="", alias="userRole")
    icon_type: str = Field(default="", alias="iconType")
    system_area: str = Field(default="", alias="systemArea")
    description: str = ""
