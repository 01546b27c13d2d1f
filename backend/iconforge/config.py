"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    iconforge_env: str = "development"
    iconforge_log_level: str = "info"

    # Rule profile used when a caller does not name one
    iconforge_profile: str = "generic"
    # Profile whose metadata enumerations the compliance validator enforces
    iconforge_compliance_profile: str = "windchill"
    # Optional JSON file whose contents replace the named profile
    iconforge_profile_path: str = ""

    # Regeneration budget: first generation plus one corrective pass
    max_generation_attempts: int = 2

    # Render sizes checked by the preview validator
    preview_sizes: list[int] = [16, 20, 24, 32, 48]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


def get_settings() -> Settings:
    return settings
