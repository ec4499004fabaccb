"""Global settings loaded from environment variables via pydantic-settings."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SPATIALRECORD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    config_dir: str = "tests"
    fixtures_dir: str = "tests/fixtures"
    environment: str = "arunit"
    # Overrides whatever database.yml says
    database_url: str = ""
    log_dir: str = "."
    log_name: str = "debug"
    # Unprefixed on purpose, these are the names existing CI setups export
    postgis_path: str | None = Field(default=None, validation_alias=AliasChoices("POSTGIS_PATH", "postgis_path"))
    enable_logger: bool = Field(default=False, validation_alias=AliasChoices("ENABLE_LOGGER", "enable_logger"))
