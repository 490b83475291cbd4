"""swgohhelp Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from swgohhelp.config.models.api_settings import APISettings
from swgohhelp.config.models.app_settings import LoggingSettings
from swgohhelp.config.models.cache_settings import CacheSettings


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Values come from keyword arguments (e.g. a TOML file) first and
    ``SWGOHHELP_`` environment variables second, for example
    ``SWGOHHELP_API__SWGOH__USERNAME``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SWGOHHELP_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file with environment variable overrides."""
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)
