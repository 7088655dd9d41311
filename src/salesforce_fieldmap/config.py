"""Configuration management using Pydantic Settings.

``Settings`` loads tunables from environment variables and an optional ``.env``
file. They only provide defaults: every helper that reads a setting also
accepts an explicit keyword argument which takes precedence.

``get_settings`` returns a cached singleton so repeated helper calls do not
re-read the environment.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """All configuration parameters for the field mapper and date codec."""

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Duplicate external names: False keeps the last value (dict overwrite),
    # True raises DuplicateFieldNameError.
    STRICT_FIELD_NAMES: bool = Field(
        default=False,
        description="Reject records whose eligible fields share a Salesforce field name",
    )

    # Locale hints for the lenient date decoder (dateutil semantics)
    DATE_PARSE_DAYFIRST: bool = Field(
        default=False,
        description="Interpret ambiguous dates like 05/03/2024 as day-first (5 March)",
    )
    DATE_PARSE_YEARFIRST: bool = Field(
        default=False,
        description="Interpret ambiguous dates like 10-09-08 as year-first",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> str:
        """Upper-case and trim the level name; blank falls back to INFO."""
        if isinstance(v, str) and v.strip():
            return v.strip().upper()
        return "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the settings."""
    return Settings()
