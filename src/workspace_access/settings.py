"""Application settings for the workspace access service."""

from __future__ import annotations

from functools import lru_cache
from typing import ClassVar, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"]

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./var/workspace-access.sqlite"


class Settings(BaseSettings):
    """Configuration loaded from ``WORKSPACE_ACCESS_*`` environment variables."""

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=".env",
        env_prefix="WORKSPACE_ACCESS_",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="Workspace Access API",
        description="Human readable API name.",
    )
    app_version: str = Field(default="0.1.0", description="API version string.")
    debug: bool = Field(default=False, description="Enable FastAPI debug mode.")
    api_docs_enabled: bool = Field(
        default=False,
        description="Expose interactive API documentation endpoints.",
    )
    logging_level: LogLevel = Field(
        default="INFO",
        description="Root log level for the process.",
    )

    database_url: str = Field(
        default=DEFAULT_DATABASE_URL,
        description="SQLAlchemy async database URL.",
    )
    database_echo: bool = Field(
        default=False,
        description="Enable SQLAlchemy engine echo logging.",
    )

    role_id_prefix: str = Field(
        default="role",
        min_length=1,
        max_length=16,
        description="Prefix used for generated custom role identifiers.",
    )
    role_id_entropy_bytes: int = Field(
        default=4,
        ge=2,
        le=16,
        description="Random bytes appended to generated custom role identifiers.",
    )

    @field_validator("logging_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("role_id_prefix")
    @classmethod
    def _validate_prefix(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate.isidentifier():
            raise ValueError("role_id_prefix must be alphanumeric/underscore")
        return candidate


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload from the environment."""

    get_settings.cache_clear()
    return get_settings()


__all__ = ["DEFAULT_DATABASE_URL", "LogLevel", "Settings", "get_settings", "reload_settings"]
