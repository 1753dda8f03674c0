from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# room for one base character plus a multi-digit "-<n>" suffix
MIN_SLUG_LENGTH = 8


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    app_name: str = Field(default="Sluggable API", description="Human readable service name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level for the example app")

    database_url: str = Field(
        default="sqlite+pysqlite:///./sluggable.db",
        description="SQLAlchemy URL used by the example application",
    )

    default_source_field: str = Field(
        default="name",
        description="Attribute that supplies slug text when a model does not override it",
    )
    default_slug_field: str = Field(
        default="slug",
        description="Attribute that stores the slug when a model does not override it",
    )
    default_nullable: bool = Field(
        default=False,
        description="Keep a null slug when neither slug nor source text is present",
    )
    max_slug_length: int | None = Field(
        default=None,
        ge=MIN_SLUG_LENGTH,
        description="Upper bound for generated slugs, suffix included. Unbounded when unset.",
    )
    random_token_bytes: int = Field(
        default=8,
        ge=1,
        description="Entropy of the fallback token used when no slug source exists",
    )

    model_config = SettingsConfigDict(
        env_prefix="SLUGGABLE_",
        env_file=str(Path.cwd() / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("max_slug_length", mode="before")
    @classmethod
    def empty_length_is_unbounded(cls, value):  # type: ignore[override]
        if value in ("", 0, "0"):
            return None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return str(value).strip().upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
