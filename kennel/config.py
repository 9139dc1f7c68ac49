"""Application configuration using Pydantic Settings."""

import logging
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SUPPORTED_LOCALES = ("en", "pt_BR")

ASYNC_DRIVERS = ("+asyncpg", "+aiosqlite", "+aiomysql", "+asyncmy", "+psycopg_async")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str = Field(
        ...,
        description="SQLAlchemy database URL using a synchronous driver"
    )
    pool_size: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Number of pooled connections (ignored for SQLite)"
    )

    # Application Configuration
    debug: bool = Field(
        default=False,
        description="Enable debug mode (echoes SQL)"
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level"
    )
    locale: str = Field(
        default="en",
        description="Locale used for generated names and pedigree labels"
    )

    # Breeding Configuration
    gestation_days: int = Field(
        default=63,
        ge=55,
        le=70,
        description="Days from mating to expected birth"
    )
    default_pedigree_generations: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Ancestor generations returned when none are requested"
    )
    upcoming_births_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Look-ahead window for upcoming births"
    )

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("TESTING") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate that the database URL uses a synchronous driver."""
        if any(driver in v for driver in ASYNC_DRIVERS):
            raise ValueError(
                "DATABASE_URL must use a synchronous driver "
                "(e.g. postgresql+psycopg:// or sqlite://)"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Validate that the locale has a label catalog."""
        if v not in SUPPORTED_LOCALES:
            raise ValueError(
                f"LOCALE must be one of: {', '.join(SUPPORTED_LOCALES)}"
            )
        return v

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")
