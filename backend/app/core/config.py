"""Application configuration using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INKFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Inkfolio"
    version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3333, description="Server port")

    # Paths
    config_path: Path = Field(
        default=Path("/config"),
        description="Path for configuration files and database",
    )

    # Database
    database_url: str | None = Field(
        default=None,
        description="Database connection URL (defaults to SQLite under config_path)",
    )

    # CORS
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Catalog
    preferred_locale: str = Field(
        default="fr",
        description="Locale used to resolve tag display names",
    )
    default_currency: str = Field(
        default="EUR",
        min_length=3,
        max_length=3,
        description="Currency for new tattoo price estimates",
    )
    price_range_spread: float = Field(
        default=90.0,
        ge=0,
        description="Half-width of the displayed price range around an estimate",
    )
    default_page_size: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Default page size for list endpoints",
    )

    @property
    def db_path(self) -> Path:
        """Get the SQLite database file path."""
        return self.config_path / "inkfolio.db"


# Global settings instance
settings = Settings()
