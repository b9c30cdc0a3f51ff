"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Blob store configuration."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    backend: Literal["sqlite", "remote", "memory"] = "sqlite"
    name: str = "ekram-prices"

    # SQLite backend
    data_dir: Path = Path("data")
    db_name: str = "ekram_prices.db"
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    # Remote backend
    remote_url: str = "http://localhost:8787/blobs"
    remote_token: str | None = None
    remote_timeout: float = 10.0

    # Versioned writes
    compare_and_swap: bool = True
    max_cas_retries: int = 5

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Shared secret expected in x-api-key on /api/update-price
    update_key: str | None = None


class PricingSettings(BaseSettings):
    """Price bookkeeping configuration."""

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    history_limit: int = Field(default=100, ge=1)
    default_icon: str = "📦"
    default_unit: str = "جنيه/طن"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Ekram Prices API"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    store: StoreSettings = Field(default_factory=StoreSettings)
    api: APISettings = Field(default_factory=APISettings)
    pricing: PricingSettings = Field(default_factory=PricingSettings)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
