"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Portfolio Monitor"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 5000
    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"

    # Cache TTLs (seconds). Prices go stale fast; P/E and earnings change rarely.
    cache_cmp_ttl: int = 30
    cache_pe_ratio_ttl: int = 21600
    cache_earnings_ttl: int = 86400

    # Refresh cycle
    scraper_interval_minutes: int = 15
    scraper_timeout_ms: int = 10000
    price_request_delay_seconds: float = 0.5
    ratio_request_delay_seconds: float = 2.0
    scheduler_enabled: bool = True

    # Market data
    market_data_provider: Literal["live", "stub"] = "live"
    default_exchange: str = "NSE"

    # Portfolio source
    portfolio_file_path: Path = Path("portfolio.csv")

    @property
    def scraper_interval_seconds(self) -> int:
        """Refresh interval expressed in seconds."""
        return self.scraper_interval_minutes * 60

    @property
    def scraper_timeout_seconds(self) -> float:
        """Per-fetch timeout expressed in seconds."""
        return self.scraper_timeout_ms / 1000


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests and embedders)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
