"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".papertrade"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "InvestMitra Paper Trading"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Data directory (database and ledger state file live here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    # Ledger storage: relational database or single-process memory
    ledger_backend: Literal["sqlalchemy", "memory"] = "sqlalchemy"
    # Memory backend only: persist ledger state as JSON
    ledger_state_file: Optional[Path] = None

    # Trading rules
    initial_cash: Decimal = Decimal("100000")
    brokerage_rate: Decimal = Decimal("0.0003")
    min_brokerage: Decimal = Decimal("20")

    # Market data settings
    market_data_cache_ttl_seconds: int = 60
    market_data_timeout_seconds: float = 5.0
    alpha_vantage_key: Optional[str] = None
    market_open_hour: int = 9
    market_close_hour: int = 15

    # API behavior
    user_id_header: str = "X-User-Id"
    orders_in_portfolio: int = 50

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "papertrade.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
