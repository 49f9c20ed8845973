"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from oik_scheduler.domain.accounting_regime import DEFAULT_ACCOUNTING_REGIME
from oik_scheduler.domain.models import AccountingRegime


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="OIK_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "oik-scheduler"
    log_level: str = "INFO"

    # Projection defaults
    default_days_ahead: int = 30
    default_future_months: int = 3
    default_accounting_regime: AccountingRegime = DEFAULT_ACCOUNTING_REGIME

    # Read-through cache for upcoming dues, keyed by family, day and records digest
    cache_ttl_seconds: float = 300.0  # 5 minutes


settings = Settings()
