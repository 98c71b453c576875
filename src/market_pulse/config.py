"""Application settings loaded from environment variables and an optional .env file."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provider credentials, endpoints and refresh tuning.

    Every field can be overridden with a ``MARKET_PULSE_``-prefixed environment
    variable, e.g. ``MARKET_PULSE_FMP_API_KEY``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MARKET_PULSE_",
        env_file=".env",
        extra="ignore",
    )

    coingecko_api_key: str | None = None
    coingecko_use_pro_api: bool = False
    fmp_api_key: str | None = None
    moralis_api_key: str | None = None

    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_pro_base_url: str = "https://pro-api.coingecko.com/api/v3"
    fmp_base_url: str = "https://financialmodelingprep.com/api/v3"
    moralis_base_url: str = "https://deep-index.moralis.io/api/v2.2"
    yapikredi_base_url: str = "https://api.yapikredi.com.tr/api/stockmarket/v1"

    database_url: str = "sqlite:///market_pulse.db"
    sql_echo: bool = False

    default_refresh_interval_ms: int = 60_000
    search_debounce_seconds: float = 0.5
    http_timeout_seconds: float = 10.0
    history_days: int = 30


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
