"""Runtime configuration read from environment variables."""
import os
from dataclasses import dataclass

_DEFAULT_DATABASE_URL = "sqlite:///./data.db"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = float(raw)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    value = int(raw)
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Service settings.

    poll_interval_seconds and max_symbols_per_session shape the live stream;
    provider_timeout_seconds bounds each outbound quote request.
    """

    alpha_vantage_api_key: str = ""
    alpha_vantage_base_url: str = "https://www.alphavantage.co"
    quote_provider: str = "alphavantage"
    poll_interval_seconds: float = 15.0
    provider_timeout_seconds: float = 10.0
    max_symbols_per_session: int | None = None
    keepalive_seconds: float = 15.0
    database_url: str = _DEFAULT_DATABASE_URL
    session_secret: str = "dev_secret_change_me"
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from the environment. Raises ValueError on bad numbers."""
    provider = os.getenv("QUOTE_PROVIDER", "alphavantage").strip().lower()
    if provider not in ("alphavantage", "yfinance"):
        raise ValueError(f"Unknown QUOTE_PROVIDER: {provider!r}")
    return Settings(
        alpha_vantage_api_key=os.getenv("ALPHA_VANTAGE_API_KEY", "").strip(),
        alpha_vantage_base_url=os.getenv(
            "ALPHA_VANTAGE_BASE_URL", "https://www.alphavantage.co"
        ),
        quote_provider=provider,
        poll_interval_seconds=_env_float("POLL_INTERVAL_SECONDS", 15.0),
        provider_timeout_seconds=_env_float("PROVIDER_TIMEOUT_SECONDS", 10.0),
        max_symbols_per_session=_env_optional_int("MAX_SYMBOLS_PER_SESSION"),
        keepalive_seconds=_env_float("KEEPALIVE_SECONDS", 15.0),
        database_url=os.getenv("DATABASE_URL", _DEFAULT_DATABASE_URL),
        session_secret=os.getenv("SESSION_SECRET", "dev_secret_change_me"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
