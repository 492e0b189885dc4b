"""Settings loaded from the environment."""
import pytest

from market_alerts.config import Settings, load_settings
from market_alerts.providers import AlphaVantageProvider, YFinanceProvider
from market_alerts.providers.factory import create_quote_provider

_VARS = (
    "ALPHA_VANTAGE_API_KEY",
    "ALPHA_VANTAGE_BASE_URL",
    "QUOTE_PROVIDER",
    "POLL_INTERVAL_SECONDS",
    "PROVIDER_TIMEOUT_SECONDS",
    "MAX_SYMBOLS_PER_SESSION",
    "KEEPALIVE_SECONDS",
    "DATABASE_URL",
    "SESSION_SECRET",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings == Settings()
    assert settings.poll_interval_seconds == 15.0
    assert settings.max_symbols_per_session is None
    assert settings.database_url == "sqlite:///./data.db"


def test_overrides(monkeypatch):
    monkeypatch.setenv("ALPHA_VANTAGE_API_KEY", " secret ")
    monkeypatch.setenv("QUOTE_PROVIDER", "YFinance")
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "2.5")
    monkeypatch.setenv("MAX_SYMBOLS_PER_SESSION", "4")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.alpha_vantage_api_key == "secret"
    assert settings.quote_provider == "yfinance"
    assert settings.poll_interval_seconds == 2.5
    assert settings.max_symbols_per_session == 4
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [
        ("POLL_INTERVAL_SECONDS", "0"),
        ("POLL_INTERVAL_SECONDS", "soon"),
        ("MAX_SYMBOLS_PER_SESSION", "-1"),
        ("QUOTE_PROVIDER", "bloomberg"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings()


@pytest.mark.asyncio
async def test_factory_builds_configured_provider():
    provider = create_quote_provider(Settings(quote_provider="alphavantage"))
    assert isinstance(provider, AlphaVantageProvider)
    await provider.close()
    assert isinstance(create_quote_provider(Settings(quote_provider="yfinance")), YFinanceProvider)
