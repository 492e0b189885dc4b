"""Factory for the configured quote provider."""
from market_alerts.config import Settings
from market_alerts.providers.alphavantage import AlphaVantageProvider
from market_alerts.providers.core import QuoteProviderABC
from market_alerts.providers.yfinance import YFinanceProvider


def create_quote_provider(settings: Settings) -> QuoteProviderABC:
    """Build the provider named by settings.quote_provider."""
    if settings.quote_provider == "yfinance":
        return YFinanceProvider(timeout=settings.provider_timeout_seconds)
    return AlphaVantageProvider(
        settings.alpha_vantage_api_key,
        base_url=settings.alpha_vantage_base_url,
        timeout=settings.provider_timeout_seconds,
    )
