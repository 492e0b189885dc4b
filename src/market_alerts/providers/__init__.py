"""Quote providers for the live stream and the REST proxy routes.

- AlphaVantageProvider: Alpha Vantage REST API (needs ALPHA_VANTAGE_API_KEY)
- YFinanceProvider: Yahoo Finance via yfinance (no key)

Both implement QuoteProviderABC. The stream calls fetch_quote, which returns
either a Quote or a FetchFailure and never raises for provider errors.

Example:
    async with AlphaVantageProvider(api_key="...") as provider:
        result = await provider.fetch_quote("AAPL")
        if isinstance(result, Quote):
            print(f"{result.symbol}: ${result.price}")
"""
from market_alerts.providers.alphavantage import AlphaVantageProvider
from market_alerts.providers.core import (ProviderErrorMapper,
                                          QuoteProviderABC)
from market_alerts.providers.yfinance import YFinanceProvider

__all__ = [
    "AlphaVantageProvider",
    "ProviderErrorMapper",
    "QuoteProviderABC",
    "YFinanceProvider",
]
