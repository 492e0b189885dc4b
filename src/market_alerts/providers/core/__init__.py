"""Core provider abstractions."""
from market_alerts.providers.core.error_mapper import ProviderErrorMapper
from market_alerts.providers.core.exceptions import (ConfigurationMissingError,
                                                     MalformedResponseError,
                                                     ProviderUnreachableError,
                                                     QuoteProviderError,
                                                     RateLimitedError)
from market_alerts.providers.core.quote_provider_abc import QuoteProviderABC
from market_alerts.providers.core.utils import (normalize_stock_symbol,
                                                parse_number, parse_percent)

__all__ = [
    "ConfigurationMissingError",
    "MalformedResponseError",
    "ProviderErrorMapper",
    "ProviderUnreachableError",
    "QuoteProviderABC",
    "QuoteProviderError",
    "RateLimitedError",
    "normalize_stock_symbol",
    "parse_number",
    "parse_percent",
]
