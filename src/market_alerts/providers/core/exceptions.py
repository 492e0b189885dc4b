"""Typed errors raised by quote providers."""
from market_alerts.schemas import FetchFailureKind


class QuoteProviderError(Exception):
    """Base for provider failures; `kind` is what the stream reports."""

    kind: FetchFailureKind = FetchFailureKind.UNREACHABLE


class RateLimitedError(QuoteProviderError):
    kind = FetchFailureKind.RATE_LIMITED


class ProviderUnreachableError(QuoteProviderError):
    kind = FetchFailureKind.UNREACHABLE


class MalformedResponseError(QuoteProviderError):
    kind = FetchFailureKind.MALFORMED_RESPONSE


class ConfigurationMissingError(QuoteProviderError):
    kind = FetchFailureKind.CONFIGURATION_MISSING
