"""Maps provider exceptions to stream failures and to HTTP responses."""
import asyncio
from dataclasses import dataclass

import httpx
from fastapi import HTTPException

from market_alerts.providers.core.exceptions import QuoteProviderError
from market_alerts.schemas import FetchFailure, FetchFailureKind

_HTTP_STATUS = {
    FetchFailureKind.RATE_LIMITED: 429,
    FetchFailureKind.UNREACHABLE: 502,
    FetchFailureKind.MALFORMED_RESPONSE: 502,
    FetchFailureKind.CONFIGURATION_MISSING: 503,
}


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Classifies provider/backend exceptions.

    The live stream wants a FetchFailure it can branch on; the REST proxy
    routes want an HTTP (status_code, detail).
    """

    api_name: str = "Quote API"

    def classify(self, exc: Exception) -> FetchFailureKind:
        """Bucket an exception into a FetchFailureKind."""
        if isinstance(exc, QuoteProviderError):
            return exc.kind
        if isinstance(exc, httpx.HTTPStatusError):
            if exc.response.status_code == 429:
                return FetchFailureKind.RATE_LIMITED
            if exc.response.status_code >= 500:
                return FetchFailureKind.UNREACHABLE
            return FetchFailureKind.MALFORMED_RESPONSE
        if isinstance(
            exc, (httpx.TransportError, asyncio.TimeoutError, TimeoutError, OSError)
        ):
            return FetchFailureKind.UNREACHABLE
        return FetchFailureKind.MALFORMED_RESPONSE

    def to_failure(self, exc: Exception, symbol: str) -> FetchFailure:
        return FetchFailure(
            symbol=symbol,
            kind=self.classify(exc),
            detail=str(exc) or type(exc).__name__,
        )

    def to_http(self, exc: Exception, symbol: str | None = None) -> tuple[int, str]:
        """Map a provider exception to (status_code, detail) for HTTP responses."""
        kind = self.classify(exc)
        if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
            detail = "Request timed out"
            if symbol is not None:
                detail = f"Request to {self.api_name} timed out for '{symbol}'"
            return (504, detail)
        if kind is FetchFailureKind.RATE_LIMITED:
            return (429, f"{self.api_name} rate limit reached")
        if kind is FetchFailureKind.CONFIGURATION_MISSING:
            return (503, f"{self.api_name} is not configured")
        if kind is FetchFailureKind.MALFORMED_RESPONSE and symbol is not None:
            return (502, f"{self.api_name} returned no usable data for '{symbol}'")
        return (_HTTP_STATUS[kind], f"{self.api_name} error")

    def raise_http(self, exc: Exception, symbol: str | None = None) -> None:
        """Map provider exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc, symbol=symbol)
        raise HTTPException(status_code=status_code, detail=detail) from exc
