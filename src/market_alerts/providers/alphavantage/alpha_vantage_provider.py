"""Alpha Vantage quote provider for stocks."""
import logging
import os
from datetime import date, datetime, timezone
from typing import Any

import httpx

from market_alerts.providers.alphavantage.models import (DailySeriesParams,
                                                          GlobalQuoteParams,
                                                          IntradaySeriesParams,
                                                          SymbolSearchParams)
from market_alerts.providers.core import (ConfigurationMissingError,
                                          MalformedResponseError,
                                          ProviderErrorMapper,
                                          QuoteProviderABC, RateLimitedError,
                                          normalize_stock_symbol, parse_number,
                                          parse_percent)
from market_alerts.schemas import (HistoryPoint, Quote, QuoteSnapshot,
                                   SymbolMatch)

logger = logging.getLogger(__name__)


def _optional_number(raw: Any) -> float | None:
    try:
        return parse_number(raw)
    except (TypeError, ValueError):
        return None


class AlphaVantageProvider(QuoteProviderABC):
    """Quote provider backed by the Alpha Vantage REST API.

    Alpha Vantage answers throttled requests with HTTP 200 and a "Note" or
    "Information" body, so those are mapped to RateLimitedError here rather
    than by status code. An "Information" body about the apikey means the key
    was rejected and maps to ConfigurationMissingError.
    """

    BASE_URL = "https://www.alphavantage.co"
    QUERY_PATH = "/query"
    SEARCH_LIMIT = 7
    DAILY_POINTS = 100
    INTRADAY_POINTS = 300

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Alpha Vantage provider.

        Args:
            api_key: Alpha Vantage API key. Defaults to ALPHA_VANTAGE_API_KEY env var.
            base_url: Override for the API host (tests, proxies).
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (e.g. httpx.MockTransport).
        """
        self._api_key = (
            api_key if api_key is not None else os.getenv("ALPHA_VANTAGE_API_KEY", "")
        )
        self.error_mapper = ProviderErrorMapper(api_name="Alpha Vantage")
        self._client = httpx.AsyncClient(
            base_url=base_url or self.BASE_URL,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def check_configuration(self) -> None:
        if not self._api_key:
            raise ConfigurationMissingError("ALPHA_VANTAGE_API_KEY is not set")

    async def _query(self, params: dict[str, Any]) -> dict[str, Any]:
        """GET /query and unwrap Alpha Vantage's in-body error conventions."""
        self.check_configuration()
        response = await self._client.get(
            self.QUERY_PATH, params=params | {"apikey": self._api_key}
        )
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Response body is not JSON") from exc
        if not isinstance(data, dict):
            raise MalformedResponseError("Response body is not a JSON object")
        if "Note" in data or "Information" in data:
            message = str(data.get("Note") or data.get("Information"))
            # Rejected keys also come back as "Information".
            if "apikey" in message.lower():
                raise ConfigurationMissingError(message)
            logger.debug("Alpha Vantage throttled %s", params.get("function"))
            raise RateLimitedError(message)
        if "Error Message" in data:
            raise MalformedResponseError(str(data["Error Message"]))
        return data

    async def _global_quote(self, symbol: str) -> dict[str, Any]:
        data = await self._query(GlobalQuoteParams(symbol=symbol).model_dump())
        row = data.get("Global Quote")
        if not isinstance(row, dict) or not row:
            raise MalformedResponseError(f"No quote data for '{symbol}'")
        return row

    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        row = await self._global_quote(sym)
        try:
            return Quote(
                symbol=sym,
                price=parse_number(row.get("05. price")),
                change_percent=parse_percent(row.get("10. change percent")),
                observed_at=self._trading_day(row.get("07. latest trading day")),
            )
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Garbled quote for '{sym}': {exc}") from exc

    async def get_snapshot(self, symbol: str) -> QuoteSnapshot:
        """Fetch the full GLOBAL_QUOTE row for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        row = await self._global_quote(sym)
        try:
            return QuoteSnapshot(
                symbol=row.get("01. symbol") or sym,
                price=parse_number(row.get("05. price")),
                change=_optional_number(row.get("09. change")),
                change_percent=parse_percent(row.get("10. change percent")),
                volume=_optional_number(row.get("06. volume")),
                latest_trading_day=row.get("07. latest trading day"),
                previous_close=_optional_number(row.get("08. previous close")),
                open=_optional_number(row.get("02. open")),
                high=_optional_number(row.get("03. high")),
                low=_optional_number(row.get("04. low")),
            )
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError(f"Garbled quote for '{sym}': {exc}") from exc

    async def search(self, query: str) -> list[SymbolMatch]:
        """Search symbols by keyword; at most SEARCH_LIMIT matches."""
        data = await self._query(SymbolSearchParams(keywords=query).model_dump())
        matches = data.get("bestMatches") or []
        return [
            SymbolMatch(
                symbol=m.get("1. symbol", ""),
                name=m.get("2. name"),
                region=m.get("4. region"),
                currency=m.get("8. currency"),
            )
            for m in matches[: self.SEARCH_LIMIT]
            if isinstance(m, dict) and m.get("1. symbol")
        ]

    async def get_history(self, symbol: str, interval: str) -> list[HistoryPoint]:
        """Fetch close/volume points (oldest first) for a daily or 5min intraday series."""
        sym = normalize_stock_symbol(symbol)
        if interval == "intraday":
            params = IntradaySeriesParams(symbol=sym).model_dump()
            key, limit = "Time Series (5min)", self.INTRADAY_POINTS
        elif interval == "daily":
            params = DailySeriesParams(symbol=sym).model_dump()
            key, limit = "Time Series (Daily)", self.DAILY_POINTS
        else:
            raise ValueError(f"Unknown interval '{interval}'")
        data = await self._query(params)
        series = data.get(key) or {}
        points: list[HistoryPoint] = []
        # Alpha Vantage lists newest first.
        for ts, bar in list(series.items())[:limit]:
            close = _optional_number(bar.get("4. close"))
            if close is None:
                continue
            points.append(
                HistoryPoint(t=ts, close=close, volume=_optional_number(bar.get("5. volume")))
            )
        points.reverse()
        return points

    @staticmethod
    def _trading_day(raw: Any) -> date | datetime:
        """Parse the latest trading day; fall back to now when absent."""
        if not raw:
            return datetime.now(timezone.utc)
        return date.fromisoformat(str(raw))

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
