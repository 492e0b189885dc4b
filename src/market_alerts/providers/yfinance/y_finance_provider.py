"""Yahoo Finance quote provider for stocks."""
import asyncio
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TypeVar

import yfinance as yf

from market_alerts.providers.core import (MalformedResponseError,
                                          ProviderErrorMapper,
                                          ProviderUnreachableError,
                                          QuoteProviderABC,
                                          normalize_stock_symbol, parse_number)
from market_alerts.schemas import (HistoryPoint, Quote, QuoteSnapshot,
                                   SymbolMatch)

T = TypeVar("T")

# interval -> (period, bar size, max points, timestamp format)
_HISTORY_SPECS = {
    "daily": ("6mo", "1d", 100, "%Y-%m-%d"),
    "intraday": ("5d", "5m", 300, "%Y-%m-%d %H:%M:%S"),
}


class YFinanceProvider(QuoteProviderABC):
    """Quote provider for stocks via Yahoo Finance.

    Uses the yfinance library; no API key required. yfinance is synchronous,
    so every call runs in a worker thread bounded by `timeout` seconds.
    """

    SEARCH_LIMIT = 7

    def __init__(self, *, timeout: float = 10.0) -> None:
        self.error_mapper = ProviderErrorMapper(api_name="Yahoo Finance")
        self._timeout = timeout

    async def _call(self, fn: Callable[[], T], what: str) -> T:
        """Run a blocking yfinance call in a thread; a hung call becomes Unreachable."""
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise ProviderUnreachableError(
                f"Yahoo Finance timed out after {self._timeout}s ({what})"
            ) from e

    def _fast_info(self, symbol: str) -> dict:
        try:
            info = yf.Ticker(symbol).fast_info
            return {
                key: info.get(key)
                for key in (
                    "lastPrice",
                    "previousClose",
                    "open",
                    "dayHigh",
                    "dayLow",
                    "lastVolume",
                )
            }
        except Exception as e:
            raise ProviderUnreachableError(
                f"Failed to fetch quote for '{symbol}': {e}"
            ) from e

    def _price_change(self, info: dict, symbol: str) -> tuple[float, float]:
        """(price, change percent vs previous close); raises if either is unusable."""
        try:
            price = parse_number(info.get("lastPrice"))
            previous = parse_number(info.get("previousClose"))
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(f"Stock '{symbol}' has no price data") from e
        if previous == 0:
            raise MalformedResponseError(f"Stock '{symbol}' has no previous close")
        return price, round((price - previous) / previous * 100, 4)

    def _fetch_quote_sync(self, symbol: str) -> Quote:
        """Fetch a single quote synchronously (run in thread)."""
        price, change_percent = self._price_change(self._fast_info(symbol), symbol)
        return Quote(
            symbol=symbol,
            price=price,
            change_percent=change_percent,
            observed_at=datetime.now(timezone.utc),
        )

    def _fetch_snapshot_sync(self, symbol: str) -> QuoteSnapshot:
        info = self._fast_info(symbol)
        price, change_percent = self._price_change(info, symbol)
        previous = float(info["previousClose"])
        return QuoteSnapshot(
            symbol=symbol,
            price=price,
            change=round(price - previous, 4),
            change_percent=change_percent,
            volume=info.get("lastVolume"),
            latest_trading_day=datetime.now(timezone.utc).date().isoformat(),
            previous_close=previous,
            open=info.get("open"),
            high=info.get("dayHigh"),
            low=info.get("dayLow"),
        )

    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for a stock symbol."""
        sym = normalize_stock_symbol(symbol)
        return await self._call(lambda: self._fetch_quote_sync(sym), f"quote {sym}")

    async def get_snapshot(self, symbol: str) -> QuoteSnapshot:
        sym = normalize_stock_symbol(symbol)
        return await self._call(lambda: self._fetch_snapshot_sync(sym), f"quote {sym}")

    async def search(self, query: str) -> list[SymbolMatch]:
        """Search Yahoo Finance for matching tickers."""
        try:
            found = await self._call(
                lambda: yf.Search(query, max_results=self.SEARCH_LIMIT).quotes,
                f"search {query!r}",
            )
        except ProviderUnreachableError:
            raise
        except Exception as e:
            raise ProviderUnreachableError(f"Search failed for '{query}': {e}") from e
        return [
            SymbolMatch(
                symbol=item["symbol"],
                name=item.get("shortname") or item.get("longname"),
                region=item.get("exchange"),
                currency=item.get("currency"),
            )
            for item in found[: self.SEARCH_LIMIT]
            if item.get("symbol")
        ]

    async def get_history(self, symbol: str, interval: str) -> list[HistoryPoint]:
        """Fetch historical bar data for a stock."""
        if interval not in _HISTORY_SPECS:
            raise ValueError(f"Unknown interval '{interval}'")
        sym = normalize_stock_symbol(symbol)
        period, bar, limit, fmt = _HISTORY_SPECS[interval]
        try:
            df = await self._call(
                lambda: yf.Ticker(sym).history(period=period, interval=bar),
                f"history {sym}",
            )
        except ProviderUnreachableError:
            raise
        except Exception as e:
            raise ProviderUnreachableError(
                f"Failed to fetch history for '{sym}': {e}"
            ) from e
        if df.empty:
            return []
        points = [
            HistoryPoint(
                t=ts.strftime(fmt),
                close=float(row["Close"]),
                volume=float(row["Volume"]) if row["Volume"] else None,
            )
            for ts, row in df.iterrows()
            if not row[["Close"]].isna().any()
        ]
        return points[-limit:]
