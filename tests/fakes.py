"""Test doubles: scripted quote source, in-memory store, stub provider."""
from datetime import date

from market_alerts.db import Alert, AlertDirection
from market_alerts.errors import PersistenceUnavailable
from market_alerts.providers.core import QuoteProviderABC
from market_alerts.schemas import (FetchFailure, FetchFailureKind, HistoryPoint,
                                   Quote, QuoteSnapshot, SymbolMatch)
from market_alerts.streaming import PushChannel

TRADING_DAY = date(2024, 1, 2)


def make_quote(symbol: str, price: float, change_percent: float = 0.5) -> Quote:
    return Quote(
        symbol=symbol, price=price, change_percent=change_percent, observed_at=TRADING_DAY
    )


def make_alert(
    alert_id: int,
    symbol: str,
    direction: str,
    threshold: float,
    *,
    user_id: int = 1,
    active: bool = True,
) -> Alert:
    return Alert(
        id=alert_id,
        user_id=user_id,
        symbol=symbol,
        direction=AlertDirection(direction),
        threshold=threshold,
        active=active,
    )


def drain(channel: PushChannel) -> list:
    """Pop every queued event (skipping the close sentinel) without waiting."""
    events = []
    while not channel._queue.empty():  # pylint: disable=protected-access
        item = channel._queue.get_nowait()  # pylint: disable=protected-access
        if item is not None:
            events.append(item)
    return events


class FakeQuoteSource:
    """Returns scripted prices; a FetchFailureKind value scripts a failure."""

    def __init__(self, prices: dict[str, float | FetchFailureKind] | None = None) -> None:
        self.prices = dict(prices or {})
        self.calls: list[str] = []

    async def fetch_quote(self, symbol: str) -> Quote | FetchFailure:
        self.calls.append(symbol)
        value = self.prices.get(symbol, FetchFailureKind.MALFORMED_RESPONSE)
        if isinstance(value, FetchFailureKind):
            return FetchFailure(symbol=symbol, kind=value, detail="scripted")
        return make_quote(symbol, value)


class FakeStore:
    """In-memory AlertStore with the same one-shot deactivation contract as SqlStore."""

    def __init__(
        self,
        watchlists: dict[int, list[str]] | None = None,
        alerts: list[Alert] | None = None,
    ) -> None:
        self.watchlists = watchlists or {}
        self.alerts = {a.id: a for a in alerts or []}
        self.watchlist_reads = 0
        self.fail_watchlist = False
        self.fail_deactivate = False
        self.deactivate_calls: list[int] = []

    async def list_watchlist_symbols(self, user_id: int) -> list[str]:
        self.watchlist_reads += 1
        if self.fail_watchlist:
            raise PersistenceUnavailable("database is locked")
        return list(self.watchlists.get(user_id, []))

    async def list_active_alerts(self, user_id: int, symbol: str) -> list[Alert]:
        return [
            a
            for a in self.alerts.values()
            if a.user_id == user_id and a.symbol == symbol and a.active
        ]

    async def deactivate_alert(self, alert_id: int) -> bool:
        self.deactivate_calls.append(alert_id)
        if self.fail_deactivate:
            raise PersistenceUnavailable("database is locked")
        alert = self.alerts.get(alert_id)
        if alert is None or not alert.active:
            return False
        alert.active = False
        return True


class StubProvider(QuoteProviderABC):
    """QuoteProviderABC with canned REST responses for the API tests."""

    def __init__(self) -> None:
        self.error: Exception | None = None
        self.closed = False

    async def get_quote(self, symbol: str) -> Quote:
        if self.error is not None:
            raise self.error
        return make_quote(symbol, 101.25)

    async def get_snapshot(self, symbol: str) -> QuoteSnapshot:
        if self.error is not None:
            raise self.error
        return QuoteSnapshot(
            symbol=symbol,
            price=101.25,
            change=1.25,
            change_percent=1.25,
            latest_trading_day="2024-01-02",
        )

    async def search(self, query: str) -> list[SymbolMatch]:
        return [SymbolMatch(symbol=query.upper(), name=f"{query} Inc", region="United States")]

    async def get_history(self, symbol: str, interval: str) -> list[HistoryPoint]:
        return [HistoryPoint(t="2024-01-01", close=99.0), HistoryPoint(t="2024-01-02", close=101.0)]

    async def close(self) -> None:
        self.closed = True
