"""Protocols for the live stream's collaborators."""
from typing import Protocol

from market_alerts.db.models import Alert
from market_alerts.schemas import FetchFailure, Quote


class QuoteSource(Protocol):
    """Anything that can fetch a quote without raising (e.g. a provider)."""

    async def fetch_quote(self, symbol: str) -> Quote | FetchFailure:
        ...


class AlertStore(Protocol):
    """Persistence reads/writes the polling task needs.

    deactivate_alert must be idempotent: it returns True only for the call
    that moved the alert from active to inactive.
    """

    async def list_watchlist_symbols(self, user_id: int) -> list[str]:
        ...

    async def list_active_alerts(self, user_id: int, symbol: str) -> list[Alert]:
        ...

    async def deactivate_alert(self, alert_id: int) -> bool:
        ...
