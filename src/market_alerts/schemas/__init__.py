"""Pydantic schemas for API and runtime use. Not persisted to DB."""
from market_alerts.schemas.api import (AlertCreate, AlertOut, Credentials,
                                       HistoryPoint, QuoteSnapshot,
                                       SymbolMatch, WatchlistAdd)
from market_alerts.schemas.quotes import FetchFailure, FetchFailureKind, Quote
from market_alerts.schemas.events import (AlertEventData, AlertTriggerEvent,
                                          ConnectedEventData, QuoteEventData,
                                          StreamEvent)

__all__ = [
    "AlertCreate",
    "AlertEventData",
    "AlertOut",
    "AlertTriggerEvent",
    "ConnectedEventData",
    "Credentials",
    "FetchFailure",
    "FetchFailureKind",
    "HistoryPoint",
    "Quote",
    "QuoteEventData",
    "QuoteSnapshot",
    "StreamEvent",
    "SymbolMatch",
    "WatchlistAdd",
]
