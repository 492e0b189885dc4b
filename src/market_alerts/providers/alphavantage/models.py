"""Models for the Alpha Vantage provider (query params)."""
from pydantic import BaseModel


class GlobalQuoteParams(BaseModel):
    """Params for GLOBAL_QUOTE (get_quote, get_snapshot)."""

    function: str = "GLOBAL_QUOTE"
    symbol: str


class SymbolSearchParams(BaseModel):
    """Params for SYMBOL_SEARCH (search)."""

    function: str = "SYMBOL_SEARCH"
    keywords: str


class DailySeriesParams(BaseModel):
    """Params for TIME_SERIES_DAILY (get_history, interval=daily)."""

    function: str = "TIME_SERIES_DAILY"
    symbol: str
    outputsize: str = "compact"


class IntradaySeriesParams(BaseModel):
    """Params for TIME_SERIES_INTRADAY (get_history, interval=intraday)."""

    function: str = "TIME_SERIES_INTRADAY"
    symbol: str
    interval: str = "5min"
    outputsize: str = "compact"
