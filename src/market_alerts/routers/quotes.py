"""Quote proxy routes: symbol search, full quote, price history."""
import asyncio
import logging

import httpx
from fastapi import APIRouter, HTTPException, Query

from market_alerts.deps import CurrentUser, QuoteProviderDep
from market_alerts.providers.core import QuoteProviderError
from market_alerts.schemas import HistoryPoint, QuoteSnapshot, SymbolMatch

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["quotes"])

# Exceptions from providers we map to HTTP; all others propagate (e.g. bugs).
_PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    QuoteProviderError,
    httpx.HTTPError,
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
)


@router.get("/search")
async def search_symbols(
    user_id: CurrentUser,
    provider: QuoteProviderDep,
    q: str = Query(default="", description="Keywords, e.g. 'micro'"),
) -> dict[str, list[SymbolMatch]]:
    """Search instruments by keyword. A blank query returns no results."""
    query = q.strip()
    if not query:
        return {"results": []}
    try:
        return {"results": await provider.search(query)}
    except NotImplementedError as exc:
        raise HTTPException(status_code=501, detail=str(exc)) from exc
    except _PROVIDER_EXCEPTIONS as exc:
        logger.warning("Search for %r failed: %s", query, exc)
        provider.error_mapper.raise_http(exc)


@router.get("/quote")
async def get_quote(
    user_id: CurrentUser,
    provider: QuoteProviderDep,
    symbol: str = Query(default=""),
) -> dict[str, QuoteSnapshot]:
    """Full quote for one symbol."""
    sym = symbol.strip().upper()
    if not sym:
        raise HTTPException(status_code=400, detail="Symbol required")
    try:
        return {"quote": await provider.get_snapshot(sym)}
    except _PROVIDER_EXCEPTIONS as exc:
        logger.warning("Quote for %s failed: %s", sym, exc)
        provider.error_mapper.raise_http(exc, symbol=sym)


@router.get("/historic")
async def get_history(
    user_id: CurrentUser,
    provider: QuoteProviderDep,
    symbol: str = Query(default=""),
    interval: str = Query(default="daily", pattern="^(daily|intraday)$"),
) -> dict[str, list[HistoryPoint]]:
    """Close/volume points, oldest first (daily: 100 bars, intraday 5min: 300)."""
    sym = symbol.strip().upper()
    if not sym:
        raise HTTPException(status_code=400, detail="Symbol required")
    try:
        return {"points": await provider.get_history(sym, interval)}
    except NotImplementedError as exc:
        raise HTTPException(status_code=501, detail=str(exc)) from exc
    except _PROVIDER_EXCEPTIONS as exc:
        logger.warning("History for %s failed: %s", sym, exc)
        provider.error_mapper.raise_http(exc, symbol=sym)
