"""Watchlist routes for the logged-in user."""
from fastapi import APIRouter

from market_alerts.deps import CurrentUser, StoreDep
from market_alerts.schemas import WatchlistAdd

router = APIRouter(prefix="/api/watchlist", tags=["watchlist"])


@router.get("")
async def get_watchlist(user_id: CurrentUser, store: StoreDep) -> dict[str, list[str]]:
    """Watched symbols, alphabetical."""
    return {"symbols": await store.list_watchlist_symbols(user_id)}


@router.post("")
async def add_to_watchlist(
    body: WatchlistAdd, user_id: CurrentUser, store: StoreDep
) -> dict[str, bool]:
    """Watch a symbol; watching it twice is a no-op."""
    await store.add_watchlist_symbol(user_id, body.symbol)
    return {"ok": True}


@router.delete("/{symbol}")
async def remove_from_watchlist(
    symbol: str, user_id: CurrentUser, store: StoreDep
) -> dict[str, bool]:
    await store.remove_watchlist_symbol(user_id, symbol)
    return {"ok": True}
