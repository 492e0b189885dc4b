"""Live stream route: one event-stream per logged-in user."""
from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from market_alerts.deps import CurrentUser, RegistryDep
from market_alerts.services import STREAM_HEADERS, stream_session

router = APIRouter(prefix="/api", tags=["stream"])


@router.get("/stream")
async def stream(user_id: CurrentUser, registry: RegistryDep) -> StreamingResponse:
    """Push `connected`, then `quote` and `alert` events for the user's watchlist.

    Opening a second stream for the same user replaces the first.
    """
    return StreamingResponse(
        stream_session(registry, user_id),
        media_type="text/event-stream",
        headers=STREAM_HEADERS,
    )
