"""Event-stream response body for a session's push channel."""
import logging
from collections.abc import AsyncIterator

import anyio

from market_alerts.streaming import SessionStreamRegistry

logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


async def stream_session(
    registry: SessionStreamRegistry, session_id: int
) -> AsyncIterator[str]:
    """Open (or replace) the session's stream and yield its frames until disconnect.

    A client disconnect cancels this generator; the registry close is shielded
    so the polling task is always torn down.
    """
    channel = await registry.open(session_id)
    try:
        async for frame in channel.frames():
            yield frame
    finally:
        channel.close()
        with anyio.CancelScope(shield=True):
            await registry.close(session_id, channel)
        logger.debug("Stream client for session %s disconnected", session_id)
