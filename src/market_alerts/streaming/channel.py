"""Per-session push channel: an ordered, one-way queue of stream events."""
import asyncio
import logging
from collections.abc import AsyncIterator

from market_alerts.errors import TransportClosed
from market_alerts.schemas import StreamEvent

logger = logging.getLogger(__name__)

KEEPALIVE_FRAME = ": keep-alive\n\n"


class PushChannel:
    """Server-to-client event stream for one connected session.

    The polling task writes with send(); the HTTP response drains frames().
    close() ends frames() after already-queued events and makes every later
    send() raise TransportClosed. Nothing is replayed after close.
    """

    def __init__(self, session_id: int, *, keepalive_seconds: float = 15.0) -> None:
        self.session_id = session_id
        self._keepalive_seconds = keepalive_seconds
        self._queue: asyncio.Queue[StreamEvent | None] = asyncio.Queue()
        self._closed = False
        self.sent = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, event: StreamEvent) -> None:
        """Queue an event; raises TransportClosed once the channel is closed."""
        if self._closed:
            raise TransportClosed(self.session_id)
        self._queue.put_nowait(event)
        self.sent += 1

    def close(self) -> None:
        """Close the channel. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)
        logger.debug("Push channel closed for session %s", self.session_id)

    async def events(self) -> AsyncIterator[StreamEvent | None]:
        """Yield queued events in order; yields None when idle for a keep-alive period."""
        while True:
            try:
                item = await asyncio.wait_for(
                    self._queue.get(), timeout=self._keepalive_seconds
                )
            except asyncio.TimeoutError:
                if self._closed:
                    return
                yield None
                continue
            if item is None:
                return
            yield item

    async def frames(self) -> AsyncIterator[str]:
        """Event-stream text frames, with keep-alive comments while idle."""
        async for event in self.events():
            yield KEEPALIVE_FRAME if event is None else event.to_frame()
