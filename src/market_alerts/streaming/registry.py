"""Process-wide table of live stream sessions."""
import asyncio
import logging

from market_alerts.streaming.channel import PushChannel
from market_alerts.streaming.scheduler import PollingScheduler, StreamSession

logger = logging.getLogger(__name__)


class SessionStreamRegistry:
    """Owns every StreamSession: at most one per session id.

    open() replaces an existing stream for the same id instead of adding a
    second polling task. All mutations go through one asyncio.Lock.
    """

    def __init__(
        self, scheduler: PollingScheduler, *, keepalive_seconds: float = 15.0
    ) -> None:
        self._scheduler = scheduler
        self._keepalive_seconds = keepalive_seconds
        self._sessions: dict[int, StreamSession] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def get(self, session_id: int) -> StreamSession | None:
        return self._sessions.get(session_id)

    async def open(self, session_id: int) -> PushChannel:
        """Create the session's channel and start polling; replaces any prior stream."""
        async with self._lock:
            previous = self._sessions.pop(session_id, None)
            if previous is not None:
                logger.info("Replacing existing stream for session %s", session_id)
                await self._teardown(previous)
            channel = PushChannel(session_id, keepalive_seconds=self._keepalive_seconds)
            session = StreamSession(session_id=session_id, channel=channel)
            self._sessions[session_id] = session
            task = self._scheduler.start(session)
            task.add_done_callback(lambda _: self._forget(session))
        logger.info("Stream opened for session %s (%d live)", session_id, len(self))
        return channel

    async def close(self, session_id: int, channel: PushChannel | None = None) -> None:
        """Stop polling and close the channel. Unknown ids are a no-op.

        When channel is given, only that stream is closed: a handler whose
        stream was already replaced cannot tear down its successor.
        """
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None or (channel is not None and session.channel is not channel):
                return
            del self._sessions[session_id]
            await self._teardown(session)
        logger.info("Stream closed for session %s (%d live)", session_id, len(self))

    async def close_all(self) -> None:
        """Close every live stream (server shutdown)."""
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
            for session in sessions:
                await self._teardown(session)
        if sessions:
            logger.info("Closed %d live streams", len(sessions))

    def _forget(self, session: StreamSession) -> None:
        """Drop the entry when its task ends on its own (e.g. transport closed)."""
        if self._sessions.get(session.session_id) is session:
            del self._sessions[session.session_id]

    @staticmethod
    async def _teardown(session: StreamSession) -> None:
        session.channel.close()
        task = session.task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait([task])
