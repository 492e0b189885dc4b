"""Per-session polling: fetch quotes, evaluate alerts, push events."""
import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

from market_alerts.errors import PersistenceUnavailable, TransportClosed
from market_alerts.schemas import FetchFailure, FetchFailureKind, StreamEvent
from market_alerts.streaming.channel import PushChannel
from market_alerts.streaming.evaluator import evaluate, trigger_event
from market_alerts.streaming.protocols import AlertStore, QuoteSource

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    STOPPED = "stopped"


@dataclass(eq=False)
class StreamSession:
    """A connected session: its channel, its polling task and tick count."""

    session_id: int
    channel: PushChannel
    state: SessionState = SessionState.IDLE
    ticks: int = 0
    task: asyncio.Task | None = field(default=None, repr=False)


class PollingScheduler:
    """Runs one repeating polling task per session.

    Each tick re-reads the watchlist, fetches every symbol, writes a quote
    event per successful fetch and an alert event per alert it managed to
    deactivate. A failed fetch skips that symbol until the next tick.
    """

    def __init__(
        self,
        provider: QuoteSource,
        store: AlertStore,
        *,
        poll_interval_seconds: float = 15.0,
        max_symbols_per_session: int | None = None,
    ) -> None:
        self._provider = provider
        self._store = store
        self._poll_interval = poll_interval_seconds
        self._max_symbols = max_symbols_per_session

    def start(self, session: StreamSession) -> asyncio.Task:
        """Schedule the polling task for a session and attach it."""
        session.task = asyncio.create_task(
            self.run(session), name=f"poll-session-{session.session_id}"
        )
        return session.task

    async def run(self, session: StreamSession) -> None:
        """Acknowledge the connection, then tick until the channel closes or the task is cancelled."""
        session.state = SessionState.POLLING
        try:
            session.channel.send(StreamEvent.connected())
            while True:
                await self.tick(session.session_id, session.channel)
                session.ticks += 1
                await asyncio.sleep(self._poll_interval)
        except TransportClosed:
            logger.debug("Session %s transport closed; polling stopped", session.session_id)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Polling failed for session %s", session.session_id)
        finally:
            session.state = SessionState.STOPPED
            session.channel.close()

    async def tick(self, session_id: int, channel: PushChannel) -> None:
        """One round of polling for a session. Raises TransportClosed if the channel went away."""
        try:
            symbols = await self._store.list_watchlist_symbols(session_id)
        except PersistenceUnavailable as exc:
            logger.warning("Watchlist read failed for session %s: %s", session_id, exc)
            return
        if self._max_symbols is not None:
            symbols = symbols[: self._max_symbols]

        results = await asyncio.gather(
            *(self._poll_symbol(session_id, s, channel) for s in symbols),
            return_exceptions=True,
        )
        for symbol, result in zip(symbols, results):
            if isinstance(result, TransportClosed):
                raise result
            if isinstance(result, Exception):
                logger.error(
                    "Unexpected error polling %s for session %s: %s",
                    symbol,
                    session_id,
                    result,
                )

    async def _poll_symbol(self, session_id: int, symbol: str, channel: PushChannel) -> None:
        if channel.closed:
            raise TransportClosed(session_id)
        result = await self._provider.fetch_quote(symbol)
        if isinstance(result, FetchFailure):
            self._log_failure(session_id, result)
            return

        channel.send(StreamEvent.quote(result))

        try:
            alerts = await self._store.list_active_alerts(session_id, symbol)
        except PersistenceUnavailable as exc:
            logger.warning("Alert read failed for %s (session %s): %s", symbol, session_id, exc)
            return

        for alert in evaluate(result, alerts):
            try:
                confirmed = await self._store.deactivate_alert(alert.id)
            except asyncio.CancelledError:
                # The worker thread may still commit; the event is then lost.
                logger.warning(
                    "Session %s stopped while deactivating alert %s; "
                    "its alert event may not be delivered",
                    session_id,
                    alert.id,
                )
                raise
            except PersistenceUnavailable as exc:
                # Still active; the next tick re-evaluates it.
                logger.warning("Could not deactivate alert %s: %s", alert.id, exc)
                continue
            if not confirmed:
                continue
            channel.send(StreamEvent.alert(trigger_event(alert)))
            logger.info("Alert %s triggered for session %s at %s", alert.id, session_id, result.price)

    @staticmethod
    def _log_failure(session_id: int, failure: FetchFailure) -> None:
        if failure.kind is FetchFailureKind.CONFIGURATION_MISSING:
            logger.error(
                "Quote provider not configured; %s skipped for session %s: %s",
                failure.symbol,
                session_id,
                failure.detail,
            )
            return
        logger.warning(
            "Fetch %s for %s (session %s): %s",
            failure.kind.value,
            failure.symbol,
            session_id,
            failure.detail,
        )
