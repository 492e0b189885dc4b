"""SQL-backed store for users, watchlists and alerts.

The live stream only uses list_watchlist_symbols, list_active_alerts and
deactivate_alert; the remaining methods back the REST routes. Sessions are
synchronous, so every call runs in a worker thread.
"""
import asyncio
import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy import update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from market_alerts.db.models import Alert, AlertDirection, User, Watchlist
from market_alerts.db.sessions import get_session
from market_alerts.errors import PersistenceUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlStore:
    """Persistence collaborator over a SQLModel engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def _run(self, fn: Callable[[Session], T]) -> T:
        def _in_session() -> T:
            with get_session(self._engine) as session:
                return fn(session)

        try:
            return await asyncio.to_thread(_in_session)
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            raise PersistenceUnavailable(str(exc)) from exc

    # ---- Live stream ----
    async def list_watchlist_symbols(self, user_id: int) -> list[str]:
        """Symbols on the user's watchlist, alphabetical."""
        def _query(session: Session) -> list[str]:
            stmt = (
                select(Watchlist.symbol)
                .where(Watchlist.user_id == user_id)
                .order_by(Watchlist.symbol)
            )
            return list(session.exec(stmt).all())

        return await self._run(_query)

    async def list_active_alerts(self, user_id: int, symbol: str) -> list[Alert]:
        """Active alerts for (user, symbol), oldest first."""
        def _query(session: Session) -> list[Alert]:
            stmt = (
                select(Alert)
                .where(
                    Alert.user_id == user_id,
                    Alert.symbol == symbol,
                    col(Alert.active).is_(True),
                )
                .order_by(Alert.id)
            )
            return list(session.exec(stmt).all())

        return await self._run(_query)

    async def deactivate_alert(self, alert_id: int) -> bool:
        """Set an alert inactive.

        Returns True only for the call that actually flipped the row; an
        already-inactive or missing alert returns False.
        """
        def _update(session: Session) -> bool:
            stmt = (
                update(Alert)
                .where(col(Alert.id) == alert_id, col(Alert.active).is_(True))
                .values(active=False)
            )
            return session.connection().execute(stmt).rowcount == 1

        return await self._run(_update)

    # ---- Users ----
    async def create_user(self, email: str, hashed_password: str) -> User | None:
        """Insert a user; returns None when the email is already registered."""
        def _insert(session: Session) -> User:
            user = User(email=email.lower(), hashed_password=hashed_password)
            session.add(user)
            session.flush()
            session.refresh(user)
            return user

        try:
            return await self._run(_insert)
        except IntegrityError:
            return None

    async def get_user_by_email(self, email: str) -> User | None:
        def _query(session: Session) -> User | None:
            return session.exec(select(User).where(User.email == email.lower())).first()

        return await self._run(_query)

    async def get_user(self, user_id: int) -> User | None:
        return await self._run(lambda session: session.get(User, user_id))

    # ---- Watchlist ----
    async def add_watchlist_symbol(self, user_id: int, symbol: str) -> None:
        """Add a symbol (uppercased); adding an existing symbol is a no-op."""
        sym = symbol.strip().upper()

        def _insert(session: Session) -> None:
            exists = session.exec(
                select(Watchlist).where(
                    Watchlist.user_id == user_id, Watchlist.symbol == sym
                )
            ).first()
            if exists is None:
                session.add(Watchlist(user_id=user_id, symbol=sym))

        try:
            await self._run(_insert)
        except IntegrityError:
            logger.debug("Watchlist insert raced for user %s symbol %s", user_id, sym)

    async def remove_watchlist_symbol(self, user_id: int, symbol: str) -> None:
        sym = symbol.strip().upper()

        def _delete(session: Session) -> None:
            rows = session.exec(
                select(Watchlist).where(
                    Watchlist.user_id == user_id, Watchlist.symbol == sym
                )
            ).all()
            for row in rows:
                session.delete(row)

        await self._run(_delete)

    # ---- Alerts ----
    async def list_alerts(self, user_id: int) -> list[Alert]:
        """All alerts for the user, newest first."""
        def _query(session: Session) -> list[Alert]:
            stmt = (
                select(Alert)
                .where(Alert.user_id == user_id)
                .order_by(col(Alert.created_at).desc(), col(Alert.id).desc())
            )
            return list(session.exec(stmt).all())

        return await self._run(_query)

    async def create_alert(
        self,
        user_id: int,
        symbol: str,
        direction: AlertDirection,
        threshold: float,
    ) -> Alert:
        def _insert(session: Session) -> Alert:
            alert = Alert(
                user_id=user_id,
                symbol=symbol.strip().upper(),
                direction=direction,
                threshold=threshold,
            )
            session.add(alert)
            session.flush()
            session.refresh(alert)
            return alert

        return await self._run(_insert)

    async def delete_alert(self, user_id: int, alert_id: int) -> bool:
        """Delete an alert owned by the user; False if there was nothing to delete."""
        def _delete(session: Session) -> bool:
            alert = session.get(Alert, alert_id)
            if alert is None or alert.user_id != user_id:
                return False
            session.delete(alert)
            return True

        return await self._run(_delete)
