"""Database package: models, session management and the store."""
from market_alerts.db.models import Alert, AlertDirection, User, Watchlist
from market_alerts.db.sessions import get_session, init_db, make_engine
from market_alerts.db.store import SqlStore

__all__ = [
    "Alert",
    "AlertDirection",
    "SqlStore",
    "User",
    "Watchlist",
    "get_session",
    "init_db",
    "make_engine",
]
