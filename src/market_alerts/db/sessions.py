"""Database engine and session management."""
import os
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from market_alerts.db.models import (  # noqa: F401  # pylint: disable=unused-import
    Alert, User, Watchlist)


def make_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared with worker threads."""
    connect_args: dict = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        database_url,
        echo=os.getenv("SQL_ECHO", "0") == "1",
        pool_pre_ping=True,
        connect_args=connect_args,
    )


@contextmanager
def get_session(engine: Engine) -> Generator[Session, None, None]:
    """Yield a database session; commits on success, rolls back on error."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create all tables. Safe to call on startup (idempotent for existing tables)."""
    SQLModel.metadata.create_all(engine)
