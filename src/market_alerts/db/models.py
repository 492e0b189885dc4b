"""Database models for the market alerts service.

Only user/application state is persisted. Quotes are fetched on every poll
tick and never stored.
"""
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import Field, SQLModel, UniqueConstraint


def utc_now() -> datetime:
    """Timezone-aware current time; datetime columns reject naive values."""
    return datetime.now(timezone.utc)


class AlertDirection(str, Enum):
    """Which side of the threshold fires the alert."""

    ABOVE = "above"
    BELOW = "below"


class User(SQLModel, table=True):
    """User account for authentication and personalization."""

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utc_now)


class Watchlist(SQLModel, table=True):
    """Symbols a user follows on the live stream."""

    __table_args__ = (UniqueConstraint("user_id", "symbol"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    symbol: str  # AAPL | MSFT | ...


class Alert(SQLModel, table=True):
    """One-shot price alert; active flips to False once and stays there."""

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    symbol: str = Field(index=True)
    direction: AlertDirection
    threshold: float
    active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
