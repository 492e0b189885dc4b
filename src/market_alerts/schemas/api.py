"""Request/response bodies for the REST routes."""
from datetime import datetime

from pydantic import (AliasChoices, BaseModel, ConfigDict, Field,
                      field_validator)

from market_alerts.db.models import AlertDirection


class Credentials(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class WatchlistAdd(BaseModel):
    symbol: str = Field(min_length=1)

    @field_validator("symbol")
    @classmethod
    def _upper(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("symbol must not be blank")
        return value


class AlertCreate(BaseModel):
    """New alert. `price` is the threshold (strict float: strings are rejected)."""

    symbol: str = Field(min_length=1)
    direction: AlertDirection
    price: float = Field(strict=True)

    @field_validator("symbol")
    @classmethod
    def _upper(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("symbol must not be blank")
        return value


class AlertOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    symbol: str
    direction: AlertDirection
    price: float = Field(validation_alias=AliasChoices("threshold", "price"))
    active: bool
    created_at: datetime


class SymbolMatch(BaseModel):
    symbol: str
    name: str | None = None
    region: str | None = None
    currency: str | None = None


class QuoteSnapshot(BaseModel):
    """Full quote for the REST quote route (richer than the streamed Quote)."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    price: float
    change: float | None = None
    change_percent: float = Field(alias="changePercent")
    volume: float | None = None
    latest_trading_day: str | None = Field(default=None, alias="latestTradingDay")
    previous_close: float | None = Field(default=None, alias="previousClose")
    open: float | None = None
    high: float | None = None
    low: float | None = None


class HistoryPoint(BaseModel):
    t: str
    close: float
    volume: float | None = None
