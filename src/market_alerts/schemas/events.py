"""Push channel events and their text framing."""
import json
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from market_alerts.schemas.quotes import Quote

EventType = Literal["connected", "quote", "alert"]


class ConnectedEventData(BaseModel):
    ok: bool = True


class QuoteEventData(BaseModel):
    """`quote` payload: {symbol, price, changePercent, time}."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    price: float
    change_percent: float = Field(serialization_alias="changePercent")
    time: date | datetime

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteEventData":
        return cls(
            symbol=quote.symbol,
            price=quote.price,
            change_percent=quote.change_percent,
            time=quote.observed_at,
        )


class AlertTriggerEvent(BaseModel):
    """Emitted at most once per alert, at the tick it is deactivated."""

    alert_id: int
    symbol: str
    message: str


class AlertEventData(BaseModel):
    """`alert` payload: {id, symbol, message}."""

    id: int
    symbol: str
    message: str

    @classmethod
    def from_trigger(cls, trigger: AlertTriggerEvent) -> "AlertEventData":
        return cls(id=trigger.alert_id, symbol=trigger.symbol, message=trigger.message)


class StreamEvent(BaseModel):
    """One typed event on a push channel."""

    event: EventType
    data: ConnectedEventData | QuoteEventData | AlertEventData

    @classmethod
    def connected(cls) -> "StreamEvent":
        return cls(event="connected", data=ConnectedEventData())

    @classmethod
    def quote(cls, quote: Quote) -> "StreamEvent":
        return cls(event="quote", data=QuoteEventData.from_quote(quote))

    @classmethod
    def alert(cls, trigger: AlertTriggerEvent) -> "StreamEvent":
        return cls(event="alert", data=AlertEventData.from_trigger(trigger))

    def to_frame(self) -> str:
        """Render as an event-stream frame: `event:` line, `data:` line, blank line."""
        payload = json.dumps(
            self.data.model_dump(mode="json", by_alias=True),
            ensure_ascii=False,
            separators=(",", ":"),
        )
        return f"event: {self.event}\ndata: {payload}\n\n"
