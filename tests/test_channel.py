"""Push channel framing, keep-alives and close semantics."""
import asyncio
import json

import pytest

from market_alerts.errors import TransportClosed
from market_alerts.schemas import AlertTriggerEvent, StreamEvent
from market_alerts.streaming import KEEPALIVE_FRAME, PushChannel
from tests.fakes import make_quote


class TestFraming:
    def test_connected_frame(self):
        assert StreamEvent.connected().to_frame() == 'event: connected\ndata: {"ok":true}\n\n'

    def test_quote_frame_uses_wire_field_names(self):
        frame = StreamEvent.quote(make_quote("ACME", 100.0, 1.5)).to_frame()
        event_line, data_line, blank, end = frame.split("\n")
        assert event_line == "event: quote"
        assert (blank, end) == ("", "")
        payload = json.loads(data_line[len("data: "):])
        assert payload == {
            "symbol": "ACME",
            "price": 100.0,
            "changePercent": 1.5,
            "time": "2024-01-02",
        }

    def test_alert_frame(self):
        trigger = AlertTriggerEvent(alert_id=4, symbol="ACME", message="ACME reached ≥ 100")
        frame = StreamEvent.alert(trigger).to_frame()
        assert frame.startswith("event: alert\ndata: ")
        payload = json.loads(frame.split("\n")[1][len("data: "):])
        assert payload == {"id": 4, "symbol": "ACME", "message": "ACME reached ≥ 100"}


class TestPushChannel:
    @pytest.mark.asyncio
    async def test_frames_in_order_then_end_after_close(self):
        channel = PushChannel(1, keepalive_seconds=5)
        channel.send(StreamEvent.connected())
        channel.send(StreamEvent.quote(make_quote("ACME", 1.0)))
        channel.close()
        frames = [f async for f in channel.frames()]
        assert [f.split("\n")[0] for f in frames] == ["event: connected", "event: quote"]

    @pytest.mark.asyncio
    async def test_keepalive_when_idle(self):
        channel = PushChannel(1, keepalive_seconds=0.01)
        frames = channel.frames()
        assert await asyncio.wait_for(frames.__anext__(), timeout=1) == KEEPALIVE_FRAME
        channel.close()
        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(frames.__anext__(), timeout=1)

    def test_send_after_close_raises_transport_closed(self):
        channel = PushChannel(3)
        channel.close()
        with pytest.raises(TransportClosed) as info:
            channel.send(StreamEvent.connected())
        assert info.value.session_id == 3
        assert channel.sent == 0

    def test_close_is_idempotent(self):
        channel = PushChannel(1)
        channel.close()
        channel.close()
        assert channel.closed
        assert channel._queue.qsize() == 1  # pylint: disable=protected-access
