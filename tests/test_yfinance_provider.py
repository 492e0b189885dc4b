"""YFinanceProvider with yfinance's Ticker and Search replaced by fakes."""
import math
import time

import pandas as pd
import pytest

from market_alerts.config import Settings
from market_alerts.providers import YFinanceProvider
from market_alerts.providers.core import ProviderUnreachableError
from market_alerts.providers.factory import create_quote_provider
from market_alerts.providers.yfinance import y_finance_provider
from market_alerts.schemas import FetchFailure, FetchFailureKind, Quote


def _install_ticker(monkeypatch, *, info=None, frame=None, delay=0.0, error=None):
    calls = []

    class FakeTicker:
        def __init__(self, symbol):
            calls.append(symbol)

        @property
        def fast_info(self):
            if delay:
                time.sleep(delay)
            if error is not None:
                raise error
            return info or {}

        def history(self, period, interval):
            calls.append((period, interval))
            if error is not None:
                raise error
            return frame

    monkeypatch.setattr(y_finance_provider.yf, "Ticker", FakeTicker)
    return calls


def _daily_frame(days: int) -> pd.DataFrame:
    index = pd.date_range("2024-01-01", periods=days, freq="D")
    return pd.DataFrame(
        {"Close": [100.0 + i for i in range(days)], "Volume": [1000 + i for i in range(days)]},
        index=index,
    )


class TestFetchQuote:
    @pytest.mark.asyncio
    async def test_price_and_change_from_previous_close(self, monkeypatch):
        calls = _install_ticker(monkeypatch, info={"lastPrice": 110.0, "previousClose": 100.0})
        result = await YFinanceProvider().fetch_quote(" acme ")
        assert isinstance(result, Quote)
        assert result.symbol == "ACME"
        assert result.price == 110.0
        assert result.change_percent == 10.0
        assert result.observed_at.tzinfo is not None
        assert calls == ["ACME"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "info",
        [
            {"lastPrice": 110.0, "previousClose": 0},
            {"lastPrice": 110.0},
            {"lastPrice": None, "previousClose": 100.0},
            {"lastPrice": math.nan, "previousClose": 100.0},
        ],
    )
    async def test_unusable_prices_are_malformed(self, monkeypatch, info):
        _install_ticker(monkeypatch, info=info)
        result = await YFinanceProvider().fetch_quote("ACME")
        assert isinstance(result, FetchFailure)
        assert result.kind is FetchFailureKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_library_error_is_unreachable(self, monkeypatch):
        _install_ticker(monkeypatch, error=RuntimeError("HTTP 404"))
        result = await YFinanceProvider().fetch_quote("ACME")
        assert result.kind is FetchFailureKind.UNREACHABLE

    @pytest.mark.asyncio
    async def test_hung_call_times_out_as_unreachable(self, monkeypatch):
        _install_ticker(
            monkeypatch, info={"lastPrice": 1.0, "previousClose": 1.0}, delay=0.5
        )
        provider = YFinanceProvider(timeout=0.05)
        started = time.monotonic()
        result = await provider.fetch_quote("ACME")
        assert time.monotonic() - started < 0.4
        assert result.kind is FetchFailureKind.UNREACHABLE
        assert "timed out" in result.detail

    def test_factory_passes_configured_timeout(self):
        provider = create_quote_provider(
            Settings(quote_provider="yfinance", provider_timeout_seconds=0.5)
        )
        assert isinstance(provider, YFinanceProvider)
        assert provider._timeout == 0.5  # pylint: disable=protected-access


class TestRestCalls:
    @pytest.mark.asyncio
    async def test_snapshot(self, monkeypatch):
        _install_ticker(
            monkeypatch,
            info={
                "lastPrice": 102.0,
                "previousClose": 100.0,
                "open": 99.5,
                "dayHigh": 103.0,
                "dayLow": 99.0,
                "lastVolume": 5000,
            },
        )
        snap = await YFinanceProvider().get_snapshot("acme")
        assert snap.symbol == "ACME"
        assert snap.change == 2.0
        assert snap.change_percent == 2.0
        assert snap.previous_close == 100.0
        assert snap.high == 103.0
        assert snap.volume == 5000

    @pytest.mark.asyncio
    async def test_search_is_capped(self, monkeypatch):
        seen = {}

        class FakeSearch:
            def __init__(self, query, max_results):
                seen["args"] = (query, max_results)
                self.quotes = [{"shortname": "no symbol"}] + [
                    {"symbol": f"AC{i}", "shortname": f"Acme {i}", "exchange": "NMS"}
                    for i in range(10)
                ]

        monkeypatch.setattr(y_finance_provider.yf, "Search", FakeSearch)
        found = await YFinanceProvider().search("acme")
        assert seen["args"] == ("acme", 7)
        assert [m.symbol for m in found] == [f"AC{i}" for i in range(6)]
        assert found[0].name == "Acme 0"
        assert found[0].region == "NMS"

    @pytest.mark.asyncio
    async def test_search_failure_is_unreachable(self, monkeypatch):
        class BrokenSearch:
            def __init__(self, query, max_results):
                raise ConnectionError("offline")

        monkeypatch.setattr(y_finance_provider.yf, "Search", BrokenSearch)
        with pytest.raises(ProviderUnreachableError):
            await YFinanceProvider().search("acme")

    @pytest.mark.asyncio
    async def test_daily_history_trimmed_oldest_first(self, monkeypatch):
        frame = _daily_frame(120)
        frame.iloc[115, frame.columns.get_loc("Close")] = math.nan
        frame.iloc[119, frame.columns.get_loc("Volume")] = 0
        calls = _install_ticker(monkeypatch, frame=frame)

        points = await YFinanceProvider().get_history("acme", "daily")

        assert calls == ["ACME", ("6mo", "1d")]
        assert len(points) == 100
        assert [p.t for p in points] == sorted(p.t for p in points)
        assert points[-1].t == "2024-04-29"
        assert "2024-04-25" not in {p.t for p in points}
        assert points[-1].close == 219.0
        assert points[-1].volume is None

    @pytest.mark.asyncio
    async def test_intraday_history_request(self, monkeypatch):
        index = pd.date_range("2024-01-02 09:30", periods=3, freq="5min")
        frame = pd.DataFrame({"Close": [1.0, 2.0, 3.0], "Volume": [10, 20, 30]}, index=index)
        calls = _install_ticker(monkeypatch, frame=frame)
        points = await YFinanceProvider().get_history("ACME", "intraday")
        assert calls[-1] == ("5d", "5m")
        assert [p.t for p in points] == [
            "2024-01-02 09:30:00",
            "2024-01-02 09:35:00",
            "2024-01-02 09:40:00",
        ]

    @pytest.mark.asyncio
    async def test_empty_history(self, monkeypatch):
        _install_ticker(monkeypatch, frame=pd.DataFrame())
        assert await YFinanceProvider().get_history("ACME", "daily") == []

    @pytest.mark.asyncio
    async def test_unknown_interval(self):
        with pytest.raises(ValueError):
            await YFinanceProvider().get_history("ACME", "weekly")
