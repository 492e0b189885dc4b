"""Abstract base class for quote providers."""
from abc import ABC, abstractmethod

from market_alerts.providers.core.error_mapper import ProviderErrorMapper
from market_alerts.providers.core.utils import normalize_stock_symbol
from market_alerts.schemas import (FetchFailure, HistoryPoint, Quote,
                                   QuoteSnapshot, SymbolMatch)


class QuoteProviderABC(ABC):
    """Base interface for all quote providers.

    Subclasses implement the raising get_* methods. The live stream only calls
    fetch_quote, which never raises for provider errors: it returns a
    FetchFailure so one failing symbol cannot break a poll tick.
    """

    error_mapper = ProviderErrorMapper()

    async def fetch_quote(self, symbol: str) -> Quote | FetchFailure:
        """Fetch the current quote for a symbol, or the reason it failed."""
        sym = normalize_stock_symbol(symbol)
        try:
            return await self.get_quote(sym)
        except Exception as exc:  # pylint: disable=broad-except
            return self.error_mapper.to_failure(exc, sym)

    @abstractmethod
    async def get_quote(self, symbol: str) -> Quote:
        """Fetch the current quote for a symbol.

        Args:
            symbol: Uppercase instrument ticker (e.g., "AAPL").

        Returns:
            A fully populated Quote. Missing or garbled numeric fields raise
            MalformedResponseError instead of producing a partial quote.
        """

    @abstractmethod
    async def get_snapshot(self, symbol: str) -> QuoteSnapshot:
        """Fetch the full quote (open/high/low/volume...) for the REST route."""

    async def search(self, query: str) -> list[SymbolMatch]:
        """Search instruments by keyword.

        Default implementation raises NotImplementedError.
        """
        raise NotImplementedError("Symbol search is not supported by this provider")

    async def get_history(self, symbol: str, interval: str) -> list[HistoryPoint]:
        """Fetch close/volume points, oldest first.

        Args:
            symbol: Instrument ticker.
            interval: "daily" or "intraday".
        """
        raise NotImplementedError("Historical data is not supported by this provider")

    def check_configuration(self) -> None:
        """Raise ConfigurationMissingError when the provider cannot work at all."""

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "QuoteProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()
