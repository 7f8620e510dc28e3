"""Data-provider capability supplying stock snapshots to the orchestrator."""

from collections.abc import Iterable
from typing import Protocol

from stock_playbook.models import StockSnapshot
from stock_playbook.utils.validators import normalize_symbol


class UnknownSymbolError(KeyError):
    """Raised when a provider has no data for a symbol."""


class StockDataProvider(Protocol):
    def get_stock(self, symbol: str) -> StockSnapshot: ...

    def symbols(self) -> list[str]: ...


class InMemoryStockProvider:
    """
    Provider backed by snapshots handed in at construction.

    Lookups ignore case and surrounding whitespace. Snapshots are immutable,
    so the same instance can serve concurrent callers.
    """

    def __init__(self, stocks: Iterable[StockSnapshot] = ()):
        self._stocks: dict[str, StockSnapshot] = {}
        for stock in stocks:
            self._stocks[normalize_symbol(stock.symbol)] = stock

    def get_stock(self, symbol: str) -> StockSnapshot:
        key = normalize_symbol(symbol)
        try:
            return self._stocks[key]
        except KeyError:
            raise UnknownSymbolError(f"No data for symbol '{key}'") from None

    def symbols(self) -> list[str]:
        return sorted(self._stocks)
