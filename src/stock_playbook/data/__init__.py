"""Data layer supplying bar series and fundamentals."""

from stock_playbook.data.provider import (
    InMemoryStockProvider,
    StockDataProvider,
    UnknownSymbolError,
)

__all__ = [
    "InMemoryStockProvider",
    "StockDataProvider",
    "UnknownSymbolError",
]
