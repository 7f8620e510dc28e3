"""Pytest configuration and fixtures."""

from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import date, timedelta

import pytest

from stock_playbook.models import Bar, Fundamentals, StockSnapshot


def bars_from_closes(
    closes: Sequence[float],
    spread: float = 1.0,
    volume: float | None = 1_000_000.0,
    breakout_last: bool = False,
) -> tuple[Bar, ...]:
    """Bars whose high/low sit ``spread`` above/below each close."""
    bars = [
        Bar(
            date=(date(2024, 1, 1) + timedelta(days=i)).isoformat(),
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
            volume=volume,
        )
        for i, close in enumerate(closes)
    ]
    if breakout_last and bars:
        bars[-1] = replace(bars[-1], is_breakout=True, breakout_volume_multiplier=3.5)
    return tuple(bars)


@pytest.fixture
def make_bars() -> Callable[..., tuple[Bar, ...]]:
    """Factory building bars from a close series."""
    return bars_from_closes


@pytest.fixture
def sample_price_series() -> list[float]:
    """Sample price series for indicator testing."""
    return [100.0, 101.0, 102.0, 101.5, 103.0, 104.0, 103.5, 105.0, 106.0, 105.5,
            107.0, 108.0, 107.5, 109.0, 110.0, 109.5, 111.0, 112.0, 111.5, 113.0,
            114.0, 113.5, 115.0, 116.0, 115.5, 117.0, 118.0, 117.5, 119.0, 120.0]


@pytest.fixture
def rising_closes() -> list[float]:
    """30 closes rising monotonically from 100 to 150."""
    return [100.0 + i * 50.0 / 29 for i in range(30)]


@pytest.fixture
def quality_fundamentals() -> Fundamentals:
    """High-quality, fairly valued fundamentals (PEG 1.25)."""
    return Fundamentals(
        pe_ratio=15.0,
        roe=20.0,
        debt_equity=0.5,
        profit_growth_3y=12.0,
        sector_pe=20.0,
        historical_pe=18.0,
        sales_growth_3y=14.0,
        eps_growth_3y=11.5,
        promoter_holding=50.3,
    )


@pytest.fixture
def sample_stock(rising_closes: list[float], quality_fundamentals: Fundamentals) -> StockSnapshot:
    """Stock snapshot with a breakout on the last of 30 rising bars."""
    return StockSnapshot(
        symbol="RELIANCE.NS",
        bars=bars_from_closes(rising_closes, breakout_last=True),
        fundamentals=quality_fundamentals,
    )
