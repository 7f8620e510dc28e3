"""Rolling-window series primitives."""

from collections.abc import Sequence

import pandas as pd


def to_series(values: Sequence[float] | pd.Series) -> pd.Series:
    """Coerce values to a float Series with a fresh 0..n-1 index."""
    return pd.Series(values, dtype=float).reset_index(drop=True)


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def calculate_sma(values: Sequence[float] | pd.Series, period: int) -> pd.Series:
    """
    Calculate Simple Moving Average.

    Only complete windows are returned, so the result has
    ``max(0, len(values) - period + 1)`` points and element ``i`` is the mean
    of ``values[i : i + period]``.

    Args:
        values: Price series (typically close prices)
        period: Number of periods for the average

    Returns:
        SMA series (empty when there are fewer values than ``period``)
    """
    _check_period(period)
    prices = to_series(values)
    if len(prices) < period:
        return pd.Series(dtype=float)

    # rolling() slides a running sum: each value enters and leaves once
    sma = prices.rolling(window=period, min_periods=period).mean()
    return sma.iloc[period - 1 :].reset_index(drop=True)


def calculate_ema(values: Sequence[float] | pd.Series, period: int) -> pd.Series:
    """
    Calculate Exponential Moving Average.

    Smoothing constant is ``2 / (period + 1)`` and the first output equals
    the first input (no SMA seed), so the result is as long as the input.

    Args:
        values: Price series (typically close prices)
        period: Number of periods for the average

    Returns:
        EMA series
    """
    _check_period(period)
    prices = to_series(values)
    if prices.empty:
        return prices
    return prices.ewm(span=period, adjust=False).mean()


def align_trailing(*series: pd.Series) -> tuple[pd.Series, ...]:
    """Truncate every series to the shortest common trailing length."""
    if not series:
        return ()
    length = min(len(s) for s in series)
    return tuple(s.iloc[len(s) - length :].reset_index(drop=True) for s in series)
