"""Technical indicator calculations.

Every indicator is total over its input: a series too short for the window
returns a documented neutral default instead of raising.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from stock_playbook.models import Bar, BollingerBands, MacdResult
from stock_playbook.utils.ohlcv import bars_to_frame
from stock_playbook.utils.series import align_trailing, calculate_ema, calculate_sma, to_series

RSI_PERIOD = 14
RSI_NEUTRAL = 50.0
ATR_PERIOD = 14
SQUEEZE_MIN_POINTS = 20
SQUEEZE_LOOKBACK = 40


def calculate_rsi(closes: Sequence[float] | pd.Series, period: int = RSI_PERIOD) -> float:
    """
    Calculate Relative Strength Index over the trailing window.

    Average gain and loss are plain means of the last ``period`` close-to-close
    differences (no Wilder smoothing).

    Args:
        closes: Close price series
        period: RSI period (default: 14)

    Returns:
        RSI (0-100). 50.0 with fewer than ``period + 1`` closes,
        100.0 when there were no losses in the window.
    """
    prices = to_series(closes)
    if len(prices) < period + 1:
        return RSI_NEUTRAL

    delta = prices.iloc[-(period + 1) :].diff().dropna()
    avg_gain = float(delta.clip(lower=0).sum()) / period
    avg_loss = float((-delta).clip(lower=0).sum()) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    rsi = 100 - (100 / (1 + rs))
    return float(min(100.0, max(0.0, rsi)))


def calculate_macd(
    closes: Sequence[float] | pd.Series,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MacdResult:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    Args:
        closes: Close price series
        fast: Fast EMA period (default: 12)
        slow: Slow EMA period (default: 26)
        signal: Signal line period (default: 9)

    Returns:
        Latest MACD, signal and histogram plus the full MACD line.
        All zero with an empty series when there are fewer than ``slow`` closes.
    """
    prices = to_series(closes)
    if len(prices) < slow:
        return MacdResult(macd=0.0, signal=0.0, hist=0.0, macd_series=())

    ema_fast, ema_slow = align_trailing(
        calculate_ema(prices, fast),
        calculate_ema(prices, slow),
    )
    macd_line = ema_fast - ema_slow
    signal_line = calculate_ema(macd_line, signal)

    latest_macd = float(macd_line.iloc[-1])
    latest_signal = float(signal_line.iloc[-1])

    return MacdResult(
        macd=latest_macd,
        signal=latest_signal,
        hist=latest_macd - latest_signal,
        macd_series=tuple(float(v) for v in macd_line),
    )


def calculate_atr(bars: Sequence[Bar], period: int = ATR_PERIOD) -> float:
    """
    Calculate Average True Range as a simple mean of the trailing true ranges.

    Args:
        bars: Chronological bars
        period: ATR period (default: 14)

    Returns:
        ATR, or 0.0 with fewer than ``period + 1`` bars
    """
    if len(bars) < period + 1:
        return 0.0

    df = bars_to_frame(bars[-(period + 1) :])
    prev_close = df["close"].shift(1)

    tr1 = df["high"] - df["low"]
    tr2 = (df["high"] - prev_close).abs()
    tr3 = (df["low"] - prev_close).abs()

    true_range = pd.concat([tr1, tr2, tr3], axis=1).max(axis=1).iloc[1:]
    return float(true_range.sum()) / period


def calculate_bollinger(
    closes: Sequence[float] | pd.Series,
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerBands:
    """
    Calculate Bollinger Bands with population standard deviation.

    Args:
        closes: Close price series
        period: SMA window (default: 20)
        std_dev: Band width in standard deviations (default: 2.0)

    Returns:
        Upper/middle/lower bands and bandwidth (percent of the middle band),
        one point per complete window. Empty with fewer than ``period`` closes.
    """
    prices = to_series(closes)
    if len(prices) < period:
        return BollingerBands()

    middle = calculate_sma(prices, period)
    sigma = (
        prices.rolling(window=period, min_periods=period)
        .std(ddof=0)
        .iloc[period - 1 :]
        .reset_index(drop=True)
    )

    upper = middle + std_dev * sigma
    lower = middle - std_dev * sigma

    # Zero mean has no meaningful relative width
    safe_middle = middle.replace(0.0, np.nan)
    bandwidth = ((upper - lower) / safe_middle * 100).fillna(0.0)

    return BollingerBands(
        upper=tuple(float(v) for v in upper),
        middle=tuple(float(v) for v in middle),
        lower=tuple(float(v) for v in lower),
        bandwidth=tuple(float(v) for v in bandwidth),
    )


def is_squeeze_present(bandwidth: Sequence[float], threshold: float = 0.2) -> bool:
    """
    Detect a Bollinger squeeze.

    True when the latest bandwidth has contracted more than ``threshold``
    (as a fraction) below the mean of the trailing 40 bandwidth points.

    Args:
        bandwidth: Bandwidth series from ``calculate_bollinger``
        threshold: Contraction fraction (default: 0.2)

    Returns:
        Squeeze flag, False with fewer than 20 points or a zero average
    """
    widths = to_series(bandwidth)
    if len(widths) < SQUEEZE_MIN_POINTS:
        return False

    latest = float(widths.iloc[-1])
    avg = float(widths.tail(SQUEEZE_LOOKBACK).mean())
    if avg == 0:
        return False
    return (avg - latest) / avg > threshold
