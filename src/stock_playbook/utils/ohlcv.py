"""OHLCV frame utilities."""

from collections.abc import Sequence

import pandas as pd

from stock_playbook.models import Bar

CANONICAL_COLUMNS = ["date", "open", "high", "low", "close", "volume", "is_breakout"]


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    """
    Convert bars to a DataFrame with a consistent schema.

    Output columns (always, in this order): date, open, high, low, close,
    volume, is_breakout. Missing volume becomes 0 so window sums stay defined.

    Args:
        bars: Chronological bars

    Returns:
        DataFrame with a 0..n-1 index
    """
    df = pd.DataFrame(
        [
            {
                "date": bar.date,
                "open": bar.open,
                "high": bar.high,
                "low": bar.low,
                "close": bar.close,
                "volume": bar.volume,
                "is_breakout": bar.is_breakout,
            }
            for bar in bars
        ],
        columns=CANONICAL_COLUMNS,
    )

    for col in ("open", "high", "low", "close", "volume"):
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
    df["volume"] = df["volume"].fillna(0.0)
    df["is_breakout"] = df["is_breakout"].astype(bool)

    return df

