"""Validation utilities and payload parsing."""

import operator
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from stock_playbook.models import Bar, Fundamentals, IndicatorSnapshot
from stock_playbook.utils.sanitize import sanitize_text

# Accept both the camelCase keys data feeds emit and snake_case
BAR_ALIASES = {
    "is_breakout": ("is_breakout", "isBreakout"),
    "breakout_volume_multiplier": ("breakout_volume_multiplier", "breakoutVolumeMultiplier"),
}
FUNDAMENTAL_ALIASES = {
    "pe_ratio": ("pe_ratio", "peRatio", "pe"),
    "roe": ("roe",),
    "debt_equity": ("debt_equity", "deRatio", "debtEquity"),
    "profit_growth_3y": ("profit_growth_3y", "profitGrowth3Y"),
    "sector_pe": ("sector_pe", "sectorPE"),
    "historical_pe": ("historical_pe", "historicalPE"),
    "sales_growth_3y": ("sales_growth_3y", "salesGrowth3Y"),
    "eps_growth_3y": ("eps_growth_3y", "epsGrowth3Y"),
    "promoter_holding": ("promoter_holding", "promoterHolding"),
}
REQUIRED_FUNDAMENTALS = (
    "pe_ratio",
    "roe",
    "debt_equity",
    "profit_growth_3y",
    "sector_pe",
    "historical_pe",
)


def normalize_symbol(symbol: str) -> str:
    """Uppercase, strip whitespace and control characters."""
    cleaned = sanitize_text(symbol, max_length=32) or ""
    cleaned = cleaned.upper().strip()
    if not cleaned:
        raise ValueError("Symbol must not be empty")
    return cleaned


def _lookup(row: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def _require_float(value: Any, field: str, where: str) -> float:
    if value is None:
        raise ValueError(f"{where}: missing required field '{field}'")
    if isinstance(value, bool):
        raise ValueError(f"{where}: field '{field}' must be numeric, got {value!r}")
    try:
        result = float(value)
    except (ValueError, TypeError):
        raise ValueError(f"{where}: field '{field}' must be numeric, got {value!r}") from None
    if result != result:  # NaN check
        raise ValueError(f"{where}: field '{field}' is NaN")
    return result


def _optional_float(value: Any, field: str, where: str) -> float | None:
    if value is None:
        return None
    return _require_float(value, field, where)


def _optional_bool(value: Any, field: str, where: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{where}: field '{field}' must be a boolean, got {value!r}")
    return value


def parse_price(value: Any) -> float | None:
    """Validate an optional quoted price."""
    return _optional_float(value, "price", "price")


def parse_bar(row: Mapping[str, Any], index: int = 0) -> Bar:
    """
    Build a Bar from a loosely typed mapping.

    OHLC values are required. High/low consistency is not checked.

    Raises:
        ValueError: On a missing or non-numeric price field
    """
    where = f"bar[{index}]"
    date = row.get("date")
    if date is None:
        raise ValueError(f"{where}: missing required field 'date'")

    return Bar(
        date=str(date),
        open=_require_float(row.get("open"), "open", where),
        high=_require_float(row.get("high"), "high", where),
        low=_require_float(row.get("low"), "low", where),
        close=_require_float(row.get("close"), "close", where),
        volume=_optional_float(row.get("volume"), "volume", where),
        is_breakout=_optional_bool(
            _lookup(row, BAR_ALIASES["is_breakout"]), "is_breakout", where
        ),
        breakout_volume_multiplier=_optional_float(
            _lookup(row, BAR_ALIASES["breakout_volume_multiplier"]),
            "breakout_volume_multiplier",
            where,
        ),
    )


def parse_bars(rows: Iterable[Mapping[str, Any]]) -> tuple[Bar, ...]:
    """Parse an ordered sequence of bar mappings."""
    return tuple(parse_bar(row, i) for i, row in enumerate(rows))


def parse_fundamentals(data: Mapping[str, Any]) -> Fundamentals:
    """
    Build a Fundamentals record from a mapping with camelCase or snake_case keys.

    Raises:
        ValueError: On a missing required ratio or a non-numeric value
    """
    values: dict[str, float] = {}
    for field, aliases in FUNDAMENTAL_ALIASES.items():
        raw = _lookup(data, aliases)
        if field in REQUIRED_FUNDAMENTALS:
            values[field] = _require_float(raw, field, "fundamentals")
        elif raw is not None:
            values[field] = _require_float(raw, field, "fundamentals")
    return Fundamentals(**values)


def parse_indicators(data: Mapping[str, Any] | None) -> IndicatorSnapshot | None:
    """Parse optional precomputed EMA values."""
    if not data:
        return None
    return IndicatorSnapshot(
        ema20=_optional_float(data.get("ema20"), "ema20", "indicators"),
        ema50=_optional_float(data.get("ema50"), "ema50", "indicators"),
    )


def check_rule(
    value: float | None,
    threshold: float,
    comparator: Callable[[float, float], bool] = operator.gt,
) -> bool | None:
    """
    Check a rule with nullable boolean semantics.

    If value is None, returns None (not False).

    Args:
        value: The value to check (may be None)
        threshold: The threshold to compare against
        comparator: Comparison function (default: operator.gt)

    Returns:
        True/False if value is not None, None otherwise
    """
    if value is None:
        return None
    return comparator(value, threshold)


def check_rule_expr(
    value1: float | None,
    value2: float | None,
    comparator: Callable[[float, float], bool] = operator.gt,
) -> bool | None:
    """
    Check a rule comparing two values with nullable boolean semantics.

    If either value is None, returns None (not False).

    Args:
        value1: First value (may be None)
        value2: Second value (may be None)
        comparator: Comparison function (default: operator.gt)

    Returns:
        True/False if both values are not None, None otherwise
    """
    if value1 is None or value2 is None:
        return None
    return comparator(value1, value2)
