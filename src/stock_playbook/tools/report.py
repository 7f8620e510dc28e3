"""JSON-ready tool responses over the analysis engine."""

from collections.abc import Mapping, Sequence
from time import perf_counter
from typing import Any

from stock_playbook.models import Bar, StockSnapshot
from stock_playbook.tools.analyze import generate_analysis
from stock_playbook.tools.fundamental import compute_fundamental_scores, make_valuation_snapshot
from stock_playbook.tools.technical import compute_technical_scores, signal_synopsis
from stock_playbook.utils.provenance import build_error_response, build_meta, build_provenance
from stock_playbook.utils.validators import (
    normalize_symbol,
    parse_bars,
    parse_fundamentals,
    parse_indicators,
    parse_price,
)


def _bar_provenance(snapshot_bars: Sequence[Bar], warnings: Sequence[str] = ()) -> dict[str, Any]:
    return build_provenance(
        source="payload",
        bar_count=len(snapshot_bars),
        last_bar_date=snapshot_bars[-1].date if snapshot_bars else None,
        warnings=warnings,
    )


async def analyze_stock(
    symbol: str,
    bars: Sequence[Mapping[str, Any]],
    fundamentals: Mapping[str, Any],
    price: float | None = None,
    indicators: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Full analysis for a caller-supplied bar series and fundamentals record.

    Args:
        symbol: Stock ticker symbol
        bars: Chronological OHLCV bars (dicts)
        fundamentals: Fundamental ratios (dict)
        price: Current quoted price (defaults to the last close)
        indicators: Optional precomputed ``ema20``/``ema50``

    Returns:
        Dict with technical/fundamental scores, valuation and three scenarios,
        or an error envelope when the payload is malformed
    """
    start_time = perf_counter()

    try:
        snapshot = StockSnapshot(
            symbol=normalize_symbol(symbol),
            bars=parse_bars(bars),
            fundamentals=parse_fundamentals(fundamentals),
            price=parse_price(price),
            indicators=parse_indicators(indicators),
        )
    except ValueError as e:
        return build_error_response(error_type="invalid_input", message=str(e), symbol=symbol)

    analysis = generate_analysis(snapshot)
    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("analyze_stock", duration_ms),
        "data_provenance": {"price": _bar_provenance(snapshot.bars, analysis.warnings)},
        **analysis.to_dict(),
    }


async def technical_scores(
    symbol: str,
    bars: Sequence[Mapping[str, Any]],
    price: float | None = None,
    indicators: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Technical scores only, for summary widgets.

    Returns:
        Dict with the TechnicalScores fields and the signal synopsis,
        or an error envelope
    """
    start_time = perf_counter()

    try:
        normalized = normalize_symbol(symbol)
        parsed_bars = parse_bars(bars)
        parsed_indicators = parse_indicators(indicators)
        quoted_price = parse_price(price)
    except ValueError as e:
        return build_error_response(error_type="invalid_input", message=str(e), symbol=symbol)

    scores = compute_technical_scores(parsed_bars, indicators=parsed_indicators, price=quoted_price)
    synopsis = signal_synopsis(parsed_bars, indicators=parsed_indicators)
    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("technical_scores", duration_ms),
        "data_provenance": {"price": _bar_provenance(parsed_bars)},
        "symbol": normalized,
        "technical": scores.to_dict(),
        "synopsis": synopsis.to_dict(),
    }


async def fundamental_scores(symbol: str, fundamentals: Mapping[str, Any]) -> dict[str, Any]:
    """
    Fundamental scores and valuation snapshot only.

    Returns:
        Dict with FundamentalScores and ValuationSnapshot fields, or an error envelope
    """
    start_time = perf_counter()

    try:
        normalized = normalize_symbol(symbol)
        record = parse_fundamentals(fundamentals)
    except ValueError as e:
        return build_error_response(error_type="invalid_input", message=str(e), symbol=symbol)

    scores = compute_fundamental_scores(record)
    valuation = make_valuation_snapshot(record, scores)
    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("fundamental_scores", duration_ms),
        "symbol": normalized,
        "fundamental": scores.to_dict(),
        "valuation": valuation.to_dict(),
    }
