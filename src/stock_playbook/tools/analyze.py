"""Analysis orchestrator: one entry point from a stock snapshot to a full analysis."""

import logging
from datetime import datetime, timezone

from stock_playbook.data.provider import StockDataProvider
from stock_playbook.models import StockAnalysis, StockSnapshot
from stock_playbook.tools.fundamental import compute_fundamental_scores, make_valuation_snapshot
from stock_playbook.tools.playbook import build_playbooks
from stock_playbook.tools.technical import compute_technical_scores, degraded_indicators

logger = logging.getLogger(__name__)


def generate_analysis(stock: StockSnapshot, now: datetime | None = None) -> StockAnalysis:
    """
    Run technical scoring, fundamental scoring and playbook building for one stock.

    Never raises on short series: indicators without enough bars fall back to
    their neutral defaults and are listed in ``warnings``.

    Args:
        stock: Bars, fundamentals and optional quote/indicators for one symbol
        now: Generation timestamp (defaults to current UTC time)

    Returns:
        StockAnalysis with exactly one scenario per horizon
    """
    technical = compute_technical_scores(
        stock.bars,
        indicators=stock.indicators,
        price=stock.current_price,
    )
    fundamental = compute_fundamental_scores(stock.fundamentals)
    valuation = make_valuation_snapshot(stock.fundamentals, fundamental)
    scenarios = build_playbooks(technical, fundamental)

    degraded = degraded_indicators(len(stock.bars))
    warnings = tuple(f"insufficient_bars:{name}" for name in degraded)
    if degraded:
        logger.debug(
            f"generate_analysis({stock.symbol}): {len(stock.bars)} bars, "
            f"using defaults for {', '.join(degraded)}"
        )
    if fundamental.peg is None:
        warnings += ("undefined_peg:non_positive_growth",)

    analysis = StockAnalysis(
        symbol=stock.symbol,
        generated_at=now or datetime.now(timezone.utc),
        technical=technical,
        fundamental=fundamental,
        valuation=valuation,
        scenarios=scenarios,
        warnings=warnings,
    )
    logger.debug(
        f"generate_analysis({stock.symbol}): short={technical.short_momentum} "
        f"medium={technical.medium_trend} quality={fundamental.quality} "
        f"flag={fundamental.valuation_flag}"
    )
    return analysis


class AnalysisService:
    """Resolves symbols through an injected data provider and analyzes them."""

    def __init__(self, provider: StockDataProvider):
        self.provider = provider

    def analyze(self, symbol: str, now: datetime | None = None) -> StockAnalysis:
        """
        Analyze a symbol known to the provider.

        Raises:
            UnknownSymbolError: If the provider has no data for the symbol
        """
        return generate_analysis(self.provider.get_stock(symbol), now=now)
