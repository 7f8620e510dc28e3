"""Fundamental scoring: quality, growth, value and stability from a ratio snapshot."""

import math
import operator

from stock_playbook.models import Fundamentals, FundamentalScores, ValuationFlag, ValuationSnapshot
from stock_playbook.utils.rules import ScoreRule, apply_rules
from stock_playbook.utils.validators import check_rule

GROWTH_MULTIPLIER = 3
PEG_UNDERVALUED = 1.0
PEG_FAIR = 2.0

QUALITY_RULES: tuple[ScoreRule[Fundamentals], ...] = (
    ScoreRule("quality.high_roe", lambda f: f.roe > 15, 30),
    ScoreRule("quality.moderate_leverage", lambda f: f.debt_equity < 1.5, 20),
)

VALUE_RULES: tuple[ScoreRule[Fundamentals], ...] = (
    ScoreRule("value.below_sector_pe", lambda f: f.pe_ratio < f.sector_pe, 30),
    ScoreRule("value.below_historical_pe", lambda f: f.pe_ratio < f.historical_pe, 30),
)

# Cumulative tiers: <1 -> 90, <2.5 -> 60, else 30
STABILITY_RULES: tuple[ScoreRule[Fundamentals], ...] = (
    ScoreRule("stability.manageable_debt", lambda f: f.debt_equity < 2.5, 30),
    ScoreRule("stability.low_debt", lambda f: f.debt_equity < 1, 30),
)


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves upward (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def calculate_peg(pe_ratio: float, profit_growth_3y: float) -> float | None:
    """PE divided by 3-year profit growth; None when growth is not positive."""
    if profit_growth_3y <= 0:
        return None
    return pe_ratio / profit_growth_3y


def valuation_flag(peg: float | None) -> ValuationFlag:
    """Bucket a PEG ratio. An undefined PEG is treated as expensive."""
    if check_rule(peg, PEG_UNDERVALUED, operator.lt):
        return "Undervalued"
    if check_rule(peg, PEG_FAIR, operator.lt):
        return "Fair"
    return "Expensive"


def compute_fundamental_scores(fundamentals: Fundamentals) -> FundamentalScores:
    """
    Score a fundamentals snapshot.

    Args:
        fundamentals: Ratio snapshot (ROE and growth in percent)

    Returns:
        FundamentalScores with quality/growth/value/stability and the raw ratios
    """
    f = fundamentals
    quality = apply_rules(50, QUALITY_RULES, f).score
    value = apply_rules(40, VALUE_RULES, f).score
    stability = apply_rules(30, STABILITY_RULES, f).score
    growth = min(100.0, f.profit_growth_3y * GROWTH_MULTIPLIER)
    peg = calculate_peg(f.pe_ratio, f.profit_growth_3y)

    return FundamentalScores(
        quality=round_half_up(quality),
        growth=round_half_up(growth),
        value=round_half_up(value),
        stability=round_half_up(stability),
        roe=f.roe,
        roce=f.roe,
        pe=f.pe_ratio,
        # Book multiple estimated as PE / ROE
        pb=f.pe_ratio / f.roe if f.roe else None,
        peg=peg,
        debt_equity=f.debt_equity,
        sales_growth_3y=f.sales_growth_3y,
        profit_growth_3y=f.profit_growth_3y,
        eps_growth_3y=f.eps_growth_3y,
        valuation_flag=valuation_flag(peg),
    )


def make_valuation_snapshot(
    fundamentals: Fundamentals,
    scores: FundamentalScores,
) -> ValuationSnapshot:
    """PE premium/discount to sector in percent, plus PEG and its flag."""
    pe_vs_sector_pct = (
        (fundamentals.pe_ratio / fundamentals.sector_pe - 1) * 100
        if fundamentals.sector_pe > 0
        else None
    )
    return ValuationSnapshot(
        pe_vs_sector_pct=pe_vs_sector_pct,
        peg=scores.peg,
        flag=scores.valuation_flag,
    )
