"""Horizon playbooks: short/medium/long scenarios from technical and fundamental scores."""

import operator

from stock_playbook.models import Bias, FundamentalScores, HorizonScenario, TechnicalScores
from stock_playbook.tools.fundamental import round_half_up
from stock_playbook.utils.rules import clamp
from stock_playbook.utils.validators import check_rule

SHORT_BULLISH_MOMENTUM = 65
SHORT_NEUTRAL_MOMENTUM = 40
MEDIUM_BULLISH_TREND = 70
MEDIUM_MIN_QUALITY = 65
LONG_MIN_QUALITY = 70
LONG_MAX_PEG = 2.0
STOP_ATR_MULTIPLE = 1.5


def _confidence(raw: float) -> int:
    return int(clamp(round_half_up(raw), 0, 100))


def short_bias(technical: TechnicalScores) -> Bias:
    if technical.short_momentum > SHORT_BULLISH_MOMENTUM:
        return "bullish"
    if technical.short_momentum > SHORT_NEUTRAL_MOMENTUM:
        return "neutral"
    return "cautious"


def medium_bias(technical: TechnicalScores, fundamental: FundamentalScores) -> Bias:
    if technical.medium_trend > MEDIUM_BULLISH_TREND and fundamental.quality > MEDIUM_MIN_QUALITY:
        return "bullish"
    return "neutral"


def long_bias(fundamental: FundamentalScores) -> Bias:
    cheap_for_growth = check_rule(fundamental.peg, LONG_MAX_PEG, operator.lt)
    if fundamental.quality > LONG_MIN_QUALITY and cheap_for_growth:
        return "bullish"
    return "neutral"


def build_playbooks(
    technical: TechnicalScores,
    fundamental: FundamentalScores,
) -> tuple[HorizonScenario, HorizonScenario, HorizonScenario]:
    """
    Build the short, medium and long horizon scenarios.

    Narrative fields are fixed per horizon; the short-horizon stop distance is
    the only value derived from the data (1.5x ATR%).

    Args:
        technical: Technical scores
        fundamental: Fundamental scores

    Returns:
        Scenarios ordered short, medium, long
    """
    stop_pct = technical.atr_pct * STOP_ATR_MULTIPLE

    short = HorizonScenario(
        horizon="short",
        bias=short_bias(technical),
        confidence=_confidence(technical.short_momentum * 0.8 + 15),
        conditions=("Close above resistance with volume", "ADX >= 25", "RSI > 50"),
        entry_styles=("Breakout close", "Retest near breakout line"),
        stop_examples=(f"{stop_pct:.1f}% below entry", "Below recent swing low"),
        target_bands=("Next Fibonacci level", "Previous high"),
        invalidation="Close below breakout line with rising volume",
        monitoring=("Price crossing key EMA", "RSI dropping below 45"),
    )

    medium = HorizonScenario(
        horizon="medium",
        bias=medium_bias(technical, fundamental),
        confidence=_confidence(technical.medium_trend * 0.7 + fundamental.quality * 0.2),
        conditions=("EMA20 > EMA50", "MACD histogram positive", "Consistent volume"),
        entry_styles=("Pullback to 20-day EMA", "Consolidation near support"),
        stop_examples=("Close below 50-day EMA",),
        target_bands=("52-week high", "Major resistance zone"),
        invalidation="Break of the 50-day EMA and medium-term trend",
        monitoring=("EMA crossover events", "Quarterly earnings report"),
    )

    long = HorizonScenario(
        horizon="long",
        bias=long_bias(fundamental),
        confidence=_confidence(fundamental.quality * 0.6 + fundamental.growth * 0.4),
        conditions=("ROE > 15%", "Debt/Equity < 1.5", "Consistent profit growth (>10%)"),
        entry_styles=("Systematic investment plan", "Accumulate on major market dips"),
        stop_examples=("Fundamental thesis breaks (e.g., loss of market share)",),
        target_bands=("Held for 3-5+ years based on business growth",),
        invalidation="Significant deterioration in company fundamentals",
        monitoring=("Annual reports", "Competitor landscape changes"),
    )

    return short, medium, long
