"""Technical scoring: indicators plus bar flags into momentum/trend scores."""

import operator
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from stock_playbook.models import Bar, IndicatorSnapshot, ObvSlope, SignalSynopsis, TechnicalScores
from stock_playbook.tools.fundamental import round_half_up
from stock_playbook.utils.indicators import (
    ATR_PERIOD,
    RSI_PERIOD,
    SQUEEZE_MIN_POINTS,
    calculate_atr,
    calculate_bollinger,
    calculate_macd,
    calculate_rsi,
    is_squeeze_present,
)
from stock_playbook.utils.ohlcv import bars_to_frame
from stock_playbook.utils.rules import ScoreRule, apply_rules, clamp
from stock_playbook.utils.series import calculate_ema
from stock_playbook.utils.validators import check_rule_expr

MACD_SLOW = 26
BOLLINGER_PERIOD = 20
LOOKBACK_BARS = 20

# ADX is approximated from MACD histogram magnitude
ADX_HIST_THRESHOLD = 2.0
ADX_STRONG = 30.0
ADX_WEAK = 15.0

BREAKOUT_BASE = 50
BREAKOUT_MIN = 10
BREAKOUT_MAX = 95

SYNOPSIS_BASE = 50
SYNOPSIS_HIST_WEIGHT = 2.0
SYNOPSIS_MIN = 10
SYNOPSIS_MAX = 98


@dataclass(frozen=True)
class TechnicalContext:
    """Inputs the scoring decision tables read."""

    rsi: float
    hist: float
    squeeze: bool
    obv_slope: ObvSlope
    ema_alignment: bool
    adx: float
    supertrend_bullish: bool
    rs_positive: bool
    last_is_breakout: bool


SHORT_MOMENTUM_RULES: tuple[ScoreRule[TechnicalContext], ...] = (
    ScoreRule("short_momentum.rsi_strong", lambda c: c.rsi > 60, 25),
    ScoreRule("short_momentum.rsi_neutral", lambda c: 40 < c.rsi <= 60, 10),
    ScoreRule("short_momentum.macd_hist_positive", lambda c: c.hist > 0, 20),
    ScoreRule("short_momentum.bb_squeeze", lambda c: c.squeeze, 10),
    ScoreRule("short_momentum.obv_slope_up", lambda c: c.obv_slope == "up", 10),
)

MEDIUM_TREND_RULES: tuple[ScoreRule[TechnicalContext], ...] = (
    ScoreRule("medium_trend.ema_alignment", lambda c: c.ema_alignment, 25),
    ScoreRule("medium_trend.adx_strong", lambda c: c.adx >= 25, 25),
    ScoreRule("medium_trend.adx_moderate", lambda c: 20 <= c.adx < 25, 15),
    ScoreRule("medium_trend.supertrend_bullish", lambda c: c.supertrend_bullish, 15),
    ScoreRule("medium_trend.rs_positive", lambda c: c.rs_positive, 15),
)

BREAKOUT_RULES: tuple[ScoreRule[TechnicalContext], ...] = (
    ScoreRule("breakout.latest_bar_breakout", lambda c: c.last_is_breakout, 25),
    ScoreRule("breakout.ema_alignment", lambda c: c.ema_alignment, 10),
    ScoreRule("breakout.rsi_strong", lambda c: c.rsi > 60, 10),
    ScoreRule("breakout.macd_hist_positive", lambda c: c.hist > 0, 5),
)


@dataclass(frozen=True)
class SynopsisContext:
    rsi: float
    hist: float
    ema_bullish: bool
    breakout_seen: bool


SYNOPSIS_RULES: tuple[ScoreRule[SynopsisContext], ...] = (
    ScoreRule("synopsis.rsi_overbought", lambda c: c.rsi > 70, 5),
    ScoreRule("synopsis.rsi_oversold", lambda c: c.rsi < 30, -5),
    ScoreRule("synopsis.macd_bullish", lambda c: c.hist > 0, 15),
    ScoreRule("synopsis.macd_bearish", lambda c: c.hist <= 0, -15),
    ScoreRule("synopsis.ema_bullish", lambda c: c.ema_bullish, 20),
    ScoreRule("synopsis.ema_bearish", lambda c: not c.ema_bullish, -20),
    ScoreRule("synopsis.breakout_seen", lambda c: c.breakout_seen, 25),
)

SYNOPSIS_SENTENCES = {
    "synopsis.rsi_overbought": "Momentum is strong, but RSI indicates the stock may be overbought.",
    "synopsis.rsi_oversold": "The stock is in oversold territory, suggesting a potential bounce.",
    "synopsis.macd_bullish": "A bullish MACD crossover is in effect, signaling positive momentum.",
    "synopsis.macd_bearish": "A bearish MACD trend is currently active.",
    "synopsis.ema_bullish": (
        "The stock is in a bullish trend, with the 20-day EMA above the 50-day EMA."
    ),
    "synopsis.ema_bearish": (
        "A bearish trend is indicated, with the 20-day EMA below the 50-day EMA."
    ),
    "synopsis.breakout_seen": "This was confirmed by a recent high-volume breakout.",
}
RSI_BALANCED_SENTENCE = "RSI shows balanced momentum."


def compute_technical_scores(
    bars: Sequence[Bar],
    indicators: IndicatorSnapshot | None = None,
    price: float | None = None,
) -> TechnicalScores:
    """
    Score a bar series for short-term momentum, medium-term trend and breakout odds.

    Args:
        bars: Chronological bars
        indicators: Precomputed EMA20/EMA50; derived from closes when absent
        price: Current price for ATR%; defaults to the last close

    Returns:
        TechnicalScores with the names of every rule that fired
    """
    df = bars_to_frame(bars)
    closes = df["close"]

    rsi = calculate_rsi(closes)
    macd = calculate_macd(closes)
    atr = calculate_atr(bars)
    bands = calculate_bollinger(closes, BOLLINGER_PERIOD)
    squeeze = is_squeeze_present(bands.bandwidth)

    ema20, ema50 = _resolve_emas(closes, indicators)
    ema_alignment = bool(check_rule_expr(ema20, ema50, operator.gt))

    ctx = TechnicalContext(
        rsi=rsi,
        hist=macd.hist,
        squeeze=squeeze,
        obv_slope=_obv_slope_proxy(macd.hist),
        ema_alignment=ema_alignment,
        adx=ADX_STRONG if abs(macd.hist) > ADX_HIST_THRESHOLD else ADX_WEAK,
        # Supertrend and relative strength follow EMA alignment until real series exist
        supertrend_bullish=ema_alignment,
        rs_positive=ema_alignment,
        last_is_breakout=bool(bars) and bars[-1].is_breakout,
    )

    short = apply_rules(0, SHORT_MOMENTUM_RULES, ctx)
    medium = apply_rules(0, MEDIUM_TREND_RULES, ctx)
    breakout = apply_rules(BREAKOUT_BASE, BREAKOUT_RULES, ctx)

    if price is None:
        price = float(closes.iloc[-1]) if len(closes) else 0.0
    atr_pct = atr / price * 100 if price > 0 else 0.0

    recent = df.tail(LOOKBACK_BARS)
    resistance = float(recent["high"].max()) if len(recent) else 0.0
    # Divides by 20 even when fewer bars exist
    avg20_vol = float(recent["volume"].sum()) / LOOKBACK_BARS

    return TechnicalScores(
        short_momentum=int(min(100, short.score)),
        medium_trend=int(min(100, medium.score)),
        breakout_prob=int(clamp(breakout.score, BREAKOUT_MIN, BREAKOUT_MAX)),
        ema_alignment=ema_alignment,
        adx=ctx.adx,
        rsi=rsi,
        macd_above_zero=macd.macd > 0,
        bb_squeeze=squeeze,
        obv_slope=ctx.obv_slope,
        supertrend_bullish=ctx.supertrend_bullish,
        rs_positive=ctx.rs_positive,
        atr_pct=atr_pct,
        breakout_status="Breakout" if ctx.last_is_breakout else "Base",
        resistance=resistance,
        avg20_vol=avg20_vol,
        triggered_rules=short.triggered + medium.triggered + breakout.triggered,
    )


def signal_synopsis(
    bars: Sequence[Bar],
    indicators: IndicatorSnapshot | None = None,
) -> SignalSynopsis:
    """
    Fuse RSI, MACD, EMA trend and breakout flags into a short narrative.

    Confidence starts at 50, moves by the synopsis rules, adds twice the MACD
    histogram, then is clamped to [10, 98] and rounded. A breakout flag on any
    bar in the series counts, not only the latest one.

    Args:
        bars: Chronological bars
        indicators: Precomputed EMA20/EMA50; derived from closes when absent

    Returns:
        SignalSynopsis with the joined sentences and the rules that fired
    """
    closes = bars_to_frame(bars)["close"]
    hist = calculate_macd(closes).hist
    ema20, ema50 = _resolve_emas(closes, indicators)

    ctx = SynopsisContext(
        rsi=calculate_rsi(closes),
        hist=hist,
        ema_bullish=bool(check_rule_expr(ema20, ema50, operator.gt)),
        breakout_seen=any(bar.is_breakout for bar in bars),
    )
    outcome = apply_rules(SYNOPSIS_BASE, SYNOPSIS_RULES, ctx)

    sentences = [SYNOPSIS_SENTENCES[name] for name in outcome.triggered]
    if not {"synopsis.rsi_overbought", "synopsis.rsi_oversold"} & set(outcome.triggered):
        sentences.insert(0, RSI_BALANCED_SENTENCE)

    raw = clamp(outcome.score + hist * SYNOPSIS_HIST_WEIGHT, SYNOPSIS_MIN, SYNOPSIS_MAX)
    return SignalSynopsis(
        text=" ".join(sentences),
        confidence=round_half_up(raw),
        triggered_rules=outcome.triggered,
    )


def degraded_indicators(bar_count: int) -> list[str]:
    """Names of indicators that fall back to their default for this many bars."""
    degraded: list[str] = []
    if bar_count < RSI_PERIOD + 1:
        degraded.append("rsi")
    if bar_count < MACD_SLOW:
        degraded.append("macd")
    if bar_count < ATR_PERIOD + 1:
        degraded.append("atr")
    if bar_count < BOLLINGER_PERIOD:
        degraded.append("bollinger")
    if bar_count < BOLLINGER_PERIOD + SQUEEZE_MIN_POINTS - 1:
        degraded.append("squeeze")
    return degraded


def _resolve_emas(
    closes: pd.Series,
    indicators: IndicatorSnapshot | None,
) -> tuple[float | None, float | None]:
    """Prefer supplied EMAs; derive any missing one from the closes."""
    ema20 = indicators.ema20 if indicators else None
    ema50 = indicators.ema50 if indicators else None
    if len(closes) == 0:
        return ema20, ema50
    if ema20 is None:
        ema20 = float(calculate_ema(closes, 20).iloc[-1])
    if ema50 is None:
        ema50 = float(calculate_ema(closes, 50).iloc[-1])
    return ema20, ema50


def _obv_slope_proxy(hist: float) -> ObvSlope:
    if hist > 0:
        return "up"
    if hist < 0:
        return "down"
    return "flat"
