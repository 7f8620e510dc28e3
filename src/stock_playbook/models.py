"""Value objects for bars, fundamentals, scores and the analysis aggregate."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Literal

ObvSlope = Literal["up", "down", "flat"]
BreakoutStatus = Literal["Base", "Breakout", "Retest", "Trend"]
ValuationFlag = Literal["Undervalued", "Fair", "Expensive"]
Horizon = Literal["short", "medium", "long"]
Bias = Literal["bullish", "neutral", "cautious"]

HORIZONS: tuple[Horizon, ...] = ("short", "medium", "long")


def _plain_dict(items: list[tuple[str, Any]]) -> dict[str, Any]:
    # JSON-ready: tuples become lists
    return {k: list(v) if isinstance(v, tuple) else v for k, v in items}


@dataclass(frozen=True)
class Bar:
    """One daily OHLCV bar. Chronological order is the caller's responsibility."""

    date: str
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None
    is_breakout: bool = False
    breakout_volume_multiplier: float | None = None


@dataclass(frozen=True)
class Fundamentals:
    """Static fundamentals snapshot. Ratios in percent where growth/ROE apply."""

    pe_ratio: float
    roe: float
    debt_equity: float
    profit_growth_3y: float
    sector_pe: float
    historical_pe: float
    sales_growth_3y: float = 0.0
    eps_growth_3y: float = 0.0
    promoter_holding: float = 0.0


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Indicators supplied by the data source alongside the bars."""

    ema20: float | None = None
    ema50: float | None = None


@dataclass(frozen=True)
class StockSnapshot:
    """Everything the orchestrator needs for one symbol."""

    symbol: str
    bars: tuple[Bar, ...]
    fundamentals: Fundamentals
    price: float | None = None
    indicators: IndicatorSnapshot | None = None

    @property
    def current_price(self) -> float:
        """Quoted price, falling back to the last close (0.0 with no bars)."""
        if self.price is not None:
            return self.price
        if self.bars:
            return self.bars[-1].close
        return 0.0


@dataclass(frozen=True)
class MacdResult:
    macd: float
    signal: float
    hist: float
    macd_series: tuple[float, ...] = ()


@dataclass(frozen=True)
class BollingerBands:
    upper: tuple[float, ...] = ()
    middle: tuple[float, ...] = ()
    lower: tuple[float, ...] = ()
    bandwidth: tuple[float, ...] = ()


@dataclass(frozen=True)
class TechnicalScores:
    short_momentum: int
    medium_trend: int
    breakout_prob: int
    ema_alignment: bool
    adx: float
    rsi: float
    macd_above_zero: bool
    bb_squeeze: bool
    obv_slope: ObvSlope
    supertrend_bullish: bool
    rs_positive: bool
    atr_pct: float
    breakout_status: BreakoutStatus
    resistance: float
    avg20_vol: float
    triggered_rules: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self, dict_factory=_plain_dict)


@dataclass(frozen=True)
class SignalSynopsis:
    """One-paragraph read of RSI, MACD, EMA trend and breakout flags."""

    text: str
    confidence: int
    triggered_rules: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self, dict_factory=_plain_dict)


@dataclass(frozen=True)
class FundamentalScores:
    quality: int
    growth: int
    value: int
    stability: int
    roe: float
    roce: float
    pe: float
    pb: float | None
    peg: float | None
    debt_equity: float
    sales_growth_3y: float
    profit_growth_3y: float
    eps_growth_3y: float
    valuation_flag: ValuationFlag

    def to_dict(self) -> dict[str, Any]:
        return asdict(self, dict_factory=_plain_dict)


@dataclass(frozen=True)
class ValuationSnapshot:
    pe_vs_sector_pct: float | None
    peg: float | None
    flag: ValuationFlag

    def to_dict(self) -> dict[str, Any]:
        return asdict(self, dict_factory=_plain_dict)


@dataclass(frozen=True)
class HorizonScenario:
    """Narrative playbook for a single investment horizon."""

    horizon: Horizon
    bias: Bias
    confidence: int
    conditions: tuple[str, ...]
    entry_styles: tuple[str, ...]
    stop_examples: tuple[str, ...]
    target_bands: tuple[str, ...]
    invalidation: str
    monitoring: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self, dict_factory=_plain_dict)


@dataclass(frozen=True)
class StockAnalysis:
    """Aggregate root returned by the analysis orchestrator."""

    symbol: str
    generated_at: datetime
    technical: TechnicalScores
    fundamental: FundamentalScores
    valuation: ValuationSnapshot
    scenarios: tuple[HorizonScenario, ...]
    warnings: tuple[str, ...] = ()

    def scenario(self, horizon: Horizon) -> HorizonScenario:
        """Look up the scenario for one horizon."""
        for scenario in self.scenarios:
            if scenario.horizon == horizon:
                return scenario
        raise KeyError(horizon)

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbol": self.symbol,
            "generated_at": self.generated_at.isoformat(),
            "technical": self.technical.to_dict(),
            "fundamental": self.fundamental.to_dict(),
            "valuation": self.valuation.to_dict(),
            "scenarios": [s.to_dict() for s in self.scenarios],
            "warnings": list(self.warnings),
        }
