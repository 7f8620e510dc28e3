"""Utility modules."""

from stock_playbook.utils.indicators import (
    calculate_atr,
    calculate_bollinger,
    calculate_macd,
    calculate_rsi,
    is_squeeze_present,
)
from stock_playbook.utils.ohlcv import bars_to_frame
from stock_playbook.utils.provenance import build_error_response, build_meta, build_provenance
from stock_playbook.utils.rules import RuleOutcome, ScoreRule, apply_rules, clamp
from stock_playbook.utils.sanitize import sanitize_text
from stock_playbook.utils.series import align_trailing, calculate_ema, calculate_sma
from stock_playbook.utils.validators import (
    check_rule,
    check_rule_expr,
    normalize_symbol,
    parse_bars,
    parse_fundamentals,
    parse_indicators,
)

__all__ = [
    "align_trailing",
    "calculate_atr",
    "calculate_bollinger",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "is_squeeze_present",
    "bars_to_frame",
    "build_error_response",
    "build_meta",
    "build_provenance",
    "RuleOutcome",
    "ScoreRule",
    "apply_rules",
    "clamp",
    "sanitize_text",
    "check_rule",
    "check_rule_expr",
    "normalize_symbol",
    "parse_bars",
    "parse_fundamentals",
    "parse_indicators",
]
