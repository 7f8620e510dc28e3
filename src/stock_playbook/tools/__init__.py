"""Scoring, playbook and analysis tools."""

from stock_playbook.tools.analyze import AnalysisService, generate_analysis
from stock_playbook.tools.fundamental import compute_fundamental_scores, make_valuation_snapshot
from stock_playbook.tools.playbook import build_playbooks
from stock_playbook.tools.report import analyze_stock, fundamental_scores, technical_scores
from stock_playbook.tools.technical import compute_technical_scores, signal_synopsis

__all__ = [
    "AnalysisService",
    "analyze_stock",
    "build_playbooks",
    "compute_fundamental_scores",
    "compute_technical_scores",
    "fundamental_scores",
    "generate_analysis",
    "make_valuation_snapshot",
    "signal_synopsis",
    "technical_scores",
]
