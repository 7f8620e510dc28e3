"""Tests for the analysis orchestrator and data provider."""

import json
import logging
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from stock_playbook.data.provider import InMemoryStockProvider, UnknownSymbolError
from stock_playbook.models import HORIZONS, Fundamentals, StockSnapshot
from stock_playbook.tools.analyze import AnalysisService, generate_analysis

FIXED_NOW = datetime(2024, 6, 3, 9, 15, tzinfo=timezone.utc)


class TestGenerateAnalysis:
    """Tests for generate_analysis."""

    def test_aggregate(self, sample_stock: StockSnapshot) -> None:
        """Test the aggregate carries every component."""
        analysis = generate_analysis(sample_stock, now=FIXED_NOW)

        assert analysis.symbol == "RELIANCE.NS"
        assert analysis.generated_at == FIXED_NOW
        assert analysis.technical.breakout_prob == 95
        assert analysis.fundamental.quality == 100
        assert analysis.valuation.flag == "Fair"
        assert analysis.valuation.pe_vs_sector_pct == pytest.approx(-25.0)

    def test_three_scenarios(self, sample_stock: StockSnapshot) -> None:
        """Test exactly one scenario per horizon."""
        analysis = generate_analysis(sample_stock)

        assert tuple(s.horizon for s in analysis.scenarios) == HORIZONS
        for horizon in HORIZONS:
            assert analysis.scenario(horizon).horizon == horizon

    @pytest.mark.parametrize("growth", [-50.0, 0.0, 5.0, 12.0, 80.0])
    @pytest.mark.parametrize("bar_count", [0, 1, 14, 30, 60])
    def test_confidence_bounded(
        self,
        make_bars,
        quality_fundamentals: Fundamentals,
        growth: float,
        bar_count: int,
    ) -> None:
        """Test confidence stays in [0, 100] for any input shape."""
        stock = StockSnapshot(
            symbol="TEST",
            bars=make_bars([100.0 + (i % 7) for i in range(bar_count)]),
            fundamentals=replace(quality_fundamentals, profit_growth_3y=growth),
        )

        analysis = generate_analysis(stock)

        assert len(analysis.scenarios) == 3
        for scenario in analysis.scenarios:
            assert 0 <= scenario.confidence <= 100

    def test_default_timestamp_is_utc(self, sample_stock: StockSnapshot) -> None:
        """Test the generation timestamp defaults to an aware UTC time."""
        analysis = generate_analysis(sample_stock)

        assert analysis.generated_at.tzinfo is not None

    def test_short_series_warnings(self, make_bars, quality_fundamentals: Fundamentals) -> None:
        """Test degraded indicators are listed instead of failing the analysis."""
        stock = StockSnapshot("TCS.NS", make_bars([100.0] * 10), quality_fundamentals)

        analysis = generate_analysis(stock)

        assert "insufficient_bars:rsi" in analysis.warnings
        assert "insufficient_bars:macd" in analysis.warnings
        assert analysis.technical.rsi == 50.0

    def test_no_warnings_for_long_series(self, make_bars, quality_fundamentals: Fundamentals) -> None:
        stock = StockSnapshot("TCS.NS", make_bars([100.0 + i for i in range(60)]), quality_fundamentals)

        assert generate_analysis(stock).warnings == ()

    def test_undefined_peg_warning(self, sample_stock: StockSnapshot) -> None:
        """Test non-positive growth is flagged."""
        stock = replace(
            sample_stock,
            fundamentals=replace(sample_stock.fundamentals, profit_growth_3y=0.0),
        )

        analysis = generate_analysis(stock)

        assert "undefined_peg:non_positive_growth" in analysis.warnings
        assert analysis.valuation.peg is None
        assert analysis.valuation.flag == "Expensive"

    def test_quoted_price_used_for_atr(self, make_bars, quality_fundamentals: Fundamentals) -> None:
        """Test a quoted price overrides the last close."""
        stock = StockSnapshot("TCS.NS", make_bars([100.0] * 20), quality_fundamentals, price=50.0)

        assert generate_analysis(stock).technical.atr_pct == pytest.approx(4.0)

    def test_to_dict_is_json_serializable(self, sample_stock: StockSnapshot) -> None:
        """Test the aggregate converts to plain JSON."""
        data = generate_analysis(sample_stock, now=FIXED_NOW).to_dict()
        decoded = json.loads(json.dumps(data))

        assert decoded["generated_at"] == "2024-06-03T09:15:00+00:00"
        assert len(decoded["scenarios"]) == 3
        assert decoded["technical"]["breakout_status"] == "Breakout"
        assert decoded["fundamental"]["valuation_flag"] == "Fair"

    def test_logs_degraded_indicators(self, make_bars, quality_fundamentals: Fundamentals, caplog) -> None:
        """Test degraded indicators are logged at debug level."""
        stock = StockSnapshot("TCS.NS", make_bars([100.0] * 10), quality_fundamentals)

        with caplog.at_level(logging.DEBUG, logger="stock_playbook.tools.analyze"):
            generate_analysis(stock)

        assert "using defaults for rsi" in caplog.text

    def test_input_not_mutated(self, sample_stock: StockSnapshot) -> None:
        """Test repeated calls give identical results on the same snapshot."""
        first = generate_analysis(sample_stock, now=FIXED_NOW)
        second = generate_analysis(sample_stock, now=FIXED_NOW)

        assert first == second


class TestInMemoryStockProvider:
    """Tests for InMemoryStockProvider."""

    def test_lookup_normalizes_symbol(self, sample_stock: StockSnapshot) -> None:
        provider = InMemoryStockProvider([sample_stock])

        assert provider.get_stock("  reliance.ns ") is sample_stock

    def test_unknown_symbol(self, sample_stock: StockSnapshot) -> None:
        """Test unknown symbols raise UnknownSymbolError (a KeyError)."""
        provider = InMemoryStockProvider([sample_stock])

        with pytest.raises(UnknownSymbolError):
            provider.get_stock("TCS.NS")
        with pytest.raises(KeyError):
            provider.get_stock("TCS.NS")

    def test_symbols(self, sample_stock: StockSnapshot) -> None:
        other = replace(sample_stock, symbol="infy.ns")
        provider = InMemoryStockProvider([sample_stock, other])

        assert provider.symbols() == ["INFY.NS", "RELIANCE.NS"]


class TestAnalysisService:
    """Tests for AnalysisService."""

    def test_analyze_via_provider(self, sample_stock: StockSnapshot) -> None:
        """Test the service resolves the symbol through the injected provider."""
        service = AnalysisService(InMemoryStockProvider([sample_stock]))

        analysis = service.analyze("reliance.ns", now=FIXED_NOW)

        assert analysis == generate_analysis(sample_stock, now=FIXED_NOW)

    def test_analyze_unknown(self) -> None:
        service = AnalysisService(InMemoryStockProvider())

        with pytest.raises(UnknownSymbolError):
            service.analyze("NOPE")
