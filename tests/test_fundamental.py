"""Tests for fundamental scoring and valuation."""

from dataclasses import replace

import pytest

from stock_playbook.models import Fundamentals
from stock_playbook.tools.fundamental import (
    calculate_peg,
    compute_fundamental_scores,
    make_valuation_snapshot,
    round_half_up,
    valuation_flag,
)


class TestComputeFundamentalScores:
    """Tests for compute_fundamental_scores."""

    def test_quality_company(self, quality_fundamentals: Fundamentals) -> None:
        """Test the reference high-quality, fairly valued profile."""
        scores = compute_fundamental_scores(quality_fundamentals)

        assert scores.quality == 100
        assert scores.value == 100
        assert scores.stability == 90
        assert scores.growth == 36
        assert scores.peg == pytest.approx(1.25)
        assert scores.valuation_flag == "Fair"

    @pytest.mark.parametrize(
        ("roe", "debt_equity", "expected"),
        [(20.0, 0.5, 100), (20.0, 1.5, 80), (15.0, 0.5, 70), (10.0, 2.0, 50)],
    )
    def test_quality(
        self, quality_fundamentals: Fundamentals, roe: float, debt_equity: float, expected: int
    ) -> None:
        """Test quality = (ROE > 15 ? 80 : 50) + (D/E < 1.5 ? 20 : 0)."""
        record = replace(quality_fundamentals, roe=roe, debt_equity=debt_equity)

        assert compute_fundamental_scores(record).quality == expected

    @pytest.mark.parametrize(
        ("debt_equity", "expected"),
        [(0.0, 90), (0.99, 90), (1.0, 60), (2.49, 60), (2.5, 30), (4.0, 30)],
    )
    def test_stability_tiers(
        self, quality_fundamentals: Fundamentals, debt_equity: float, expected: int
    ) -> None:
        """Test stability is 90 / 60 / 30 by leverage tier."""
        record = replace(quality_fundamentals, debt_equity=debt_equity)

        assert compute_fundamental_scores(record).stability == expected

    @pytest.mark.parametrize(
        ("pe", "expected"),
        [(15.0, 100), (19.0, 70), (21.0, 40), (17.0, 100)],
    )
    def test_value(self, quality_fundamentals: Fundamentals, pe: float, expected: int) -> None:
        """Test value = (PE < sector ? 70 : 40) + (PE < historical ? 30 : 0)."""
        # sector PE 20, historical PE 18
        record = replace(quality_fundamentals, pe_ratio=pe)

        assert compute_fundamental_scores(record).value == expected

    def test_value_below_historical_only(self, quality_fundamentals: Fundamentals) -> None:
        """Test PE above sector but below history scores 40 + 30."""
        record = replace(quality_fundamentals, pe_ratio=22.0, historical_pe=25.0)

        assert compute_fundamental_scores(record).value == 70

    def test_growth_capped(self, quality_fundamentals: Fundamentals) -> None:
        """Test growth score is capped at 100."""
        record = replace(quality_fundamentals, profit_growth_3y=45.0)

        assert compute_fundamental_scores(record).growth == 100

    def test_growth_rounds_half_up(self, quality_fundamentals: Fundamentals) -> None:
        """Test 12.5 * 3 = 37.5 rounds to 38."""
        record = replace(quality_fundamentals, profit_growth_3y=12.5)

        assert compute_fundamental_scores(record).growth == 38

    def test_raw_ratios(self, quality_fundamentals: Fundamentals) -> None:
        """Test raw ratios are carried through."""
        scores = compute_fundamental_scores(quality_fundamentals)

        assert scores.roe == 20.0
        assert scores.roce == 20.0
        assert scores.pe == 15.0
        assert scores.pb == pytest.approx(0.75)
        assert scores.debt_equity == 0.5
        assert scores.sales_growth_3y == 14.0

    def test_zero_roe_pb_undefined(self, quality_fundamentals: Fundamentals) -> None:
        """Test the PB estimate is None when ROE is zero."""
        record = replace(quality_fundamentals, roe=0.0)

        assert compute_fundamental_scores(record).pb is None

    @pytest.mark.parametrize("growth", [0.0, -5.0])
    def test_non_positive_growth(self, quality_fundamentals: Fundamentals, growth: float) -> None:
        """Test zero or negative growth gives no PEG and an Expensive flag."""
        record = replace(quality_fundamentals, profit_growth_3y=growth)

        scores = compute_fundamental_scores(record)

        assert scores.peg is None
        assert scores.valuation_flag == "Expensive"
        assert scores.growth == round_half_up(growth * 3)


class TestValuation:
    """Tests for PEG, valuation flag and snapshot."""

    def test_calculate_peg(self) -> None:
        assert calculate_peg(15.0, 12.0) == pytest.approx(1.25)
        assert calculate_peg(15.0, 0.0) is None

    @pytest.mark.parametrize(
        ("peg", "expected"),
        [(0.5, "Undervalued"), (0.99, "Undervalued"), (1.0, "Fair"), (1.99, "Fair"),
         (2.0, "Expensive"), (None, "Expensive")],
    )
    def test_valuation_flag(self, peg: float | None, expected: str) -> None:
        """Test PEG buckets: < 1 undervalued, < 2 fair, else expensive."""
        assert valuation_flag(peg) == expected

    def test_snapshot(self, quality_fundamentals: Fundamentals) -> None:
        """Test PE discount to sector in percent."""
        scores = compute_fundamental_scores(quality_fundamentals)
        snapshot = make_valuation_snapshot(quality_fundamentals, scores)

        assert snapshot.pe_vs_sector_pct == pytest.approx(-25.0)
        assert snapshot.peg == scores.peg
        assert snapshot.flag == "Fair"

    def test_snapshot_zero_sector_pe(self, quality_fundamentals: Fundamentals) -> None:
        """Test a non-positive sector PE gives no comparison."""
        record = replace(quality_fundamentals, sector_pe=0.0)
        snapshot = make_valuation_snapshot(record, compute_fundamental_scores(record))

        assert snapshot.pe_vs_sector_pct is None


class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.5, 1), (1.5, 2), (2.5, 3), (2.4, 2), (-2.5, -2), (-2.6, -3)],
    )
    def test_round_half_up(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected
