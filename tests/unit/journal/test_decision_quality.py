"""Tests for the Decision Quality Index."""

import pytest

from protrade_analytics.core.enums import Grade
from protrade_analytics.journal.decision_quality import (
    calculate_decision_quality_index,
    consistency_bonus,
    documentation,
    emotional_control,
    execution_precision,
    plan_quality,
    risk_management,
)


class TestComponents:
    def test_complete_trade(self, make_complete_trade):
        trade = make_complete_trade()
        assert plan_quality(trade) == 100
        assert risk_management(trade) == 100
        assert execution_precision(trade) == 80
        assert emotional_control(trade) == 100
        assert documentation(trade) == 100

    def test_bare_trade(self, make_trade):
        trade = make_trade(-10)
        assert plan_quality(trade) == 0
        # untracked risk reads as 0% -> lowest tier
        assert risk_management(trade) == 40
        assert execution_precision(trade) == 0
        assert emotional_control(trade) == 30
        assert documentation(trade) == 0

    @pytest.mark.parametrize(
        "risk, expected",
        [(0.5, 40), (1.5, 30), (2.5, 15), (5, 5)],
    )
    def test_risk_tiers(self, make_trade, risk, expected):
        assert risk_management(make_trade(risk_percent=risk)) == expected

    def test_emotional_mistakes_reduce_control(self, make_trade):
        trade = make_trade(mistakes=["FOMO", "revenge", "fear", "greed"])
        assert emotional_control(trade) == 0

    @pytest.mark.parametrize(
        "actual, expected",
        [(2.0, 40), (1.5, 25), (1.0, 10), (0.5, 0)],
    )
    def test_rr_achievement(self, make_trade, actual, expected):
        assert execution_precision(make_trade(rr_planned=2.0, rr_actual=actual)) == expected


class TestPenaltyAndMultiplier:
    def test_single_trade_without_stop_loss(self, make_trade):
        dqi = calculate_decision_quality_index([make_trade(-10)])
        assert dqi.penalty >= 15
        assert "1 trades without stop loss" in dqi.violations
        assert "1 trades without strategy" in dqi.violations
        # 14.5 weighted * (1 - 25/100)
        assert dqi.score == 11
        assert dqi.grade == Grade.F

    def test_oversized_positions_violation(self, make_complete_trade):
        dqi = calculate_decision_quality_index([make_complete_trade(risk_percent=5)])
        assert dqi.violations == ["1 oversized positions"]
        assert dqi.penalty == pytest.approx(10.0)

    def test_consistency_bonus_needs_ten_trades(self, make_trade):
        trades = [make_trade(10, date="2024-01-01") for _ in range(9)]
        assert consistency_bonus(trades) == 0.0
        trades.append(make_trade(10, date="2024-01-01"))
        assert consistency_bonus(trades) == pytest.approx(0.20)

    def test_erratic_daily_pnl_earns_no_bonus(self, make_trade):
        trades = [make_trade(p, date=f"2024-01-{i + 1:02d}") for i, p in enumerate([100, -100] * 5)]
        assert consistency_bonus(trades) == 0.0


class TestDecisionQualityIndex:
    def test_empty(self):
        dqi = calculate_decision_quality_index([])
        assert dqi.score == 0
        assert dqi.grade == Grade.F
        assert dqi.violations == ["Insufficient data"]

    def test_complete_trade(self, make_complete_trade):
        dqi = calculate_decision_quality_index([make_complete_trade()])
        assert dqi.score == 96
        assert dqi.grade == Grade.A
        assert dqi.violations == []
        assert dqi.components.execution_precision == 80
        assert dqi.confidence_interval == (96, 96)

    def test_score_is_capped(self, make_complete_trade):
        trades = [make_complete_trade(100) for _ in range(12)]
        dqi = calculate_decision_quality_index(trades)
        assert dqi.consistency_multiplier == pytest.approx(1.2)
        assert dqi.score == 100

    def test_grade_follows_rounded_score(self, make_complete_trade):
        # 88.25 (short notes) and 91.5 (no exit emotion) average 89.875
        trades = [make_complete_trade(notes="ok"), make_complete_trade(emotion_after=None)]
        dqi = calculate_decision_quality_index(trades)
        assert dqi.score == 90
        assert dqi.grade == Grade.A
