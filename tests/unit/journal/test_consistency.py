"""Tests for consistency metrics."""

import logging

import pytest

from protrade_analytics.journal.consistency import (
    calculate_consistency_metrics,
    frequency_consistency,
)


class TestConsistencyMetrics:
    def test_empty(self):
        metrics = calculate_consistency_metrics([])
        assert metrics.win_rate == 0.0
        assert metrics.consecutive_wins == 0

    def test_streaks_follow_chronology_not_input_order(self, make_trade):
        profits = [10, 10, 10, -5, -5]
        chronological = [make_trade(p, date=f"2024-01-0{i + 1}") for i, p in enumerate(profits)]
        shuffled = [chronological[i] for i in (3, 0, 4, 2, 1)]
        for trades in (chronological, shuffled):
            metrics = calculate_consistency_metrics(trades)
            assert metrics.consecutive_wins == 3
            assert metrics.consecutive_losses == 2

    def test_breakeven_breaks_a_run(self, make_trade):
        trades = [make_trade(p, date=f"2024-01-0{i + 1}") for i, p in enumerate([10, 0, 10, -5, 0, -5])]
        metrics = calculate_consistency_metrics(trades)
        assert metrics.consecutive_wins == 1
        assert metrics.consecutive_losses == 1

    def test_scenario_one(self, scenario_trades):
        metrics = calculate_consistency_metrics(scenario_trades)
        assert metrics.win_rate == pytest.approx(60.0)
        assert metrics.profit_factor == pytest.approx(3.0)
        assert metrics.expectancy == pytest.approx(40.0)
        assert metrics.emotional_consistency == 0.0

    def test_logs_streak_summary(self, scenario_trades, caplog):
        with caplog.at_level(logging.DEBUG, logger="protrade_analytics.journal.consistency"):
            calculate_consistency_metrics(scenario_trades)
        assert "max_win_streak=6 max_loss_streak=4" in caplog.text

    def test_emotional_consistency(self, make_trade):
        trades = [make_trade(1, emotion_before="Calm"), make_trade(1)]
        assert calculate_consistency_metrics(trades).emotional_consistency == pytest.approx(50.0)


class TestFrequencyConsistency:
    def test_even_rhythm(self, make_trade):
        trades = [make_trade(1, date=d) for d in ("2024-01-01", "2024-01-01", "2024-01-02", "2024-01-02")]
        assert frequency_consistency(trades) == pytest.approx(100.0)

    def test_uneven_rhythm(self, make_trade):
        trades = [make_trade(1, date="2024-01-01")] + [make_trade(1, date="2024-01-02") for _ in range(5)]
        # counts [1, 5]: variance 4, mean 3
        assert frequency_consistency(trades) == pytest.approx(100 - 4 / 3 * 20)

    def test_empty(self):
        assert frequency_consistency([]) == 0.0
