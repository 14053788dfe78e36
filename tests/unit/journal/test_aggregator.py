"""Tests for trade grouping and reduction."""

import pytest

from protrade_analytics.core.models import Strategy
from protrade_analytics.journal.aggregator import (
    UNSPECIFIED,
    daily_profit,
    group_by,
    group_by_name,
    hour_key,
    max_streak,
    normalize_name,
    sort_chronologically,
    summarize,
    trade_stats,
    trades_for,
    weekday_key,
)


class TestSummarize:
    def test_empty_group_is_all_zero(self):
        summary = summarize([])
        assert summary.count == 0
        assert summary.win_rate == 0.0
        assert summary.avg_profit == 0.0
        assert summary.volatility == 0.0

    def test_scenario_one(self, scenario_trades):
        summary = summarize(scenario_trades)
        assert summary.count == 10
        assert summary.wins == 6
        assert summary.losses == 4
        assert summary.win_rate == pytest.approx(60.0)
        assert summary.total_profit == pytest.approx(400.0)
        assert summary.avg_profit == pytest.approx(40.0)

    def test_breakeven_counts_in_denominator(self, make_trade):
        summary = summarize([make_trade(10), make_trade(0)])
        assert summary.win_rate == pytest.approx(50.0)
        assert summary.losses == 0


class TestTradeStats:
    def test_scenario_one(self, scenario_trades):
        stats = trade_stats(scenario_trades)
        assert stats.win_rate == pytest.approx(60.0)
        assert stats.gross_profit == pytest.approx(600.0)
        assert stats.gross_loss == pytest.approx(200.0)
        assert stats.profit_factor == pytest.approx(3.0)
        assert stats.expectancy == pytest.approx(0.6 * 100 - 0.4 * 50)

    def test_all_winners_profit_factor_is_gross_profit(self, make_trade):
        stats = trade_stats([make_trade(30), make_trade(70)])
        assert stats.gross_loss == 0
        assert stats.profit_factor == pytest.approx(100.0)

    def test_empty(self):
        stats = trade_stats([])
        assert stats.win_rate == 0.0
        assert stats.profit_factor == 0.0
        assert stats.expectancy == 0.0


class TestGrouping:
    def test_group_by_skips_none_keys(self, make_trade):
        trades = [make_trade(1, time="09:15"), make_trade(2, time="garbage"), make_trade(3, time="")]
        groups = group_by(trades, hour_key)
        assert list(groups) == [9]
        assert len(groups[9]) == 1

    def test_group_by_keeps_first_seen_order(self, make_trade):
        trades = [make_trade(1, time="14:00"), make_trade(1, time="09:00"), make_trade(1, time="14:30")]
        groups = group_by(trades, hour_key)
        assert list(groups) == [14, 9]
        assert len(groups[14]) == 2

    def test_blank_strategy_goes_to_unspecified(self, make_trade):
        trades = [make_trade(1, strategy=""), make_trade(2), make_trade(3, strategy="  ")]
        groups = group_by_name(trades, "strategy")
        assert list(groups) == [UNSPECIFIED]
        assert len(groups[UNSPECIFIED]) == 3

    def test_names_link_case_insensitively_to_canonical_record(self, make_trade):
        trades = [make_trade(1, strategy="breakout "), make_trade(2, strategy="BREAKOUT")]
        groups = group_by_name(trades, "strategy", [Strategy(name="Breakout")])
        assert list(groups) == ["Breakout"]
        assert len(groups["Breakout"]) == 2

    def test_unknown_name_keeps_first_spelling(self, make_trade):
        trades = [make_trade(1, strategy="Scalp"), make_trade(2, strategy="scalp")]
        assert list(group_by_name(trades, "strategy")) == ["Scalp"]

    def test_trades_for(self, make_trade):
        trades = [make_trade(1, session="London"), make_trade(2, session=" london"), make_trade(3, session="Asia")]
        assert len(trades_for(trades, "session", "LONDON")) == 2

    def test_normalize_name(self):
        assert normalize_name("  New York ") == "new york"
        assert normalize_name(None) == ""

    def test_weekday_key(self, make_trade):
        assert weekday_key(make_trade(date="2024-01-01")) == "Monday"
        assert weekday_key(make_trade(date="not a date")) is None

    def test_daily_profit(self, make_trade):
        trades = [make_trade(10, date="2024-01-01"), make_trade(-4, date="2024-01-01"), make_trade(7, date="2024-01-02")]
        assert daily_profit(trades) == {"2024-01-01": 6, "2024-01-02": 7}


class TestOrdering:
    def test_sort_is_chronological_and_stable(self, make_trade):
        a = make_trade(1, date="2024-01-02", time="10:00", id="a")
        b = make_trade(2, date="2024-01-01", time="15:00", id="b")
        c = make_trade(3, date="2024-01-01", time="09:00", id="c")
        d = make_trade(4, date="2024-01-01", time="09:00", id="d")
        assert [t.id for t in sort_chronologically([a, b, c, d])] == ["c", "d", "b", "a"]

    def test_unpadded_hours_sort_by_clock_time(self, make_trade):
        trades = [make_trade(1, date="2024-01-02", time=t) for t in ("10:00", "9:30", "11:00", "9:05")]
        assert [t.time for t in sort_chronologically(trades)] == ["9:05", "9:30", "10:00", "11:00"]

    def test_unparsable_times_sort_first_within_a_day(self, make_trade):
        trades = [
            make_trade(1, date="2024-01-02", time="08:00"),
            make_trade(1, date="2024-01-02", time=""),
            make_trade(1, date="2024-01-01", time="23:00"),
        ]
        ordered = sort_chronologically(trades)
        assert [(t.date, t.time) for t in ordered] == [
            ("2024-01-01", "23:00"),
            ("2024-01-02", ""),
            ("2024-01-02", "08:00"),
        ]

    def test_max_streak_uses_given_order(self, make_trade):
        trades = [make_trade(p) for p in (1, 1, -1, 1, 1, 1, 0, 1)]
        assert max_streak(trades, lambda t: t.is_win) == 3
        assert max_streak(list(reversed(trades)), lambda t: t.is_win) == 3
        assert max_streak(trades, lambda t: t.is_loss) == 1
