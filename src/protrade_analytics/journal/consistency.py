"""Consistency metrics: edge, streaks, volatility and trading rhythm."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.models import Trade
from .aggregator import daily_trade_counts, max_streak, sort_chronologically, trade_stats
from .results import ConsistencyMetrics
from .stats import mean, std_dev, variance

logger = logging.getLogger(__name__)


def frequency_consistency(trades: Sequence[Trade]) -> float:
    """100 minus the dispersion of daily trade counts, floored at 0."""
    counts = list(daily_trade_counts(trades).values())
    if not counts:
        return 0.0
    avg = mean(counts)
    return max(0.0, 100 - variance(counts) / max(avg, 1) * 20)


def calculate_consistency_metrics(trades: Sequence[Trade]) -> ConsistencyMetrics:
    """Win/loss statistics and behavioural regularity.

    Streaks are scanned in chronological order; a breakeven trade ends
    both a winning and a losing run.
    """
    n = len(trades)
    if n == 0:
        return ConsistencyMetrics()

    ordered = sort_chronologically(trades)
    stats = trade_stats(ordered)
    tracked = sum(1 for t in ordered if t.has_emotion_before)
    consecutive_wins = max_streak(ordered, lambda t: t.is_win)
    consecutive_losses = max_streak(ordered, lambda t: t.is_loss)

    logger.debug(
        "Consistency: trades=%d win_rate=%.1f max_win_streak=%d max_loss_streak=%d",
        n, stats.win_rate, consecutive_wins, consecutive_losses,
    )

    return ConsistencyMetrics(
        win_rate=stats.win_rate,
        profit_factor=stats.profit_factor,
        expectancy=stats.expectancy,
        consecutive_wins=consecutive_wins,
        consecutive_losses=consecutive_losses,
        volatility_of_returns=std_dev([t.profit for t in ordered]),
        trading_frequency_consistency=frequency_consistency(ordered),
        emotional_consistency=tracked / n * 100,
    )
