"""Strategy Reliability Coefficient (SRC).

Scores each strategy's statistical reliability from its own trades::

    coefficient = 0.25 * win_rate
                + 0.30 * min(profit_factor * 25, 100)
                + 0.25 * consistency * 100
                + 0.20 * max(0, 100 - 2 * std_dev)

Strategies with fewer than five trades are reported as *untested* with a
zero coefficient; fewer than ten keeps the *untested* label but computes
the numbers.  Best/worst strategy require ten trades.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.enums import Reliability
from ..core.models import Strategy, Trade
from .aggregator import group_by_name, max_streak, sort_chronologically, trade_stats
from .results import StrategyReliabilityCoefficient, StrategyScore
from .stats import (
    coefficient_of_variation,
    confidence_interval_95,
    round_score,
    safe_div,
    std_dev,
)

logger = logging.getLogger(__name__)

MIN_SCORED_TRADES = 5
MIN_TESTED_TRADES = 10


def _reliability(n: int, coefficient: int, win_rate: float) -> Reliability:
    if n < MIN_TESTED_TRADES:
        return Reliability.UNTESTED
    if coefficient >= 70 and win_rate >= 55:
        return Reliability.HIGH
    if coefficient >= 50:
        return Reliability.MEDIUM
    return Reliability.LOW


def score_strategy(name: str, trades: Sequence[Trade]) -> StrategyScore:
    """Score a single strategy group (trades in chronological order)."""
    n = len(trades)
    if n < MIN_SCORED_TRADES:
        return StrategyScore(strategy=name, sample_size=n)

    stats = trade_stats(trades)
    profits = [t.profit for t in trades]
    std = std_dev(profits)
    consistency = max(0.0, 1 - coefficient_of_variation(profits))

    coefficient = round_score(
        stats.win_rate * 0.25
        + min(stats.profit_factor * 25, 100) * 0.30
        + consistency * 100 * 0.25
        + max(0.0, 100 - std * 2) * 0.20
    )
    lo, hi = confidence_interval_95(coefficient, std, n)

    return StrategyScore(
        strategy=name,
        coefficient=coefficient,
        reliability=_reliability(n, coefficient, stats.win_rate),
        win_rate=stats.win_rate,
        profit_factor=stats.profit_factor,
        consistency=consistency,
        sample_size=n,
        expectancy=stats.expectancy,
        max_consecutive_losses=max_streak(trades, lambda t: t.is_loss),
        confidence_interval=(round_score(lo), round_score(hi)),
    )


def calculate_strategy_reliability(
    trades: Sequence[Trade],
    strategies: Sequence[Strategy] = (),
) -> StrategyReliabilityCoefficient:
    """Compute the SRC across all strategy groups, blank names as "Unspecified"."""
    if not trades:
        return StrategyReliabilityCoefficient()

    groups = group_by_name(sort_chronologically(trades), "strategy", strategies)
    scores = [score_strategy(name, group) for name, group in groups.items()]
    scores.sort(key=lambda s: s.coefficient, reverse=True)

    total = sum(s.sample_size for s in scores)
    overall = round_score(
        sum(s.coefficient * safe_div(s.sample_size, total) for s in scores)
    )

    tested = [s for s in scores if s.sample_size >= MIN_TESTED_TRADES]
    best = tested[0].strategy if tested else None
    worst = tested[-1].strategy if len(tested) > 1 else None

    logger.debug("SRC overall=%d strategies=%d tested=%d", overall, len(scores), len(tested))

    return StrategyReliabilityCoefficient(
        overall_coefficient=overall,
        strategy_scores=scores,
        best_strategy=best,
        worst_strategy=worst,
        diversification_score=min(100, 25 * len(groups)),
    )
