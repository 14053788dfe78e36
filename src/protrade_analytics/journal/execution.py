"""Strategy execution fidelity.

Five percentage scores averaged (unweighted) into ``overall_score``:

    plan_adherence        trades with R:R plan, strategy and emotion
    entry_timing          winners that had a strategy / all winners
    exit_timing           trades closed at TP or SL
    strategy_consistency  strategy-tagged share vs a 70% target, capped at 100
    rule_following        trades with at least one rule used

A strategy winning more than 60% of at least 5 trades is reported as a
deviation when strategy usage falls short of the target.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.enums import DeviationImpact, TradeStatus
from ..core.models import Strategy, Trade
from .aggregator import group_by_name
from .results import StrategyDeviation, StrategyExecutionScore
from .stats import round_score

logger = logging.getLogger(__name__)

STRATEGY_USAGE_TARGET = 0.7
DEVIATION_MIN_TRADES = 5
DEVIATION_WIN_RATE = 0.6


def _pct(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def _deviations(
    trades: Sequence[Trade],
    strategies: Sequence[Strategy],
    strategy_consistency: float,
) -> list[StrategyDeviation]:
    if strategy_consistency >= 100:
        return []
    tagged = [t for t in trades if t.has_strategy]
    deviations = []
    for name, group in group_by_name(tagged, "strategy", strategies).items():
        wins = sum(1 for t in group if t.is_win)
        win_rate = wins / len(group)
        if win_rate > DEVIATION_WIN_RATE and len(group) >= DEVIATION_MIN_TRADES:
            deviations.append(
                StrategyDeviation(
                    rule=f"Stick to {name} strategy",
                    violation_rate=100 - strategy_consistency,
                    impact=DeviationImpact.NEGATIVE,
                    context=(
                        f"This strategy has {round_score(win_rate * 100)}% win rate "
                        f"but you only use it {round_score(strategy_consistency)}% of the time"
                    ),
                )
            )
    return deviations


def analyze_strategy_execution(
    trades: Sequence[Trade],
    strategies: Sequence[Strategy] = (),
) -> StrategyExecutionScore:
    n = len(trades)
    if n == 0:
        return StrategyExecutionScore()

    planned = sum(1 for t in trades if t.has_plan and t.has_strategy and t.has_emotion_before)
    winners = [t for t in trades if t.is_win]
    good_entries = sum(1 for t in winners if t.has_strategy)
    planned_exits = sum(1 for t in trades if t.status in (TradeStatus.TP, TradeStatus.SL))
    tagged = sum(1 for t in trades if t.has_strategy)
    with_rules = sum(1 for t in trades if t.rules_used)

    plan_adherence = _pct(planned, n)
    entry_timing = good_entries / max(len(winners), 1) * 100
    exit_timing = _pct(planned_exits, n)
    strategy_consistency = min(tagged / (n * STRATEGY_USAGE_TARGET) * 100, 100.0)
    rule_following = _pct(with_rules, n)

    overall = round_score(
        (plan_adherence + entry_timing + exit_timing + strategy_consistency + rule_following) / 5
    )

    deviations = _deviations(trades, strategies, strategy_consistency)
    logger.debug("Execution: overall=%d deviations=%d", overall, len(deviations))

    return StrategyExecutionScore(
        overall_score=overall,
        plan_adherence=plan_adherence,
        entry_timing=entry_timing,
        exit_timing=exit_timing,
        strategy_consistency=strategy_consistency,
        rule_following=rule_following,
        common_deviations=deviations,
    )
