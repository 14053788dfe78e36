"""Session Performance Stability (SPS).

Compares per-session results against each other.  The stability score is
``1 - CV`` of the per-session average trade, so sessions that earn the
same per trade score 100 however different their volume.

Usage::

    sps = calculate_session_stability(trades, sessions)
    print(sps.stability_score, sps.time_based_patterns.best_hour)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Sequence

from ..core.enums import Trend
from ..core.models import Session, Trade
from .aggregator import (
    group_by,
    group_by_name,
    hour_key,
    sort_chronologically,
    summarize,
    weekday_key,
)
from .results import SessionBreakdown, SessionPerformanceStability, TimeBasedPatterns
from .stats import coefficient_of_variation, round_score, variance

logger = logging.getLogger(__name__)

# Trades a time bucket needs before it can be best/worst
MIN_BUCKET_TRADES = 3


def split_half_trend(trades: Sequence[Trade]) -> Trend:
    """Compare the second half's profit against the first half's, in given order.

    The change must exceed twice the average trade to count as a trend.
    """
    n = len(trades)
    if n == 0:
        return Trend.STABLE
    midpoint = n // 2
    first = sum(t.profit for t in trades[:midpoint])
    second = sum(t.profit for t in trades[midpoint:])
    threshold = (first + second) / n * 2
    change = second - first
    if change > threshold:
        return Trend.IMPROVING
    if change < -threshold:
        return Trend.DECLINING
    return Trend.STABLE


def _extremes(
    trades: Sequence[Trade],
    key_fn: Callable[[Trade], Hashable | None],
) -> tuple[Hashable | None, Hashable | None]:
    """Best and worst bucket by average profit, ignoring thin buckets."""
    averages = {
        key: sum(t.profit for t in group) / len(group)
        for key, group in group_by(trades, key_fn).items()
        if len(group) >= MIN_BUCKET_TRADES
    }
    if not averages:
        return None, None
    # first-seen bucket wins ties
    best = max(averages, key=lambda k: averages[k])
    worst = min(averages, key=lambda k: averages[k])
    return best, worst


def analyze_time_patterns(trades: Sequence[Trade]) -> TimeBasedPatterns:
    best_hour, worst_hour = _extremes(trades, hour_key)
    best_day, worst_day = _extremes(trades, weekday_key)
    return TimeBasedPatterns(
        best_hour=best_hour,
        worst_hour=worst_hour,
        best_day=best_day,
        worst_day=worst_day,
    )


def calculate_session_stability(
    trades: Sequence[Trade],
    sessions: Sequence[Session] = (),
) -> SessionPerformanceStability:
    """Compute the SPS; trades without a session go to "Unspecified"."""
    if not trades:
        return SessionPerformanceStability()

    ordered = sort_chronologically(trades)
    breakdown: list[SessionBreakdown] = []
    for name, group in group_by_name(ordered, "session", sessions).items():
        summary = summarize(group)
        breakdown.append(
            SessionBreakdown(
                session=name,
                trades=summary.count,
                total_profit=summary.total_profit,
                win_rate=summary.win_rate,
                avg_trade=summary.avg_profit,
                volatility=summary.volatility,
                trend=split_half_trend(group),
            )
        )

    cv = coefficient_of_variation([s.avg_trade for s in breakdown])
    stability = round_score(max(0.0, (1 - cv) * 100))

    by_volatility = sorted(breakdown, key=lambda s: s.volatility)
    most_stable = by_volatility[0].session
    most_volatile = by_volatility[-1].session if len(by_volatility) > 1 else None

    consistency_index = round_score(
        max(0.0, 100 - variance([s.win_rate for s in breakdown]) / 10)
    )

    logger.debug(
        "SPS sessions=%d stability=%d consistency=%d",
        len(breakdown), stability, consistency_index,
    )

    return SessionPerformanceStability(
        stability_score=stability,
        session_breakdown=breakdown,
        most_stable_session=most_stable,
        most_volatile_session=most_volatile,
        session_consistency_index=consistency_index,
        time_based_patterns=analyze_time_patterns(ordered),
    )
