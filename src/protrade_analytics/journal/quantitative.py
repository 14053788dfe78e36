"""Quantitative Metrics Engine.

Runs the four named indices (DQI, EIS, SRC, SPS) plus four secondary
ratios and folds them into one composite score::

    composite = 0.30 * DQI + 0.20 * EIS + 0.25 * SRC + 0.15 * SPS
              + 10 * edge_consistency_ratio

Usage::

    metrics = compute_quantitative_metrics(trades, sessions, strategies)
    print(metrics.composite_score, metrics.overall_grade)
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from ..core.models import Session, Strategy, Trade
from .aggregator import asset_category_key, group_by, sort_chronologically
from .decision_quality import calculate_decision_quality_index
from .emotional_impact import calculate_emotional_impact_score
from .results import QuantitativeMetrics
from .session_stability import calculate_session_stability
from .stats import mean, normalized_entropy, round_score, score_to_grade, std_dev
from .strategy_reliability import calculate_strategy_reliability

logger = logging.getLogger(__name__)

EDGE_MIN_TRADES = 10
EDGE_WINDOWS = 3

# (average risk % ceiling, risk tier score)
_RISK_TIERS: list[tuple[float, int]] = [(1.0, 100), (2.0, 80), (3.0, 60)]
_RISK_TIER_FLOOR = 40


# ------------------------------------------------------------------ #
# Secondary metrics                                                    #
# ------------------------------------------------------------------ #

def edge_consistency_ratio(trades: Sequence[Trade]) -> float:
    """Win-rate stability across three equal windows, in given order (0-1).

    Trades beyond ``3 * (n // 3)`` are not part of any window.
    """
    n = len(trades)
    if n < EDGE_MIN_TRADES:
        return 0.0
    size = n // EDGE_WINDOWS
    rates = []
    for i in range(EDGE_WINDOWS):
        window = trades[i * size:(i + 1) * size]
        rates.append(sum(1 for t in window if t.is_win) / len(window))
    return max(0.0, 1 - std_dev(rates) * 3)


def risk_tier_score(trades: Sequence[Trade]) -> int:
    avg_risk = mean([t.risk for t in trades])
    for ceiling, score in _RISK_TIERS:
        if avg_risk <= ceiling:
            return score
    return _RISK_TIER_FLOOR


def risk_adjusted_discipline(trades: Sequence[Trade], dqi_score: float) -> int:
    return round_score(dqi_score * 0.6 + risk_tier_score(trades) * 0.4)


def behavioral_entropy(trades: Sequence[Trade]) -> float:
    """Normalized entropy of strategy usage; blank strategies count as one label."""
    counts = Counter((t.strategy.strip() or "none") for t in trades)
    return normalized_entropy(counts)


def market_adaptability_index(trades: Sequence[Trade]) -> int:
    """% of traded asset categories that are net profitable; 50 with <2 categories."""
    groups = group_by(trades, asset_category_key)
    if len(groups) < 2:
        return 50
    profitable = sum(1 for g in groups.values() if sum(t.profit for t in g) > 0)
    return round_score(profitable / len(groups) * 100)


# ------------------------------------------------------------------ #
# Entry point                                                          #
# ------------------------------------------------------------------ #

def compute_quantitative_metrics(
    trades: Sequence[Trade],
    sessions: Sequence[Session] = (),
    strategies: Sequence[Strategy] = (),
) -> QuantitativeMetrics:
    """Compute every quantitative metric.  Empty input returns the zero/F result."""
    if not trades:
        return QuantitativeMetrics(
            decision_quality_index=calculate_decision_quality_index(trades, strategies),
            emotional_impact_score=calculate_emotional_impact_score(trades),
        )

    ordered = sort_chronologically(trades)

    dqi = calculate_decision_quality_index(ordered, strategies)
    eis = calculate_emotional_impact_score(ordered)
    src = calculate_strategy_reliability(ordered, strategies)
    sps = calculate_session_stability(ordered, sessions)

    ecr = edge_consistency_ratio(ordered)
    composite = round_score(
        dqi.score * 0.30
        + eis.score * 0.20
        + src.overall_coefficient * 0.25
        + sps.stability_score * 0.15
        + ecr * 10
    )

    logger.info(
        "Quantitative metrics: trades=%d dqi=%d eis=%d src=%d sps=%d composite=%d",
        len(ordered), dqi.score, eis.score, src.overall_coefficient,
        sps.stability_score, composite,
    )

    return QuantitativeMetrics(
        decision_quality_index=dqi,
        emotional_impact_score=eis,
        strategy_reliability_coefficient=src,
        session_performance_stability=sps,
        edge_consistency_ratio=ecr,
        risk_adjusted_discipline=risk_adjusted_discipline(ordered, dqi.score),
        behavioral_entropy=behavioral_entropy(ordered),
        market_adaptability_index=market_adaptability_index(ordered),
        composite_score=composite,
        overall_grade=score_to_grade(composite),
    )
