"""Decision Quality Index (DQI): process quality independent of outcome.

Each trade is scored 0-100 on five components which are averaged across
the set and combined::

    DQI = sum(w_i * C_i) * (1 - penalty / 100) * multiplier

    Component            Weight
    ─────────────────────────────
    Plan quality          0.25
    Risk management       0.25
    Execution precision   0.20
    Emotional control     0.15
    Documentation         0.15

The penalty charges for trades without a stop loss (15 pts per 100%),
oversized positions above 3% risk (10) and trades without a strategy
(10).  Its maximum is 35.  The multiplier rewards consistent daily P&L
once at least ten trades exist.

Usage::

    dqi = calculate_decision_quality_index(trades)
    print(dqi.score, dqi.grade, dqi.violations)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.enums import TradeStatus
from ..core.models import Strategy, Trade
from .aggregator import daily_profit
from .classifiers import count_emotional_mistakes
from .results import DecisionQualityComponents, DecisionQualityIndex
from .stats import (
    clamp,
    coefficient_of_variation,
    confidence_interval_95,
    mean,
    round_score,
    score_to_grade,
    std_dev,
)

logger = logging.getLogger(__name__)

WEIGHTS = {
    "plan_quality": 0.25,
    "risk_management": 0.25,
    "execution_precision": 0.20,
    "emotional_control": 0.15,
    "documentation": 0.15,
}

NO_STOP_LOSS_PENALTY = 15.0
OVERSIZED_PENALTY = 10.0
NO_STRATEGY_PENALTY = 10.0
OVERSIZED_RISK_PCT = 3.0

CONSISTENCY_MIN_TRADES = 10
# (daily P&L coefficient-of-variation ceiling, bonus)
_CONSISTENCY_TIERS: list[tuple[float, float]] = [
    (0.5, 0.20),
    (1.0, 0.10),
    (1.5, 0.05),
]


# ------------------------------------------------------------------ #
# Per-trade component scores                                           #
# ------------------------------------------------------------------ #

def plan_quality(trade: Trade) -> float:
    score = 0.0
    if trade.has_plan:
        score += 30
    if trade.has_strategy:
        score += 25
    if trade.entry and (trade.exit or trade.tp or trade.sl):
        score += 25
    if len(trade.notes) > 10:
        score += 20
    return score


def risk_management(trade: Trade) -> float:
    risk = trade.risk
    if risk <= 1:
        score = 40.0
    elif risk <= 2:
        score = 30.0
    elif risk <= 3:
        score = 15.0
    else:
        score = 5.0

    if trade.has_stop_loss:
        score += 30
    if trade.has_take_profit:
        score += 20

    rr = trade.rr_planned or 0.0
    if rr >= 2:
        score += 10
    elif rr >= 1.5:
        score += 5
    return score


def execution_precision(trade: Trade) -> float:
    score = 0.0
    if trade.rr_actual and trade.rr_planned:
        achievement = trade.rr_actual / trade.rr_planned
        if achievement >= 0.9:
            score += 40
        elif achievement >= 0.7:
            score += 25
        elif achievement >= 0.5:
            score += 10

    if trade.status in (TradeStatus.TP, TradeStatus.SL):
        score += 30
    elif trade.status == TradeStatus.BE:
        score += 20

    if trade.rules_used:
        score += 10
    return score


def emotional_control(trade: Trade) -> float:
    score = 0.0
    if trade.has_emotion_before:
        score += 40
    if trade.has_emotion_after:
        score += 30
    score += max(0, 30 - 10 * count_emotional_mistakes(trade.mistakes))
    return score


def documentation(trade: Trade) -> float:
    score = 0.0
    if len(trade.notes) > 20:
        score += 25
    elif trade.notes:
        score += 15
    if trade.screenshot:
        score += 25
    if trade.mistakes:
        score += 25
    if trade.symbol and trade.entry and trade.type and trade.date and trade.time:
        score += 25
    return score


_COMPONENTS = {
    "plan_quality": plan_quality,
    "risk_management": risk_management,
    "execution_precision": execution_precision,
    "emotional_control": emotional_control,
    "documentation": documentation,
}


# ------------------------------------------------------------------ #
# Penalty & multiplier                                                 #
# ------------------------------------------------------------------ #

def _penalty(trades: Sequence[Trade]) -> tuple[float, list[str]]:
    n = len(trades)
    penalty = 0.0
    violations: list[str] = []

    no_sl = sum(1 for t in trades if not t.has_stop_loss)
    if no_sl:
        violations.append(f"{no_sl} trades without stop loss")
        penalty += no_sl / n * NO_STOP_LOSS_PENALTY

    oversized = sum(1 for t in trades if t.risk > OVERSIZED_RISK_PCT)
    if oversized:
        violations.append(f"{oversized} oversized positions")
        penalty += oversized / n * OVERSIZED_PENALTY

    no_strategy = sum(1 for t in trades if not t.has_strategy)
    if no_strategy:
        violations.append(f"{no_strategy} trades without strategy")
        penalty += no_strategy / n * NO_STRATEGY_PENALTY

    return penalty, violations


def consistency_bonus(trades: Sequence[Trade]) -> float:
    """Bonus from the coefficient of variation of daily P&L."""
    if len(trades) < CONSISTENCY_MIN_TRADES:
        return 0.0
    cv = coefficient_of_variation(list(daily_profit(trades).values()))
    for ceiling, bonus in _CONSISTENCY_TIERS:
        if cv < ceiling:
            return bonus
    return 0.0


# ------------------------------------------------------------------ #
# Entry point                                                          #
# ------------------------------------------------------------------ #

def calculate_decision_quality_index(
    trades: Sequence[Trade],
    strategies: Sequence[Strategy] = (),
) -> DecisionQualityIndex:
    """Compute the DQI for a trade set.  Empty input grades F with score 0."""
    n = len(trades)
    if n == 0:
        return DecisionQualityIndex(violations=["Insufficient data"])

    components = {
        name: mean([fn(t) for t in trades]) for name, fn in _COMPONENTS.items()
    }
    weighted = sum(components[name] * w for name, w in WEIGHTS.items())

    penalty, violations = _penalty(trades)
    multiplier = 1.0 + consistency_bonus(trades)
    final = clamp(weighted * (1 - penalty / 100) * multiplier)

    score = round_score(final)
    lo, hi = confidence_interval_95(final, std_dev([t.profit for t in trades]), n)

    logger.debug(
        "DQI weighted=%.2f penalty=%.2f multiplier=%.2f final=%.2f",
        weighted, penalty, multiplier, final,
    )

    return DecisionQualityIndex(
        score=score,
        grade=score_to_grade(score),
        components=DecisionQualityComponents(
            **{name: round_score(v) for name, v in components.items()}
        ),
        penalty=round(penalty, 4),
        consistency_multiplier=multiplier,
        violations=violations,
        confidence_interval=(round_score(lo), round_score(hi)),
    )
