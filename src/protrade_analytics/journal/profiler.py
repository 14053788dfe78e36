"""Psychological Profiler.

Combines behavioral patterns, risk discipline, weaknesses, execution and
consistency into a single :class:`PsychologicalProfile` with an overall
score, red flags, strengths and an improvement plan::

    overall = 0.35 * risk + 0.30 * execution + 0.15 * emotional_consistency
            + 0.20 * min(profit_factor * 20, 100) - weakness_penalty

where ``weakness_penalty = sum(frequency / 100 * weight)`` with weights
severe=15, moderate=10, mild=5.  The result is clamped to [0, 100].

The profiler itself accepts any sample size; callers that want to refuse
small samples use :func:`require_profile_sample`.

Usage::

    require_profile_sample(trades, settings.profile.min_trades)
    profile = generate_profile(trades, sessions, strategies)
    print(profile.grade, [f.issue for f in profile.red_flags])
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from ..core.enums import Severity, ViolationType, WeaknessSeverity
from ..core.errors import InsufficientDataError
from ..core.models import Session, Strategy, Trade
from .aggregator import sort_chronologically
from .behavior import analyze_behavioral_patterns
from .consistency import calculate_consistency_metrics
from .execution import analyze_strategy_execution
from .improvement_plan import generate_improvement_plan
from .results import (
    BehavioralPattern,
    ConsistencyMetrics,
    PsychologicalProfile,
    PsychologicalWeakness,
    RedFlag,
    RiskAnalysis,
    StrategyExecutionScore,
    Strength,
)
from .risk_analysis import analyze_risk_management
from .stats import clamp, round_score, score_to_grade
from .weaknesses import identify_psychological_weaknesses

logger = logging.getLogger(__name__)

DEFAULT_MIN_TRADES = 5
NO_STOP_LOSS_FLAG_MIN = 3

_SEVERITY_WEIGHTS = {
    WeaknessSeverity.SEVERE: 15.0,
    WeaknessSeverity.MODERATE: 10.0,
    WeaknessSeverity.MILD: 5.0,
}


def require_profile_sample(trades: Sequence[Trade], min_trades: int = DEFAULT_MIN_TRADES) -> None:
    """Raise :class:`InsufficientDataError` when the sample is too small to profile."""
    if len(trades) < min_trades:
        raise InsufficientDataError(required=min_trades, available=len(trades))


# ------------------------------------------------------------------ #
# Scoring                                                              #
# ------------------------------------------------------------------ #

def weakness_penalty(weaknesses: Sequence[PsychologicalWeakness]) -> float:
    return sum(w.frequency / 100 * _SEVERITY_WEIGHTS[w.severity] for w in weaknesses)


def overall_score(
    risk: RiskAnalysis,
    execution: StrategyExecutionScore,
    consistency: ConsistencyMetrics,
    weaknesses: Sequence[PsychologicalWeakness],
) -> int:
    raw = (
        risk.overall_score * 0.35
        + execution.overall_score * 0.30
        + consistency.emotional_consistency * 0.15
        + min(consistency.profit_factor * 20, 100) * 0.20
        - weakness_penalty(weaknesses)
    )
    return round_score(clamp(raw))


# ------------------------------------------------------------------ #
# Red flags & strengths                                                #
# ------------------------------------------------------------------ #

def identify_red_flags(
    risk: RiskAnalysis,
    weaknesses: Sequence[PsychologicalWeakness],
) -> list[RedFlag]:
    flags: list[RedFlag] = []
    violations = risk.risk_violations

    if any(
        v.type == ViolationType.NO_STOP_LOSS and v.occurrences > NO_STOP_LOSS_FLAG_MIN
        for v in violations
    ):
        flags.append(
            RedFlag(
                id="no-sl",
                severity=Severity.CRITICAL,
                issue="Trading Without Stop Losses",
                description="Multiple trades executed without defined stop losses",
                consequence="Catastrophic losses can wipe out account",
                urgent_action="Implement mandatory stop loss rule immediately",
            )
        )

    if any(v.type == ViolationType.MARTINGALE for v in violations):
        flags.append(
            RedFlag(
                id="martingale",
                severity=Severity.CRITICAL,
                issue="Martingale Behavior Detected",
                description="Increasing position size after losses",
                consequence="Account destruction through exponential risk",
                urgent_action="Use fixed fractional position sizing only",
            )
        )

    severe = [w for w in weaknesses if w.severity == WeaknessSeverity.SEVERE]
    if len(severe) >= 2:
        flags.append(
            RedFlag(
                id="multiple-weaknesses",
                severity=Severity.WARNING,
                issue="Multiple Severe Psychological Weaknesses",
                description=f"{len(severe)} severe behavioral patterns identified",
                consequence="Consistent losses due to unmanaged psychology",
                urgent_action="Consider working with trading psychologist",
            )
        )

    return flags


def identify_strengths(
    patterns: Sequence[BehavioralPattern],
    consistency: ConsistencyMetrics,
) -> list[Strength]:
    strengths: list[Strength] = []

    if consistency.emotional_consistency > 80:
        strengths.append(
            Strength(
                id="emotional-awareness",
                area="Emotional Awareness",
                description="Consistently tracks emotions before and after trades",
                evidence=[
                    f"{round_score(consistency.emotional_consistency)}% of trades have emotion documented"
                ],
                leverage_opportunity="Use this awareness to identify your optimal trading mindset",
            )
        )

    if consistency.win_rate > 55 and consistency.profit_factor > 1.5:
        strengths.append(
            Strength(
                id="edge-recognition",
                area="Strategy Edge",
                description="Demonstrates positive expectancy in trading",
                evidence=[
                    f"{round_score(consistency.win_rate)}% win rate",
                    f"{consistency.profit_factor:.2f} profit factor",
                ],
                leverage_opportunity="Focus on your winning setups and eliminate marginal trades",
            )
        )

    if not patterns:
        strengths.append(
            Strength(
                id="discipline",
                area="Trading Discipline",
                description="No significant behavioral patterns detected",
                evidence=["Consistent execution without overtrading or revenge trading"],
                leverage_opportunity="Maintain current routines and focus on incremental improvements",
            )
        )

    return strengths


# ------------------------------------------------------------------ #
# Entry point                                                          #
# ------------------------------------------------------------------ #

def generate_profile(
    trades: Sequence[Trade],
    sessions: Sequence[Session] = (),
    strategies: Sequence[Strategy] = (),
    *,
    trader_id: str | None = None,
    analysis_date: str | None = None,
) -> PsychologicalProfile:
    """Build the full psychological profile for a trade set.

    ``trader_id`` defaults to a fresh UUID and ``analysis_date`` to the
    current UTC time in ISO format.
    """
    ordered = sort_chronologically(trades)

    patterns = analyze_behavioral_patterns(ordered)
    risk = analyze_risk_management(ordered)
    weaknesses = identify_psychological_weaknesses(ordered)
    execution = analyze_strategy_execution(ordered, strategies)
    consistency = calculate_consistency_metrics(ordered)

    score = overall_score(risk, execution, consistency, weaknesses)

    logger.info(
        "Profile generated: trades=%d score=%d patterns=%d weaknesses=%d",
        len(ordered), score, len(patterns), len(weaknesses),
    )

    return PsychologicalProfile(
        trader_id=trader_id or str(uuid.uuid4()),
        analysis_date=analysis_date or datetime.now(timezone.utc).isoformat(),
        overall_score=score,
        grade=score_to_grade(score),
        behavioral_patterns=patterns,
        risk_management=risk,
        psychological_weaknesses=weaknesses,
        strategy_execution=execution,
        consistency_metrics=consistency,
        improvement_plan=generate_improvement_plan(patterns, risk, weaknesses, execution),
        red_flags=identify_red_flags(risk, weaknesses),
        strengths=identify_strengths(patterns, consistency),
    )
