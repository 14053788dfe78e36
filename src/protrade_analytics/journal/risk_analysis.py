"""Risk-management discipline scoring.

Grades average position size and planned R:R, detects risk violations
(oversized positions, missing stop losses, martingale sizing) and
derives an overall risk score and a capital preservation score.

Averages only include trades where the value was tracked (> 0).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..core.enums import Grade, Severity, ViolationType
from ..core.models import Trade
from .aggregator import sort_chronologically
from .results import RiskAnalysis, RiskViolation
from .stats import clamp, mean, round_score

logger = logging.getLogger(__name__)

OVERSIZED_RISK_PCT = 3.0
MARTINGALE_FACTOR = 1.5
EXAMPLE_LIMIT = 3

_POSITION_SIZING_TIERS: list[tuple[float, Grade]] = [
    (1.0, Grade.A),
    (2.0, Grade.B),
    (3.0, Grade.C),
    (5.0, Grade.D),
]

_RISK_REWARD_TIERS: list[tuple[float, Grade]] = [
    (3.0, Grade.A),
    (2.0, Grade.B),
    (1.5, Grade.C),
    (1.0, Grade.D),
]


@dataclass
class MartingaleScan:
    """Result of a pairwise lot-size scan."""

    occurrences: int = 0
    examples: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.occurrences > 0


def _fmt(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:g}"


def detect_martingale(trades: Sequence[Trade]) -> MartingaleScan:
    """Lot size raised above 1.5x right after a loss, in given order.

    Pairs where either lot size is missing are skipped.
    """
    scan = MartingaleScan()
    for prev, curr in zip(trades, trades[1:]):
        if not prev.is_loss or prev.lot_size is None or curr.lot_size is None:
            continue
        if curr.lot_size > prev.lot_size * MARTINGALE_FACTOR:
            scan.occurrences += 1
            scan.examples.append(
                f"{curr.date}: Increased size from {_fmt(prev.lot_size)} "
                f"to {_fmt(curr.lot_size)} after loss"
            )
    return scan


def position_sizing_grade(avg_risk: float) -> Grade:
    for ceiling, grade in _POSITION_SIZING_TIERS:
        if avg_risk <= ceiling:
            return grade
    return Grade.F


def risk_reward_grade(avg_rr: float) -> Grade:
    for floor, grade in _RISK_REWARD_TIERS:
        if avg_rr >= floor:
            return grade
    return Grade.F


def _violations(trades: Sequence[Trade]) -> list[RiskViolation]:
    violations: list[RiskViolation] = []

    oversized = [t for t in trades if t.risk > OVERSIZED_RISK_PCT]
    if oversized:
        violations.append(
            RiskViolation(
                type=ViolationType.OVERSIZED_POSITION,
                severity=Severity.CRITICAL if len(oversized) > 3 else Severity.WARNING,
                occurrences=len(oversized),
                examples=[
                    f"{t.symbol}: {_fmt(t.risk_percent)}% risk"
                    for t in oversized[:EXAMPLE_LIMIT]
                ],
                recommendation="Reduce position size to maximum 2% per trade",
            )
        )

    no_sl = [t for t in trades if not t.has_stop_loss]
    if no_sl:
        violations.append(
            RiskViolation(
                type=ViolationType.NO_STOP_LOSS,
                severity=Severity.CRITICAL,
                occurrences=len(no_sl),
                examples=[f"{t.symbol} on {t.date}" for t in no_sl[:EXAMPLE_LIMIT]],
                recommendation="Always set a stop loss before entering any trade",
            )
        )

    martingale = detect_martingale(trades)
    if martingale.found:
        violations.append(
            RiskViolation(
                type=ViolationType.MARTINGALE,
                severity=Severity.CRITICAL,
                occurrences=martingale.occurrences,
                examples=martingale.examples,
                recommendation="Never increase position size after losses. Use fixed fractional sizing.",
            )
        )

    return violations


def risk_score(violations: Sequence[RiskViolation], avg_risk: float, avg_rr: float) -> int:
    score = 100.0
    for v in violations:
        score -= 25 if v.severity == Severity.CRITICAL else 15

    if avg_risk > 5:
        score -= 20
    elif avg_risk > 3:
        score -= 15
    elif avg_risk > 2:
        score -= 10

    if avg_rr < 1:
        score -= 15
    elif avg_rr < 1.5:
        score -= 10
    elif avg_rr < 2:
        score -= 5

    return round_score(clamp(score))


def capital_preservation_score(trades: Sequence[Trade]) -> int:
    """Average of a worst-trade tier and an average-loss tier."""
    worst = min([t.profit for t in trades] + [0.0])
    losses = [-t.profit for t in trades if t.is_loss]
    avg_loss = sum(losses) / max(len(losses), 1)

    if worst > -5:
        worst_score = 100
    elif worst > -10:
        worst_score = 70
    elif worst > -20:
        worst_score = 40
    else:
        worst_score = 20

    if avg_loss < 2:
        avg_score = 100
    elif avg_loss < 3:
        avg_score = 80
    elif avg_loss < 5:
        avg_score = 60
    else:
        avg_score = 40

    return round_score((worst_score + avg_score) / 2)


def analyze_risk_management(trades: Sequence[Trade]) -> RiskAnalysis:
    """Score risk discipline over the chronologically sorted trades."""
    if not trades:
        return RiskAnalysis()

    ordered = sort_chronologically(trades)
    avg_risk = mean([t.risk for t in ordered if t.risk > 0])
    avg_rr = mean([t.rr_planned for t in ordered if t.has_plan])
    violations = _violations(ordered)
    with_sl = sum(1 for t in ordered if t.has_stop_loss)

    logger.debug(
        "Risk analysis: avg_risk=%.2f avg_rr=%.2f violations=%s",
        avg_risk, avg_rr, [v.type.value for v in violations],
    )

    return RiskAnalysis(
        overall_score=risk_score(violations, avg_risk, avg_rr),
        position_sizing_grade=position_sizing_grade(avg_risk),
        risk_reward_grade=risk_reward_grade(avg_rr),
        max_drawdown_respect=with_sl / len(ordered) * 100,
        average_risk_per_trade=avg_risk,
        average_planned_rr=avg_rr,
        risk_violations=violations,
        capital_preservation_score=capital_preservation_score(ordered),
    )
