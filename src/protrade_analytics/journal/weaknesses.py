"""Psychological weakness identification.

Four detectors, each emitting at most one :class:`PsychologicalWeakness`
with its triggers, manifestations and countermeasures:

- Loss aversion: winners closed in relief below 1R
- Confirmation bias: strategy losses with no contrarian check in notes
- Overconfidence: a 5+ win streak *and* risk above 2% during 3+ win runs
- Impulsivity: losses missing an emotion, a strategy or a plan

``frequency`` is the share of all trades affected, as a whole percent.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.enums import WeaknessSeverity, WeaknessType
from ..core.models import Trade
from .aggregator import max_streak, sort_chronologically
from .classifiers import has_contrarian_check, is_relief
from .results import PsychologicalWeakness
from .stats import round_score

logger = logging.getLogger(__name__)

LOSS_AVERSION_MIN = 2
CONFIRMATION_BIAS_MIN = 3
IMPULSIVITY_MIN = 3
OVERCONFIDENCE_STREAK = 5
SIZE_UP_STREAK = 3
SIZE_UP_RISK_PCT = 2.0


def _share(count: int, total: int) -> int:
    return round_score(count / total * 100) if total else 0


def count_size_ups_after_wins(trades: Sequence[Trade]) -> int:
    """Trades risking more than 2% after 3+ consecutive wins, in given order."""
    count = 0
    run = 0
    for prev, curr in zip(trades, trades[1:]):
        if prev.is_win:
            run += 1
            if run >= SIZE_UP_STREAK and curr.risk > SIZE_UP_RISK_PCT:
                count += 1
        else:
            run = 0
    return count


def detect_loss_aversion(trades: Sequence[Trade]) -> PsychologicalWeakness | None:
    early_exits = [
        t for t in trades
        if t.is_win and is_relief(t.emotion_after) and (t.rr_actual or 0) < 1
    ]
    if len(early_exits) <= LOSS_AVERSION_MIN:
        return None
    return PsychologicalWeakness(
        id="loss_aversion",
        type=WeaknessType.COGNITIVE,
        name="Loss Aversion",
        description="Cutting winners short due to fear of giving back profits",
        triggers=["Seeing unrealized profits", "Market reversing slightly", "Previous losses"],
        manifestations=[
            "Closing trades too early",
            "Moving stops to breakeven too quickly",
            "Taking partial profits prematurely",
        ],
        frequency=_share(len(early_exits), len(trades)),
        severity=WeaknessSeverity.SEVERE if len(early_exits) > 5 else WeaknessSeverity.MODERATE,
        countermeasures=[
            "Set profit targets before entering",
            "Use trailing stops instead of manual exits",
            "Practice letting winners run",
            "Journal the feeling of regret when exiting early",
        ],
    )


def detect_confirmation_bias(trades: Sequence[Trade]) -> PsychologicalWeakness | None:
    biased = [
        t for t in trades
        if t.has_strategy and not has_contrarian_check(t.notes) and t.is_loss
    ]
    if len(biased) <= CONFIRMATION_BIAS_MIN:
        return None
    return PsychologicalWeakness(
        id="confirmation_bias",
        type=WeaknessType.COGNITIVE,
        name="Confirmation Bias",
        description="Only seeking information that confirms your trade idea",
        triggers=[
            "Strong conviction in trade",
            "Previous success with similar setup",
            "Social media reinforcement",
        ],
        manifestations=[
            "Ignoring contrary signals",
            "Overweighting supporting evidence",
            "Dismissing risk factors",
        ],
        frequency=_share(len(biased), len(trades)),
        severity=WeaknessSeverity.MODERATE,
        countermeasures=[
            "Force yourself to write 3 reasons why the trade might fail",
            "Seek out contradictory opinions before trading",
            "Set predefined invalidation points",
            "Review losing trades for missed warning signs",
        ],
    )


def detect_overconfidence(trades: Sequence[Trade]) -> PsychologicalWeakness | None:
    streak = max_streak(trades, lambda t: t.is_win)
    size_ups = count_size_ups_after_wins(trades)
    if streak < OVERCONFIDENCE_STREAK or size_ups == 0:
        return None
    return PsychologicalWeakness(
        id="overconfidence",
        type=WeaknessType.EMOTIONAL,
        name="Overconfidence",
        description="Increasing risk after winning streaks, assuming edge is stronger than it is",
        triggers=["Winning streaks", "Recent success", "Positive feedback from others"],
        manifestations=[
            "Increasing position size",
            "Taking lower quality setups",
            "Skipping checklist items",
        ],
        frequency=_share(size_ups, len(trades)),
        severity=WeaknessSeverity.SEVERE,
        countermeasures=[
            "Maintain fixed position sizing regardless of recent results",
            "Review losing streaks to stay humble",
            'Implement a "cooling off" period after large wins',
            "Focus on process, not outcomes",
        ],
    )


def _is_impulsive(trade: Trade) -> bool:
    unprepared = not trade.has_emotion_before or not trade.has_strategy or not trade.has_plan
    return unprepared and trade.is_loss


def detect_impulsivity(trades: Sequence[Trade]) -> PsychologicalWeakness | None:
    impulsive = [t for t in trades if _is_impulsive(t)]
    if len(impulsive) <= IMPULSIVITY_MIN:
        return None
    return PsychologicalWeakness(
        id="impulsivity",
        type=WeaknessType.BEHAVIORAL,
        name="Impulsivity",
        description="Acting on urges without proper planning or emotional awareness",
        triggers=["Market volatility", "Boredom", "News events", "Seeing others trade"],
        manifestations=[
            "Trading without plan",
            "Skipping pre-trade routine",
            "No emotion tracking",
            "Chasing moves",
        ],
        frequency=_share(len(impulsive), len(trades)),
        severity=WeaknessSeverity.SEVERE if len(impulsive) > 8 else WeaknessSeverity.MODERATE,
        countermeasures=[
            "Mandatory 5-minute pause before every trade",
            "Complete trade plan worksheet before entry",
            "Set daily trade limit",
            'Use "trading contract" with yourself',
        ],
    )


_DETECTORS = (
    detect_loss_aversion,
    detect_confirmation_bias,
    detect_overconfidence,
    detect_impulsivity,
)


def identify_psychological_weaknesses(trades: Sequence[Trade]) -> list[PsychologicalWeakness]:
    if not trades:
        return []
    ordered = sort_chronologically(trades)
    found = [w for w in (detect(ordered) for detect in _DETECTORS) if w is not None]
    logger.debug("Weaknesses identified: %s", [w.id for w in found])
    return found
