"""Behavioral pattern detection.

Five independent detectors, each producing at most one
:class:`BehavioralPattern`:

- Overtrading (any calendar day with more than 5 trades)
- Revenge trading (a loss taken immediately after a loss)
- FOMO trading (afternoon fear/FOMO entries that lost)
- Strategy hopping (many distinct strategies relative to usage)
- Emotional trading (emotion-driven entries above 20% of trades)

Usage::

    patterns = analyze_behavioral_patterns(trades)
    print([p.id for p in patterns])  # ["revenge_trading", ...]
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from ..core.enums import Impact, PatternFrequency
from ..core.models import Trade
from .aggregator import daily_trade_counts, normalize_name, sort_chronologically
from .classifiers import is_emotional_trading, is_fomo_emotion
from .results import BehavioralPattern

logger = logging.getLogger(__name__)

OVERTRADING_DAILY_LIMIT = 5
FOMO_AFTER_HOUR = 14
FOMO_MIN_TRADES = 2
STRATEGY_HOPPING_MIN_DISTINCT = 3
STRATEGY_HOPPING_RATIO = 0.5
EMOTIONAL_TRADING_SHARE = 0.2
EVIDENCE_LIMIT = 5


def _type_label(trade: Trade) -> str:
    return trade.type.value if trade.type is not None else ""


# ------------------------------------------------------------------ #
# Sequential scanners                                                  #
# ------------------------------------------------------------------ #

def find_revenge_trades(trades: Sequence[Trade]) -> list[Trade]:
    """Losing trades that immediately follow a losing trade, in given order."""
    found: list[Trade] = []
    last_was_loss = False
    for trade in trades:
        if last_was_loss and trade.is_loss:
            found.append(trade)
        last_was_loss = trade.is_loss
    return found


# ------------------------------------------------------------------ #
# Detectors                                                            #
# ------------------------------------------------------------------ #

def detect_overtrading(trades: Sequence[Trade]) -> BehavioralPattern | None:
    heavy = {
        day: count
        for day, count in daily_trade_counts(trades).items()
        if count > OVERTRADING_DAILY_LIMIT
    }
    if not heavy:
        return None
    return BehavioralPattern(
        id="overtrading",
        name="Overtrading",
        description="Taking too many trades in a single session, often a sign of boredom or FOMO",
        frequency=PatternFrequency.FREQUENT if len(heavy) > 5 else PatternFrequency.OCCASIONAL,
        impact=Impact.HIGH,
        evidence=[f"{day}: {count} trades" for day, count in heavy.items()],
        trades_affected=sum(heavy.values()),
    )


def detect_revenge_trading(trades: Sequence[Trade]) -> BehavioralPattern | None:
    revenge = find_revenge_trades(trades)
    if not revenge:
        return None
    return BehavioralPattern(
        id="revenge_trading",
        name="Revenge Trading",
        description='Entering trades immediately after losses to "make back" money',
        frequency=PatternFrequency.FREQUENT if len(revenge) > 3 else PatternFrequency.OCCASIONAL,
        impact=Impact.CRITICAL,
        evidence=[
            f"{t.date} {t.time}: Entered {t.symbol} {_type_label(t)} after loss"
            for t in revenge
        ],
        trades_affected=len(revenge),
    )


def _is_late_fomo_loss(trade: Trade) -> bool:
    hour = trade.hour
    return (
        hour is not None
        and hour > FOMO_AFTER_HOUR
        and is_fomo_emotion(trade.emotion_before)
        and trade.is_loss
    )


def detect_fomo(trades: Sequence[Trade]) -> BehavioralPattern | None:
    late = [t for t in trades if _is_late_fomo_loss(t)]
    if len(late) <= FOMO_MIN_TRADES:
        return None
    return BehavioralPattern(
        id="fomo_trading",
        name="FOMO Trading",
        description="Entering trades due to fear of missing out, often late in the move",
        frequency=PatternFrequency.FREQUENT if len(late) > 5 else PatternFrequency.OCCASIONAL,
        impact=Impact.HIGH,
        evidence=[
            f"{t.date}: Late {t.symbol} entry ({t.time}) with emotion: {t.emotion_before}"
            for t in late
        ],
        trades_affected=len(late),
    )


def detect_strategy_hopping(trades: Sequence[Trade]) -> BehavioralPattern | None:
    tagged = [normalize_name(t.strategy) for t in trades if t.has_strategy]
    distinct = len(set(tagged))
    ratio = distinct / max(len(tagged), 1)
    if not (distinct > STRATEGY_HOPPING_MIN_DISTINCT and ratio > STRATEGY_HOPPING_RATIO):
        return None

    if ratio > 0.7:
        frequency = PatternFrequency.FREQUENT
    elif ratio > 0.4:
        frequency = PatternFrequency.OCCASIONAL
    else:
        frequency = PatternFrequency.RARE

    return BehavioralPattern(
        id="strategy_hopping",
        name="Strategy Hopping",
        description="Frequently switching strategies instead of mastering one",
        frequency=frequency,
        impact=Impact.MEDIUM,
        evidence=[f"Used {distinct} different strategies in {len(trades)} trades"],
        trades_affected=math.floor(len(trades) * 0.3),
    )


def detect_emotional_trading(trades: Sequence[Trade]) -> BehavioralPattern | None:
    emotional = [t for t in trades if is_emotional_trading(t.emotion_before)]
    n = len(trades)
    if len(emotional) <= n * EMOTIONAL_TRADING_SHARE:
        return None
    return BehavioralPattern(
        id="emotional_trading",
        name="Emotional Trading",
        description="Making trading decisions based on emotions rather than plan",
        frequency=(
            PatternFrequency.FREQUENT if len(emotional) > n * 0.4
            else PatternFrequency.OCCASIONAL
        ),
        impact=Impact.HIGH,
        evidence=[
            f"{t.date}: Traded {t.symbol} while feeling {t.emotion_before}"
            for t in emotional[:EVIDENCE_LIMIT]
        ],
        trades_affected=len(emotional),
    )


_DETECTORS = (
    detect_overtrading,
    detect_revenge_trading,
    detect_fomo,
    detect_strategy_hopping,
    detect_emotional_trading,
)


def analyze_behavioral_patterns(trades: Sequence[Trade]) -> list[BehavioralPattern]:
    """Run every detector over the chronologically sorted trades."""
    if not trades:
        return []
    ordered = sort_chronologically(trades)
    patterns = []
    for detector in _DETECTORS:
        pattern = detector(ordered)
        if pattern is not None:
            patterns.append(pattern)
    logger.debug("Behavioral patterns detected: %s", [p.id for p in patterns])
    return patterns
