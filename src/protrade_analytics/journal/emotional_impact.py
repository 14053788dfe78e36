"""Emotional Impact Score (EIS).

Measures how well emotions are tracked and how much they bias results:

* **awareness**: % of trades with a pre-trade emotion recorded
* **stability**: ``1 - entropy / 3`` over the pre-trade emotion histogram,
  floored at 0 (3 bits is the ceiling for roughly eight labels)
* **bias**: loss rate among negative-emotion trades, centred on 0.5
* **correlation**: Pearson r between emotion polarity (+1/-1) and profit

Usage::

    eis = calculate_emotional_impact_score(trades)
    for emotion in eis.dominant_emotions:
        print(emotion.emotion, emotion.win_rate)
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from ..core.models import Trade
from .classifiers import is_negative_emotion, is_positive_emotion
from .results import DominantEmotion, EmotionalImpactScore
from .stats import pearson_correlation, round_score, safe_div, shannon_entropy

logger = logging.getLogger(__name__)

# Entropy ceiling (bits) mapped to zero stability
MAX_EMOTION_ENTROPY = 3.0
DOMINANT_EMOTION_LIMIT = 5
POOR_EMOTION_WIN_RATE = 40.0

EMPTY_RECOMMENDATION = "Start tracking emotions to see analysis"


def _emotion_key(trade: Trade) -> str:
    return (trade.emotion_before or "").strip().lower()


def _dominant_emotions(
    tracked: Sequence[Trade],
    counts: Counter[str],
) -> list[DominantEmotion]:
    by_emotion: dict[str, list[Trade]] = {}
    for trade in tracked:
        by_emotion.setdefault(_emotion_key(trade), []).append(trade)

    rows = []
    for emotion, count in counts.items():
        group = by_emotion[emotion]
        wins = sum(1 for t in group if t.is_win)
        rows.append(
            DominantEmotion(
                emotion=emotion[:1].upper() + emotion[1:],
                frequency=round_score(count / len(tracked) * 100),
                avg_profit=sum(t.profit for t in group) / len(group),
                win_rate=wins / len(group) * 100,
            )
        )
    rows.sort(key=lambda r: r.frequency, reverse=True)
    return rows[:DOMINANT_EMOTION_LIMIT]


def _recommendations(
    awareness: float,
    stability: float,
    bias: float,
    dominant: Sequence[DominantEmotion],
) -> list[str]:
    recs: list[str] = []
    if awareness < 50:
        recs.append("Increase emotional tracking: Document emotions before every trade")
    if stability < 0.5:
        recs.append("Work on emotional consistency: Your emotional state varies significantly")
    if bias > 0.3:
        recs.append("Address emotional bias: Negative emotions correlate with losses")
    poor = next((d for d in dominant if d.win_rate < POOR_EMOTION_WIN_RATE), None)
    if poor is not None:
        recs.append(
            f"Avoid trading when feeling {poor.emotion}: "
            f"{round_score(poor.win_rate)}% win rate"
        )
    return recs


def calculate_emotional_impact_score(trades: Sequence[Trade]) -> EmotionalImpactScore:
    """Compute the EIS.  Empty input scores 0 with a tracking recommendation."""
    n = len(trades)
    if n == 0:
        return EmotionalImpactScore(recommendations=[EMPTY_RECOMMENDATION])

    tracked = [t for t in trades if t.has_emotion_before]
    awareness = len(tracked) / n * 100

    counts = Counter(_emotion_key(t) for t in tracked)
    stability = max(0.0, 1 - shannon_entropy(counts) / MAX_EMOTION_ENTROPY)

    negative = [t for t in tracked if is_negative_emotion(t.emotion_before)]
    negative_losses = sum(1 for t in negative if t.is_loss)
    bias = safe_div(negative_losses, len(negative), default=0.5) - 0.5

    correlation = pearson_correlation(
        [1.0 if is_positive_emotion(t.emotion_before) else -1.0 for t in tracked],
        [t.profit for t in tracked],
    )

    dominant = _dominant_emotions(tracked, counts) if tracked else []

    score = round_score(
        awareness * 0.4
        + stability * 100 * 0.3
        + (1 - abs(bias)) * 100 * 0.3
    )

    logger.debug(
        "EIS awareness=%.1f stability=%.3f bias=%.3f score=%d",
        awareness, stability, bias, score,
    )

    return EmotionalImpactScore(
        score=score,
        emotional_awareness=awareness,
        emotional_stability=stability,
        emotional_bias_index=bias,
        emotion_performance_correlation=correlation,
        dominant_emotions=dominant,
        recommendations=_recommendations(awareness, stability, bias, dominant),
    )
