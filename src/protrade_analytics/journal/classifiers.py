"""Keyword classification of free-text emotion, mistake and note labels.

Journal entries carry emotions and mistakes as free text ("FOMO",
"slightly fearful", "revenge trade").  Every keyword table lives here so
the analyses share a single, swappable vocabulary.  Matching is
case-insensitive substring matching.
"""

from __future__ import annotations

from collections.abc import Iterable

# Emotions treated as negative when measuring emotional bias
NEGATIVE_EMOTIONS: tuple[str, ...] = (
    "fear", "greed", "fomo", "anxiety", "revenge", "frustration",
)

# Emotions scored +1 against profit; anything else scores -1
POSITIVE_EMOTIONS: tuple[str, ...] = (
    "focused", "calm", "confident", "disciplined", "patient",
)

# Mistake tags that reflect emotional rather than technical errors
EMOTIONAL_MISTAKES: tuple[str, ...] = ("fomo", "revenge", "greed", "fear")

# Pre-trade emotions indicating a chase
FOMO_EMOTIONS: tuple[str, ...] = ("fomo", "fear")

# Pre-trade emotions counted as emotional trading
EMOTIONAL_TRADING_EMOTIONS: tuple[str, ...] = (
    "fear", "greed", "fomo", "revenge", "angry", "anxious",
)

# Post-trade emotion revealing an early, fearful exit
RELIEF_EMOTIONS: tuple[str, ...] = ("relief",)

# Note phrases showing the trader challenged their own thesis
CONTRARIAN_PHRASES: tuple[str, ...] = ("why wrong", "opposite view")

# Exact labels the mindset snapshot counts as stable
STABLE_EMOTION_LABELS: tuple[str, ...] = ("Focused", "Disciplined", "Patient")


def contains_any(text: str | None, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in ``text`` (case-insensitive)."""
    if not text:
        return False
    lowered = text.lower()
    return any(k in lowered for k in keywords)


def is_negative_emotion(emotion: str | None) -> bool:
    return contains_any(emotion, NEGATIVE_EMOTIONS)


def is_positive_emotion(emotion: str | None) -> bool:
    return contains_any(emotion, POSITIVE_EMOTIONS)


def count_emotional_mistakes(mistakes: Iterable[str]) -> int:
    return sum(1 for m in mistakes if contains_any(m, EMOTIONAL_MISTAKES))


def is_fomo_emotion(emotion: str | None) -> bool:
    return contains_any(emotion, FOMO_EMOTIONS)


def is_emotional_trading(emotion: str | None) -> bool:
    return contains_any(emotion, EMOTIONAL_TRADING_EMOTIONS)


def is_relief(emotion: str | None) -> bool:
    return contains_any(emotion, RELIEF_EMOTIONS)


def has_contrarian_check(notes: str | None) -> bool:
    return contains_any(notes, CONTRARIAN_PHRASES)
