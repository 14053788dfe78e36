"""Tests for the keyword vocabulary."""

import pytest

from protrade_analytics.journal.classifiers import (
    contains_any,
    count_emotional_mistakes,
    has_contrarian_check,
    is_emotional_trading,
    is_fomo_emotion,
    is_negative_emotion,
    is_positive_emotion,
    is_relief,
)


class TestContainsAny:
    def test_case_insensitive_substring(self):
        assert contains_any("Slightly FEARFUL", ["fear"])

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_text_never_matches(self, text):
        assert not contains_any(text, ["fear"])


class TestEmotionPolarity:
    @pytest.mark.parametrize("emotion", ["Fear", "greedy", "FOMO", "anxiety", "Revenge", "frustration"])
    def test_negative(self, emotion):
        assert is_negative_emotion(emotion)

    @pytest.mark.parametrize("emotion", ["Focused", "calm", "Confident", "disciplined", "Patient"])
    def test_positive(self, emotion):
        assert is_positive_emotion(emotion)
        assert not is_negative_emotion(emotion)

    def test_unknown_emotion_is_neither(self):
        assert not is_positive_emotion("Bored")
        assert not is_negative_emotion("Bored")


class TestMistakesAndNotes:
    def test_count_emotional_mistakes(self):
        assert count_emotional_mistakes(["FOMO entry", "late exit", "revenge trade"]) == 2
        assert count_emotional_mistakes([]) == 0

    def test_fomo_and_emotional_trading(self):
        assert is_fomo_emotion("fearful")
        assert not is_fomo_emotion("greed")
        assert is_emotional_trading("angry")
        assert is_emotional_trading("anxious")
        assert not is_emotional_trading("calm")

    def test_relief(self):
        assert is_relief("Relief after exit")
        assert not is_relief("happy")

    def test_contrarian_check(self):
        assert has_contrarian_check("Asked: why wrong? Checked opposite view")
        assert not has_contrarian_check("Followed the plan")
