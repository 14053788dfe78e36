"""Property test: results depend on trade chronology, not storage order.

Journals are stored newest-first or in arbitrary order.  When every trade
has a distinct timestamp, any permutation of the input must produce the
same analyses.
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings, strategies as st

from protrade_analytics.core.models import Trade
from protrade_analytics.journal.aggregator import summarize
from protrade_analytics.journal.behavior import analyze_behavioral_patterns
from protrade_analytics.journal.consistency import calculate_consistency_metrics
from protrade_analytics.journal.risk_analysis import analyze_risk_management

_DAY0 = date(2024, 1, 1)


@st.composite
def journal_and_shuffle(draw):
    profits = draw(st.lists(st.integers(min_value=-200, max_value=200), min_size=1, max_size=30))
    lots = draw(st.lists(st.sampled_from([None, 0.5, 1.0, 2.0]), min_size=len(profits), max_size=len(profits)))
    trades = [
        Trade(
            id=f"t{i}",
            profit=p,
            date=(_DAY0 + timedelta(days=i // 4)).isoformat(),
            time=f"{8 + i % 4:02d}:00",
            lot_size=lot,
            emotion_before="Fear" if p < 0 else "Calm",
        )
        for i, (p, lot) in enumerate(zip(profits, lots))
    ]
    shuffled = draw(st.permutations(trades))
    return trades, list(shuffled)


@settings(max_examples=80, deadline=None)
@given(data=journal_and_shuffle())
def test_win_rate_ignores_order(data):
    trades, shuffled = data
    assert summarize(trades).win_rate == pytest.approx(summarize(shuffled).win_rate)


@settings(max_examples=80, deadline=None)
@given(data=journal_and_shuffle())
def test_streaks_ignore_storage_order(data):
    trades, shuffled = data
    assert calculate_consistency_metrics(trades) == calculate_consistency_metrics(shuffled)


@settings(max_examples=80, deadline=None)
@given(data=journal_and_shuffle())
def test_sequential_detectors_ignore_storage_order(data):
    trades, shuffled = data
    assert analyze_behavioral_patterns(trades) == analyze_behavioral_patterns(shuffled)
    assert analyze_risk_management(trades) == analyze_risk_management(shuffled)
