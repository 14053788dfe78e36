"""Shared fixtures for journal analytics tests."""

import pytest


@pytest.fixture
def revenge_sequence(make_trade):
    """L, L, L, W, L, L in chronological order: 3 losses follow a loss."""
    profits = [-10, -20, -30, 50, -15, -25]
    return [
        make_trade(p, date="2024-01-02", time=f"{9 + i:02d}:00", symbol="EURUSD", type="sell")
        for i, p in enumerate(profits)
    ]


@pytest.fixture
def three_equal_sessions(make_trade):
    """12 trades over 3 sessions, each averaging +25 per trade."""
    trades = []
    for name in ("London", "New York", "Asia"):
        for p in (50, 0, 40, 10):
            trades.append(make_trade(p, session=name))
    return trades
