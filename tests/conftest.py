"""Shared fixtures for the protrade-analytics test suite."""

from __future__ import annotations

import itertools
import json
from typing import Any

import pytest

from protrade_analytics.core.models import Session, Strategy, Trade

_ids = itertools.count(1)


def build_trade(profit: float = 0.0, **fields: Any) -> Trade:
    """Trade with only the given fields set; everything else is "not tracked"."""
    fields.setdefault("id", f"t{next(_ids)}")
    return Trade(profit=profit, **fields)


def build_complete_trade(profit: float = 100.0, **fields: Any) -> Trade:
    """A fully documented, well-risked trade."""
    defaults: dict[str, Any] = {
        "date": "2024-03-04",
        "time": "09:30",
        "symbol": "EURUSD",
        "asset_category": "Forex",
        "strategy": "Breakout",
        "session": "London",
        "type": "buy",
        "entry": 1.0850,
        "exit": 1.0900,
        "sl": 1.0825,
        "tp": 1.0900,
        "lot_size": 1.0,
        "risk_percent": 1.0,
        "rr_planned": 2.0,
        "rr_actual": 2.0,
        "status": "TP" if profit > 0 else "SL",
        "emotion_before": "Focused",
        "emotion_after": "Calm",
        "mistakes": ["late entry"],
        "rules_used": ["Wait for close above range"],
        "notes": "Clean breakout after London open, followed the plan",
        "screenshot": "shot.png",
    }
    defaults.update(fields)
    return build_trade(profit, **defaults)


@pytest.fixture
def make_trade():
    return build_trade


@pytest.fixture
def make_complete_trade():
    return build_complete_trade


@pytest.fixture
def scenario_trades() -> list[Trade]:
    """10 trades: 6 wins of 100, 4 losses of -50, nothing else set."""
    return [build_trade(100.0) for _ in range(6)] + [build_trade(-50.0) for _ in range(4)]


@pytest.fixture
def sessions() -> list[Session]:
    return [
        Session(name="London", initial_capital=5000),
        Session(name="New York"),
    ]


@pytest.fixture
def strategies() -> list[Strategy]:
    return [
        Strategy(name="Breakout", rules=["Wait for close above range"]),
        Strategy(name="Pullback"),
    ]


@pytest.fixture
def dataset_file(tmp_path):
    """Write a camelCase dataset (as saved by the journal app) and return its path."""

    def _write(trades: list[dict[str, Any]], **extra: Any):
        path = tmp_path / "journal.json"
        path.write_text(json.dumps({"trades": trades, **extra}))
        return path

    return _write
