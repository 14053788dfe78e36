"""Core domain models for the trading journal.

These are the records the analytics layer consumes.  They mirror what the
journal UI persists, so field aliases accept the UI's camelCase keys and a
saved dataset validates directly.  The analytics never mutate them.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import AssetCategory, TradeOutcome, TradeStatus, TradeType


def parse_hour(value: str | None) -> int | None:
    """Parse the hour from an ``HH:MM`` string; None when unparsable."""
    if not value:
        return None
    head = value.strip().split(":")[0]
    try:
        hour = int(head)
    except ValueError:
        return None
    if 0 <= hour <= 23:
        return hour
    return None


def parse_clock(value: str | None) -> tuple[int, int] | None:
    """Parse ``H:MM`` or ``HH:MM`` into (hour, minute); None when unparsable."""
    hour = parse_hour(value)
    if hour is None:
        return None
    parts = value.strip().split(":")
    if len(parts) < 2:
        return hour, 0
    try:
        minute = int(parts[1][:2])
    except ValueError:
        return None
    if 0 <= minute <= 59:
        return hour, minute
    return None


def parse_trade_date(value: str | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` calendar date; None when unparsable."""
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _coerce_float(value: Any) -> float | None:
    """Lenient numeric coercion: blanks and junk become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


class _JournalModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Trade
# ---------------------------------------------------------------------------

class Trade(_JournalModel):
    """A single journaled trade, the unit of analysis."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    # Timing
    date: str = ""  # "YYYY-MM-DD"
    time: str = ""  # "HH:MM"

    # Classification
    symbol: str = ""
    asset_category: AssetCategory | None = None
    strategy: str = ""
    session: str = ""

    # Execution
    type: TradeType | None = None
    entry: float = 0.0
    exit: float = 0.0
    sl: float = 0.0  # 0 = unset
    tp: float = 0.0  # 0 = unset
    lot_size: float | None = None
    risk_percent: float | None = None
    rr_planned: float | None = None
    rr_actual: float | None = None
    pips_profit: float | None = None

    # Outcome
    profit: float = 0.0
    status: TradeStatus | None = None

    # Psychology
    emotion_before: str | None = None
    emotion_after: str | None = None
    mistakes: tuple[str, ...] = ()
    rules_used: tuple[str, ...] = ()
    notes: str = ""
    screenshot: str | None = None

    @field_validator("entry", "exit", "sl", "tp", "profit", mode="before")
    @classmethod
    def _zero_when_missing(cls, value: Any) -> float:
        coerced = _coerce_float(value)
        return 0.0 if coerced is None else coerced

    @field_validator(
        "lot_size", "risk_percent", "rr_planned", "rr_actual", "pips_profit",
        mode="before",
    )
    @classmethod
    def _none_when_missing(cls, value: Any) -> float | None:
        return _coerce_float(value)

    @field_validator("asset_category", mode="before")
    @classmethod
    def _match_category(cls, value: Any) -> AssetCategory | None:
        if isinstance(value, AssetCategory):
            return value
        if not isinstance(value, str):
            return None
        for category in AssetCategory:
            if category.value.lower() == value.strip().lower():
                return category
        return None

    @field_validator("status", mode="before")
    @classmethod
    def _match_status(cls, value: Any) -> TradeStatus | None:
        if isinstance(value, TradeStatus):
            return value
        if not isinstance(value, str):
            return None
        for status in TradeStatus:
            if status.value.lower() == value.strip().lower():
                return status
        return None

    @field_validator("type", mode="before")
    @classmethod
    def _match_type(cls, value: Any) -> TradeType | None:
        if isinstance(value, TradeType):
            return value
        if isinstance(value, str) and value.strip().lower() in ("buy", "sell"):
            return TradeType(value.strip().lower())
        return None

    @field_validator("mistakes", "rules_used", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> tuple[str, ...]:
        if not value:
            return ()
        if isinstance(value, str):
            return (value,)
        return tuple(str(v) for v in value if v)

    @field_validator("strategy", "session", "notes", "date", "time", "symbol", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    # ------------------------------------------------------------------ #
    # Derived                                                              #
    # ------------------------------------------------------------------ #

    @property
    def outcome(self) -> TradeOutcome:
        if self.profit > 0:
            return TradeOutcome.WIN
        if self.profit < 0:
            return TradeOutcome.LOSS
        return TradeOutcome.BREAKEVEN

    @property
    def is_win(self) -> bool:
        return self.profit > 0

    @property
    def is_loss(self) -> bool:
        return self.profit < 0

    @property
    def has_stop_loss(self) -> bool:
        return self.sl > 0

    @property
    def has_take_profit(self) -> bool:
        return self.tp > 0

    @property
    def has_strategy(self) -> bool:
        return bool(self.strategy.strip())

    @property
    def has_emotion_before(self) -> bool:
        return bool(self.emotion_before and self.emotion_before.strip())

    @property
    def has_emotion_after(self) -> bool:
        return bool(self.emotion_after and self.emotion_after.strip())

    @property
    def has_plan(self) -> bool:
        """A planned R:R was recorded."""
        return bool(self.rr_planned and self.rr_planned > 0)

    @property
    def hour(self) -> int | None:
        return parse_hour(self.time)

    @property
    def clock(self) -> tuple[int, int] | None:
        return parse_clock(self.time)

    @property
    def trade_date(self) -> date | None:
        return parse_trade_date(self.date)

    @property
    def risk(self) -> float:
        """Risk percent with "not tracked" read as zero."""
        return self.risk_percent or 0.0


# ---------------------------------------------------------------------------
# Session / Strategy
# ---------------------------------------------------------------------------

class Session(_JournalModel):
    """A named trading window grouping trades."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    type: str = ""
    date: str = ""
    timezone: str = ""
    strategy_name: str | None = None
    initial_capital: float | None = None

    @field_validator("initial_capital", mode="before")
    @classmethod
    def _capital(cls, value: Any) -> float | None:
        return _coerce_float(value)


class Strategy(_JournalModel):
    """A named trading plan with an optional ordered rule list."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str = ""
    status: str = "Active"
    rules: tuple[str, ...] = ()

    @field_validator("rules", mode="before")
    @classmethod
    def _rules(cls, value: Any) -> tuple[str, ...]:
        if not value:
            return ()
        return tuple(str(v) for v in value if v)


class Dataset(_JournalModel):
    """The three collections the analytics core is called with."""

    trades: list[Trade] = Field(default_factory=list)
    sessions: list[Session] = Field(default_factory=list)
    strategies: list[Strategy] = Field(default_factory=list)
