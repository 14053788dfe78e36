"""Trade grouping and reduction.

Groups a trade collection by an arbitrary key (date, hour, session,
strategy, asset category) and reduces each group to count, win rate,
profit and volatility.  Every higher analysis builds on these helpers.

Ordering
--------
Journals are often stored newest-first.  Order-dependent analyses call
:func:`sort_chronologically` before scanning; the raw scanners here
(:func:`max_streak`) use the order they are given.

Name linking
------------
Trades reference sessions and strategies by free-text name.  Linking
always goes through :func:`normalize_name` (strip + casefold); the group
label is the canonical record name when one matches.

Usage::

    groups = group_by_name(trades, "strategy", strategies)
    for name, group in groups.items():
        print(name, summarize(group).win_rate)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import TypeVar

from ..core.models import Session, Strategy, Trade
from .results import GroupSummary
from .stats import safe_div, std_dev

logger = logging.getLogger(__name__)

UNSPECIFIED = "Unspecified"

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

K = TypeVar("K", bound=Hashable)


# ------------------------------------------------------------------ #
# Ordering                                                             #
# ------------------------------------------------------------------ #

def _chronological_key(trade: Trade) -> tuple:
    return (
        trade.trade_date or date.min,
        trade.clock or (-1, -1),
        trade.date.strip(),
        trade.time.strip(),
    )


def sort_chronologically(trades: Iterable[Trade]) -> list[Trade]:
    """Stable sort by parsed (date, time); ties keep their input order.

    ``"9:30"`` sorts before ``"10:00"``.  Unparsable dates and times sort
    first, then fall back to their raw text.
    """
    return sorted(trades, key=_chronological_key)


# ------------------------------------------------------------------ #
# Grouping                                                             #
# ------------------------------------------------------------------ #

def group_by(
    trades: Iterable[Trade],
    key_fn: Callable[[Trade], K | None],
) -> dict[K, list[Trade]]:
    """Group trades by ``key_fn``; trades whose key is None are skipped.

    Groups keep first-seen order and each group keeps input order.
    """
    groups: dict[K, list[Trade]] = {}
    skipped = 0
    for trade in trades:
        key = key_fn(trade)
        if key is None:
            skipped += 1
            continue
        groups.setdefault(key, []).append(trade)
    if skipped:
        logger.debug("group_by skipped %d trades without a usable key", skipped)
    return groups


def normalize_name(name: str | None) -> str:
    """Normalization applied whenever a name links two records."""
    return (name or "").strip().casefold()


def canonical_names(records: Iterable[Session | Strategy]) -> dict[str, str]:
    """Map normalized name -> record name (first record wins)."""
    names: dict[str, str] = {}
    for record in records:
        names.setdefault(normalize_name(record.name), record.name)
    return names


def group_by_name(
    trades: Iterable[Trade],
    attribute: str,
    records: Iterable[Session | Strategy] = (),
    default: str = UNSPECIFIED,
) -> dict[str, list[Trade]]:
    """Group trades by their ``session`` or ``strategy`` name.

    Blank names fall into ``default``; they are never dropped.
    """
    canonical = canonical_names(records)
    labels: dict[str, str] = {}

    def _key(trade: Trade) -> str:
        raw = getattr(trade, attribute) or ""
        norm = normalize_name(raw)
        if not norm:
            return default
        if norm not in labels:
            labels[norm] = canonical.get(norm, raw.strip())
        return labels[norm]

    return group_by(trades, _key)


def trades_for(
    trades: Iterable[Trade],
    attribute: str,
    name: str,
) -> list[Trade]:
    """All trades whose ``attribute`` links to ``name``."""
    target = normalize_name(name)
    return [t for t in trades if normalize_name(getattr(t, attribute)) == target]


def hour_key(trade: Trade) -> int | None:
    return trade.hour


def weekday_key(trade: Trade) -> str | None:
    d = trade.trade_date
    if d is None:
        return None
    return DAY_NAMES[d.weekday()]


def date_key(trade: Trade) -> str:
    return trade.date


def asset_category_key(trade: Trade, default: str = "Unknown") -> str:
    if trade.asset_category is None:
        return default
    return trade.asset_category.value


# ------------------------------------------------------------------ #
# Reduction                                                            #
# ------------------------------------------------------------------ #

def summarize(group: Sequence[Trade]) -> GroupSummary:
    """Reduce a group; an empty group is all zeros."""
    n = len(group)
    if n == 0:
        return GroupSummary()
    profits = [t.profit for t in group]
    wins = sum(1 for t in group if t.is_win)
    losses = sum(1 for t in group if t.is_loss)
    total = sum(profits)
    return GroupSummary(
        count=n,
        wins=wins,
        losses=losses,
        win_rate=wins / n * 100,
        total_profit=total,
        avg_profit=total / n,
        volatility=std_dev(profits),
    )


def daily_profit(trades: Iterable[Trade]) -> dict[str, float]:
    """Net profit per calendar date string."""
    return {d: sum(t.profit for t in group) for d, group in group_by(trades, date_key).items()}


def daily_trade_counts(trades: Iterable[Trade]) -> dict[str, int]:
    return {d: len(group) for d, group in group_by(trades, date_key).items()}


@dataclass(frozen=True)
class TradeStats:
    """Win/loss bookkeeping shared by several analyses.

    ``win_rate`` is wins over *all* trades, breakevens included.
    """

    count: int = 0
    wins: int = 0
    losses: int = 0
    gross_profit: float = 0.0
    gross_loss: float = 0.0  # positive magnitude

    @property
    def win_rate(self) -> float:
        return safe_div(self.wins, self.count) * 100

    @property
    def profit_factor(self) -> float:
        """Gross profit / gross loss; gross profit itself when nothing was lost."""
        if self.gross_loss == 0:
            return self.gross_profit
        return self.gross_profit / self.gross_loss

    @property
    def avg_win(self) -> float:
        return self.gross_profit / max(self.wins, 1)

    @property
    def avg_loss(self) -> float:
        return self.gross_loss / max(self.losses, 1)

    @property
    def expectancy(self) -> float:
        rate = self.win_rate / 100
        if self.count == 0:
            return 0.0
        return rate * self.avg_win - (1 - rate) * self.avg_loss


def trade_stats(trades: Iterable[Trade]) -> TradeStats:
    count = wins = losses = 0
    gross_profit = gross_loss = 0.0
    for t in trades:
        count += 1
        if t.is_win:
            wins += 1
            gross_profit += t.profit
        elif t.is_loss:
            losses += 1
            gross_loss += -t.profit
    return TradeStats(count, wins, losses, gross_profit, gross_loss)


def max_streak(trades: Iterable[Trade], predicate: Callable[[Trade], bool]) -> int:
    """Longest run of consecutive trades satisfying ``predicate``, in given order."""
    best = current = 0
    for t in trades:
        if predicate(t):
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best
