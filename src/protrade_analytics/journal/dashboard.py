"""Page-level dashboard aggregations.

Thin rollups built on the Trade Aggregator: headline stats, equity and
drawdown curves, hourly/weekday histograms, daily breakdowns, session
equity and the psychology-page snapshots.  Curves and streaks run over
the chronologically sorted trades.

Usage::

    curve = equity_curve(trades, settings.dashboard.starting_balance)
    print(curve[-1].balance, min(drawdown_series(trades, 1000.0)))
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

from ..core.models import Session, Trade
from .aggregator import (
    DAY_NAMES,
    asset_category_key,
    group_by,
    group_by_name,
    hour_key,
    sort_chronologically,
    summarize,
    trade_stats,
    trades_for,
    weekday_key,
)
from .classifiers import STABLE_EMOTION_LABELS
from .results import (
    DailyBreakdown,
    DecisionQualitySnapshot,
    EmotionWinRate,
    EquityPoint,
    GroupSummary,
    HeadlineStats,
    HourBucket,
    MindsetSnapshot,
    MistakeCount,
    SessionEquity,
    WeekdayBucket,
)
from .stats import mean, round_score, score_to_grade

BREAKDOWN_KEYS = ("session", "strategy", "asset_category")
SNAPSHOT_MAX_RISK_PCT = 2.0
RECENT_MISTAKE_TRADES = 5
TOP_MISTAKES = 3


def _pct(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def _rank_mistakes(tags: Iterable[str]) -> list[MistakeCount]:
    counts = Counter(tags)
    return [
        MistakeCount(label=label, count=count)
        for label, count in sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    ]


# ------------------------------------------------------------------ #
# Headline & curves                                                    #
# ------------------------------------------------------------------ #

def headline_stats(trades: Sequence[Trade]) -> HeadlineStats:
    if not trades:
        return HeadlineStats()
    stats = trade_stats(trades)
    avg_loss = stats.gross_loss / stats.losses if stats.losses else 0.0
    return HeadlineStats(
        total_trades=stats.count,
        win_rate=stats.win_rate,
        total_profit=sum(t.profit for t in trades),
        best_trade=max(t.profit for t in trades),
        average_rr=mean([t.rr_actual for t in trades if t.rr_actual]),
        profit_factor=stats.profit_factor,
        expectancy=stats.expectancy,
        risk_adjusted_ratio=stats.expectancy / (avg_loss or 1),
    )


def equity_curve(trades: Sequence[Trade], starting_balance: float) -> list[EquityPoint]:
    """Running balance after each trade with drawdown from the running peak."""
    balance = starting_balance
    peak = starting_balance
    points: list[EquityPoint] = []
    for trade in sort_chronologically(trades):
        balance += trade.profit
        peak = max(peak, balance)
        drawdown = 0.0 if peak == 0 else (peak - balance) / peak * 100
        points.append(
            EquityPoint(
                label=trade.date,
                balance=round(balance, 2),
                drawdown=-round(drawdown, 2) if drawdown else 0.0,
            )
        )
    return points


def drawdown_series(trades: Sequence[Trade], starting_balance: float) -> list[float]:
    return [p.drawdown for p in equity_curve(trades, starting_balance)]


# ------------------------------------------------------------------ #
# Histograms                                                           #
# ------------------------------------------------------------------ #

def hourly_histogram(trades: Sequence[Trade]) -> list[HourBucket]:
    """Trade count for each of the 24 hours; unparsable times are skipped."""
    groups = group_by(trades, hour_key)
    return [
        HourBucket(hour=f"{h:02d}:00", count=len(groups.get(h, [])))
        for h in range(24)
    ]


def weekday_histogram(trades: Sequence[Trade]) -> list[WeekdayBucket]:
    groups = group_by(trades, weekday_key)
    return [
        WeekdayBucket(
            day=day,
            count=len(groups.get(day, [])),
            profit=sum(t.profit for t in groups.get(day, [])),
        )
        for day in DAY_NAMES
    ]


def daily_breakdown(trades: Sequence[Trade]) -> list[DailyBreakdown]:
    """Per-date profit with the won/lost share of that day's volume."""
    rows = []
    for day, group in sorted(group_by(trades, lambda t: t.date).items()):
        won = sum(t.profit for t in group if t.is_win)
        lost = sum(-t.profit for t in group if t.is_loss)
        volume = won + lost
        rows.append(
            DailyBreakdown(
                date=day,
                profit=sum(t.profit for t in group),
                win_pct=round_score(won / volume * 100) if volume else 0,
                loss_pct=round_score(lost / volume * 100) if volume else 0,
            )
        )
    return rows


# ------------------------------------------------------------------ #
# Rollups                                                              #
# ------------------------------------------------------------------ #

def session_equity(
    session: Session,
    trades: Sequence[Trade],
    default_balance: float,
) -> SessionEquity:
    """Starting capital plus the profit of trades linked to ``session``."""
    linked = trades_for(trades, "session", session.name)
    profit = sum(t.profit for t in linked)
    starting = session.initial_capital if session.initial_capital is not None else default_balance
    wins = sum(1 for t in linked if t.is_win)
    return SessionEquity(
        session=session.name,
        trade_count=len(linked),
        profit=profit,
        win_rate=round_score(_pct(wins, len(linked))),
        starting=starting,
        equity=starting + profit,
    )


def breakdown_by(trades: Sequence[Trade], key: str) -> dict[str, GroupSummary]:
    """Summaries per session, strategy or asset category."""
    if key not in BREAKDOWN_KEYS:
        raise ValueError(f"Unknown breakdown key {key!r}; expected one of {BREAKDOWN_KEYS}")
    if key == "asset_category":
        groups = group_by(trades, asset_category_key)
    else:
        groups = group_by_name(trades, key)
    return {name: summarize(group) for name, group in groups.items()}


# ------------------------------------------------------------------ #
# Psychology snapshots                                                 #
# ------------------------------------------------------------------ #

def mindset_snapshot(trades: Sequence[Trade]) -> MindsetSnapshot:
    n = len(trades)
    if n == 0:
        return MindsetSnapshot()

    with_notes = sum(1 for t in trades if len(t.notes) > 20)
    with_strategy = sum(1 for t in trades if t.has_strategy)
    clean = sum(1 for t in trades if not t.mistakes)
    discipline = round_score((with_notes / n + with_strategy / n + clean / n) / 3 * 100)

    stable = sum(1 for t in trades if (t.emotion_before or "").strip() in STABLE_EMOTION_LABELS)
    risk_planned = sum(1 for t in trades if t.has_stop_loss and t.has_take_profit)

    by_emotion = group_by(trades, lambda t: (t.emotion_before or "").strip() or "Neutral")
    emotion_stats = [
        EmotionWinRate(
            emotion=emotion,
            win_rate=round_score(_pct(sum(1 for t in group if t.is_win), len(group))),
        )
        for emotion, group in by_emotion.items()
    ]

    return MindsetSnapshot(
        discipline=discipline,
        stability=round_score(stable / n * 100),
        risk_adherence=round_score(risk_planned / n * 100),
        mistakes=_rank_mistakes(m for t in trades for m in t.mistakes),
        emotion_stats=emotion_stats,
    )


def decision_quality_snapshot(trades: Sequence[Trade]) -> DecisionQualitySnapshot:
    """The dashboard's lightweight decision-quality card.

    Distinct from the full Decision Quality Index: a weighted share of
    trades with a plan, an emotion, a strategy, rules and risk <= 2%.
    """
    n = len(trades)
    if n == 0:
        return DecisionQualitySnapshot()

    ordered = sort_chronologically(trades)
    plan = _pct(sum(1 for t in ordered if t.has_plan), n)
    emotion = _pct(sum(1 for t in ordered if t.has_emotion_before), n)
    strategy = _pct(sum(1 for t in ordered if t.has_strategy), n)
    rules = _pct(sum(1 for t in ordered if t.rules_used), n)
    risk = _pct(
        sum(1 for t in ordered if 0 < t.risk <= SNAPSHOT_MAX_RISK_PCT), n
    )
    score = round_score(
        plan * 0.25 + emotion * 0.20 + strategy * 0.20 + rules * 0.20 + risk * 0.15
    )

    best = current = 0
    for trade in ordered:
        current = current + 1 if trade.is_win else 0
        best = max(best, current)

    recent = [t for t in reversed(ordered) if t.mistakes][:RECENT_MISTAKE_TRADES]
    top = _rank_mistakes(m for t in recent for m in t.mistakes)[:TOP_MISTAKES]

    return DecisionQualitySnapshot(
        score=score,
        grade=score_to_grade(score),
        total_trades=n,
        win_rate=round_score(_pct(sum(1 for t in ordered if t.is_win), n)),
        current_streak=current,
        max_streak=best,
        plan_adherence=plan,
        emotional_tracking=emotion,
        strategy_compliance=strategy,
        rules_following=rules,
        risk_management=risk,
        top_mistakes=top,
    )

