"""Improvement plan synthesis.

A deterministic mapping from analysis findings to tiered action items:

    critical risk violation       -> immediate action
    psychological weakness        -> short-term goal (2-4 weeks)
    plan adherence below 80%      -> medium-term goal
    high/critical-impact pattern  -> long-term goal (3-6 months)

Daily routines and psychological exercises are fixed and always included.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.enums import (
    ActionCategory,
    ExerciseType,
    Impact,
    Priority,
    RoutineTime,
    Severity,
    WeaknessSeverity,
)
from .results import (
    ActionItem,
    BehavioralPattern,
    Exercise,
    ImprovementPlan,
    PsychologicalWeakness,
    RiskAnalysis,
    Routine,
    StrategyExecutionScore,
)
from .stats import round_score

PLAN_ADHERENCE_TARGET = 80.0

DAILY_ROUTINES: tuple[Routine, ...] = (
    Routine(
        time_of_day=RoutineTime.PRE_MARKET,
        activity="Meditation & Market Review",
        duration="15 minutes",
        purpose="Clear mind and identify key levels",
    ),
    Routine(
        time_of_day=RoutineTime.PRE_MARKET,
        activity="Trade Plan Creation",
        duration="10 minutes",
        purpose="Define setups to watch and rules",
    ),
    Routine(
        time_of_day=RoutineTime.DURING_MARKET,
        activity="Pre-Trade Checklist",
        duration="2 minutes",
        purpose="Ensure all criteria met before entry",
    ),
    Routine(
        time_of_day=RoutineTime.POST_MARKET,
        activity="Trade Review & Journaling",
        duration="20 minutes",
        purpose="Document emotions, mistakes, and lessons",
    ),
)

PSYCHOLOGICAL_EXERCISES: tuple[Exercise, ...] = (
    Exercise(
        name="The 5-Minute Pause",
        type=ExerciseType.MINDFULNESS,
        frequency="Before every trade",
        instructions=[
            "Step away from screens",
            "Take 5 deep breaths",
            'Ask: "Am I trading my plan or my emotions?"',
            "Only proceed if plan is clear",
        ],
        expected_benefit="Reduces impulsive trades by creating space between urge and action",
    ),
    Exercise(
        name="Devil's Advocate",
        type=ExerciseType.JOURNALING,
        frequency="Before every trade",
        instructions=[
            "Write down your trade thesis",
            "List 3 reasons why this trade could fail",
            "Identify what would invalidate your idea",
            "Decide if you still want to proceed",
        ],
        expected_benefit="Combats confirmation bias and improves decision quality",
    ),
    Exercise(
        name="Win/Loss Visualization",
        type=ExerciseType.VISUALIZATION,
        frequency="Daily",
        instructions=[
            "Visualize a successful trade step-by-step",
            "Visualize handling a losing trade calmly",
            "Feel the emotions of both scenarios",
            "Commit to process over outcome",
        ],
        expected_benefit="Prepares mind for both outcomes, reduces emotional volatility",
    ),
)


def _immediate_actions(risk: RiskAnalysis) -> list[ActionItem]:
    return [
        ActionItem(
            id=f"risk-{v.type.value}",
            category=ActionCategory.RISK,
            priority=Priority.CRITICAL,
            title=f"Fix {v.type.value.replace('_', ' ')}",
            description=v.recommendation,
            expected_outcome="Reduce account volatility and prevent large losses",
            timeframe="Starting immediately",
            measurable_target="Zero violations in next 10 trades",
            success_criteria=[
                "No oversized positions",
                "All trades have stop loss",
                "Fixed position sizing",
            ],
        )
        for v in risk.risk_violations
        if v.severity == Severity.CRITICAL
    ]


def _short_term_goals(weaknesses: Sequence[PsychologicalWeakness]) -> list[ActionItem]:
    return [
        ActionItem(
            id=f"psych-{w.id}",
            category=ActionCategory.PSYCHOLOGY,
            priority=Priority.HIGH if w.severity == WeaknessSeverity.SEVERE else Priority.MEDIUM,
            title=f"Address {w.name}",
            description=w.description,
            expected_outcome="Reduced emotional interference in trading",
            timeframe="2-4 weeks",
            measurable_target=f"Reduce {w.name.lower()} occurrences by 50%",
            success_criteria=list(w.countermeasures[:3]),
        )
        for w in weaknesses
    ]


def _medium_term_goals(execution: StrategyExecutionScore) -> list[ActionItem]:
    if execution.plan_adherence >= PLAN_ADHERENCE_TARGET:
        return []
    return [
        ActionItem(
            id="exec-plan",
            category=ActionCategory.DISCIPLINE,
            priority=Priority.HIGH,
            title="Improve Plan Adherence",
            description=f"Currently only planning {round_score(execution.plan_adherence)}% of trades",
            expected_outcome="Every trade has a clear plan before entry",
            timeframe="1-2 months",
            measurable_target="90% plan adherence rate",
            success_criteria=[
                "Document R:R before every trade",
                "Define entry/exit criteria",
                "Note emotional state",
            ],
        )
    ]


def _long_term_goals(patterns: Sequence[BehavioralPattern]) -> list[ActionItem]:
    return [
        ActionItem(
            id=f"behavior-{p.id}",
            category=ActionCategory.DISCIPLINE,
            priority=Priority.CRITICAL if p.impact == Impact.CRITICAL else Priority.HIGH,
            title=f"Eliminate {p.name}",
            description=p.description,
            expected_outcome="Sustainable trading behavior",
            timeframe="3-6 months",
            measurable_target=f"Reduce {p.name.lower()} by 80%",
            success_criteria=[
                "Awareness of triggers",
                "Implementation of interventions",
                "Consistent improvement over time",
            ],
        )
        for p in patterns
        if p.impact in (Impact.HIGH, Impact.CRITICAL)
    ]


def generate_improvement_plan(
    patterns: Sequence[BehavioralPattern],
    risk: RiskAnalysis,
    weaknesses: Sequence[PsychologicalWeakness],
    execution: StrategyExecutionScore,
) -> ImprovementPlan:
    return ImprovementPlan(
        immediate_actions=_immediate_actions(risk),
        short_term_goals=_short_term_goals(weaknesses),
        medium_term_goals=_medium_term_goals(execution),
        long_term_goals=_long_term_goals(patterns),
        daily_routines=list(DAILY_ROUTINES),
        psychological_exercises=list(PSYCHOLOGICAL_EXERCISES),
    )
