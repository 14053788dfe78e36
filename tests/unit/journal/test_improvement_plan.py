"""Tests for improvement plan synthesis."""

from protrade_analytics.core.enums import (
    ActionCategory,
    Impact,
    PatternFrequency,
    Priority,
    Severity,
    ViolationType,
    WeaknessSeverity,
    WeaknessType,
)
from protrade_analytics.journal.improvement_plan import (
    DAILY_ROUTINES,
    PSYCHOLOGICAL_EXERCISES,
    generate_improvement_plan,
)
from protrade_analytics.journal.results import (
    BehavioralPattern,
    PsychologicalWeakness,
    RiskAnalysis,
    RiskViolation,
    StrategyExecutionScore,
)


def _pattern(id, impact):
    return BehavioralPattern(
        id=id,
        name=id.replace("_", " ").title(),
        description="desc",
        frequency=PatternFrequency.OCCASIONAL,
        impact=impact,
    )


def _weakness(id, severity):
    return PsychologicalWeakness(
        id=id,
        type=WeaknessType.EMOTIONAL,
        name="Overconfidence",
        description="Increasing risk after winning streaks",
        severity=severity,
        countermeasures=["a", "b", "c", "d"],
    )


class TestImprovementPlan:
    def test_clean_inputs_only_fixed_content(self):
        plan = generate_improvement_plan([], RiskAnalysis(), [], StrategyExecutionScore(plan_adherence=90))
        assert plan.immediate_actions == []
        assert plan.short_term_goals == []
        assert plan.medium_term_goals == []
        assert plan.long_term_goals == []
        assert plan.daily_routines == list(DAILY_ROUTINES)
        assert plan.psychological_exercises == list(PSYCHOLOGICAL_EXERCISES)
        assert len(plan.daily_routines) == 4
        assert len(plan.psychological_exercises) == 3

    def test_critical_violations_become_immediate_actions(self):
        risk = RiskAnalysis(
            risk_violations=[
                RiskViolation(
                    type=ViolationType.NO_STOP_LOSS,
                    severity=Severity.CRITICAL,
                    occurrences=2,
                    recommendation="Always set a stop loss before entering any trade",
                ),
                RiskViolation(
                    type=ViolationType.OVERSIZED_POSITION,
                    severity=Severity.WARNING,
                    occurrences=1,
                ),
            ]
        )
        plan = generate_improvement_plan([], risk, [], StrategyExecutionScore(plan_adherence=100))
        (action,) = plan.immediate_actions
        assert action.id == "risk-no_stop_loss"
        assert action.title == "Fix no stop loss"
        assert action.category == ActionCategory.RISK
        assert action.priority == Priority.CRITICAL
        assert action.description == "Always set a stop loss before entering any trade"

    def test_weaknesses_become_short_term_goals(self):
        weaknesses = [
            _weakness("overconfidence", WeaknessSeverity.SEVERE),
            _weakness("impulsivity", WeaknessSeverity.MODERATE),
        ]
        plan = generate_improvement_plan([], RiskAnalysis(), weaknesses, StrategyExecutionScore(plan_adherence=100))
        first, second = plan.short_term_goals
        assert first.id == "psych-overconfidence"
        assert first.priority == Priority.HIGH
        assert first.measurable_target == "Reduce overconfidence occurrences by 50%"
        assert first.success_criteria == ["a", "b", "c"]
        assert second.priority == Priority.MEDIUM

    def test_low_plan_adherence_is_a_medium_term_goal(self):
        plan = generate_improvement_plan([], RiskAnalysis(), [], StrategyExecutionScore(plan_adherence=49.6))
        (goal,) = plan.medium_term_goals
        assert goal.id == "exec-plan"
        assert goal.description == "Currently only planning 50% of trades"

    def test_only_high_impact_patterns_are_long_term_goals(self):
        patterns = [
            _pattern("revenge_trading", Impact.CRITICAL),
            _pattern("strategy_hopping", Impact.MEDIUM),
            _pattern("overtrading", Impact.HIGH),
        ]
        plan = generate_improvement_plan(patterns, RiskAnalysis(), [], StrategyExecutionScore(plan_adherence=100))
        assert [g.id for g in plan.long_term_goals] == ["behavior-revenge_trading", "behavior-overtrading"]
        assert [g.priority for g in plan.long_term_goals] == [Priority.CRITICAL, Priority.HIGH]
        assert plan.long_term_goals[0].title == "Eliminate Revenge Trading"
