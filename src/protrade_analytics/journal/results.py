"""Result structures returned by the journal analyses.

Every value is final: percentages, grades and counts are computed once
here so a renderer never re-derives them.  ``model_dump(mode="json")``
yields plain JSON-serializable dicts.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ..core.enums import (
    ActionCategory,
    DeviationImpact,
    ExerciseType,
    Grade,
    Impact,
    PatternFrequency,
    Priority,
    Reliability,
    RoutineTime,
    Severity,
    Trend,
    ViolationType,
    WeaknessSeverity,
    WeaknessType,
)


class _Result(BaseModel):
    model_config = {"frozen": True}


# ================================================================== #
# Trade Aggregator                                                    #
# ================================================================== #

class GroupSummary(_Result):
    """Reduction of one trade group."""

    count: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: float = 0.0  # % of all trades in the group
    total_profit: float = 0.0
    avg_profit: float = 0.0
    volatility: float = 0.0  # population std dev of profit


# ================================================================== #
# Quantitative metrics                                                #
# ================================================================== #

class DecisionQualityComponents(_Result):
    plan_quality: int = 0
    risk_management: int = 0
    execution_precision: int = 0
    emotional_control: int = 0
    documentation: int = 0


class DecisionQualityIndex(_Result):
    score: int = 0
    grade: Grade = Grade.F
    components: DecisionQualityComponents = Field(default_factory=DecisionQualityComponents)
    penalty: float = 0.0  # percentage points
    consistency_multiplier: float = 1.0
    violations: list[str] = Field(default_factory=list)
    confidence_interval: tuple[int, int] = (0, 0)


class DominantEmotion(_Result):
    emotion: str
    frequency: int  # % of tracked emotions
    avg_profit: float
    win_rate: float


class EmotionalImpactScore(_Result):
    score: int = 0
    emotional_awareness: float = 0.0  # %
    emotional_stability: float = 0.0  # 0-1
    emotional_bias_index: float = 0.0  # -0.5 to 0.5
    emotion_performance_correlation: float = 0.0  # -1 to 1
    dominant_emotions: list[DominantEmotion] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class StrategyScore(_Result):
    strategy: str
    coefficient: int = 0
    reliability: Reliability = Reliability.UNTESTED
    win_rate: float = 0.0
    profit_factor: float = 0.0
    consistency: float = 0.0
    sample_size: int = 0
    expectancy: float = 0.0
    max_consecutive_losses: int = 0
    confidence_interval: tuple[int, int] = (0, 0)


class StrategyReliabilityCoefficient(_Result):
    overall_coefficient: int = 0
    strategy_scores: list[StrategyScore] = Field(default_factory=list)
    best_strategy: str | None = None
    worst_strategy: str | None = None
    diversification_score: int = 0


class SessionBreakdown(_Result):
    session: str
    trades: int
    total_profit: float
    win_rate: float
    avg_trade: float
    volatility: float
    trend: Trend = Trend.STABLE


class TimeBasedPatterns(_Result):
    best_hour: int | None = None
    worst_hour: int | None = None
    best_day: str | None = None
    worst_day: str | None = None


class SessionPerformanceStability(_Result):
    stability_score: int = 0
    session_breakdown: list[SessionBreakdown] = Field(default_factory=list)
    most_stable_session: str | None = None
    most_volatile_session: str | None = None
    session_consistency_index: int = 0
    time_based_patterns: TimeBasedPatterns = Field(default_factory=TimeBasedPatterns)


class QuantitativeMetrics(_Result):
    decision_quality_index: DecisionQualityIndex = Field(default_factory=DecisionQualityIndex)
    emotional_impact_score: EmotionalImpactScore = Field(default_factory=EmotionalImpactScore)
    strategy_reliability_coefficient: StrategyReliabilityCoefficient = Field(
        default_factory=StrategyReliabilityCoefficient
    )
    session_performance_stability: SessionPerformanceStability = Field(
        default_factory=SessionPerformanceStability
    )

    edge_consistency_ratio: float = 0.0  # 0-1
    risk_adjusted_discipline: int = 0
    behavioral_entropy: float = 0.0  # 0-1
    market_adaptability_index: int = 0

    composite_score: int = 0
    overall_grade: Grade = Grade.F


# ================================================================== #
# Psychological profile                                               #
# ================================================================== #

class BehavioralPattern(_Result):
    id: str
    name: str
    description: str
    frequency: PatternFrequency
    impact: Impact
    evidence: list[str] = Field(default_factory=list)
    trades_affected: int = 0


class RiskViolation(_Result):
    type: ViolationType
    severity: Severity
    occurrences: int
    examples: list[str] = Field(default_factory=list)
    recommendation: str = ""


class RiskAnalysis(_Result):
    overall_score: int = 0
    position_sizing_grade: Grade = Grade.F
    risk_reward_grade: Grade = Grade.F
    max_drawdown_respect: float = 0.0  # % of trades with a stop loss
    average_risk_per_trade: float = 0.0  # %
    average_planned_rr: float = 0.0
    risk_violations: list[RiskViolation] = Field(default_factory=list)
    capital_preservation_score: int = 0


class PsychologicalWeakness(_Result):
    id: str
    type: WeaknessType
    name: str
    description: str
    triggers: list[str] = Field(default_factory=list)
    manifestations: list[str] = Field(default_factory=list)
    frequency: int = 0  # % of trades
    severity: WeaknessSeverity = WeaknessSeverity.MILD
    countermeasures: list[str] = Field(default_factory=list)


class StrategyDeviation(_Result):
    rule: str
    violation_rate: float
    impact: DeviationImpact
    context: str


class StrategyExecutionScore(_Result):
    overall_score: int = 0
    plan_adherence: float = 0.0
    entry_timing: float = 0.0
    exit_timing: float = 0.0
    strategy_consistency: float = 0.0
    rule_following: float = 0.0
    common_deviations: list[StrategyDeviation] = Field(default_factory=list)


class ConsistencyMetrics(_Result):
    win_rate: float = 0.0
    profit_factor: float = 0.0
    expectancy: float = 0.0
    consecutive_wins: int = 0
    consecutive_losses: int = 0
    volatility_of_returns: float = 0.0
    trading_frequency_consistency: float = 0.0  # %
    emotional_consistency: float = 0.0  # %


class ActionItem(_Result):
    id: str
    category: ActionCategory
    priority: Priority
    title: str
    description: str
    expected_outcome: str
    timeframe: str
    measurable_target: str
    success_criteria: list[str] = Field(default_factory=list)


class Routine(_Result):
    time_of_day: RoutineTime
    activity: str
    duration: str
    purpose: str


class Exercise(_Result):
    name: str
    type: ExerciseType
    frequency: str
    instructions: list[str] = Field(default_factory=list)
    expected_benefit: str


class ImprovementPlan(_Result):
    immediate_actions: list[ActionItem] = Field(default_factory=list)
    short_term_goals: list[ActionItem] = Field(default_factory=list)  # 2-4 weeks
    medium_term_goals: list[ActionItem] = Field(default_factory=list)  # 1-3 months
    long_term_goals: list[ActionItem] = Field(default_factory=list)  # 3-6 months
    daily_routines: list[Routine] = Field(default_factory=list)
    psychological_exercises: list[Exercise] = Field(default_factory=list)


class RedFlag(_Result):
    id: str
    severity: Severity
    issue: str
    description: str
    consequence: str
    urgent_action: str


class Strength(_Result):
    id: str
    area: str
    description: str
    evidence: list[str] = Field(default_factory=list)
    leverage_opportunity: str


class PsychologicalProfile(_Result):
    trader_id: str
    analysis_date: str
    overall_score: int = 0
    grade: Grade = Grade.F

    behavioral_patterns: list[BehavioralPattern] = Field(default_factory=list)
    risk_management: RiskAnalysis = Field(default_factory=RiskAnalysis)
    psychological_weaknesses: list[PsychologicalWeakness] = Field(default_factory=list)
    strategy_execution: StrategyExecutionScore = Field(default_factory=StrategyExecutionScore)
    consistency_metrics: ConsistencyMetrics = Field(default_factory=ConsistencyMetrics)

    improvement_plan: ImprovementPlan = Field(default_factory=ImprovementPlan)
    red_flags: list[RedFlag] = Field(default_factory=list)
    strengths: list[Strength] = Field(default_factory=list)


# ================================================================== #
# Dashboard                                                           #
# ================================================================== #

class HeadlineStats(_Result):
    total_trades: int = 0
    win_rate: float = 0.0  # % of all trades
    total_profit: float = 0.0
    best_trade: float = 0.0
    average_rr: float = 0.0  # over trades with an actual R:R
    profit_factor: float = 0.0
    expectancy: float = 0.0
    risk_adjusted_ratio: float = 0.0  # expectancy / average loss


class EquityPoint(_Result):
    label: str
    balance: float
    drawdown: float  # % below running peak, <= 0


class HourBucket(_Result):
    hour: str  # "HH:00"
    count: int = 0


class WeekdayBucket(_Result):
    day: str
    count: int = 0
    profit: float = 0.0


class DailyBreakdown(_Result):
    date: str
    profit: float
    win_pct: int  # share of the day's traded volume won
    loss_pct: int


class SessionEquity(_Result):
    session: str
    trade_count: int = 0
    profit: float = 0.0
    win_rate: int = 0
    starting: float = 0.0
    equity: float = 0.0


class MistakeCount(_Result):
    label: str
    count: int


class EmotionWinRate(_Result):
    emotion: str
    win_rate: int


class MindsetSnapshot(_Result):
    discipline: int = 0
    stability: int = 0
    risk_adherence: int = 0
    mistakes: list[MistakeCount] = Field(default_factory=list)
    emotion_stats: list[EmotionWinRate] = Field(default_factory=list)


class DecisionQualitySnapshot(_Result):
    score: int = 0
    grade: Grade = Grade.F
    total_trades: int = 0
    win_rate: int = 0
    current_streak: int = 0
    max_streak: int = 0
    plan_adherence: float = 0.0
    emotional_tracking: float = 0.0
    strategy_compliance: float = 0.0
    rules_following: float = 0.0
    risk_management: float = 0.0
    top_mistakes: list[MistakeCount] = Field(default_factory=list)
