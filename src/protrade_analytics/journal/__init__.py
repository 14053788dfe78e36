"""Trade Journal Analytics: quantitative and psychological self-measurement.

Turns a journal's trades, sessions and strategies into statistics,
composite behavioral scores and a rule-based improvement plan.  Every
entry point is a pure function of its input collections.

Key components
--------------
**Quantitative metrics**

compute_quantitative_metrics       DQI, EIS, SRC, SPS + composite grade
calculate_decision_quality_index   Process quality independent of outcome
calculate_emotional_impact_score   Emotional awareness, stability and bias
calculate_strategy_reliability     Per-strategy statistical reliability
calculate_session_stability        Cross-session consistency

**Psychological profile**

generate_profile                   Full profile with plan, flags, strengths
analyze_behavioral_patterns        Overtrading, revenge, FOMO, hopping, emotion
analyze_risk_management            Sizing/R:R grades and risk violations
identify_psychological_weaknesses  Loss aversion, bias, overconfidence, impulsivity
analyze_strategy_execution         Plan, timing and rule fidelity
calculate_consistency_metrics      Edge, streaks and trading rhythm
generate_improvement_plan          Tiered action items and fixed routines

**Building blocks**

group_by / summarize               Trade Aggregator
sort_chronologically               Ordering for sequential detectors
"""

from .aggregator import group_by, group_by_name, sort_chronologically, summarize
from .behavior import analyze_behavioral_patterns
from .consistency import calculate_consistency_metrics
from .decision_quality import calculate_decision_quality_index
from .emotional_impact import calculate_emotional_impact_score
from .execution import analyze_strategy_execution
from .improvement_plan import generate_improvement_plan
from .profiler import generate_profile, require_profile_sample
from .quantitative import compute_quantitative_metrics
from .risk_analysis import analyze_risk_management
from .session_stability import calculate_session_stability
from .strategy_reliability import calculate_strategy_reliability
from .weaknesses import identify_psychological_weaknesses

__all__ = [
    "group_by",
    "group_by_name",
    "sort_chronologically",
    "summarize",
    "analyze_behavioral_patterns",
    "calculate_consistency_metrics",
    "calculate_decision_quality_index",
    "calculate_emotional_impact_score",
    "analyze_strategy_execution",
    "generate_improvement_plan",
    "generate_profile",
    "require_profile_sample",
    "compute_quantitative_metrics",
    "analyze_risk_management",
    "calculate_session_stability",
    "calculate_strategy_reliability",
    "identify_psychological_weaknesses",
]
