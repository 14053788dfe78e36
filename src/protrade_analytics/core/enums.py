"""Enumerations used across the journal analytics."""

from enum import Enum


class TradeType(str, Enum):
    BUY = "buy"
    SELL = "sell"


class TradeStatus(str, Enum):
    TP = "TP"
    SL = "SL"
    BE = "BE"
    OPEN = "open"


class AssetCategory(str, Enum):
    FOREX = "Forex"
    CRYPTO = "Crypto"
    STOCKS = "Stocks"
    INDICES = "Indices"
    COMMODITIES = "Commodities"


class StrategyStatus(str, Enum):
    ACTIVE = "Active"
    TESTING = "Testing"
    ARCHIVED = "Archived"


class Grade(str, Enum):
    """Letter grade shared by every composite score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class Reliability(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNTESTED = "untested"


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class PatternFrequency(str, Enum):
    RARE = "rare"
    OCCASIONAL = "occasional"
    FREQUENT = "frequent"
    PERSISTENT = "persistent"


class Impact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ViolationType(str, Enum):
    OVERSIZED_POSITION = "oversized_position"
    NO_STOP_LOSS = "no_stop_loss"
    MARTINGALE = "martingale"
    REVENGE_TRADING = "revenge_trading"
    EXCESSIVE_LEVERAGE = "excessive_leverage"


class Severity(str, Enum):
    """Severity of a risk violation or red flag."""

    WARNING = "warning"
    CRITICAL = "critical"


class WeaknessType(str, Enum):
    EMOTIONAL = "emotional"
    COGNITIVE = "cognitive"
    BEHAVIORAL = "behavioral"


class WeaknessSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class DeviationImpact(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ActionCategory(str, Enum):
    RISK = "risk"
    PSYCHOLOGY = "psychology"
    STRATEGY = "strategy"
    DISCIPLINE = "discipline"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RoutineTime(str, Enum):
    PRE_MARKET = "pre-market"
    DURING_MARKET = "during-market"
    POST_MARKET = "post-market"
    DAILY = "daily"


class ExerciseType(str, Enum):
    MINDFULNESS = "mindfulness"
    JOURNALING = "journaling"
    VISUALIZATION = "visualization"
    REVIEW = "review"


class TradeOutcome(str, Enum):
    """Win / loss / break-even classification by signed profit."""

    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"
