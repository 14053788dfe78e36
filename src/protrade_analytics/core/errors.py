"""Custom exception hierarchy for the journal analytics.

The analytics functions themselves never raise on degenerate input; these
errors belong to the edges (configuration, dataset loading, sample gating).
"""


class AnalyticsError(Exception):
    """Base exception for all journal analytics errors."""


# --- Configuration ---
class ConfigError(AnalyticsError):
    """Invalid or missing configuration."""


# --- Data ---
class DatasetError(AnalyticsError):
    """A trade dataset could not be read or validated."""


class InsufficientDataError(AnalyticsError):
    """Too few trades for a meaningful analysis."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"At least {required} trades required, got {available}"
        )
