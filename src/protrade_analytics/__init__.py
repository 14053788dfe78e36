"""ProTrade journal analytics: statistics, composite scores and profiles for a trading journal."""

__version__ = "0.1.0"
