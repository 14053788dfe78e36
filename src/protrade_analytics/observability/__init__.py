"""Logging setup for the journal analytics."""

from .logger import get_logger, get_run_id, new_run_id, setup_logging

__all__ = ["get_logger", "get_run_id", "new_run_id", "setup_logging"]
