"""
Shared utilities: structured logging and error tracking.
"""

from .error_handling import (
    ErrorCategory,
    ErrorSeverity,
    ErrorTracker,
    get_error_tracker,
    with_error_handling,
)
from .logging import get_logger, setup_logging

__all__ = [
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorTracker",
    "get_error_tracker",
    "with_error_handling",
    "get_logger",
    "setup_logging",
]
