"""
Utilities Module

Provides shared utilities across the application:
- Logging configuration
- Custom exceptions
"""

from .logging import get_logger, setup_logging, log_learning_outcome
from .exceptions import (
    DictationError,
    TranscriptNotFoundError,
    CorrectionNotFoundError,
    CorrectionStoreError,
    AuthenticationError,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "log_learning_outcome",
    # Exceptions
    "DictationError",
    "TranscriptNotFoundError",
    "CorrectionNotFoundError",
    "CorrectionStoreError",
    "AuthenticationError",
]
