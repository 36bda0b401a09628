"""Utility functions for git-branch-orchestrator.

This package provides utility modules:
- logging: Logging configuration and logger creation
- cancellation: Cancellation token used by the event polling loop
"""

from .logging import setup_logging, get_logger, ColoredFormatter
from .cancellation import CancellationToken

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "ColoredFormatter",
    # Cancellation
    "CancellationToken",
]
