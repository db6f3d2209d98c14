"""Utility modules."""

from .logging import get_logger, preview, setup_logging
from .retry import retry_async

__all__ = [
    "setup_logging",
    "get_logger",
    "preview",
    "retry_async",
]
