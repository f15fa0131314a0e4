"""
Observability module.

Provides structured logging, correlation ID tracking and request logging.
"""

from exam_helper.observability.correlation import get_correlation_id, set_correlation_id
from exam_helper.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
