"""
Logging utilities for safe structured logging.

Keeps document text, raw upload bytes and embedding vectors out of log
records: such values are reduced to a short summary before they are
attached as extra context.

Dependencies: logging (stdlib), numpy, exam_helper.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

import numpy as np

from exam_helper.core.exceptions import ExamHelperException
from exam_helper.models.chunk import Chunk


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert a value to a short string for a log record.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, Chunk):
        summary = f"Chunk({value.chunk_id}, {len(value.content)} chars, page={value.page})"
    elif isinstance(value, np.ndarray):
        summary = f"ndarray(shape={value.shape})"
    elif isinstance(value, (bytes, bytearray)):
        summary = f"bytes({len(value)})"
    elif isinstance(value, (list, tuple)):
        summary = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        summary = f"dict({len(value)} keys)"
    else:
        summary = str(value)

    if len(summary) > max_length:
        return summary[:max_length] + f"... (truncated, {len(summary)} total)"
    return summary


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with summarized context as record attributes.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log a failure with its context.

    Application exceptions are expected outcomes (bad uploads, provider
    outages) and are logged at WARNING with their details; anything else
    is logged at ERROR with the traceback.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__

    if isinstance(exc, ExamHelperException):
        extra["error_msg"] = exc.message
        extra["error_details"] = safe_log_value(exc.details)
        logger.warning(f"{message}: {exc.message}", extra=extra)
    else:
        extra["error_msg"] = safe_log_value(str(exc))
        logger.exception(message, extra=extra)
