"""
Retry policy for model provider calls.

Only transient failures are retried: timeouts, dropped connections and
provider responses with a retryable HTTP status (408, 429, 5xx). Client
errors such as a rejected key or a malformed request fail on the first
attempt.

Provider SDK errors are classified by the status code they carry
(`code` on google-api-core and google-genai errors, `status_code` or
`response.status_code` on HTTP client errors), following the exception
chain so wrapped errors are classified by their cause.

Dependencies: tenacity, exam_helper.configs.providers
System role: Shared backoff policy for embedding and generation adapters
"""

import asyncio
import logging

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from exam_helper.configs.providers import ProviderSettings

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


def _status_code(exc: BaseException) -> int | None:
    for candidate in (
        getattr(exc, "status_code", None),
        getattr(exc, "code", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    ):
        if isinstance(candidate, int):
            return candidate
    return None


def is_transient_error(exc: BaseException) -> bool:
    """
    Decide whether a failed provider call is worth another attempt.

    Args:
        exc: Exception raised by the call

    Returns:
        bool: True for timeouts, connection errors and retryable statuses
    """
    seen = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, (asyncio.TimeoutError, TimeoutError, ConnectionError)):
            return True
        status_code = _status_code(current)
        if status_code is not None:
            return status_code in RETRYABLE_STATUS_CODES
        current = current.__cause__ or current.__context__
    return False


def provider_retrying(settings: ProviderSettings, logger: logging.Logger, operation: str) -> AsyncRetrying:
    """
    Build the AsyncRetrying loop used around a single provider call.

    Args:
        settings: Attempt count and backoff bounds
        logger: Logger that records each retry
        operation: Name used in retry log lines

    Returns:
        AsyncRetrying: Retry controller that re-raises the last error
    """
    return AsyncRetrying(
        retry=retry_if_exception(is_transient_error),
        stop=stop_after_attempt(settings.max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.retry_initial_wait,
            max=settings.retry_max_wait,
            jitter=settings.retry_initial_wait,
        ),
        before_sleep=lambda retry_state: logger.warning(
            f"{logger.name}:{operation} - Retry {retry_state.attempt_number}/{settings.max_attempts} "
            f"after {type(retry_state.outcome.exception()).__name__}"
        ),
        reraise=True,
    )
