"""
Module: delivery/retry.py
Description: Retry curves for failed deliveries.

Maps each named retries option onto the retry mechanism of the transport
in use: tenacity strategies for webhook requests and slack_sdk retry
handlers for Web API calls.
"""

from typing import Any, Dict, List

import httpx
from slack_sdk.http_retry.async_handler import AsyncRetryHandler
from slack_sdk.http_retry.builtin_async_handlers import (
    AsyncConnectionErrorRetryHandler,
    AsyncRateLimitErrorRetryHandler,
)
from slack_sdk.http_retry.builtin_interval_calculators import (
    BackoffRetryIntervalCalculator,
    FixedValueRetryIntervalCalculator,
)
from slack_sdk.http_retry.jitter import RandomJitter
from tenacity import (
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
    wait_incrementing,
)

from slack_send.config.settings import Retries
from slack_send.utils.logger import get_logger

logger = get_logger(__name__)


def is_retryable_error(error: BaseException) -> bool:
    """
    Decide if a failed webhook request should be attempted again.

    Connection problems, rate limits and server errors are retried.
    Timeouts and client errors are not.

    Args:
        error: Exception raised by the request

    Returns:
        True if another attempt might succeed
    """
    if isinstance(error, httpx.TimeoutException):
        return False
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        return status == 429 or status >= 500
    return isinstance(error, httpx.TransportError)


def log_retry(retry_state) -> None:
    """Log an upcoming retry of a webhook request."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying the webhook request",
        attempt=retry_state.attempt_number,
        delay_seconds=retry_state.next_action.sleep if retry_state.next_action else 0,
        error=str(error),
    )


def webhook_retry_policy(option: Retries) -> Dict[str, Any]:
    """
    Build tenacity options for webhook requests.

    Args:
        option: Named retry curve

    Returns:
        Keyword arguments for tenacity.AsyncRetrying
    """
    if option == Retries.ZERO:
        return {"stop": stop_after_attempt(1)}
    if option == Retries.TEN:
        # 4 * 2 ** (n - 1) seconds, about 34 minutes before the 10th retry
        return {
            "retry": retry_if_exception(is_retryable_error),
            "stop": stop_after_attempt(11),
            "wait": wait_exponential_jitter(initial=4, max=3600, jitter=4),
        }
    if option == Retries.RAPID:
        # 12 seconds before the 12th retry
        return {
            "retry": retry_if_exception(is_retryable_error),
            "stop": stop_after_attempt(13),
            "wait": wait_incrementing(start=1, increment=1),
        }
    # 5 minutes before the 5th retry
    return {
        "retry": retry_if_exception(is_retryable_error),
        "stop": stop_after_attempt(6),
        "wait": wait_incrementing(start=60, increment=60),
    }


def client_retry_handlers(option: Retries) -> List[AsyncRetryHandler]:
    """
    Build slack_sdk retry handlers for Web API calls.

    Args:
        option: Named retry curve

    Returns:
        Handlers for connection errors and rate limits
    """
    if option == Retries.ZERO:
        return []
    if option == Retries.TEN:
        count = 10
        interval = BackoffRetryIntervalCalculator(backoff_factor=1.8, jitter=RandomJitter())
    elif option == Retries.RAPID:
        count = 10
        interval = FixedValueRetryIntervalCalculator(0.1)
    else:
        count = 5
        interval = FixedValueRetryIntervalCalculator(60)
    return [
        AsyncConnectionErrorRetryHandler(max_retry_count=count, interval_calculator=interval),
        AsyncRateLimitErrorRetryHandler(max_retry_count=count, interval_calculator=interval),
    ]
