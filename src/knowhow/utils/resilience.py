"""Resilience utilities for the completion service call.

This module provides the backoff retry policy used around every transport
call. The policy retries on any exception: timeouts, connection failures and
all other errors raised during the call are treated alike.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_INITIAL_DELAY = 1.0
DEFAULT_BACKOFF_FACTOR = 2.0


def _log_retry_attempt(retry_state: RetryCallState) -> None:
    """Log the failed attempt before sleeping."""
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        f"[Resilience] Attempt {retry_state.attempt_number} failed after "
        f"{retry_state.seconds_since_start:.1f}s, retrying in {delay:.1f}s. "
        f"Exception: {exception!r}"
    )


def create_backoff_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    factor: float = DEFAULT_BACKOFF_FACTOR,
    sleep: SleepFunc = asyncio.sleep,
) -> AsyncRetrying:
    """Create an async retry controller with exponential backoff.

    Delays between attempts are ``initial_delay * factor ** (n - 1)`` with no
    jitter and no cap, so the defaults wait 1s, 2s, 4s across four attempts.

    Args:
        max_attempts: Total number of attempts, including the first
        initial_delay: Delay before the second attempt (seconds)
        factor: Multiplier applied to the delay after each attempt
        sleep: Coroutine used to wait between attempts

    Returns:
        An AsyncRetrying that re-raises the last exception when exhausted

    Example:
        ```python
        retrying = create_backoff_retry(max_attempts=3)
        body = await retrying(transport.call, request)
        ```
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=initial_delay, exp_base=factor, min=0),
        retry=retry_if_exception_type(Exception),
        before_sleep=_log_retry_attempt,
        sleep=sleep,
        reraise=True,
    )
