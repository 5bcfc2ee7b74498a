"""
Retrying transport decorator.

Wraps any BaseTransport with the exponential backoff policy from
knowhow.utils.resilience. The wrapped transport never knows it is retried.
"""

import asyncio
import logging

from knowhow.models.api_models import ResponsesRequest
from knowhow.utils.resilience import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_INITIAL_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    SleepFunc,
    create_backoff_retry,
)

from .base import BaseTransport

logger = logging.getLogger(__name__)


class RetryingTransport(BaseTransport):
    """Transport decorator retrying every failure with exponential backoff"""

    def __init__(
        self,
        inner: BaseTransport,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        factor: float = DEFAULT_BACKOFF_FACTOR,
        sleep: SleepFunc = asyncio.sleep,
    ):
        super().__init__()
        self.inner = inner
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.factor = factor
        self.sleep = sleep

    @property
    def transport_name(self) -> str:
        return f"retrying({self.inner.transport_name})"

    async def call(self, request: ResponsesRequest) -> str:
        """Call the inner transport, retrying on any exception.

        Raises:
            Exception: The last error raised by the inner transport, unchanged
        """
        retrying = create_backoff_retry(
            max_attempts=self.max_attempts,
            initial_delay=self.initial_delay,
            factor=self.factor,
            sleep=self.sleep,
        )
        self._start_timing()
        body = await retrying(self.inner.call, request)
        attempts = retrying.statistics.get("attempt_number", 1)
        if attempts > 1:
            logger.info(
                f"{self.inner.transport_name} succeeded on attempt {attempts} "
                f"after {self._get_response_time_ms()}ms"
            )
        return body
