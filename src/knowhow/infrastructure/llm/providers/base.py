"""
Base transport interface for the completion service.

A transport performs exactly one outbound call and returns the raw response
body. Retry, parsing and persistence are layered on top, so any transport
(including in-memory test doubles) can be used by the mode drivers.
"""

import time
from abc import ABC, abstractmethod
from typing import Optional

from knowhow.models.api_models import ResponsesRequest


class BaseTransport(ABC):
    """Abstract base class for completion service transports"""

    def __init__(self):
        self.start_time: Optional[float] = None

    @property
    @abstractmethod
    def transport_name(self) -> str:
        """Return the unique name of this transport"""
        pass

    @abstractmethod
    async def call(self, request: ResponsesRequest) -> str:
        """
        Send one request and return the raw response body

        Args:
            request: Fully built request envelope

        Returns:
            Response body as text, whatever the HTTP status
        """
        pass

    def _start_timing(self):
        """Start timing for response measurement"""
        self.start_time = time.time()

    def _get_response_time_ms(self) -> int:
        """Get response time in milliseconds"""
        if self.start_time is None:
            return 0
        return int((time.time() - self.start_time) * 1000)
