"""
OpenAI Responses transport.

POSTs a ResponsesRequest to the /responses endpoint with bearer auth.
"""

import logging
from typing import Dict

import aiohttp

from knowhow.config import KnowHowConfig
from knowhow.models.api_models import ResponsesRequest

from .base import BaseTransport

logger = logging.getLogger(__name__)


class OpenAIResponsesTransport(BaseTransport):
    """OpenAI Responses API transport implementation"""

    def __init__(self, config: KnowHowConfig):
        super().__init__()
        self.config = config

    @property
    def transport_name(self) -> str:
        return "openai"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.config.request_timeout,
            connect=self.config.connect_timeout,
        )

    async def call(self, request: ResponsesRequest) -> str:
        """POST the request and return the body text.

        The HTTP status is not inspected here; an error embedded in the body
        is detected by the envelope parser.
        """
        self._start_timing()

        async with aiohttp.ClientSession() as session:
            async with session.post(
                self.config.responses_url,
                headers=self._headers(),
                json=request.to_payload(),
                timeout=self._timeout(),
            ) as response:
                body = await response.text()

        logger.info(
            f"{self.transport_name} responded {response.status} "
            f"in {self._get_response_time_ms()}ms ({len(body)} bytes)"
        )
        return body
