"""
Transport Package

This package contains the transport interface used to reach the completion
service, its OpenAI Responses implementation and the retrying decorator.
"""

from knowhow.config import KnowHowConfig

from .base import BaseTransport
from .openai_provider import OpenAIResponsesTransport
from .retrying import RetryingTransport


def build_transport(config: KnowHowConfig) -> BaseTransport:
    """OpenAI transport wrapped with the configured backoff policy."""
    return RetryingTransport(
        OpenAIResponsesTransport(config),
        max_attempts=config.max_attempts,
        initial_delay=config.initial_delay,
        factor=config.backoff_factor,
    )


__all__ = [
    "BaseTransport",
    "OpenAIResponsesTransport",
    "RetryingTransport",
    "build_transport",
]
