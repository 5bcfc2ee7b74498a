"""Exception hierarchy for the KnowHow crash-case pipeline.

Every failure the pipeline reports on purpose derives from ``KnowHowError``
so the CLI can handle them with a single clause. Transport failures are the
exception: they are whatever aiohttp or asyncio raised, retried by
``RetryingTransport`` and then propagated unchanged.

Exception tree::

    KnowHowError
    ├── ConfigurationError
    │   └── MissingInputError
    ├── ApiError
    ├── ResponseParseError
    ├── SchemaViolationError
    └── CaseStoreError
"""

from pathlib import Path
from typing import Optional, Union


class KnowHowError(Exception):
    """Base exception for all KnowHow errors.

    Attributes:
        message: Human-readable error description.
        hint: Optional remediation hint shown to the operator.
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return self.message


class ConfigurationError(KnowHowError):
    """Missing credential, invalid mode or any other setup problem.

    Never retried; the process exits nonzero.
    """


class MissingInputError(ConfigurationError):
    """A required input file or the minimal-case base is missing."""


class ApiError(KnowHowError):
    """Error object embedded in the completion service response."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        error_type: Optional[str] = None,
    ):
        self.code = code
        self.error_type = error_type
        super().__init__(message)

    def _format_message(self) -> str:
        parts = ["API error"]
        if self.code:
            parts.append(f" ({self.code})")
        if self.error_type:
            parts.append(f" [{self.error_type}]")
        return f"{''.join(parts)}: {self.message}"


class ResponseParseError(KnowHowError):
    """The response envelope had neither direct text nor nested content text."""

    def __init__(self, message: str, raw_path: Optional[Union[str, Path]] = None):
        self.raw_path = raw_path
        super().__init__(message)

    def _format_message(self) -> str:
        if self.raw_path:
            return f"{self.message}. See {self.raw_path}"
        return self.message


class SchemaViolationError(KnowHowError):
    """The extracted text did not decode into the expected document."""

    def __init__(self, message: str, document: Optional[str] = None):
        self.document = document
        super().__init__(message)

    def _format_message(self) -> str:
        if self.document:
            return f"{self.document}: {self.message}"
        return self.message


class CaseStoreError(KnowHowError):
    """A stored case file could not be decoded."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        hint: Optional[str] = None,
    ):
        self.path = path
        super().__init__(message, hint=hint)

    def _format_message(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message
