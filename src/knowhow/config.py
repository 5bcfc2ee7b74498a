"""
Runtime configuration for the KnowHow pipeline.

A single ``KnowHowConfig`` is built once per invocation and passed to each
mode driver. Every field has a default except the API key; the prompt
templates and model id can be overridden per instance.

Environment Variables:
    OPENAI_API_KEY: Bearer token for the completion service (required)
    KNOWHOW_MODEL: Model identifier (default: gpt-4o-mini)
    OPENAI_API_BASE: Service base URL (default: https://api.openai.com/v1)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from knowhow.exceptions import ConfigurationError
from knowhow.prompts import (
    ANALYZE_INSTRUCTIONS,
    MATCH_INSTRUCTIONS,
    PROMPT_ANALYZE,
    PROMPT_MATCH,
)

logger = logging.getLogger(__name__)

API_KEY_VAR = "OPENAI_API_KEY"
MODEL_VAR = "KNOWHOW_MODEL"
BASE_URL_VAR = "OPENAI_API_BASE"

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"


@dataclass
class KnowHowConfig:
    """Configuration for one analyze or match run"""

    api_key: str = field(repr=False)
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL

    # Prompts
    analyze_prompt: str = PROMPT_ANALYZE
    match_prompt: str = PROMPT_MATCH
    analyze_instructions: str = ANALYZE_INSTRUCTIONS
    match_instructions: str = MATCH_INSTRUCTIONS

    # Transport (seconds); the total timeout covers slow model generation
    connect_timeout: float = 30.0
    request_timeout: float = 240.0

    # Retry: delays are initial_delay * backoff_factor ** (attempt - 1)
    max_attempts: int = 4
    initial_delay: float = 1.0
    backoff_factor: float = 2.0

    # Directory holding crash.txt / pr.txt and the output directories
    work_dir: Path = Path(".")

    def __post_init__(self):
        self.work_dir = Path(self.work_dir)
        self.base_url = self.base_url.rstrip("/")

    @property
    def responses_url(self) -> str:
        return f"{self.base_url}/responses"

    @classmethod
    def from_environment(
        cls, work_dir: Optional[Union[str, Path]] = None
    ) -> "KnowHowConfig":
        """Build a config from environment variables (and a local .env file).

        Raises:
            ConfigurationError: If OPENAI_API_KEY is missing or blank
        """
        work_dir = Path(work_dir) if work_dir is not None else Path(".")
        load_dotenv(work_dir / ".env")

        api_key = os.getenv(API_KEY_VAR, "").strip()
        if not api_key:
            raise ConfigurationError(
                f"{API_KEY_VAR} is not set",
                hint=f"Export {API_KEY_VAR} or add it to a .env file in {work_dir.resolve()}",
            )

        config = cls(
            api_key=api_key,
            model=os.getenv(MODEL_VAR) or DEFAULT_MODEL,
            base_url=os.getenv(BASE_URL_VAR) or DEFAULT_BASE_URL,
            work_dir=work_dir,
        )
        logger.debug(f"Loaded config: model={config.model}, base_url={config.base_url}")
        return config
