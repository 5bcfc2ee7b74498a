"""
Shared plumbing for the mode drivers.

Each run performs one exchange with the completion service:
call (retried by the transport) -> persist raw body -> check for an embedded
error -> extract answer text -> persist text -> decode into a typed document.
"""

import logging
from typing import Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from knowhow.config import KnowHowConfig
from knowhow.exceptions import MissingInputError, SchemaViolationError
from knowhow.infrastructure.llm.envelope import parse_response
from knowhow.infrastructure.llm.providers import BaseTransport
from knowhow.models.api_models import ResponsesRequest
from knowhow.storage.case_store import CaseStore

logger = logging.getLogger(__name__)

CRASH_FILE = "crash.txt"
PR_FILE = "pr.txt"

DocumentT = TypeVar("DocumentT", bound=BaseModel)


class BaseRunner:
    """Base class for the analyze and match mode drivers"""

    mode: str = ""

    def __init__(
        self,
        config: KnowHowConfig,
        transport: BaseTransport,
        store: Optional[CaseStore] = None,
    ):
        self.config = config
        self.transport = transport
        self.store = store or CaseStore(config.work_dir)

    @property
    def raw_artifact(self) -> str:
        return f"response_raw_{self.mode}.json"

    @property
    def text_artifact(self) -> str:
        return f"output_text_{self.mode}.json"

    def _require_inputs(self, names: Iterable[str]) -> None:
        """Raise MissingInputError naming every absent input file."""
        missing = [n for n in names if not (self.config.work_dir / n).is_file()]
        if missing:
            work_dir = self.config.work_dir.resolve()
            raise MissingInputError(
                f"Missing input file(s): {', '.join(missing)}",
                hint=f"Place {' and '.join(missing)} in the working directory ({work_dir})",
            )

    def _read_input(self, name: str) -> str:
        # Crash dumps may carry stray bytes; undecodable ones become U+FFFD
        return (self.config.work_dir / name).read_text(encoding="utf-8", errors="replace")

    async def _exchange(self, request: ResponsesRequest) -> str:
        """Call the service and return the extracted answer text."""
        logger.info(f"[{self.mode}] Calling {self.transport.transport_name} with model {request.model}")
        raw = await self.transport.call(request)

        raw_path = self.store.write_artifact(self.raw_artifact, raw)
        text = parse_response(raw, raw_path)
        self.store.write_artifact(self.text_artifact, text)
        return text

    def _decode(self, model_cls: Type[DocumentT], text: str) -> DocumentT:
        """Decode the answer text; any failure means the schema was not honored."""
        try:
            return model_cls.model_validate_json(text)
        except ValidationError as e:
            raise SchemaViolationError(
                f"Answer does not match the schema ({e.error_count()} error(s)): {e}",
                document=model_cls.__name__,
            ) from e
