"""
Analyze mode.

Reads crash.txt and pr.txt, asks the model for a structured case, and stores
it three times: out/case.json, cases/case-<id>.json and the minimal
projection in cases_min/case-<id>.json.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List

from knowhow.core.projection import extract_related_pr, generate_case_id, to_minimal_case
from knowhow.infrastructure.llm.request_builder import build_analyze_request
from knowhow.models.case import CaseOutput, MinimalCase
from knowhow.storage.case_store import to_pretty_json

from .base import CRASH_FILE, PR_FILE, BaseRunner

logger = logging.getLogger(__name__)

CASE_ARTIFACT = "case.json"


@dataclass
class AnalyzeResult:
    """Outcome of one analyze run"""

    case_id: str
    case: CaseOutput
    minimal_case: MinimalCase
    written: List[Path] = field(default_factory=list)


class AnalyzeRunner(BaseRunner):
    """Drives the analyze workflow"""

    mode = "analyze"

    def __init__(self, *args, clock: Callable[[], datetime] = datetime.now, **kwargs):
        super().__init__(*args, **kwargs)
        self.clock = clock

    async def run(self) -> AnalyzeResult:
        """
        Analyze the crash and its fixing PR and persist the resulting case

        Returns:
            AnalyzeResult with the case id, both documents and written paths

        Raises:
            MissingInputError: If crash.txt or pr.txt is missing
            ApiError: If the service embedded an error in its response
            ResponseParseError: If no answer text could be found
            SchemaViolationError: If the answer does not decode into CaseOutput
        """
        self._require_inputs([CRASH_FILE, PR_FILE])
        crash_text = self._read_input(CRASH_FILE)
        pr_text = self._read_input(PR_FILE)

        request = build_analyze_request(self.config, crash_text, pr_text)
        text = await self._exchange(request)
        case = self._decode(CaseOutput, text)

        pretty = to_pretty_json(case)
        written = [self.store.write_artifact(CASE_ARTIFACT, pretty)]

        case_id = generate_case_id(self.clock())
        written.append(self.store.save_case(case_id, case))

        minimal = to_minimal_case(case_id, case, extract_related_pr(pr_text))
        written.append(self.store.save_minimal_case(minimal))

        logger.info(f"[analyze] Stored case {minimal.case_id} ({case.crash_signature.exception})")
        return AnalyzeResult(case_id=case_id, case=case, minimal_case=minimal, written=written)
