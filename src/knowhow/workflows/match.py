"""
Match mode.

Compares crash.txt against every minimal case in cases_min/ and stores the
model's ranking in out/similar_cases.json.
"""

import logging

from knowhow.exceptions import MissingInputError
from knowhow.infrastructure.llm.request_builder import build_match_request
from knowhow.models.similarity import SimilarCasesResult
from knowhow.storage.case_store import render_known_cases, to_pretty_json

from .base import CRASH_FILE, BaseRunner

logger = logging.getLogger(__name__)

SIMILAR_CASES_ARTIFACT = "similar_cases.json"

NO_MATCH_MESSAGE = "🤷 No similar case found in the knowledge base yet."


def format_for_chat(result: SimilarCasesResult) -> str:
    """Chat-style summary of the highest ranked hit."""
    best = result.best
    if best is None:
        return NO_MATCH_MESSAGE

    return "\n".join([
        "🔎 **We've seen this crash before**",
        "",
        f"– Case: {best.case_id}",
        f"– Reason: {best.similarity_reason.strip()}",
        f"– PR: {best.related_pr.url} ({best.related_pr.title})",
    ])


class SimilarityRunner(BaseRunner):
    """Drives the match workflow"""

    mode = "match"

    async def run(self) -> SimilarCasesResult:
        """
        Rank known cases by similarity to the new crash

        Raises:
            MissingInputError: If crash.txt is missing or no minimal case exists
            ApiError: If the service embedded an error in its response
            ResponseParseError: If no answer text could be found
            SchemaViolationError: If the answer does not decode into SimilarCasesResult
            CaseStoreError: If a stored minimal case is corrupt
        """
        self._require_inputs([CRASH_FILE])

        run_analyze_hint = "Run 'analyze' at least once to generate minimal cases"
        if not self.store.has_minimal_case_dir():
            raise MissingInputError(
                f"Directory {self.store.minimal_cases_dir} does not exist",
                hint=run_analyze_hint,
            )
        cases = self.store.load_minimal_cases()
        if not cases:
            raise MissingInputError(
                f"No .json case found in {self.store.minimal_cases_dir}",
                hint=run_analyze_hint,
            )

        logger.info(f"[match] Comparing against {len(cases)} known case(s)")
        request = build_match_request(
            self.config, self._read_input(CRASH_FILE), render_known_cases(cases)
        )
        text = await self._exchange(request)
        result = self._decode(SimilarCasesResult, text)

        self.store.write_artifact(SIMILAR_CASES_ARTIFACT, to_pretty_json(result))
        logger.info(f"[match] {len(result.similar_cases)} similar case(s) returned")
        return result
