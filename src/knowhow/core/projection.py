"""Minimal-case derivation.

Turns a full CaseOutput plus the raw PR text into the searchable MinimalCase:
- generate_case_id(): wall-clock timestamp identifier
- extract_related_pr(): PR link and title scraped from the PR text
- to_minimal_case(): the projection itself
"""

import re
from datetime import datetime
from typing import Optional

from knowhow.models.case import UNKNOWN, CaseOutput, MinimalCase, RelatedPr

CASE_ID_FORMAT = "%Y%m%d-%H%M%S"
SUMMARY_MAX_CHARS = 280
TITLE_MAX_CHARS = 120

_PR_URL_RE = re.compile(r"https?://github\.com/[^\s]+/pull/\d+", re.IGNORECASE)
_TITLE_PREFIX = "title:"


def generate_case_id(now: Optional[datetime] = None) -> str:
    """Timestamp identifier, e.g. '20250117-143000'.

    Second resolution with no collision check: two runs in the same second
    get the same id.
    """
    return (now or datetime.now()).strftime(CASE_ID_FORMAT)


def _extract_title(pr_text: str) -> str:
    lines = [line.strip() for line in pr_text.splitlines()]

    for line in lines:
        if line.lower().startswith(_TITLE_PREFIX):
            title = line[len(_TITLE_PREFIX):].strip()
            if title:
                return title
            break

    for line in lines:
        if line:
            return line[:TITLE_MAX_CHARS]

    return UNKNOWN


def extract_related_pr(pr_text: str) -> RelatedPr:
    """Find the first GitHub PR URL and the PR title in free text.

    The title comes from the first 'Title:' line (any case), falling back to
    the first non-blank line cut at 120 characters. Either field is
    "unknown" when nothing matches.
    """
    match = _PR_URL_RE.search(pr_text)
    url = match.group(0) if match else UNKNOWN
    return RelatedPr(url=url, title=_extract_title(pr_text))


def to_minimal_case(case_id: str, case: CaseOutput, related_pr: RelatedPr) -> MinimalCase:
    """Project a full case onto its searchable minimal form."""
    return MinimalCase(
        case_id=f"case-{case_id}",
        crash_signature=case.crash_signature,
        problem_summary=case.hypothesis.strip()[:SUMMARY_MAX_CHARS],
        solution_pattern=case.solution_pattern.strip(),
        related_pr=related_pr,
    )
