"""Case data models.

These are the documents the analyze workflow produces:

- CaseOutput: full case returned by the model (crash signature, hypothesis,
  solution pattern, PR evidence)
- MinimalCase: compact projection persisted for similarity lookup
- RelatedPr: pull request link and title scraped from the PR text

All models are immutable once created. Unknown keys in the model's answer are
ignored; missing or mistyped fields fail validation.
"""

from typing import List

from pydantic import BaseModel, Field


# Array bounds shared with the output schemas
MAX_TOP_FRAMES = 8
MAX_FILES_TOUCHED = 12

UNKNOWN = "unknown"


# ============================================================
# Full Case (analyze output)
# ============================================================

class CrashSignature(BaseModel):
    """Exception identifier plus the most relevant stack frames."""

    exception: str = Field(
        description="Exception class or identifier"
    )

    top_frames: List[str] = Field(
        description="Ordered top stack frames",
        max_length=MAX_TOP_FRAMES
    )

    class Config:
        frozen = True


class PrEvidence(BaseModel):
    """Files touched by the fixing pull request and why they relate to the crash."""

    files_touched: List[str] = Field(
        description="Relevant files changed by the PR",
        max_length=MAX_FILES_TOUCHED
    )

    why_related: str = Field(
        description="Relation between the modified files and the crash site"
    )

    class Config:
        frozen = True


class CaseOutput(BaseModel):
    """
    Full case produced by one analyze run.

    Written to out/case.json and archived under cases/. Never mutated.
    """

    crash_signature: CrashSignature = Field(
        description="Crash signature extracted from the report"
    )

    hypothesis: str = Field(
        description="Probable technical mechanism behind the crash"
    )

    solution_pattern: str = Field(
        description="Technical pattern adopted by the fix"
    )

    pr_evidence: PrEvidence = Field(
        description="Evidence taken from the pull request"
    )

    class Config:
        frozen = True


# ============================================================
# Minimal Case (searchable projection)
# ============================================================

class RelatedPr(BaseModel):
    """Pull request reference; either field may be "unknown"."""

    url: str = Field(description="GitHub pull request URL")
    title: str = Field(description="Pull request title")

    class Config:
        frozen = True


class MinimalCase(BaseModel):
    """
    Searchable projection of a CaseOutput.

    Persisted to cases_min/ and rendered into the match prompt.
    """

    case_id: str = Field(
        description="Case identifier, 'case-<yyyyMMdd-HHmmss>'"
    )

    crash_signature: CrashSignature = Field(
        description="Crash signature copied from the full case"
    )

    problem_summary: str = Field(
        description="Hypothesis truncated to 280 characters"
    )

    solution_pattern: str = Field(
        description="Solution pattern copied from the full case"
    )

    related_pr: RelatedPr = Field(
        description="Pull request that fixed the crash"
    )

    class Config:
        frozen = True
