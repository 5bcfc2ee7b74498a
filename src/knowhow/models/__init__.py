"""
Data models for the KnowHow crash-case pipeline.

Pydantic models for the documents exchanged with the completion service
and persisted to the case directories.
"""

from knowhow.models.case import (
    # Full case
    CaseOutput,
    CrashSignature,
    PrEvidence,

    # Minimal case
    MinimalCase,
    RelatedPr,

    # Limits and sentinels
    MAX_TOP_FRAMES,
    MAX_FILES_TOUCHED,
    UNKNOWN,
)
from knowhow.models.similarity import (
    SimilarCaseHit,
    SimilarCasesResult,
    MAX_SIMILAR_CASES,
)
from knowhow.models.api_models import (
    ResponsesRequest,
    TextConfig,
    TextFormat,
)

__all__ = [
    # Full case
    "CaseOutput", "CrashSignature", "PrEvidence",
    # Minimal case
    "MinimalCase", "RelatedPr",
    # Similarity
    "SimilarCaseHit", "SimilarCasesResult",
    # Wire
    "ResponsesRequest", "TextConfig", "TextFormat",
    # Limits
    "MAX_TOP_FRAMES", "MAX_FILES_TOUCHED", "MAX_SIMILAR_CASES", "UNKNOWN",
]
