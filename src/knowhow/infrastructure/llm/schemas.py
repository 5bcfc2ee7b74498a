"""
Output schemas for schema-constrained decoding.

The service is asked to conform its answer to these JSON-Schema documents.
Every object level forbids additional properties and lists all of its
properties as required, which strict structured output demands.
"""

from typing import Any, Dict, List

from knowhow.models.case import MAX_FILES_TOUCHED, MAX_TOP_FRAMES
from knowhow.models.similarity import MAX_SIMILAR_CASES


def _string() -> Dict[str, Any]:
    return {"type": "string"}


def _string_array(max_items: int) -> Dict[str, Any]:
    return {"type": "array", "items": _string(), "maxItems": max_items}


def _object(properties: Dict[str, Dict[str, Any]], required: List[str]) -> Dict[str, Any]:
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": required,
    }


def _related_pr_schema() -> Dict[str, Any]:
    return _object(
        {"url": _string(), "title": _string()},
        ["url", "title"],
    )


def build_analyze_schema() -> Dict[str, Any]:
    """Schema of a CaseOutput document."""
    crash_signature = _object(
        {
            "exception": _string(),
            "top_frames": _string_array(MAX_TOP_FRAMES),
        },
        ["exception", "top_frames"],
    )
    pr_evidence = _object(
        {
            "files_touched": _string_array(MAX_FILES_TOUCHED),
            "why_related": _string(),
        },
        ["files_touched", "why_related"],
    )
    return _object(
        {
            "crash_signature": crash_signature,
            "hypothesis": _string(),
            "solution_pattern": _string(),
            "pr_evidence": pr_evidence,
        },
        ["crash_signature", "hypothesis", "solution_pattern", "pr_evidence"],
    )


def build_match_schema() -> Dict[str, Any]:
    """Schema of a SimilarCasesResult document."""
    hit = _object(
        {
            "case_id": _string(),
            "similarity_reason": _string(),
            "related_pr": _related_pr_schema(),
        },
        ["case_id", "similarity_reason", "related_pr"],
    )
    return _object(
        {
            "similar_cases": {
                "type": "array",
                "maxItems": MAX_SIMILAR_CASES,
                "items": hit,
            },
        },
        ["similar_cases"],
    )
