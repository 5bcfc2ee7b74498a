"""Core case derivation logic."""

from knowhow.core.projection import (
    extract_related_pr,
    generate_case_id,
    to_minimal_case,
)

__all__ = [
    "extract_related_pr",
    "generate_case_id",
    "to_minimal_case",
]
