"""Case file storage."""

from knowhow.storage.case_store import (
    CaseStore,
    load_all_minimal_cases,
    render_known_cases,
)

__all__ = [
    "CaseStore",
    "load_all_minimal_cases",
    "render_known_cases",
]
