"""Flat-file storage for cases and run artifacts.

Layout below the store root:

    out/                      per-run artifacts (raw response, extracted text,
                              decoded result)
    cases/case-<id>.json      full case archive
    cases_min/case-<id>.json  searchable minimal cases

The two case directories are independent; they share only the case-id naming.
Writes are plain overwrites with no locking.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import BaseModel, ValidationError

from knowhow.exceptions import CaseStoreError
from knowhow.models.case import CaseOutput, MinimalCase

logger = logging.getLogger(__name__)

OUT_DIR = "out"
CASES_DIR = "cases"
MINIMAL_CASES_DIR = "cases_min"

JSON_INDENT = 4


def to_pretty_json(document: BaseModel) -> str:
    return document.model_dump_json(indent=JSON_INDENT)


def _load_minimal_case(path: Path) -> MinimalCase:
    try:
        return MinimalCase.model_validate_json(path.read_bytes())
    except ValidationError as e:
        raise CaseStoreError(
            f"Not a valid minimal case ({e.error_count()} error(s)): {e}",
            path=path,
            hint=f"Fix or remove {path.name}, or re-run 'analyze' to regenerate it",
        ) from e


def load_all_minimal_cases(directory: Union[str, Path]) -> List[MinimalCase]:
    """Load every minimal case in a directory, ordered by file name.

    Args:
        directory: Directory holding case-<id>.json files

    Returns:
        Cases sorted lexicographically by file name; empty if the directory
        does not exist

    Raises:
        CaseStoreError: If a file does not decode into a MinimalCase
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []

    files = sorted(
        (f for f in directory.iterdir() if f.is_file() and f.suffix.lower() == ".json"),
        key=lambda f: f.name,
    )
    cases = [_load_minimal_case(f) for f in files]
    logger.debug(f"Loaded {len(cases)} minimal case(s) from {directory}")
    return cases


def render_known_cases(cases: Sequence[MinimalCase]) -> str:
    """Render minimal cases as the plain-text block used in the match prompt."""
    lines = []
    for case in cases:
        lines.append(f"CASE ID: {case.case_id}")
        lines.append(f"Exception: {case.crash_signature.exception}")
        lines.append("Top frames:")
        lines.extend(f"- {frame}" for frame in case.crash_signature.top_frames)
        lines.append("Solution pattern:")
        lines.append(case.solution_pattern)
        lines.append("PR:")
        lines.append(f"{case.related_pr.url} | {case.related_pr.title}")
        lines.append("\n---\n")
    return "\n".join(lines).strip()


class CaseStore:
    """Reads and writes case files below a root directory.

    Usage:
        store = CaseStore(Path("."))
        store.save_case(case_id, case)
        cases = store.load_minimal_cases()
    """

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)
        self.out_dir = self.root / OUT_DIR
        self.cases_dir = self.root / CASES_DIR
        self.minimal_cases_dir = self.root / MINIMAL_CASES_DIR

    @staticmethod
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.debug(f"Wrote {path}")
        return path

    def artifact_path(self, name: str) -> Path:
        return self.out_dir / name

    def write_artifact(self, name: str, text: str) -> Path:
        """Write a per-run artifact under out/."""
        return self._write(self.artifact_path(name), text)

    def save_case(self, case_id: str, case: CaseOutput) -> Path:
        """Archive a full case as cases/case-<id>.json."""
        return self._write(self.cases_dir / f"case-{case_id}.json", to_pretty_json(case))

    def save_minimal_case(self, minimal: MinimalCase) -> Path:
        """Persist a minimal case as cases_min/<case_id>.json."""
        return self._write(
            self.minimal_cases_dir / f"{minimal.case_id}.json", to_pretty_json(minimal)
        )

    def has_minimal_case_dir(self) -> bool:
        return self.minimal_cases_dir.is_dir()

    def load_minimal_cases(self) -> List[MinimalCase]:
        return load_all_minimal_cases(self.minimal_cases_dir)
