"""Shared fixtures for the knowhow test suite."""

import json

import pytest

from knowhow.config import KnowHowConfig
from knowhow.infrastructure.llm.providers import BaseTransport


CASE_DOCUMENT = {
    "crash_signature": {
        "exception": "java.lang.IllegalStateException",
        "top_frames": [
            "com.example.ui.ProfileFragment.requireContext(ProfileFragment.kt:42)",
            "com.example.ui.ProfileFragment.onDataLoaded(ProfileFragment.kt:88)",
        ],
    },
    "hypothesis": "The callback probably runs after the Fragment was detached.",
    "solution_pattern": "Collect the flow with repeatOnLifecycle(STARTED).",
    "pr_evidence": {
        "files_touched": ["app/src/main/java/com/example/ui/ProfileFragment.kt"],
        "why_related": "The crash site lives in ProfileFragment.",
    },
}

PR_TEXT = """Title: Fix crash when profile loads after detach
https://github.com/example/app/pull/1234

Moves collection into repeatOnLifecycle.
"""

CRASH_TEXT = """Fatal Exception: java.lang.IllegalStateException
Fragment ProfileFragment not attached to a context.
    at com.example.ui.ProfileFragment.requireContext(ProfileFragment.kt:42)
"""


class FakeTransport(BaseTransport):
    """In-memory transport replaying scripted bodies or exceptions."""

    def __init__(self, *outcomes):
        super().__init__()
        self.outcomes = list(outcomes)
        self.requests = []

    @property
    def transport_name(self) -> str:
        return "fake"

    async def call(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def output_text_envelope(document) -> str:
    """Flattened envelope carrying a JSON document as output_text."""
    return json.dumps({"output_text": json.dumps(document)})


def nested_envelope(*texts) -> str:
    """Nested envelope with one message item holding the given text blocks."""
    return json.dumps({
        "id": "resp_123",
        "output": [
            {
                "type": "message",
                "content": [{"type": "output_text", "text": t} for t in texts],
            }
        ],
    })


@pytest.fixture
def config(tmp_path):
    return KnowHowConfig(api_key="test-key", work_dir=tmp_path)


@pytest.fixture
def case_document():
    return json.loads(json.dumps(CASE_DOCUMENT))


@pytest.fixture
def analyze_inputs(tmp_path):
    (tmp_path / "crash.txt").write_text(CRASH_TEXT, encoding="utf-8")
    (tmp_path / "pr.txt").write_text(PR_TEXT, encoding="utf-8")
    return tmp_path
