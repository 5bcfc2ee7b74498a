"""Tests for the match mode driver and chat formatting."""

import asyncio
import json

import pytest

from knowhow.exceptions import ApiError, MissingInputError
from knowhow.models import CrashSignature, MinimalCase, RelatedPr, SimilarCasesResult
from knowhow.storage import CaseStore
from knowhow.workflows import SimilarityRunner, format_for_chat
from knowhow.workflows.match import NO_MATCH_MESSAGE

from conftest import CRASH_TEXT, FakeTransport, output_text_envelope


HITS = {
    "similar_cases": [
        {
            "case_id": "case-20250101-000000",
            "similarity_reason": " Same detached-fragment access. ",
            "related_pr": {"url": "https://github.com/a/b/pull/1", "title": "Fix detach"},
        },
        {
            "case_id": "case-20250102-000000",
            "similarity_reason": "Weaker match",
            "related_pr": {"url": "https://github.com/a/b/pull/2", "title": "Other"},
        },
    ]
}


@pytest.fixture
def known_cases(tmp_path):
    store = CaseStore(tmp_path)
    for case_id in ("case-20250102-000000", "case-20250101-000000"):
        store.save_minimal_case(MinimalCase(
            case_id=case_id,
            crash_signature=CrashSignature(exception="IllegalStateException", top_frames=["f"]),
            problem_summary="summary",
            solution_pattern=f"pattern of {case_id}",
            related_pr=RelatedPr(url="https://github.com/a/b/pull/1", title="Fix"),
        ))
    (tmp_path / "crash.txt").write_text(CRASH_TEXT, encoding="utf-8")
    return tmp_path


def test_match_writes_result(config, known_cases):
    transport = FakeTransport(output_text_envelope(HITS))

    result = asyncio.run(SimilarityRunner(config, transport).run())

    assert [hit.case_id for hit in result.similar_cases] == [
        "case-20250101-000000", "case-20250102-000000"
    ]
    out = known_cases / "out"
    assert (out / "response_raw_match.json").exists()
    assert json.loads((out / "output_text_match.json").read_text()) == HITS
    assert SimilarCasesResult.model_validate_json((out / "similar_cases.json").read_text()) == result


def test_match_prompt_lists_cases_in_file_order(config, known_cases):
    transport = FakeTransport(output_text_envelope(HITS))

    asyncio.run(SimilarityRunner(config, transport).run())

    prompt = transport.requests[0].input
    assert CRASH_TEXT in prompt
    first = prompt.index("CASE ID: case-20250101-000000")
    second = prompt.index("CASE ID: case-20250102-000000")
    assert first < second


def test_match_missing_crash_file(config, known_cases):
    (known_cases / "crash.txt").unlink()
    with pytest.raises(MissingInputError, match="crash.txt"):
        asyncio.run(SimilarityRunner(config, FakeTransport("{}")).run())


def test_match_missing_case_directory(config, tmp_path):
    (tmp_path / "crash.txt").write_text(CRASH_TEXT)
    with pytest.raises(MissingInputError) as exc_info:
        asyncio.run(SimilarityRunner(config, FakeTransport("{}")).run())
    assert "analyze" in exc_info.value.hint


def test_match_empty_case_directory(config, tmp_path):
    (tmp_path / "crash.txt").write_text(CRASH_TEXT)
    (tmp_path / "cases_min").mkdir()
    transport = FakeTransport("{}")

    with pytest.raises(MissingInputError, match="No .json case"):
        asyncio.run(SimilarityRunner(config, transport).run())
    assert transport.requests == []


def test_match_api_error(config, known_cases):
    raw = json.dumps({"error": {"message": "rate limited", "type": "requests"}})
    with pytest.raises(ApiError, match=r"\[requests\]: rate limited"):
        asyncio.run(SimilarityRunner(config, FakeTransport(raw)).run())
    assert not (known_cases / "out" / "similar_cases.json").exists()


def test_format_for_chat_uses_best_hit_only():
    message = format_for_chat(SimilarCasesResult.model_validate(HITS))

    assert "case-20250101-000000" in message
    assert "Reason: Same detached-fragment access." in message
    assert "https://github.com/a/b/pull/1" in message
    assert "case-20250102-000000" not in message


def test_format_for_chat_no_hits():
    assert format_for_chat(SimilarCasesResult(similar_cases=[])) == NO_MATCH_MESSAGE
