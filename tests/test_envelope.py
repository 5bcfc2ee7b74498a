"""Tests for knowhow.infrastructure.llm.envelope."""

import json

import pytest

from knowhow.exceptions import ApiError, ResponseParseError
from knowhow.infrastructure.llm import envelope
from knowhow.infrastructure.llm.envelope import (
    check_for_api_error,
    extract_output_text,
    parse_response,
)

from conftest import nested_envelope


# ---------------------------------------------------------------------------
# Embedded errors
# ---------------------------------------------------------------------------


def test_error_with_code_and_type():
    raw = json.dumps({"error": {"message": "boom", "code": "x", "type": "invalid_request_error"}})
    with pytest.raises(ApiError) as exc_info:
        check_for_api_error(raw)

    err = exc_info.value
    assert (err.message, err.code, err.error_type) == ("boom", "x", "invalid_request_error")
    assert str(err) == "API error (x) [invalid_request_error]: boom"


def test_error_message_only():
    with pytest.raises(ApiError, match=r"^API error: boom$"):
        check_for_api_error(json.dumps({"error": {"message": "boom", "code": None}}))


def test_error_without_message_defaults():
    with pytest.raises(ApiError, match="unknown error"):
        check_for_api_error(json.dumps({"error": {}}))


def test_null_error_is_ignored():
    check_for_api_error(json.dumps({"error": None, "output_text": "{}"}))


def test_parse_response_raises_api_error_before_extracting():
    raw = json.dumps({"error": {"message": "boom", "code": "x"}, "output_text": "{}"})
    with pytest.raises(ApiError) as exc_info:
        parse_response(raw)
    assert "boom" in str(exc_info.value)
    assert "x" in str(exc_info.value)


def test_parse_response_decodes_body_once(monkeypatch):
    calls = []
    real_loads = envelope.json.loads

    def counting_loads(*args, **kwargs):
        calls.append(args[0])
        return real_loads(*args, **kwargs)

    monkeypatch.setattr(envelope.json, "loads", counting_loads)

    assert parse_response(json.dumps({"error": None, "output_text": "{}"})) == "{}"
    assert len(calls) == 1


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------


def test_direct_output_text():
    assert extract_output_text(json.dumps({"output_text": "hello"})) == "hello"


def test_direct_output_text_is_trimmed():
    assert extract_output_text(json.dumps({"output_text": "  {\"a\": 1}\n"})) == '{"a": 1}'


def test_nested_blocks_joined_with_newline():
    assert extract_output_text(nested_envelope("a", "b")) == "a\nb"


def test_blank_direct_text_falls_back_to_nested():
    raw = json.dumps({
        "output_text": "   ",
        "output": [{"content": [{"text": "nested"}]}],
    })
    assert extract_output_text(raw) == "nested"


def test_nested_skips_blank_blocks_and_items_without_content():
    raw = json.dumps({
        "output": [
            {"type": "reasoning", "summary": []},
            {"content": [{"text": ""}, {"type": "refusal"}, {"text": "first"}]},
            {"content": [{"text": "second "}]},
        ]
    })
    assert extract_output_text(raw) == "first\nsecond"


def test_no_text_found_names_raw_path():
    raw = json.dumps({"output": [{"content": [{"type": "refusal"}]}]})
    with pytest.raises(ResponseParseError) as exc_info:
        extract_output_text(raw, "out/response_raw_analyze.json")

    assert exc_info.value.raw_path == "out/response_raw_analyze.json"
    assert "no output text found" in str(exc_info.value).lower()
    assert "out/response_raw_analyze.json" in str(exc_info.value)


def test_missing_output_and_output_text():
    with pytest.raises(ResponseParseError, match="neither"):
        extract_output_text(json.dumps({"id": "resp_1"}))


def test_non_json_body():
    with pytest.raises(ResponseParseError, match="not valid JSON"):
        extract_output_text("<html>502 Bad Gateway</html>", "out/raw.json")


def test_non_object_body():
    with pytest.raises(ResponseParseError, match="expected an object"):
        check_for_api_error("[1, 2]")
