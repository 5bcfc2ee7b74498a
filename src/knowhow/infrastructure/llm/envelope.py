"""
Response envelope parsing.

The service returns the model's answer in one of two shapes depending on
its version and configuration:

- flattened:  {"output_text": "<answer>"}
- nested:     {"output": [{"content": [{"text": "<part>"}, ...]}, ...]}

An error object may also be embedded in an otherwise successful response:

    {"error": {"message": "...", "code": "...", "type": "..."}}

The parser tolerates both answer shapes without knowing in advance which
one will appear.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from knowhow.exceptions import ApiError, ResponseParseError

logger = logging.getLogger(__name__)

RawPath = Optional[Union[str, Path]]


def _load_envelope(raw: str, raw_path: RawPath = None) -> Dict[str, Any]:
    try:
        root = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response body is not valid JSON ({e})", raw_path) from e

    if not isinstance(root, dict):
        raise ResponseParseError(
            f"Response body is a JSON {type(root).__name__}, expected an object", raw_path
        )
    return root


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def check_for_api_error(raw: str, raw_path: RawPath = None) -> None:
    """Raise ApiError if the envelope carries a non-null top-level error.

    Raises:
        ApiError: With message, and code/type when present
        ResponseParseError: If the body is not a JSON object
    """
    _raise_embedded_error(_load_envelope(raw, raw_path))


def _raise_embedded_error(root: Dict[str, Any]) -> None:
    error = root.get("error")
    if error is None:
        return

    if isinstance(error, dict):
        message = error.get("message") or "unknown error"
        code = _optional_str(error.get("code"))
        error_type = _optional_str(error.get("type"))
    else:
        message, code, error_type = str(error), None, None

    logger.error(f"Service reported an error: code={code} type={error_type} message={message}")
    raise ApiError(str(message), code=code, error_type=error_type)


def _nested_texts(output: List[Any]) -> List[str]:
    texts = []
    for item in output:
        if not isinstance(item, dict):
            continue
        content = item.get("content")
        if not isinstance(content, list):
            continue
        for block in content:
            if not isinstance(block, dict):
                continue
            text = block.get("text")
            if isinstance(text, str) and text.strip():
                texts.append(text)
    return texts


def extract_output_text(raw: str, raw_path: RawPath = None) -> str:
    """Return the model's answer text from either envelope shape.

    Args:
        raw: Raw response body
        raw_path: Where the raw body was persisted, quoted in errors

    Returns:
        Trimmed answer text

    Raises:
        ResponseParseError: If neither output_text nor output[].content[].text
            yields any text
    """
    return _answer_text(_load_envelope(raw, raw_path), raw_path)


def _answer_text(root: Dict[str, Any], raw_path: RawPath = None) -> str:
    direct = root.get("output_text")
    if isinstance(direct, str) and direct.strip():
        return direct.strip()

    output = root.get("output")
    if not isinstance(output, list):
        raise ResponseParseError(
            "No output text found: response has neither 'output_text' nor 'output'", raw_path
        )

    texts = _nested_texts(output)
    if not texts:
        raise ResponseParseError(
            "No output text found in output[].content[].text", raw_path
        )

    logger.debug(f"Extracted {len(texts)} text block(s) from nested output")
    return "\n".join(texts).strip()


def parse_response(raw: str, raw_path: RawPath = None) -> str:
    """Check for an embedded error, then extract the answer text.

    The body is decoded once and shared by both steps.
    """
    root = _load_envelope(raw, raw_path)
    _raise_embedded_error(root)
    return _answer_text(root, raw_path)
