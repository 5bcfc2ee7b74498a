"""
Completion service plumbing: output schemas, request construction,
transports and response envelope parsing.
"""

from .envelope import check_for_api_error, extract_output_text, parse_response
from .request_builder import (
    build_analyze_request,
    build_match_request,
    build_request,
    render_prompt,
)
from .schemas import build_analyze_schema, build_match_schema

__all__ = [
    "build_analyze_schema",
    "build_match_schema",
    "render_prompt",
    "build_request",
    "build_analyze_request",
    "build_match_request",
    "check_for_api_error",
    "extract_output_text",
    "parse_response",
]
