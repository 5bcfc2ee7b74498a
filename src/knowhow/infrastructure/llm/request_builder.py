"""
Request envelope construction.

Renders a prompt template with the case data and wraps it, together with the
model id, steering instruction and output schema, into a ResponsesRequest.
"""

from typing import Any, Dict, Mapping

from knowhow.config import KnowHowConfig
from knowhow.models.api_models import ResponsesRequest, TextConfig, TextFormat
from knowhow.infrastructure.llm.schemas import build_analyze_schema, build_match_schema

ANALYZE_SCHEMA_NAME = "knowhow_analyze_case"
MATCH_SCHEMA_NAME = "knowhow_match_similar"


def render_prompt(template: str, values: Mapping[str, str]) -> str:
    """Replace each {NAME} token with its value.

    Tokens absent from the template are ignored.
    """
    prompt = template
    for name, value in values.items():
        prompt = prompt.replace(f"{{{name}}}", value)
    return prompt


def build_request(
    model: str,
    instructions: str,
    prompt: str,
    schema_name: str,
    schema: Dict[str, Any],
) -> ResponsesRequest:
    """Wrap a rendered prompt into a strict json_schema request."""
    return ResponsesRequest(
        model=model,
        instructions=instructions,
        input=prompt,
        text=TextConfig(
            format=TextFormat(
                type="json_schema",
                name=schema_name,
                strict=True,
                schema=schema,
            )
        ),
    )


def build_analyze_request(
    config: KnowHowConfig, crash_text: str, pr_text: str
) -> ResponsesRequest:
    prompt = render_prompt(
        config.analyze_prompt,
        {"CRASH_CONTENT": crash_text, "PR_CONTENT": pr_text},
    )
    return build_request(
        model=config.model,
        instructions=config.analyze_instructions,
        prompt=prompt,
        schema_name=ANALYZE_SCHEMA_NAME,
        schema=build_analyze_schema(),
    )


def build_match_request(
    config: KnowHowConfig, new_crash_text: str, known_cases_text: str
) -> ResponsesRequest:
    prompt = render_prompt(
        config.match_prompt,
        {"NEW_CRASH_CONTENT": new_crash_text, "KNOWN_CASES_CONTENT": known_cases_text},
    )
    return build_request(
        model=config.model,
        instructions=config.match_instructions,
        prompt=prompt,
        schema_name=MATCH_SCHEMA_NAME,
        schema=build_match_schema(),
    )
