"""Wire models for the completion service (Responses API).

These mirror the request body the service expects:

    {
      "model": "...",
      "instructions": "...",
      "input": "...",
      "text": {"format": {"type": "json_schema", "name": "...",
                          "strict": true, "schema": {...}}}
    }
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class TextFormat(BaseModel):
    """Structured output format (schema-constrained decoding)."""

    type: str = Field(
        default="json_schema",
        description="Output format type"
    )

    name: str = Field(
        description="Schema name, required by the service"
    )

    strict: bool = Field(
        default=True,
        description="Require strict schema conformance"
    )

    # Aliased because BaseModel already defines a `schema` attribute
    json_schema: Dict[str, Any] = Field(
        alias="schema",
        description="JSON-Schema the answer must conform to"
    )

    class Config:
        populate_by_name = True
        frozen = True


class TextConfig(BaseModel):
    """Text output configuration."""

    format: TextFormat

    class Config:
        frozen = True


class ResponsesRequest(BaseModel):
    """Outbound request for one completion call."""

    model: str = Field(description="Model identifier")
    instructions: str = Field(description="One-line steering instruction")
    input: str = Field(description="Rendered prompt")
    text: TextConfig = Field(description="Structured output configuration")

    class Config:
        frozen = True

    def to_payload(self) -> Dict[str, Any]:
        """JSON body sent over the wire."""
        return self.model_dump(mode="json", by_alias=True)
