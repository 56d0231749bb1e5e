"""Request and response models for the generateContent endpoint.

Field aliases follow the camelCase JSON used on the wire. Unknown fields
in responses are ignored.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..conversation import Turn


class Part(BaseModel):
    """A single piece of content. Only text parts are used."""

    text: str | None = None


class Content(BaseModel):
    """Role-tagged list of parts, the wire form of a turn."""

    role: str | None = None
    parts: list[Part] = Field(default_factory=list)

    @classmethod
    def from_turn(cls, turn: Turn) -> "Content":
        return cls(role=turn.role.value, parts=[Part(text=turn.text)])


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temperature: float | None = None
    max_output_tokens: int | None = Field(default=None, alias="maxOutputTokens")


class GenerateContentRequest(BaseModel):
    """Body of a generateContent call."""

    model_config = ConfigDict(populate_by_name=True)

    contents: list[Content]
    generation_config: GenerationConfig | None = Field(default=None, alias="generationConfig")

    @classmethod
    def from_turns(
        cls,
        turns: Iterable[Turn],
        temperature: float | None = None,
        max_tokens: int | None = None
    ) -> "GenerateContentRequest":
        generation_config = None
        if temperature is not None or max_tokens is not None:
            generation_config = GenerationConfig(
                temperature=temperature,
                max_output_tokens=max_tokens
            )
        return cls(
            contents=[Content.from_turn(turn) for turn in turns],
            generation_config=generation_config
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Candidate(BaseModel):
    """One alternative generated response."""

    model_config = ConfigDict(populate_by_name=True)

    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")


class UsageMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt_token_count: int | None = Field(default=None, alias="promptTokenCount")
    candidates_token_count: int | None = Field(default=None, alias="candidatesTokenCount")
    total_token_count: int | None = Field(default=None, alias="totalTokenCount")

    def to_usage(self) -> dict[str, int]:
        return {
            "prompt_tokens": self.prompt_token_count or 0,
            "completion_tokens": self.candidates_token_count or 0,
            "total_tokens": self.total_token_count or 0
        }


class GenerateContentResponse(BaseModel):
    """Body of a successful generateContent response."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    candidates: list[Candidate] | None = None
    usage_metadata: UsageMetadata | None = Field(default=None, alias="usageMetadata")
    model_version: str | None = Field(default=None, alias="modelVersion")

    def first_text(self) -> str | None:
        """Text of the first candidate's first content part, if any."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content, empty if none was returned")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
    finish_reason: str | None = Field(default=None, description="Why generation stopped")
