"""Google Gemini LLM provider implementation.

Talks to the generateContent REST endpoint directly with httpx so that
HTTP status codes and error bodies stay visible to the caller.
Reference: https://ai.google.dev/api/generate-content
"""

from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from ...conversation import Turn
from ..base import LLMProvider
from ..exceptions import EmptyResponseError, MalformedResponseError, TransportError
from ..models import GenerateContentRequest, GenerateContentResponse, LLMResponse

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT = 60.0


class GeminiProvider(LLMProvider):
    """Google Gemini LLM provider implementation.

    Hidden design decisions:
    - The API key travels in the `key` query parameter
    - Turns map to `contents` entries with a role and one text part
    - Non-OK responses become TransportError, with the error body parsed
      as JSON when possible and kept as raw text otherwise
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.0-flash, gemini-2.5-flash, gemini-2.5-pro)
            base_url: API base URL including the version segment
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._api_key = api_key
        self._model = model
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def endpoint(self, model: str | None = None) -> str:
        """Path of the generateContent method for a model, relative to the base URL."""
        return f"/models/{model or self._model}:generateContent"

    @staticmethod
    def _read_error_body(response: httpx.Response) -> Any:
        """Read an error body as JSON, falling back to raw text."""
        try:
            return response.json()
        except ValueError:
            return response.text

    def _parse_body(self, response: httpx.Response) -> GenerateContentResponse:
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}",
                {"body": data}
            )

        try:
            parsed = GenerateContentResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected response shape: {e}", {"body": data}) from e

        if not parsed.candidates:
            raise EmptyResponseError(
                "Response received but no 'candidates' were found.",
                {"body": data}
            )
        return parsed

    async def generate_content(
        self,
        turns: Sequence[Turn],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate the next model turn using Google Gemini.

        Args:
            turns: Conversation history
            model: Model to use (overrides default)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            **kwargs: Extra top-level fields merged into the request body

        Returns:
            LLMResponse with the first candidate's first text part
        """
        model_to_use = model or self._model
        request = GenerateContentRequest.from_turns(turns, temperature, max_tokens)
        payload = request.to_payload()
        payload.update(kwargs)

        response = await self._client.post(
            self.endpoint(model_to_use),
            params={"key": self._api_key},
            json=payload
        )

        if not response.is_success:
            raise TransportError(
                response.status_code,
                response.reason_phrase,
                self._read_error_body(response)
            )

        parsed = self._parse_body(response)
        usage = parsed.usage_metadata.to_usage() if parsed.usage_metadata else None

        return LLMResponse(
            content=parsed.first_text() or "",
            model=parsed.model_version or model_to_use,
            usage=usage,
            finish_reason=parsed.candidates[0].finish_reason
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
