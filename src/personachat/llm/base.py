from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..conversation import Turn
from .models import LLMResponse


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of how the remote endpoint is
    reached. Implementations must handle provider-specific details like:
    - Authentication
    - Request/response format conversion
    - Translating HTTP failures into typed errors

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.generate_content(turns)
        # Automatically cleaned up
    """

    @abstractmethod
    async def generate_content(
        self,
        turns: Sequence[Turn],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate the next model turn for a conversation.

        Exactly one request is made per call, with no retries.

        Args:
            turns: Full conversation history in chronological order
            model: Model to use (None uses provider's default)
            temperature: Sampling temperature (None uses the endpoint default)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse whose content is empty when no text came back

        Raises:
            TransportError: The endpoint answered with a non-OK status
            EmptyResponseError: The endpoint answered with no candidates
            MalformedResponseError: The response body could not be parsed
            httpx.HTTPError: The request could not be sent or completed
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
