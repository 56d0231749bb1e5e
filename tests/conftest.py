"""Pytest configuration and shared fixtures."""
import io
import json
import os
from collections.abc import Callable

import httpx
import pytest
from rich.console import Console

from personachat.chat import LineReader
from personachat.config import LogLevel
from personachat.conversation import ConversationStore
from personachat.diagnostics import DiagnosticLog
from personachat.llm import GeminiProvider
from personachat.persona import load_persona


class ScriptedReader(LineReader):
    """Line reader that replays a fixed list of inputs, then reports EOF."""

    def __init__(self, lines: list[str]):
        self._lines = list(lines)
        self.prompts: list[str] = []
        self.closed = False

    async def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

    def close(self) -> None:
        self.closed = True


class RecordingHandler:
    """MockTransport handler that records requests and returns canned responses."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


def candidate_body(text: str | None) -> dict:
    """Build a generateContent response body with one candidate."""
    part = {} if text is None else {"text": text}
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [part]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {
            "promptTokenCount": 120,
            "candidatesTokenCount": 4,
            "totalTokenCount": 124,
        },
        "modelVersion": "gemini-2.0-flash",
    }


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def persona():
    """Return the default persona."""
    return load_persona("gosling")


@pytest.fixture
def store(persona):
    """Return a freshly seeded conversation store."""
    return ConversationStore.from_persona(persona)


@pytest.fixture
def log_output():
    """Return a string buffer and a debug-level log writing into it."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, force_terminal=False, color_system=None)
    return buffer, DiagnosticLog(LogLevel.DEBUG, console)


@pytest.fixture
def console_output():
    """Return a string buffer and a console writing into it."""
    buffer = io.StringIO()
    return buffer, Console(file=buffer, width=200, force_terminal=False, color_system=None)


@pytest.fixture
def make_provider():
    """Return a factory for Gemini providers backed by a mock transport."""
    def _make(respond: Callable[[httpx.Request], httpx.Response], **kwargs) -> tuple[GeminiProvider, RecordingHandler]:
        handler = RecordingHandler(respond)
        provider = GeminiProvider(
            api_key="test-key",
            transport=httpx.MockTransport(handler),
            **kwargs
        )
        return provider, handler
    return _make
