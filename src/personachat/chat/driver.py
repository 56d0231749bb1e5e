"""Interactive chat loop.

Reads one line at a time, relays it through the reply fetcher and prints
the persona's answer until the user types an exit keyword.
"""

import asyncio
import threading
from abc import ABC, abstractmethod
from enum import Enum

from rich.console import Console

from ..conversation import ConversationStore
from ..persona import Persona
from .fetcher import ReplyFetcher

PROMPT = "> "
EXIT_COMMANDS = frozenset({"exit", "quit"})


def is_exit_command(line: str) -> bool:
    """True if the line asks to leave. Case-insensitive, no trimming."""
    return line.lower() in EXIT_COMMANDS


class LoopState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    TERMINATED = "terminated"


class LineReader(ABC):
    """Source of user input lines."""

    @abstractmethod
    async def read_line(self, prompt: str) -> str:
        """Read one line, without the trailing newline.

        Raises:
            EOFError: If the input is exhausted
        """

    @abstractmethod
    def close(self) -> None:
        """Stop handing out lines. Later reads raise EOFError."""


class ConsoleLineReader(LineReader):
    """Reads lines from the terminal through a Rich console.

    The blocking read runs in a daemon thread so the event loop stays free
    to handle Ctrl-C while waiting for the user. A read that is abandoned
    on interrupt keeps its thread parked in input() until the process exits.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def read_line(self, prompt: str) -> str:
        if self._closed:
            raise EOFError("Input reader is closed")
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()

        def _settle(line: str | None, error: Exception | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(line)

        def _read() -> None:
            try:
                line = self._console.input(prompt, markup=False)
            except Exception as e:
                result: tuple[str | None, Exception | None] = (None, e)
            else:
                result = (line, None)
            try:
                loop.call_soon_threadsafe(_settle, *result)
            except RuntimeError:
                # Event loop already closed; nobody is waiting for this line
                pass

        threading.Thread(target=_read, name="personachat-input", daemon=True).start()
        return await future

    def close(self) -> None:
        """Mark the reader closed.

        The console stream belongs to the process and is left open.
        """
        self._closed = True


class ChatDriver:
    """Turn-taking loop between the terminal and the reply fetcher.

    States:
        AWAITING_INPUT: waiting for the next line
        TERMINATED: the user left; the loop does not run again
    """

    def __init__(
        self,
        store: ConversationStore,
        fetcher: ReplyFetcher,
        persona: Persona,
        reader: LineReader,
        console: Console | None = None,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._persona = persona
        self._reader = reader
        self._console = console or Console()
        self._state = LoopState.AWAITING_INPUT

    @property
    def state(self) -> LoopState:
        return self._state

    async def run(self) -> None:
        """Greet with the opening line, then chat until the user leaves."""
        self._say(self._store.opening_line)
        while self._state is LoopState.AWAITING_INPUT:
            try:
                await self.step()
            except asyncio.CancelledError:
                self._interrupted()

    async def step(self) -> LoopState:
        """Handle one line of input."""
        if self._state is LoopState.TERMINATED:
            return self._state

        try:
            user_input = await self._reader.read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            self._console.print()
            self._terminate()
            return self._state

        if is_exit_command(user_input):
            self._terminate()
            return self._state

        # An empty turn would be rejected by the endpoint
        if not user_input:
            return self._state

        self._store.add_user_turn(user_input)
        reply = await self._fetcher.fetch_reply()
        self._say(reply)
        return self._state

    def _say(self, text: str) -> None:
        self._console.print(self._persona.speak(text), markup=False, highlight=False, soft_wrap=True)

    def _interrupted(self) -> None:
        """End the session after Ctrl-C, which asyncio delivers as task cancellation."""
        task = asyncio.current_task()
        if task is not None:
            task.uncancel()
        self._console.print()
        self._terminate()

    def _terminate(self) -> None:
        for line in self._persona.farewell_lines:
            self._say(line)
        self._reader.close()
        self._state = LoopState.TERMINATED
