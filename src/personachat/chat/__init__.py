from .driver import (
    EXIT_COMMANDS,
    PROMPT,
    ChatDriver,
    ConsoleLineReader,
    LineReader,
    LoopState,
    is_exit_command,
)
from .fallbacks import FAILURE_REPLY, NO_CANDIDATES_REPLY, NO_TEXT_REPLY, fallback_for
from .fetcher import ReplyFetcher, fetch_reply

__all__ = [
    "ChatDriver",
    "ConsoleLineReader",
    "EXIT_COMMANDS",
    "FAILURE_REPLY",
    "LineReader",
    "LoopState",
    "NO_CANDIDATES_REPLY",
    "NO_TEXT_REPLY",
    "PROMPT",
    "ReplyFetcher",
    "fallback_for",
    "fetch_reply",
    "is_exit_command",
]
