"""Fixed replies shown when the endpoint does not produce one.

The chat never surfaces a stack trace; every failure maps to one of
these lines instead.
"""

from ..llm.exceptions import EmptyResponseError

NO_TEXT_REPLY = "I'm just sitting here for a minute."
NO_CANDIDATES_REPLY = "I'm drawing a blank right now."
FAILURE_REPLY = "Something's off. Give me a moment."


def fallback_for(error: BaseException) -> str:
    """Translate a fetch failure into the text shown to the user."""
    if isinstance(error, EmptyResponseError):
        return NO_CANDIDATES_REPLY
    return FAILURE_REPLY
