"""Reply fetching with an "always answer" policy."""

from ..conversation import ConversationStore, Role
from ..diagnostics import DiagnosticLog
from ..llm import EmptyResponseError, LLMProvider, TransportError
from .fallbacks import NO_TEXT_REPLY, fallback_for


class ReplyFetcher:
    """Sends the conversation to the provider and records the reply.

    Only a successful reply with text is appended to the store as a MODEL
    turn. Every failure path returns fallback text and leaves the history
    untouched, so the endpoint never sees a failed exchange in its context.
    """

    def __init__(
        self,
        provider: LLMProvider,
        store: ConversationStore,
        log: DiagnosticLog | None = None,
        temperature: float | None = None,
    ) -> None:
        self._provider = provider
        self._store = store
        self._log = log or DiagnosticLog()
        self._temperature = temperature

    @property
    def store(self) -> ConversationStore:
        return self._store

    async def fetch_reply(self) -> str:
        """Fetch the next model reply for the current history.

        Returns:
            The reply text, or a fallback line if no reply could be obtained.
            Never raises for endpoint or network failures.
        """
        history = self._store.snapshot()
        self._log.debug(
            f"Sending {len(history)} turns to the model "
            f"({self._store.count(Role.USER)} user, {self._store.count(Role.MODEL)} model)"
        )

        try:
            response = await self._provider.generate_content(history, temperature=self._temperature)
        except Exception as e:
            self._report(e)
            return fallback_for(e)

        if response.usage:
            self._log.debug("Token usage:", response.usage)

        if not response.content:
            self._log.info(f"Empty reply from model (finish reason: {response.finish_reason})")
            return NO_TEXT_REPLY

        self._store.add_model_turn(response.content)
        return response.content

    def _report(self, error: Exception) -> None:
        if isinstance(error, EmptyResponseError):
            self._log.error(f"API Error: {error.message}", error.details.get("body"))
            return
        if isinstance(error, TransportError):
            self._log.api_error(error.status_code, error.reason, error.body)
        self._log.error("Error in fetch_reply:", str(error) or type(error).__name__)


async def fetch_reply(
    provider: LLMProvider,
    store: ConversationStore,
    log: DiagnosticLog | None = None,
) -> str:
    """Fetch one reply for the store's history. See ReplyFetcher.fetch_reply."""
    return await ReplyFetcher(provider, store, log).fetch_reply()
