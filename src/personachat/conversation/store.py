"""In-memory conversation store.

Holds the persona-primed history for the lifetime of one chat session.
Data is lost when the application exits.
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

from .models import Role, Turn

if TYPE_CHECKING:
    from ..persona import Persona


class ConversationStore:
    """Ordered, append-only sequence of turns.

    The store is seeded with two priming turns: a USER turn carrying the
    persona instructions and a MODEL turn carrying the opening line. Seed
    turns are never removed and there is no way to edit or delete a turn.
    """

    def __init__(self, persona_instructions: str, opening_line: str):
        self._turns: list[Turn] = [
            Turn.user(persona_instructions),
            Turn.model(opening_line),
        ]

    @classmethod
    def from_persona(cls, persona: "Persona") -> "ConversationStore":
        """Create a store primed with a persona's instructions and opening line."""
        return cls(persona.instructions, persona.opening_line)

    def append(self, turn: Turn) -> None:
        """Add a turn to the end of the history.

        Args:
            turn: The turn to add

        Raises:
            ValueError: If the turn text is empty
        """
        if not turn.text:
            raise ValueError("Turn text must not be empty")
        self._turns.append(turn)

    def add_user_turn(self, text: str) -> Turn:
        turn = Turn.user(text)
        self.append(turn)
        return turn

    def add_model_turn(self, text: str) -> Turn:
        turn = Turn.model(text)
        self.append(turn)
        return turn

    def snapshot(self) -> tuple[Turn, ...]:
        """Return the full history in chronological order.

        The returned tuple is detached from the store, so later appends
        do not show up in it.
        """
        return tuple(self._turns)

    @property
    def seed(self) -> tuple[Turn, Turn]:
        """The two priming turns."""
        return self._turns[0], self._turns[1]

    @property
    def opening_line(self) -> str:
        return self._turns[1].text

    @property
    def last(self) -> Turn:
        return self._turns[-1]

    def count(self, role: Role) -> int:
        """Number of turns spoken by the given role."""
        return sum(1 for turn in self._turns if turn.role is role)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))
