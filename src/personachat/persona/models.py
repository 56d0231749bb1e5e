"""Persona definition model."""

from pydantic import BaseModel, ConfigDict, Field


class Persona(BaseModel):
    """Configuration data that primes the conversation and voices the console.

    The instructions and opening line become the two seed turns of the
    conversation history. The remaining fields are console copy.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Speaker label shown before replies")
    instructions: str = Field(min_length=1, description="Priming instructions sent as the first user turn")
    opening_line: str = Field(min_length=1, description="Seeded first model turn, printed at startup")
    banner_lines: tuple[str, ...] = Field(default=(), description="Lines printed when the chat starts")
    farewell_lines: tuple[str, ...] = Field(
        default=("Goodbye.",),
        description="Lines spoken by the persona when the user leaves"
    )

    @property
    def label(self) -> str:
        return f"{self.name}: "

    def speak(self, text: str) -> str:
        """Prefix text with the persona's speaker label."""
        return f"{self.label}{text}"
