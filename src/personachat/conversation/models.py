"""Data models for the conversation history.

A conversation is an ordered list of turns. Each turn carries the speaker
role and a single text payload, and never changes once created.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a turn. Values match the wire format of the endpoint."""

    USER = "user"
    MODEL = "model"


class Turn(BaseModel):
    """One role-tagged text unit within a conversation history."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who produced the text: 'user' or 'model'")
    text: str = Field(min_length=1, description="Text payload of the turn")

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=Role.USER, text=text)

    @classmethod
    def model(cls, text: str) -> "Turn":
        return cls(role=Role.MODEL, text=text)
