"""Base types shared by chat providers."""

from abc import ABC, abstractmethod
from typing import Literal

from pydantic import BaseModel, Field


class MessagePart(BaseModel):
    text: str


class ConversationMessage(BaseModel):
    """One prior turn of the conversation, in Gemini's content shape."""

    role: Literal["user", "model"]
    parts: list[MessagePart]

    @classmethod
    def from_text(cls, role: Literal["user", "model"], text: str) -> "ConversationMessage":
        return cls(role=role, parts=[MessagePart(text=text)])

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts)


class TokenUsage(BaseModel):
    """Token counters reported by the provider."""

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class ChatReply(BaseModel):
    """Assistant answer to one message."""

    text: str
    usage: TokenUsage | None = None
    is_fallback: bool = Field(
        default=False, description="True when produced locally instead of by the provider"
    )


class ChatProvider(ABC):
    """Conversational assistant that answers one message given prior turns."""

    @abstractmethod
    async def send(
        self, message: str, history: list[ConversationMessage] | None = None
    ) -> ChatReply:
        """Send a message and return the assistant's reply.

        Raises:
            Exception: Provider specific errors; callers decide how to degrade
        """
