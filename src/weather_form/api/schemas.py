"""Request and response models of the HTTP backend."""

from pydantic import BaseModel, ConfigDict, Field

from weather_form.ai.base import ConversationMessage, TokenUsage


class ChatRequest(BaseModel):
    """Chat request carrying the prior turns of the conversation."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    conversation_history: list[ConversationMessage] = Field(
        default_factory=list, alias="conversationHistory"
    )


class ChatResponse(BaseModel):
    response: str
    usage: TokenUsage | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    status: str
    message: str
