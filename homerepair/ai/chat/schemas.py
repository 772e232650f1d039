"""Chat request and response schemas."""

from typing import Any

from pydantic import ConfigDict, Field

from homerepair.schemas import CamelModel


class ChatRequest(CamelModel):
    """Body of POST /chat-handler.

    ``message`` is validated by the service so that a missing or oversized
    message yields the same 400 as a wrongly typed one.
    """

    model_config = ConfigDict(extra="ignore")

    message: Any = None
    conversation_id: Any = None
    user_id: Any = None
    images: Any = None


class ChatResponse(CamelModel):
    response: str
    conversation_id: str
    structured: dict[str, Any] | None = None
    difficulty: str
    estimated_cost_hint: str | None = None
    features_limited: bool


class ConversationSummary(CamelModel):
    id: str
    created_at: str
    updated_at: str
    last_preview: str = ""
    last_role: str | None = None


class ConversationList(CamelModel):
    items: list[ConversationSummary] = Field(default_factory=list)
    continuation_token: str | None = None
    page_size: int
