from typing import Any

from pydantic import Field

from homerepair.schemas import CamelModel


class ChatMessage(CamelModel):
    role: str = Field(..., description="user or assistant")
    content: str
    timestamp: str
    images: list[str] = Field(
        default_factory=list, description="Placeholders only, raw images are not stored"
    )
    image_analysis: dict[str, Any] | None = None


class Conversation(CamelModel):
    """Chat history, partitioned by the owning user."""

    id: str
    user_id: str
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: str
    updated_at: str
