"""
Home repair chat service.

Keeps per-user conversation history in the document store and answers each
message with one chat completion over a fixed system prompt and the most
recent turns.
"""

import re
import uuid
from pathlib import Path
from typing import Any

from homerepair.ai.chat.parsing import (
    extract_cost_estimate,
    extract_difficulty,
    extract_structured_json,
)
from homerepair.ai.chat.schemas import (
    ChatRequest,
    ChatResponse,
    ConversationList,
    ConversationSummary,
)
from homerepair.ai.openai.client import OpenAIChatClient
from homerepair.auth.schemas import AuthenticatedUser
from homerepair.db.conversations.model import ChatMessage, Conversation
from homerepair.db.conversations.repository import ConversationRepository
from homerepair.exceptions import NotFoundError, ValidationError
from homerepair.utils.logger import logger
from homerepair.utils.text import utc_now_iso

MAX_MESSAGE_LENGTH = 5000
PROMPT_HISTORY_MESSAGES = 5
CONVERSATION_MESSAGE_LIMIT = 50
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50
PREVIEW_LENGTH = 180

MAX_IMAGE_DATA_URL_LENGTH = 10 * 1024 * 1024
IMAGE_PLACEHOLDER = "[image attached]"
ANONYMOUS_PREFIX = "anon:"

_IMAGE_DATA_URL = re.compile(r"^data:image/(jpeg|jpg|png|webp);base64,")
_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def is_safe_image_data_url(value: Any) -> bool:
    """Only jpeg/png/webp base64 data URLs under 10 MB are accepted."""
    return (
        isinstance(value, str)
        and len(value) <= MAX_IMAGE_DATA_URL_LENGTH
        and _IMAGE_DATA_URL.match(value) is not None
    )


def anonymous_user_id(provided: Any) -> str:
    """Partition key for an unauthenticated caller."""
    cleaned = ""
    if isinstance(provided, str):
        cleaned = _UNSAFE_ID_CHARS.sub("", provided.strip())[:64]
    return f"{ANONYMOUS_PREFIX}{cleaned or uuid.uuid4()}"


def clamp_page_size(raw: str | None) -> int:
    """Parse ``limit`` and clamp it to 1..50; unparsable or zero means 20."""
    try:
        limit = int(raw) if raw is not None else 0
    except ValueError:
        limit = 0
    return max(1, min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE))


class HomeRepairChatService:
    """Service for the home repair chat assistant."""

    def __init__(
        self,
        conversation_repository: ConversationRepository,
        chat_client: OpenAIChatClient,
    ):
        """
        Initialize the chat service.

        Args:
            conversation_repository: Conversation history storage
            chat_client: Completion client
        """
        self.conversations = conversation_repository
        self.chat_client = chat_client
        self.system_prompt_file = Path(__file__).parent / "system_prompt.md"
        self.system_prompt = self.system_prompt_file.read_text(encoding="utf-8")

    def _attached_images(self, images: Any, authenticated: bool) -> list[str]:
        """Placeholders for the valid images; raw image data is never stored."""
        if not isinstance(images, list) or not images:
            return []
        if not authenticated:
            logger.warning("Image attachments ignored for anonymous request")
            return []

        first = images[0]
        data_url = first.get("dataUrl") if isinstance(first, dict) else first
        if not is_safe_image_data_url(data_url):
            logger.warning("Rejected image: invalid format or too large")
            return []
        return [IMAGE_PLACEHOLDER]

    def _build_prompt(self, conversation: Conversation) -> list[dict[str, str]]:
        history = conversation.messages[-PROMPT_HISTORY_MESSAGES:]
        return [{"role": "system", "content": self.system_prompt}] + [
            {"role": message.role, "content": message.content} for message in history
        ]

    async def send_message(
        self, request: ChatRequest, user: AuthenticatedUser | None
    ) -> ChatResponse:
        """
        Append the caller's message, ask the model, and persist both turns.

        Args:
            request: Chat request body
            user: Verified caller, or None for an anonymous chat

        Returns:
            ChatResponse: The reply plus best-effort hints

        Raises:
            ValidationError: If the message is missing or too long
            OpenAIError: If the completion call fails
        """
        authenticated = user is not None
        user_id = user.sub if user else anonymous_user_id(request.user_id)

        message = request.message
        if not isinstance(message, str) or not message or len(message) > MAX_MESSAGE_LENGTH:
            raise ValidationError("Message is required and must be under 5000 chars")

        conversation_id = (
            request.conversation_id
            if isinstance(request.conversation_id, str) and request.conversation_id
            else str(uuid.uuid4())
        )
        now = utc_now_iso()
        conversation = await self.conversations.get(user_id, conversation_id)
        if conversation is None:
            conversation = Conversation(
                id=conversation_id, user_id=user_id, created_at=now, updated_at=now
            )

        conversation.messages.append(
            ChatMessage(
                role="user",
                content=message,
                timestamp=now,
                images=self._attached_images(request.images, authenticated),
            )
        )

        reply = await self.chat_client.complete(self._build_prompt(conversation))

        replied_at = utc_now_iso()
        conversation.messages.append(
            ChatMessage(role="assistant", content=reply, timestamp=replied_at)
        )
        conversation.messages = conversation.messages[-CONVERSATION_MESSAGE_LIMIT:]
        conversation.updated_at = replied_at
        await self.conversations.save(conversation)

        structured = extract_structured_json(reply)
        difficulty = (structured or {}).get("difficulty") or extract_difficulty(reply)
        logger.info(
            "Chat reply generated",
            conversation_id=conversation_id,
            user_id=user_id,
            authenticated=authenticated,
            has_structured=structured is not None,
        )
        return ChatResponse(
            response=reply,
            conversation_id=conversation_id,
            structured=structured,
            difficulty=str(difficulty),
            estimated_cost_hint=extract_cost_estimate(reply),
            features_limited=not authenticated,
        )

    async def get_conversation(
        self, user: AuthenticatedUser, conversation_id: str | None
    ) -> Conversation:
        """
        Fetch one of the caller's conversations with at most the last 50 messages.

        Raises:
            ValidationError: If no id is given
            NotFoundError: If the caller has no such conversation
        """
        if not conversation_id:
            raise ValidationError("conversationId required")

        conversation = await self.conversations.get(user.sub, conversation_id)
        if conversation is None:
            raise NotFoundError("Conversation not found")
        conversation.messages = conversation.messages[-CONVERSATION_MESSAGE_LIMIT:]
        return conversation

    async def list_conversations(
        self,
        user: AuthenticatedUser,
        limit: str | None,
        continuation_token: str | None,
    ) -> ConversationList:
        """One page of the caller's conversations, most recently updated first."""
        page_size = clamp_page_size(limit)
        conversations, next_token = await self.conversations.list_page(
            user.sub, page_size, continuation_token
        )

        items = []
        for conversation in conversations:
            last = conversation.messages[-1] if conversation.messages else None
            items.append(
                ConversationSummary(
                    id=conversation.id,
                    created_at=conversation.created_at,
                    updated_at=conversation.updated_at,
                    last_preview=last.content[:PREVIEW_LENGTH] if last else "",
                    last_role=last.role if last else None,
                )
            )
        return ConversationList(
            items=items, continuation_token=next_token, page_size=page_size
        )
