"""FastAPI router for the home repair chat and conversation history."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from homerepair.ai.chat.dependencies import get_chat_service
from homerepair.ai.chat.schemas import ChatRequest, ChatResponse, ConversationList
from homerepair.ai.chat.service import HomeRepairChatService
from homerepair.auth.dependencies import get_current_user, get_current_user_optional
from homerepair.auth.schemas import AuthenticatedUser
from homerepair.db.conversations.model import Conversation

router = APIRouter(tags=["Chat"])


@router.post("/chat-handler", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    current_user: Annotated[
        AuthenticatedUser | None, Depends(get_current_user_optional)
    ],
    chat_service: Annotated[HomeRepairChatService, Depends(get_chat_service)],
) -> ChatResponse:
    """
    Send a chat message and get the assistant's reply.

    Signing in is optional. Anonymous chats are stored under an ``anon:``
    partition and get limited features (no image attachments).
    """
    return await chat_service.send_message(request, current_user)


@router.get("/get-conversation", response_model=Conversation)
async def get_conversation(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    chat_service: Annotated[HomeRepairChatService, Depends(get_chat_service)],
    conversation_id: Annotated[str | None, Query(alias="id")] = None,
    conversation_id_alt: Annotated[str | None, Query(alias="conversationId")] = None,
) -> Conversation:
    """Get one of the caller's conversations (last 50 messages)."""
    return await chat_service.get_conversation(
        current_user, conversation_id or conversation_id_alt
    )


@router.get("/list-conversations", response_model=ConversationList)
async def list_conversations(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    chat_service: Annotated[HomeRepairChatService, Depends(get_chat_service)],
    limit: Annotated[str | None, Query(description="Page size, 1..50")] = None,
    continuation_token: Annotated[str | None, Query(alias="continuationToken")] = None,
) -> ConversationList:
    """List the caller's conversations, most recently updated first."""
    return await chat_service.list_conversations(
        current_user, limit, continuation_token
    )
