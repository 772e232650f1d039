"""FastAPI dependencies for the chat assistant."""

from fastapi import Depends

from homerepair.ai.chat.service import HomeRepairChatService
from homerepair.ai.openai.client import OpenAIChatClient
from homerepair.db.conversations.repository import ConversationRepository
from homerepair.db.dependencies import get_conversation_repository
from homerepair.utils.logger import logger

# Singleton client: one HTTP connection pool per process
_chat_client: OpenAIChatClient | None = None


def get_chat_client() -> OpenAIChatClient:
    """
    Get or create the chat completion client singleton.

    Returns:
        OpenAIChatClient: The client instance
    """
    global _chat_client
    if _chat_client is None:
        _chat_client = OpenAIChatClient()
        logger.info("Initialized OpenAIChatClient")
    return _chat_client


async def get_chat_service(
    conversation_repository: ConversationRepository = Depends(
        get_conversation_repository
    ),
    chat_client: OpenAIChatClient = Depends(get_chat_client),
) -> HomeRepairChatService:
    return HomeRepairChatService(conversation_repository, chat_client)
