"""
Repository for chat conversations.

Conversations are keyed by (userId, id), so every read is confined to the
caller's own partition.
"""

import base64
import binascii
import json
from typing import Any

from boto3.dynamodb.conditions import Key

from homerepair.db.base import DynamoDBRepository
from homerepair.db.conversations.model import Conversation
from homerepair.db.dynamodb_client import Collection
from homerepair.db.tables import CONVERSATIONS_BY_UPDATED_INDEX
from homerepair.exceptions import ValidationError
from homerepair.utils.logger import logger

# Key attributes of the updatedAt index: table key plus index sort key
CONTINUATION_KEY_ATTRIBUTES = {"userId", "id", "updatedAt"}


def encode_continuation_token(last_key: dict[str, Any] | None) -> str | None:
    if not last_key:
        return None
    raw = json.dumps(last_key, sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_continuation_token(token: str | None) -> dict[str, Any] | None:
    """
    Decode an opaque continuation token back into a DynamoDB start key.

    Raises:
        ValidationError: If the token is not one we issued
    """
    if not token:
        return None
    try:
        decoded = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
    except (binascii.Error, ValueError, UnicodeError) as e:
        raise ValidationError("continuationToken is invalid") from e
    if (
        not isinstance(decoded, dict)
        or set(decoded) != CONTINUATION_KEY_ATTRIBUTES
        or not all(isinstance(value, str) for value in decoded.values())
    ):
        raise ValidationError("continuationToken is invalid")
    return decoded


class ConversationRepository(DynamoDBRepository):
    collection = Collection.CONVERSATIONS

    async def get(self, user_id: str, conversation_id: str) -> Conversation | None:
        item = self._get_item({"userId": user_id, "id": conversation_id})
        return Conversation.model_validate(item) if item else None

    async def save(self, conversation: Conversation) -> Conversation:
        self._put_item(conversation.to_document())
        logger.info(
            f"[ConversationRepository] Saved conversation {conversation.id}",
            user_id=conversation.user_id,
            message_count=len(conversation.messages),
        )
        return conversation

    async def list_page(
        self,
        user_id: str,
        limit: int,
        continuation_token: str | None = None,
    ) -> tuple[list[Conversation], str | None]:
        """
        One page of a user's conversations, most recently updated first.

        Args:
            user_id: Owner of the conversations
            limit: Page size
            continuation_token: Token returned with the previous page

        Returns:
            tuple: (conversations, token for the next page or None)
        """
        query_kwargs: dict[str, Any] = {
            "IndexName": CONVERSATIONS_BY_UPDATED_INDEX,
            "KeyConditionExpression": Key("userId").eq(user_id),
            "ScanIndexForward": False,
            "Limit": limit,
        }
        start_key = decode_continuation_token(continuation_token)
        if start_key:
            if start_key.get("userId") != user_id:
                raise ValidationError("continuationToken is invalid")
            query_kwargs["ExclusiveStartKey"] = start_key

        items, last_key = self._query(**query_kwargs)
        conversations = [Conversation.model_validate(item) for item in items]
        return conversations, encode_continuation_token(last_key)
