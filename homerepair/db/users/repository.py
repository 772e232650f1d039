"""Repository for homeowner profiles."""

from homerepair.db.base import DynamoDBRepository
from homerepair.db.dynamodb_client import Collection
from homerepair.db.users.model import UserProfile
from homerepair.utils.logger import logger


class UserRepository(DynamoDBRepository):
    collection = Collection.USERS

    async def get(self, user_id: str) -> UserProfile | None:
        item = self._get_item({"id": user_id})
        return UserProfile.model_validate(item) if item else None

    async def upsert(self, profile: UserProfile) -> UserProfile:
        self._put_item(profile.to_document())
        logger.info(f"[UserRepository] Saved profile for user {profile.id}")
        return profile
