"""FastAPI dependencies for profiles."""

from fastapi import Depends

from homerepair.db.dependencies import (
    get_professional_repository,
    get_user_repository,
)
from homerepair.db.professionals.repository import ProfessionalRepository
from homerepair.db.users.repository import UserRepository
from homerepair.profiles.service import ProfileService


async def get_profile_service(
    user_repository: UserRepository = Depends(get_user_repository),
    professional_repository: ProfessionalRepository = Depends(
        get_professional_repository
    ),
) -> ProfileService:
    return ProfileService(user_repository, professional_repository)
