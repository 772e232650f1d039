"""
Profile router.

Homeowner and professional registration plus a combined profile lookup for
the signed-in caller.
"""

from fastapi import APIRouter, Depends

from homerepair.auth.dependencies import get_current_user
from homerepair.auth.schemas import AuthenticatedUser
from homerepair.profiles.dependencies import get_profile_service
from homerepair.profiles.schemas import (
    ProfileResponse,
    RegisterProfessionalRequest,
    RegisterProfessionalResponse,
    RegisterUserRequest,
    RegisterUserResponse,
)
from homerepair.profiles.service import ProfileService

router = APIRouter(tags=["Profiles"])


@router.post("/register-user", response_model=RegisterUserResponse)
async def register_user(
    request: RegisterUserRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> RegisterUserResponse:
    """
    Create or update the caller's homeowner profile.

    The email falls back to the token's email claims when ``contactEmail`` is
    not given.
    """
    user = await profile_service.register_user(current_user, request)
    return RegisterUserResponse(user=user)


@router.post("/register-professional", response_model=RegisterProfessionalResponse)
async def register_professional(
    request: RegisterProfessionalRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> RegisterProfessionalResponse:
    """Create or update the caller's professional profile."""
    professional = await profile_service.register_professional(current_user, request)
    return RegisterProfessionalResponse(professional=professional)


@router.get("/get-profile", response_model=ProfileResponse)
async def get_profile(
    current_user: AuthenticatedUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return await profile_service.get_profile(current_user)
