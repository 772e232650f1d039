"""
Profile registration service.

Both profile kinds are keyed by the caller's token subject and upserted, so
registering again updates the existing record in place.
"""

import re

from homerepair.auth.schemas import AuthenticatedUser
from homerepair.db.professionals.model import PENDING_REVIEW, ProfessionalProfile
from homerepair.db.professionals.repository import ProfessionalRepository
from homerepair.db.users.model import UserProfile
from homerepair.db.users.repository import UserRepository
from homerepair.exceptions import ValidationError
from homerepair.profiles.schemas import (
    ProfileResponse,
    RegisterProfessionalRequest,
    RegisterUserRequest,
)
from homerepair.utils.location import map_state
from homerepair.utils.logger import logger
from homerepair.utils.text import normalize_list, to_number, utc_now_iso

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MOBILE_PATTERN = re.compile(r"^[0-9+ ()-]{6,20}$")
PHONE_PATTERN = re.compile(r"^[0-9+ ]{6,20}$")
WEBSITE_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)
ABN_PATTERN = re.compile(r"^\d{11}$")

MAX_USERNAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 280
MAX_BUSINESS_NAME_LENGTH = 150


def _first_email(user: AuthenticatedUser, contact_email: str | None) -> str | None:
    candidates: list[object] = [contact_email]
    emails = user.claims.get("emails")
    if isinstance(emails, list):
        candidates.extend(emails)
    candidates.append(user.claims.get("email"))
    candidates.append(user.claims.get("preferred_username"))
    return next(
        (c for c in candidates if isinstance(c, str) and EMAIL_PATTERN.match(c)), None
    )


def _optional(value: str | None) -> str | None:
    return (value.strip() or None) if value else None


class ProfileService:
    """Service class for homeowner and professional profiles."""

    def __init__(
        self,
        user_repository: UserRepository,
        professional_repository: ProfessionalRepository,
    ):
        self.users = user_repository
        self.professionals = professional_repository

    async def register_user(
        self, user: AuthenticatedUser, request: RegisterUserRequest
    ) -> UserProfile:
        """
        Create or update the caller's homeowner profile.

        Raises:
            ValidationError: If the username, email, mobile number or address
                is missing or malformed
        """
        username = next(
            (
                name.strip()
                for name in (request.preferred_username, request.display_name)
                if name and name.strip()
            ),
            "",
        )
        if not username or len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError("preferredUsername is required (<=100 chars)")

        email = _first_email(user, request.contact_email)
        if email is None:
            raise ValidationError("A valid email address is required")

        mobile = _optional(request.mobile_number)
        if mobile and not MOBILE_PATTERN.match(mobile):
            raise ValidationError("mobileNumber invalid")

        address = _optional(request.address)
        if address and len(address) > MAX_ADDRESS_LENGTH:
            raise ValidationError("address must be 280 characters or fewer")

        now = utc_now_iso()
        existing = await self.users.get(user.sub)
        profile = UserProfile(
            id=user.sub,
            display_name=username,
            preferred_username=username,
            contact_email=email,
            mobile_number=mobile,
            address=address,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        await self.users.upsert(profile)
        logger.info("User profile registered", user_id=user.sub, new_profile=existing is None)
        return profile

    async def register_professional(
        self, user: AuthenticatedUser, request: RegisterProfessionalRequest
    ) -> ProfessionalProfile:
        """
        Create or update the caller's professional profile.

        A new profile starts as ``pending_review``. An update keeps the
        original creation time, verification status and review notes.

        Raises:
            ValidationError: On the first field that fails validation
        """
        business_name = (request.business_name or "").strip()
        if not business_name or len(business_name) > MAX_BUSINESS_NAME_LENGTH:
            raise ValidationError("businessName is required (<=150 chars)")

        state = map_state(request.state)
        if state is None:
            raise ValidationError("state is required (AUS state/territory)")

        service_areas = normalize_list(request.service_areas)
        if not service_areas:
            raise ValidationError("Provide at least one service area")

        services = normalize_list(request.services)
        if not services:
            raise ValidationError("Provide at least one service offered")

        qualifications = normalize_list(request.trade_qualifications)
        if not qualifications:
            raise ValidationError("At least one trade qualification is required")

        certifications = normalize_list(request.certifications)
        if not certifications:
            raise ValidationError("At least one certification is required")

        licences = normalize_list(request.licence_numbers)
        if not licences:
            raise ValidationError("At least one licence number is required")

        years = to_number(request.years_experience)
        if years is None or not 1 <= years <= 80:
            raise ValidationError("yearsExperience must be between 1 and 80")

        insurance_provider = (request.insurance_provider or "").strip()
        if len(insurance_provider) < 2:
            raise ValidationError("insuranceProvider is required")

        phone = (request.phone or "").strip()
        if phone and not PHONE_PATTERN.match(phone):
            raise ValidationError("phone invalid")

        website = (request.website or "").strip()
        if not WEBSITE_PATTERN.match(website):
            raise ValidationError("website must start with http(s)://")

        abn = re.sub(r"\s", "", request.abn or "")
        if not ABN_PATTERN.match(abn):
            raise ValidationError("ABN must be 11 digits (no spaces)")

        now = utc_now_iso()
        existing = await self.professionals.get(user.sub)
        profile = ProfessionalProfile(
            id=user.sub,
            owner_id=user.sub,
            business_name=business_name,
            phone=phone or None,
            website=website,
            state=state,
            service_areas=service_areas,
            services=services,
            services_concat=",".join(s.lower() for s in services),
            abn=abn,
            trade_qualifications=qualifications,
            certifications=certifications,
            licence_numbers=licences,
            years_experience=round(years),
            insurance_provider=insurance_provider,
            insurance_policy_number=_optional(request.insurance_policy_number),
            insurance_expiry=_optional(request.insurance_expiry),
            verification_status=existing.verification_status if existing else PENDING_REVIEW,
            review_notes=existing.review_notes if existing else None,
            rating=existing.rating if existing else None,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        await self.professionals.upsert(profile)
        logger.info(
            "Professional profile registered",
            user_id=user.sub,
            state=state,
            new_profile=existing is None,
        )
        return profile

    async def get_profile(self, user: AuthenticatedUser) -> ProfileResponse:
        """The caller's homeowner and professional profiles (either may be None)."""
        return ProfileResponse(
            user=await self.users.get(user.sub),
            professional=await self.professionals.get(user.sub),
        )
