"""Request and response schemas for profile registration."""

from typing import Any

from pydantic import ConfigDict, field_validator

from homerepair.db.professionals.model import ProfessionalProfile
from homerepair.db.users.model import UserProfile
from homerepair.schemas import CamelModel


class ProfileRequestModel(CamelModel):
    """Registration forms: wrongly typed text fields are treated as absent."""

    model_config = ConfigDict(extra="ignore")


class RegisterUserRequest(ProfileRequestModel):
    preferred_username: str | None = None
    display_name: str | None = None
    contact_email: str | None = None
    mobile_number: str | None = None
    address: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class RegisterProfessionalRequest(ProfileRequestModel):
    business_name: str | None = None
    phone: str | None = None
    website: str | None = None
    state: str | None = None
    abn: str | None = None
    insurance_provider: str | None = None
    insurance_policy_number: str | None = None
    insurance_expiry: str | None = None
    # Lists arrive either as arrays or as comma-separated strings
    service_areas: Any = None
    services: Any = None
    trade_qualifications: Any = None
    certifications: Any = None
    licence_numbers: Any = None
    years_experience: Any = None

    @field_validator(
        "business_name",
        "phone",
        "website",
        "state",
        "abn",
        "insurance_provider",
        "insurance_policy_number",
        "insurance_expiry",
        mode="before",
    )
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class RegisterUserResponse(CamelModel):
    ok: bool = True
    user: UserProfile


class RegisterProfessionalResponse(CamelModel):
    ok: bool = True
    professional: ProfessionalProfile


class ProfileResponse(CamelModel):
    user: UserProfile | None = None
    professional: ProfessionalProfile | None = None
