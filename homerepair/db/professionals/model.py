from pydantic import Field

from homerepair.schemas import CamelModel

PENDING_REVIEW = "pending_review"


class ProfessionalProfile(CamelModel):
    """Tradesperson profile. Shares its id with the owner's user profile."""

    id: str = Field(..., description="Auth subject (sub) of the owner")
    owner_id: str = Field(..., description="Auth subject (sub) of the owner")
    business_name: str = Field(..., description="Trading name")
    phone: str | None = Field(None, description="Business phone")
    website: str = Field(..., description="Business website")
    state: str = Field(..., description="Australian state/territory abbreviation")
    service_areas: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)
    services_concat: str = Field(
        "", description="Lowercased comma-joined services, used for matching"
    )
    abn: str = Field(..., description="Australian Business Number (11 digits)")
    trade_qualifications: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    licence_numbers: list[str] = Field(default_factory=list)
    years_experience: int = Field(..., ge=1, le=80)
    insurance_provider: str
    insurance_policy_number: str | None = None
    insurance_expiry: str | None = None
    verification_status: str = Field(default=PENDING_REVIEW)
    review_notes: str | None = None
    rating: float | None = Field(None, ge=0, le=5, description="Average rating out of 5")
    created_at: str
    updated_at: str
