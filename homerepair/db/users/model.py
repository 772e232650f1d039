from pydantic import Field

from homerepair.schemas import CamelModel


class UserProfile(CamelModel):
    """Homeowner profile, keyed by the token subject."""

    id: str = Field(..., description="Auth subject (sub)")
    display_name: str = Field(..., description="Name shown to professionals")
    preferred_username: str = Field(..., description="Preferred username")
    contact_email: str = Field(..., description="Contact email address")
    mobile_number: str | None = Field(None, description="Mobile number")
    address: str | None = Field(None, description="Free-text street address")
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    updated_at: str = Field(..., description="ISO-8601 last update timestamp")
