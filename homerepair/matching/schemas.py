"""Product matcher request and response schemas."""

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from homerepair.schemas import CamelModel
from homerepair.utils.location import Location
from homerepair.utils.text import to_number


class MatchRequest(CamelModel):
    """Body of POST /product-matcher."""

    model_config = ConfigDict(extra="ignore")

    problem: Any = None
    category: str | None = None
    max_price: float | None = None
    location: str | None = None
    state: str | None = None
    postcode: Any = None

    @field_validator("category", "location", "state", mode="before")
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("max_price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> float | int | None:
        return to_number(value)


class ProductMatch(CamelModel):
    id: str
    name: str | None = None
    category: str | None = None
    price: float | None = None
    price_low: float | None = None
    price_high: float | None = None
    supplier: str | None = None
    location: str | None = None
    state: str | None = None
    postcode: int | None = None
    problems: list[Any] = Field(default_factory=list)
    rating: float | None = None
    link: str | None = None
    product_url: str | None = None
    image_url: str | None = None
    last_updated: str | None = None
    search_score: float | None = None


class ProfessionalMatch(CamelModel):
    id: str
    name: str | None = None
    services: list[str] = Field(default_factory=list)
    service_areas: list[str] = Field(default_factory=list)
    phone: str | None = None
    website: str | None = None
    rating: float | None = None
    state: str | None = None


class MatchResponse(CamelModel):
    products: list[ProductMatch] = Field(default_factory=list)
    professionals: list[ProfessionalMatch] = Field(default_factory=list)
    location: Location
    search_query: str
    total_results: int
