"""
Request and response schemas for the job/quote workflow.

Request models are lenient: wrongly typed optional fields are dropped rather
than rejected, matching what the web client sends.
"""

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from homerepair.db.jobs.model import JobStatus, Quote
from homerepair.schemas import CamelModel
from homerepair.utils.text import to_number

MAX_JOB_PRODUCTS = 6


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class JobRequestModel(CamelModel):
    model_config = ConfigDict(extra="ignore")


class CreateJobRequest(JobRequestModel):
    """Body of POST /jobs."""

    title: str | None = None
    description: str | None = None
    summary: str | None = None
    conversation_id: str | None = None
    preferred_time: str | None = None
    budget_min: float | None = None
    budget_max: float | None = None
    location: dict[str, Any] | None = None
    products: list[Any] = Field(default_factory=list)

    @field_validator(
        "title", "description", "summary", "conversation_id", "preferred_time",
        mode="before",
    )
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return _string_or_none(value)

    @field_validator("budget_min", "budget_max", mode="before")
    @classmethod
    def coerce_budget(cls, value: Any) -> float | int | None:
        return to_number(value)

    @field_validator("location", mode="before")
    @classmethod
    def location_object(cls, value: Any) -> dict[str, Any] | None:
        return value if isinstance(value, dict) else None

    @field_validator("products", mode="before")
    @classmethod
    def cap_products(cls, value: Any) -> list[Any]:
        return value[:MAX_JOB_PRODUCTS] if isinstance(value, list) else []


class SubmitQuoteRequest(JobRequestModel):
    """Body of POST /job-quotes."""

    job_id: str | None = None
    price_min: float | None = None
    price_max: float | None = None
    availability: str | None = None
    message: str | None = None

    @field_validator("job_id", "availability", "message", mode="before")
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return _string_or_none(value)

    @field_validator("price_min", "price_max", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> float | int | None:
        return to_number(value)


class AcceptQuoteRequest(JobRequestModel):
    """Body of PATCH /job-quotes."""

    job_id: str | None = None
    quote_id: str | None = None
    action: str | None = None
    scheduled_slot: str | None = None

    @field_validator("job_id", "quote_id", "action", "scheduled_slot", mode="before")
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return _string_or_none(value)


class ProfessionalQuoteSummary(CamelModel):
    """One entry of a professional's "my quotes" list."""

    job_id: str
    title: str
    status: JobStatus
    quote: Quote | None
