"""
Job and quote documents.

Quotes are embedded in their job; there is no separate quotes collection.
"""

from enum import Enum
from typing import Any

from pydantic import Field

from homerepair.schemas import CamelModel


class JobStatus(str, Enum):
    OPEN = "open"
    SCHEDULED = "scheduled"


class QuoteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class Quote(CamelModel):
    """A professional's priced offer against a job."""

    id: str
    professional_id: str
    professional_name: str
    price_min: float | None = None
    price_max: float | None = None
    availability: str = ""
    message: str = ""
    status: QuoteStatus = QuoteStatus.PENDING
    created_at: str
    updated_at: str | None = None


class Job(CamelModel):
    """A homeowner's repair request."""

    id: str
    user_id: str
    conversation_id: str | None = None
    title: str
    summary: str = ""
    description: str
    preferred_time: str = ""
    budget_min: float | None = None
    budget_max: float | None = None
    location: dict[str, Any] | None = None
    products: list[Any] = Field(default_factory=list)
    status: JobStatus = JobStatus.OPEN
    quotes: list[Quote] = Field(default_factory=list)
    scheduled_slot: str | None = None
    created_at: str
    updated_at: str

    def quote_by_professional(self, professional_id: str) -> Quote | None:
        return next(
            (q for q in self.quotes if q.professional_id == professional_id), None
        )

    def quote_by_id(self, quote_id: str) -> Quote | None:
        return next((q for q in self.quotes if q.id == quote_id), None)
