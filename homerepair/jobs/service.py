"""
Job/quote workflow service.

Jobs move ``open -> scheduled``; ``scheduled`` is terminal. Quotes are
embedded in the job and keyed by professional, so a professional holds at
most one quote per job.
"""

import uuid
from enum import Enum

from homerepair.auth.schemas import AuthenticatedUser
from homerepair.db.jobs.model import Job, JobStatus, Quote, QuoteStatus
from homerepair.db.jobs.repository import JobRepository
from homerepair.db.professionals.model import ProfessionalProfile
from homerepair.db.professionals.repository import ProfessionalRepository
from homerepair.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    StateError,
    ValidationError,
)
from homerepair.jobs.schemas import (
    AcceptQuoteRequest,
    CreateJobRequest,
    ProfessionalQuoteSummary,
    SubmitQuoteRequest,
)
from homerepair.utils.logger import logger
from homerepair.utils.text import normalize_text, utc_now_iso

DEFAULT_JOB_TITLE = "Home repair request"
ACCEPT_ACTION = "accept"


class Role(str, Enum):
    """Which side of the marketplace the caller is acting as."""

    USER = "user"
    PROFESSIONAL = "professional"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        return cls.PROFESSIONAL if (value or "").lower() == cls.PROFESSIONAL else cls.USER


class JobService:
    """Service class for the job/quote marketplace."""

    def __init__(
        self,
        job_repository: JobRepository,
        professional_repository: ProfessionalRepository,
    ):
        """
        Initialize the job service.

        Args:
            job_repository: Jobs collection access
            professional_repository: Professionals collection access
        """
        self.jobs = job_repository
        self.professionals = professional_repository

    async def _require_professional(self, user_id: str) -> ProfessionalProfile:
        profile = await self.professionals.get(user_id)
        if profile is None:
            raise PermissionDeniedError("Professional profile required")
        return profile

    async def _require_job(self, job_id: str) -> Job:
        job = await self.jobs.get(job_id)
        if job is None:
            raise NotFoundError("Job not found")
        return job

    # ========================================================================
    # Jobs
    # ========================================================================

    async def create_job(self, user: AuthenticatedUser, request: CreateJobRequest) -> Job:
        """
        Create an open job owned by the caller.

        Raises:
            ValidationError: If neither description nor summary has content
        """
        title = normalize_text(request.title or request.summary or DEFAULT_JOB_TITLE, 180)
        description = normalize_text(request.description or request.summary or "", 4000)
        if not description:
            raise ValidationError("description is required")

        now = utc_now_iso()
        job = Job(
            id=str(uuid.uuid4()),
            user_id=user.sub,
            conversation_id=request.conversation_id,
            title=title,
            summary=normalize_text(request.summary or description, 1000),
            description=description,
            preferred_time=normalize_text(request.preferred_time or "", 120),
            budget_min=request.budget_min,
            budget_max=request.budget_max,
            location=request.location,
            products=request.products,
            status=JobStatus.OPEN,
            quotes=[],
            created_at=now,
            updated_at=now,
        )
        await self.jobs.create(job)
        logger.info("Job created", job_id=job.id, user_id=user.sub)
        return job

    async def get_job(self, user: AuthenticatedUser, job_id: str, role: Role) -> Job:
        """
        Fetch a single job.

        Non-owners not acting as a professional may only see open jobs.

        Raises:
            NotFoundError: If the job does not exist
            PermissionDeniedError: If the caller may not view it
        """
        job = await self._require_job(job_id)
        if (
            job.user_id != user.sub
            and role is not Role.PROFESSIONAL
            and job.status is not JobStatus.OPEN
        ):
            raise PermissionDeniedError()
        return job

    async def list_jobs(self, user: AuthenticatedUser, role: Role) -> list[Job]:
        """The caller's own jobs, or the open-jobs board for professionals."""
        if role is Role.PROFESSIONAL:
            await self._require_professional(user.sub)
            return await self.jobs.list_open()
        return await self.jobs.list_by_user(user.sub)

    # ========================================================================
    # Quotes
    # ========================================================================

    async def submit_quote(
        self, user: AuthenticatedUser, request: SubmitQuoteRequest
    ) -> Job:
        """
        Create or replace the caller's quote on an open job.

        Raises:
            ValidationError: If jobId is missing
            PermissionDeniedError: If the caller has no professional profile
            NotFoundError: If the job does not exist
            StateError: If the job is no longer open
        """
        if not request.job_id:
            raise ValidationError("jobId required")

        professional = await self._require_professional(user.sub)
        job = await self._require_job(request.job_id)
        if job.status is not JobStatus.OPEN:
            raise StateError("Job is not accepting quotes")

        now = utc_now_iso()
        fields = {
            "professional_name": professional.business_name or "Professional",
            "price_min": request.price_min,
            "price_max": request.price_max,
            "availability": (request.availability or "").strip(),
            "message": normalize_text(request.message or "", 1000),
            "status": QuoteStatus.PENDING,
        }

        existing = job.quote_by_professional(user.sub)
        if existing is not None:
            for name, value in fields.items():
                setattr(existing, name, value)
            existing.updated_at = now
            quote = existing
        else:
            quote = Quote(
                id=str(uuid.uuid4()),
                professional_id=user.sub,
                created_at=now,
                **fields,
            )
            job.quotes.append(quote)

        job.updated_at = now
        await self.jobs.save(job)
        logger.info(
            "Quote submitted",
            job_id=job.id,
            quote_id=quote.id,
            professional_id=user.sub,
            resubmitted=existing is not None,
        )
        return job

    async def accept_quote(
        self, user: AuthenticatedUser, request: AcceptQuoteRequest
    ) -> Job:
        """
        Accept one quote: it becomes accepted, every sibling declined, and the
        job scheduled.

        Raises:
            ValidationError: Unless jobId, quoteId and action=accept are given
            NotFoundError: If the job or the quote does not exist
            PermissionDeniedError: If the caller does not own the job
            StateError: If the job is no longer open
        """
        if not request.job_id or not request.quote_id or request.action != ACCEPT_ACTION:
            raise ValidationError("jobId, quoteId and action=accept required")

        job = await self._require_job(request.job_id)
        if job.user_id != user.sub:
            raise PermissionDeniedError("Only job owner can accept quotes")
        if job.status is not JobStatus.OPEN:
            raise StateError("Job is not accepting quotes")
        if job.quote_by_id(request.quote_id) is None:
            raise NotFoundError("Quote not found")

        for quote in job.quotes:
            quote.status = (
                QuoteStatus.ACCEPTED if quote.id == request.quote_id else QuoteStatus.DECLINED
            )
        job.status = JobStatus.SCHEDULED
        job.scheduled_slot = (request.scheduled_slot or "").strip()
        job.updated_at = utc_now_iso()
        await self.jobs.save(job)
        logger.info("Quote accepted", job_id=job.id, quote_id=request.quote_id)
        return job

    async def list_quotes(
        self, user: AuthenticatedUser, job_id: str | None, role: Role
    ) -> list[Quote] | list[ProfessionalQuoteSummary] | list[Job]:
        """
        Quote listings.

        - with ``job_id``: that job's quotes (owner, or caller acting as a
          professional)
        - as a professional: one summary per job the caller has quoted on
        - otherwise: the caller's jobs that have at least one quote
        """
        if job_id:
            job = await self._require_job(job_id)
            if job.user_id != user.sub and role is not Role.PROFESSIONAL:
                raise PermissionDeniedError()
            return job.quotes

        if role is Role.PROFESSIONAL:
            await self._require_professional(user.sub)
            jobs = await self.jobs.list_quoted_by(user.sub)
            return [
                ProfessionalQuoteSummary(
                    job_id=job.id,
                    title=job.title,
                    status=job.status,
                    quote=job.quote_by_professional(user.sub),
                )
                for job in jobs
            ]

        return await self.jobs.list_with_quotes_by_user(user.sub)
