"""Tests for the job/quote workflow service."""

import pytest
import pytest_asyncio

from homerepair.auth.schemas import AuthenticatedUser
from homerepair.db.jobs.model import JobStatus, QuoteStatus
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
from homerepair.jobs.service import JobService, Role

OWNER = AuthenticatedUser(sub="owner-1")
STRANGER = AuthenticatedUser(sub="owner-2")
PRO_A = AuthenticatedUser(sub="pro-a")
PRO_B = AuthenticatedUser(sub="pro-b")


def professional_profile(user: AuthenticatedUser) -> ProfessionalProfile:
    return ProfessionalProfile(
        id=user.sub,
        owner_id=user.sub,
        business_name=f"Trades {user.sub}",
        website="https://example.com",
        state="NSW",
        service_areas=["Sydney"],
        services=["Plumbing"],
        services_concat="plumbing",
        abn="12345678901",
        trade_qualifications=["Cert III"],
        certifications=["White card"],
        licence_numbers=["L1"],
        years_experience=5,
        insurance_provider="QBE",
        created_at="2025-01-01T00:00:00+00:00",
        updated_at="2025-01-01T00:00:00+00:00",
    )


@pytest_asyncio.fixture
async def job_service(dynamodb):
    """Job service with two registered professionals."""
    professionals = ProfessionalRepository()
    await professionals.upsert(professional_profile(PRO_A))
    await professionals.upsert(professional_profile(PRO_B))
    return JobService(JobRepository(), professionals)


async def open_job(service: JobService):
    return await service.create_job(
        OWNER, CreateJobRequest(title="Leaking tap", description="Kitchen tap drips")
    )


async def quoted_job(service: JobService):
    job = await open_job(service)
    await service.submit_quote(PRO_A, SubmitQuoteRequest(job_id=job.id, price_min=100))
    return await service.submit_quote(
        PRO_B, SubmitQuoteRequest(job_id=job.id, price_min=150)
    )


class TestRole:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("professional", Role.PROFESSIONAL),
            ("PROFESSIONAL", Role.PROFESSIONAL),
            ("user", Role.USER),
            (None, Role.USER),
            ("admin", Role.USER),
        ],
    )
    def test_parse(self, value, expected):
        assert Role.parse(value) is expected


class TestCreateJob:
    @pytest.mark.asyncio
    async def test_creates_open_job(self, job_service):
        job = await job_service.create_job(
            OWNER,
            CreateJobRequest(
                title="  Leaking tap  ",
                description=" Kitchen tap drips ",
                budget_min="80",
                preferred_time="Weekends",
            ),
        )

        assert job.user_id == OWNER.sub
        assert job.status is JobStatus.OPEN
        assert job.quotes == []
        assert job.title == "Leaking tap"
        assert job.description == "Kitchen tap drips"
        assert job.summary == "Kitchen tap drips"
        assert job.budget_min == 80
        assert job.created_at == job.updated_at

    @pytest.mark.asyncio
    async def test_long_title_is_cut(self, job_service):
        job = await job_service.create_job(
            OWNER, CreateJobRequest(title="t" * 300, description="Kitchen tap drips")
        )

        assert job.title == "t" * 180

    @pytest.mark.asyncio
    async def test_summary_fills_title_and_description(self, job_service):
        job = await job_service.create_job(OWNER, CreateJobRequest(summary="Fix tap"))

        assert job.title == "Fix tap"
        assert job.description == "Fix tap"

    @pytest.mark.asyncio
    async def test_default_title_and_truncation(self, job_service):
        job = await job_service.create_job(
            OWNER, CreateJobRequest(description="x" * 5000)
        )

        assert job.title == "Home repair request"
        assert len(job.description) == 4000
        assert len(job.summary) == 1000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("description", [None, "", "   "])
    async def test_requires_description(self, job_service, description):
        with pytest.raises(ValidationError, match="description is required"):
            await job_service.create_job(
                OWNER, CreateJobRequest(description=description)
            )

    def test_request_caps_products_and_drops_bad_types(self):
        request = CreateJobRequest.model_validate(
            {"title": 42, "products": list(range(8)), "location": "Sydney"}
        )

        assert request.title is None
        assert request.products == list(range(6))
        assert request.location is None


class TestGetAndListJobs:
    @pytest.mark.asyncio
    async def test_get_missing_job(self, job_service):
        with pytest.raises(NotFoundError, match="Job not found"):
            await job_service.get_job(OWNER, "missing", Role.USER)

    @pytest.mark.asyncio
    async def test_scheduled_job_hidden_from_other_users(self, job_service):
        job = await quoted_job(job_service)
        await job_service.accept_quote(
            OWNER,
            AcceptQuoteRequest(job_id=job.id, quote_id=job.quotes[0].id, action="accept"),
        )

        assert (await job_service.get_job(OWNER, job.id, Role.USER)).id == job.id
        assert (await job_service.get_job(PRO_A, job.id, Role.PROFESSIONAL)).id == job.id
        with pytest.raises(PermissionDeniedError):
            await job_service.get_job(STRANGER, job.id, Role.USER)

    @pytest.mark.asyncio
    async def test_open_job_visible_to_anyone(self, job_service):
        job = await open_job(job_service)

        assert (await job_service.get_job(STRANGER, job.id, Role.USER)).id == job.id

    @pytest.mark.asyncio
    async def test_list_own_jobs(self, job_service):
        job = await open_job(job_service)

        assert [j.id for j in await job_service.list_jobs(OWNER, Role.USER)] == [job.id]
        assert await job_service.list_jobs(STRANGER, Role.USER) == []

    @pytest.mark.asyncio
    async def test_open_board_requires_professional_profile(self, job_service):
        job = await open_job(job_service)

        board = await job_service.list_jobs(PRO_A, Role.PROFESSIONAL)

        assert [j.id for j in board] == [job.id]
        with pytest.raises(PermissionDeniedError, match="Professional profile required"):
            await job_service.list_jobs(STRANGER, Role.PROFESSIONAL)


class TestSubmitQuote:
    @pytest.mark.asyncio
    async def test_adds_pending_quote(self, job_service):
        job = await open_job(job_service)

        updated = await job_service.submit_quote(
            PRO_A,
            SubmitQuoteRequest(
                job_id=job.id,
                price_min="120",
                price_max=200,
                availability=" Tomorrow ",
                message="Can do",
            ),
        )

        quote = updated.quotes[0]
        assert quote.professional_id == PRO_A.sub
        assert quote.professional_name == "Trades pro-a"
        assert quote.price_min == 120
        assert quote.availability == "Tomorrow"
        assert quote.status is QuoteStatus.PENDING

    @pytest.mark.asyncio
    async def test_resubmission_replaces_quote(self, job_service):
        """Test that a professional keeps a single quote per job."""
        job = await open_job(job_service)
        first = await job_service.submit_quote(
            PRO_A, SubmitQuoteRequest(job_id=job.id, price_min=100)
        )
        second = await job_service.submit_quote(
            PRO_A, SubmitQuoteRequest(job_id=job.id, price_min=90)
        )

        assert len(second.quotes) == 1
        assert second.quotes[0].id == first.quotes[0].id
        assert second.quotes[0].created_at == first.quotes[0].created_at
        assert second.quotes[0].price_min == 90
        assert second.quotes[0].updated_at is not None

    @pytest.mark.asyncio
    async def test_requires_job_id(self, job_service):
        with pytest.raises(ValidationError, match="jobId required"):
            await job_service.submit_quote(PRO_A, SubmitQuoteRequest())

    @pytest.mark.asyncio
    async def test_requires_professional_profile(self, job_service):
        job = await open_job(job_service)

        with pytest.raises(PermissionDeniedError):
            await job_service.submit_quote(STRANGER, SubmitQuoteRequest(job_id=job.id))

    @pytest.mark.asyncio
    async def test_unknown_job(self, job_service):
        with pytest.raises(NotFoundError):
            await job_service.submit_quote(PRO_A, SubmitQuoteRequest(job_id="missing"))

    @pytest.mark.asyncio
    async def test_scheduled_job_rejects_quotes(self, job_service):
        job = await quoted_job(job_service)
        await job_service.accept_quote(
            OWNER,
            AcceptQuoteRequest(job_id=job.id, quote_id=job.quotes[0].id, action="accept"),
        )

        with pytest.raises(StateError, match="Job is not accepting quotes"):
            await job_service.submit_quote(PRO_B, SubmitQuoteRequest(job_id=job.id))


class TestAcceptQuote:
    @pytest.mark.asyncio
    async def test_accept_schedules_job(self, job_service):
        job = await quoted_job(job_service)
        chosen = job.quotes[1]

        accepted = await job_service.accept_quote(
            OWNER,
            AcceptQuoteRequest(
                job_id=job.id, quote_id=chosen.id, action="accept", scheduled_slot="Mon 9am"
            ),
        )

        assert accepted.status is JobStatus.SCHEDULED
        assert accepted.scheduled_slot == "Mon 9am"
        statuses = {q.id: q.status for q in accepted.quotes}
        assert statuses[chosen.id] is QuoteStatus.ACCEPTED
        assert statuses[job.quotes[0].id] is QuoteStatus.DECLINED

    @pytest.mark.asyncio
    async def test_second_accept_is_rejected(self, job_service):
        job = await quoted_job(job_service)
        request = AcceptQuoteRequest(job_id=job.id, quote_id=job.quotes[0].id, action="accept")
        await job_service.accept_quote(OWNER, request)

        with pytest.raises(StateError):
            await job_service.accept_quote(
                OWNER,
                AcceptQuoteRequest(job_id=job.id, quote_id=job.quotes[1].id, action="accept"),
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields",
        [
            {"quote_id": "q", "action": "accept"},
            {"job_id": "j", "action": "accept"},
            {"job_id": "j", "quote_id": "q", "action": "decline"},
        ],
    )
    async def test_requires_ids_and_accept_action(self, job_service, fields):
        with pytest.raises(ValidationError, match="action=accept required"):
            await job_service.accept_quote(OWNER, AcceptQuoteRequest(**fields))

    @pytest.mark.asyncio
    async def test_only_owner_can_accept(self, job_service):
        job = await quoted_job(job_service)

        with pytest.raises(PermissionDeniedError, match="Only job owner"):
            await job_service.accept_quote(
                STRANGER,
                AcceptQuoteRequest(job_id=job.id, quote_id=job.quotes[0].id, action="accept"),
            )

    @pytest.mark.asyncio
    async def test_unknown_quote(self, job_service):
        job = await quoted_job(job_service)

        with pytest.raises(NotFoundError, match="Quote not found"):
            await job_service.accept_quote(
                OWNER, AcceptQuoteRequest(job_id=job.id, quote_id="missing", action="accept")
            )
        assert (await job_service.get_job(OWNER, job.id, Role.USER)).status is JobStatus.OPEN


class TestListQuotes:
    @pytest.mark.asyncio
    async def test_quotes_for_job(self, job_service):
        job = await quoted_job(job_service)

        quotes = await job_service.list_quotes(OWNER, job.id, Role.USER)

        assert {q.professional_id for q in quotes} == {PRO_A.sub, PRO_B.sub}

    @pytest.mark.asyncio
    async def test_quotes_for_job_hidden_from_other_users(self, job_service):
        job = await quoted_job(job_service)

        with pytest.raises(PermissionDeniedError):
            await job_service.list_quotes(STRANGER, job.id, Role.USER)

    @pytest.mark.asyncio
    async def test_professional_summaries(self, job_service):
        job = await quoted_job(job_service)
        await open_job(job_service)

        summaries = await job_service.list_quotes(PRO_A, None, Role.PROFESSIONAL)

        assert len(summaries) == 1
        assert isinstance(summaries[0], ProfessionalQuoteSummary)
        assert summaries[0].job_id == job.id
        assert summaries[0].quote.professional_id == PRO_A.sub

    @pytest.mark.asyncio
    async def test_owner_jobs_with_quotes(self, job_service):
        job = await quoted_job(job_service)
        await open_job(job_service)

        jobs = await job_service.list_quotes(OWNER, None, Role.USER)

        assert [j.id for j in jobs] == [job.id]
