"""
Job/quote router.

Homeowners post jobs and accept quotes; professionals browse open jobs and
submit quotes. Every endpoint requires a bearer token.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from homerepair.auth.dependencies import get_current_user
from homerepair.auth.schemas import AuthenticatedUser
from homerepair.db.jobs.model import Job
from homerepair.jobs.dependencies import get_job_service
from homerepair.jobs.schemas import (
    AcceptQuoteRequest,
    CreateJobRequest,
    SubmitQuoteRequest,
)
from homerepair.jobs.service import JobService, Role

router = APIRouter(tags=["Jobs"])


# ========================================================================
# Job Endpoints
# ========================================================================


@router.post("/jobs", response_model=Job, status_code=status.HTTP_201_CREATED)
async def create_job(
    request: CreateJobRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service),
) -> Job:
    """
    Create a repair job owned by the caller.

    Args:
        request: Job details; description (or summary) is required

    Returns:
        Job: The new job, status "open" with no quotes
    """
    return await job_service.create_job(current_user, request)


@router.get("/jobs", response_model=None)
async def get_jobs(
    job_id: str | None = Query(None, alias="jobId"),
    role: str | None = Query(None, description="user (default) or professional"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service),
) -> Any:
    """
    Get one job (``jobId``) or a job list.

    As ``role=professional`` the list is the open-jobs board; otherwise it is
    the caller's own jobs, newest first.
    """
    parsed_role = Role.parse(role)
    if job_id:
        return await job_service.get_job(current_user, job_id, parsed_role)
    return await job_service.list_jobs(current_user, parsed_role)


# ========================================================================
# Quote Endpoints
# ========================================================================


@router.post("/job-quotes", response_model=Job)
async def submit_quote(
    request: SubmitQuoteRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service),
) -> Job:
    """Submit (or resubmit) the caller's quote on an open job."""
    return await job_service.submit_quote(current_user, request)


@router.patch("/job-quotes", response_model=Job)
async def accept_quote(
    request: AcceptQuoteRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service),
) -> Job:
    """Accept a quote on one of the caller's jobs and schedule the job."""
    return await job_service.accept_quote(current_user, request)


@router.get("/job-quotes", response_model=None)
async def list_quotes(
    job_id: str | None = Query(None, alias="jobId"),
    role: str | None = Query(None, description="user (default) or professional"),
    current_user: AuthenticatedUser = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service),
) -> Any:
    """List quotes for a job, for the calling professional, or for the caller's jobs."""
    return await job_service.list_quotes(current_user, job_id, Role.parse(role))
