"""FastAPI dependencies for the job/quote workflow."""

from fastapi import Depends

from homerepair.db.dependencies import get_job_repository, get_professional_repository
from homerepair.db.jobs.repository import JobRepository
from homerepair.db.professionals.repository import ProfessionalRepository
from homerepair.jobs.service import JobService


async def get_job_service(
    job_repository: JobRepository = Depends(get_job_repository),
    professional_repository: ProfessionalRepository = Depends(
        get_professional_repository
    ),
) -> JobService:
    """
    Get job service instance.

    Returns:
        JobService instance
    """
    return JobService(job_repository, professional_repository)
