"""
Repository for jobs (with their embedded quotes).

Writes are plain upserts: the last writer wins, no version token is checked.
"""

from typing import Any

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from homerepair.db.base import DynamoDBRepository
from homerepair.db.dynamodb_client import Collection
from homerepair.db.jobs.model import Job, JobStatus
from homerepair.db.models import convert_floats_to_decimal
from homerepair.db.tables import JOBS_BY_STATUS_INDEX, JOBS_BY_USER_INDEX
from homerepair.utils.logger import logger

DEFAULT_PAGE_SIZE = 30

# Flat list of quoting professional ids, the attribute list_quoted_by filters on
QUOTE_PROFESSIONAL_IDS = "quoteProfessionalIds"


def _to_item(job: Job) -> dict[str, Any]:
    item = job.to_document()
    item[QUOTE_PROFESSIONAL_IDS] = [q.professional_id for q in job.quotes]
    return item


def _to_job(item: dict[str, Any]) -> Job:
    item.pop(QUOTE_PROFESSIONAL_IDS, None)
    return Job.model_validate(item)


class JobRepository(DynamoDBRepository):
    collection = Collection.JOBS

    async def create(self, job: Job) -> Job:
        """
        Insert a new job. Fails if a job with the same id already exists.

        Raises:
            DocumentStoreError: If the write fails
        """
        try:
            self.table.put_item(
                Item=convert_floats_to_decimal(_to_item(job)),
                ConditionExpression=Attr("id").not_exists(),
            )
        except ClientError as e:
            raise self._fail("create job", e) from e

        logger.info(f"[JobRepository] Created job {job.id} for user {job.user_id}")
        return job

    async def get(self, job_id: str) -> Job | None:
        item = self._get_item({"id": job_id})
        return _to_job(item) if item else None

    async def save(self, job: Job) -> Job:
        """Upsert the whole job document."""
        self._put_item(_to_item(job))
        logger.info(
            f"[JobRepository] Saved job {job.id}",
            status=job.status.value,
            quote_count=len(job.quotes),
        )
        return job

    async def list_by_user(
        self, user_id: str, limit: int = DEFAULT_PAGE_SIZE
    ) -> list[Job]:
        """Jobs owned by a user, newest first."""
        items, _ = self._query(
            IndexName=JOBS_BY_USER_INDEX,
            KeyConditionExpression=Key("userId").eq(user_id),
            ScanIndexForward=False,
            Limit=limit,
        )
        return [_to_job(item) for item in items]

    async def list_open(self, limit: int = DEFAULT_PAGE_SIZE) -> list[Job]:
        """The open-jobs board: most recent open jobs across all users."""
        items, _ = self._query(
            IndexName=JOBS_BY_STATUS_INDEX,
            KeyConditionExpression=Key("status").eq(JobStatus.OPEN.value),
            ScanIndexForward=False,
            Limit=limit,
        )
        return [_to_job(item) for item in items]

    async def list_with_quotes_by_user(self, user_id: str) -> list[Job]:
        """A user's jobs that have received at least one quote, newest first."""
        items = self._query_all(
            IndexName=JOBS_BY_USER_INDEX,
            KeyConditionExpression=Key("userId").eq(user_id),
            ScanIndexForward=False,
        )
        return [job for job in map(_to_job, items) if job.quotes]

    async def list_quoted_by(self, professional_id: str) -> list[Job]:
        """Every job the professional has a quote on."""
        items = self._scan(
            FilterExpression=Attr(QUOTE_PROFESSIONAL_IDS).contains(professional_id)
        )
        return [_to_job(item) for item in items]
