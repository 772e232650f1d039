"""
DynamoDB client initialization and configuration.

Provides a singleton DynamoDB resource shared by every repository.
"""

from enum import Enum
from functools import lru_cache

import boto3
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource

from homerepair.db.config import get_document_store_settings
from homerepair.utils.logger import logger


class Collection(str, Enum):
    """Logical collections, one DynamoDB table each."""

    USERS = "users"
    PROFESSIONALS = "professionals"
    JOBS = "jobs"
    CONVERSATIONS = "conversations"
    PRODUCTS = "products"


@lru_cache(maxsize=1)
def get_dynamodb_resource() -> DynamoDBServiceResource:
    """
    Get a cached DynamoDB resource instance.

    Returns:
        DynamoDBServiceResource: Boto3 DynamoDB resource
    """
    settings = get_document_store_settings()
    logger.info(
        f"[DynamoDB Client] Initializing DynamoDB resource in region: {settings.region}"
    )

    return boto3.resource(
        "dynamodb",
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
    )


def get_table_name(collection: Collection) -> str:
    """
    Get the table name backing a collection.

    Args:
        collection: The logical collection

    Returns:
        str: The table name, e.g. 'homerepair-jobs'
    """
    return f"{get_document_store_settings().table_prefix}-{collection.value}"
