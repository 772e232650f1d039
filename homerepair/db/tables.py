"""
Table and index definitions for every collection.

Used by ``create_tables`` for local development (DynamoDB Local) and by the
test suite under moto.
"""

from typing import Any

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource

from homerepair.db.dynamodb_client import (
    Collection,
    get_dynamodb_resource,
    get_table_name,
)
from homerepair.utils.logger import logger

JOBS_BY_USER_INDEX = "userId-createdAt-index"
JOBS_BY_STATUS_INDEX = "status-createdAt-index"
CONVERSATIONS_BY_UPDATED_INDEX = "userId-updatedAt-index"


def _string_attrs(*names: str) -> list[dict[str, str]]:
    return [{"AttributeName": name, "AttributeType": "S"} for name in names]


def _key(hash_key: str, range_key: str | None = None) -> list[dict[str, str]]:
    schema = [{"AttributeName": hash_key, "KeyType": "HASH"}]
    if range_key:
        schema.append({"AttributeName": range_key, "KeyType": "RANGE"})
    return schema


TABLE_DEFINITIONS: dict[Collection, dict[str, Any]] = {
    Collection.USERS: {
        "KeySchema": _key("id"),
        "AttributeDefinitions": _string_attrs("id"),
    },
    Collection.PROFESSIONALS: {
        "KeySchema": _key("id"),
        "AttributeDefinitions": _string_attrs("id"),
    },
    Collection.JOBS: {
        "KeySchema": _key("id"),
        "AttributeDefinitions": _string_attrs("id", "userId", "status", "createdAt"),
        "GlobalSecondaryIndexes": [
            {
                "IndexName": JOBS_BY_USER_INDEX,
                "KeySchema": _key("userId", "createdAt"),
                "Projection": {"ProjectionType": "ALL"},
            },
            {
                "IndexName": JOBS_BY_STATUS_INDEX,
                "KeySchema": _key("status", "createdAt"),
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    },
    Collection.CONVERSATIONS: {
        "KeySchema": _key("userId", "id"),
        "AttributeDefinitions": _string_attrs("userId", "id", "updatedAt"),
        "LocalSecondaryIndexes": [
            {
                "IndexName": CONVERSATIONS_BY_UPDATED_INDEX,
                "KeySchema": _key("userId", "updatedAt"),
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    },
    Collection.PRODUCTS: {
        "KeySchema": _key("id", "category"),
        "AttributeDefinitions": _string_attrs("id", "category"),
    },
}


def create_tables(dynamodb: DynamoDBServiceResource | None = None) -> list[str]:
    """
    Create any missing tables (on-demand billing).

    Args:
        dynamodb: DynamoDB resource (defaults to the shared cached resource)

    Returns:
        list[str]: Names of the tables that were created
    """
    dynamodb = dynamodb or get_dynamodb_resource()
    created = []
    for collection, definition in TABLE_DEFINITIONS.items():
        table_name = get_table_name(collection)
        try:
            dynamodb.create_table(
                TableName=table_name, BillingMode="PAY_PER_REQUEST", **definition
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceInUseException":
                logger.info("Table already exists", table=table_name)
                continue
            raise
        created.append(table_name)
        logger.info("Created table", table=table_name)
    return created


if __name__ == "__main__":
    create_tables()
