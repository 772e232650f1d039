"""
Base class for DynamoDB-backed repositories.

Wraps the boto3 Table calls the repositories need and turns ``ClientError``
into ``DocumentStoreError`` so handlers can map it to a 500.
"""

from typing import Any

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource

from homerepair.db.dynamodb_client import (
    Collection,
    get_dynamodb_resource,
    get_table_name,
)
from homerepair.db.models import convert_decimals, convert_floats_to_decimal
from homerepair.exceptions import DocumentStoreError
from homerepair.utils.logger import logger


class DynamoDBRepository:
    """Common table access for a single collection."""

    collection: Collection

    def __init__(self, dynamodb: DynamoDBServiceResource | None = None):
        """
        Initialize the repository with its DynamoDB table.

        Args:
            dynamodb: DynamoDB resource (defaults to the shared cached resource)
        """
        self.dynamodb = dynamodb or get_dynamodb_resource()
        self.table_name = get_table_name(self.collection)
        self.table = self.dynamodb.Table(self.table_name)

    def _fail(self, operation: str, error: ClientError) -> DocumentStoreError:
        message = error.response.get("Error", {}).get("Message", str(error))
        logger.error(
            f"[{type(self).__name__}] {operation} failed",
            table=self.table_name,
            error=message,
        )
        return DocumentStoreError(f"Failed to {operation} on {self.table_name}: {message}")

    def _get_item(self, key: dict[str, Any]) -> dict[str, Any] | None:
        try:
            response = self.table.get_item(Key=key)
        except ClientError as e:
            raise self._fail("get item", e) from e

        item = response.get("Item")
        return convert_decimals(item) if item is not None else None

    def _put_item(self, item: dict[str, Any]) -> None:
        try:
            self.table.put_item(Item=convert_floats_to_decimal(item))
        except ClientError as e:
            raise self._fail("put item", e) from e

    def _query(self, **kwargs: Any) -> tuple[list[dict[str, Any]], dict[str, Any] | None]:
        """
        Run a single Query page.

        Returns:
            tuple: (items, LastEvaluatedKey or None)
        """
        try:
            response = self.table.query(**kwargs)
        except ClientError as e:
            raise self._fail("query", e) from e

        items = [convert_decimals(item) for item in response.get("Items", [])]
        last_key = response.get("LastEvaluatedKey")
        return items, convert_decimals(last_key) if last_key else None

    def _query_all(self, **kwargs: Any) -> list[dict[str, Any]]:
        """Run a Query and follow LastEvaluatedKey until exhausted."""
        items: list[dict[str, Any]] = []
        query_kwargs = dict(kwargs)
        while True:
            page, last_key = self._query(**query_kwargs)
            items.extend(page)
            if not last_key:
                return items
            query_kwargs["ExclusiveStartKey"] = last_key

    def _scan(self, limit: int | None = None, **kwargs: Any) -> list[dict[str, Any]]:
        """
        Scan the table, following pagination until ``limit`` matches are found.

        DynamoDB applies ``Limit`` before the filter expression, so the page
        size is left to the service and the cut happens here.
        """
        items: list[dict[str, Any]] = []
        scan_kwargs = dict(kwargs)
        while True:
            try:
                response = self.table.scan(**scan_kwargs)
            except ClientError as e:
                raise self._fail("scan", e) from e

            items.extend(convert_decimals(item) for item in response.get("Items", []))
            if limit is not None and len(items) >= limit:
                return items[:limit]

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            scan_kwargs["ExclusiveStartKey"] = last_key
