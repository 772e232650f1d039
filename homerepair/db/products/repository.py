"""Repository for the product catalogue used to enrich search hits."""

from typing import Any

from homerepair.db.base import DynamoDBRepository
from homerepair.db.dynamodb_client import Collection


class ProductRepository(DynamoDBRepository):
    collection = Collection.PRODUCTS

    async def get(self, product_id: str, category: str) -> dict[str, Any] | None:
        """Product detail keyed by (id, category); None if absent."""
        return self._get_item({"id": product_id, "category": category})

    async def put(self, product: dict[str, Any]) -> None:
        self._put_item(product)
