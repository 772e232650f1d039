"""Async client for the product search index (``docs/search`` REST API)."""

from typing import Any
from urllib.parse import quote

import httpx

from homerepair.exceptions import ExternalServiceError
from homerepair.search.config import SearchSettings, get_search_settings
from homerepair.utils.logger import logger
from homerepair.utils.text import to_number

SEARCH_FIELDS = "name,description,problems"
TOP_RESULTS = 10


class SearchError(ExternalServiceError):
    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message, service="search", original_error=original_error)


def escape_odata(value: Any) -> str:
    """Escape a value for use inside a single-quoted OData string literal."""
    return str(value).replace("'", "''")


def build_filter(
    category: str | None = None,
    max_price: float | None = None,
    state: str | None = None,
    postcode: int | None = None,
    city: str | None = None,
) -> str | None:
    """OData ``$filter`` joining every given constraint with ``and``."""
    clauses = []
    if category:
        clauses.append(f"category eq '{escape_odata(category)}'")
    if max_price:
        clauses.append(f"price le {max_price}")
    if state:
        clauses.append(f"state eq '{escape_odata(state)}'")
    if postcode:
        clauses.append(f"postcode eq {int(postcode)}")
    if city:
        clauses.append(f"location eq '{escape_odata(city)}'")
    return " and ".join(clauses) or None


def _number(value: Any) -> float | int | None:
    # Index numbers come back as JSON numbers; strings are not coerced
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return to_number(value)


def to_result_row(document: dict[str, Any]) -> dict[str, Any]:
    """Flatten a search hit into the product row shape used by the matcher."""
    problems = document.get("problems")
    if not isinstance(problems, list):
        problems = [problems] if problems else []
    link = document.get("link") or document.get("url") or document.get("productUrl")
    product_url = document.get("productUrl") or document.get("link") or document.get("url")
    score = document.get("@search.score")
    return {
        "id": document.get("id"),
        "name": document.get("name"),
        "category": document.get("category"),
        "price": _number(document.get("price")),
        "supplier": document.get("supplier"),
        "location": document.get("location"),
        "state": document.get("state"),
        "postcode": _number(document.get("postcode")),
        "problems": problems,
        "rating": _number(document.get("rating")),
        "link": link or None,
        "productUrl": product_url or None,
        "imageUrl": document.get("imageUrl"),
        "lastUpdated": document.get("lastUpdated"),
        "score": _number(score),
    }


class SearchClient:
    """Async client for the product index.

    Queries are sent once; failures are not retried.
    """

    def __init__(
        self,
        settings: SearchSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the search client.

        Args:
            settings: Search settings (defaults to the global instance)
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
        """
        self.settings = settings or get_search_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.endpoint.rstrip("/"),
                headers={
                    "api-key": self.settings.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.settings.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search_products(
        self, query: str, filter_expression: str | None = None
    ) -> list[dict[str, Any]]:
        """
        Full-text search over name, description and problems.

        Args:
            query: Free-text search
            filter_expression: Optional OData filter

        Returns:
            list[dict]: Up to 10 product rows in score order

        Raises:
            SearchError: If the request fails or returns an error status
        """
        client = await self._ensure_client()
        path = f"/indexes/{quote(self.settings.index, safe='')}/docs/search"
        body: dict[str, Any] = {
            "search": query or "",
            "queryType": "simple",
            "top": TOP_RESULTS,
            "searchFields": SEARCH_FIELDS,
        }
        if filter_expression:
            body["filter"] = filter_expression

        try:
            response = await client.post(
                path, params={"api-version": self.settings.api_version}, json=body
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Search request rejected",
                status_code=e.response.status_code,
                body=e.response.text[:500],
            )
            raise SearchError(f"HTTP error: {e.response.status_code}", e) from e
        except httpx.RequestError as e:
            logger.error("Search request failed", error=str(e))
            raise SearchError(f"Request error: {e}", e) from e
        except ValueError as e:
            raise SearchError(f"Invalid response format: {e}", e) from e

        values = data.get("value") if isinstance(data, dict) else None
        rows = [to_result_row(v) for v in values or [] if isinstance(v, dict)]
        logger.info("Product search completed", results=len(rows), filtered=bool(filter_expression))
        return rows
