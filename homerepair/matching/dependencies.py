"""FastAPI dependencies for the product matcher."""

from fastapi import Depends

from homerepair.db.dependencies import (
    get_product_repository,
    get_professional_repository,
)
from homerepair.db.products.repository import ProductRepository
from homerepair.db.professionals.repository import ProfessionalRepository
from homerepair.matching.service import ProductMatcherService
from homerepair.search.client import SearchClient

_search_client: SearchClient | None = None


def get_search_client() -> SearchClient:
    """Process-wide search client (one HTTP connection pool)."""
    global _search_client
    if _search_client is None:
        _search_client = SearchClient()
    return _search_client


async def close_search_client() -> None:
    """Close the shared client's connection pool; the next request opens a new one."""
    global _search_client
    if _search_client is not None:
        await _search_client.close()
        _search_client = None


async def get_product_matcher_service(
    search_client: SearchClient = Depends(get_search_client),
    product_repository: ProductRepository = Depends(get_product_repository),
    professional_repository: ProfessionalRepository = Depends(
        get_professional_repository
    ),
) -> ProductMatcherService:
    return ProductMatcherService(
        search_client, product_repository, professional_repository
    )
