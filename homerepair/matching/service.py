"""
Product and professional matching for a described repair problem.

Products come from the search index, enriched from the products collection.
Professionals come from the professionals collection, picked by a keyword
service classification and the caller's location.
"""

from typing import Any

from homerepair.db.products.repository import ProductRepository
from homerepair.db.professionals.model import ProfessionalProfile
from homerepair.db.professionals.repository import ProfessionalRepository
from homerepair.exceptions import DocumentStoreError, ValidationError
from homerepair.matching.schemas import (
    MatchRequest,
    MatchResponse,
    ProductMatch,
    ProfessionalMatch,
)
from homerepair.search.client import SearchClient, build_filter
from homerepair.utils.location import normalise_location
from homerepair.utils.logger import logger
from homerepair.utils.text import to_number

MAX_PROFESSIONALS = 5
DEFAULT_SERVICE_TYPE = "general_maintenance"

# Checked in order; the first service with a matching keyword wins
SERVICE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "plumbing": ("leak", "pipe", "tap", "water", "drain"),
    "electrical": ("wiring", "power", "light", "switch", "outlet"),
    "carpentry": ("door", "window", "cabinet", "shelf", "wood"),
    "painting": ("paint", "wall", "ceiling", "color"),
    "general_maintenance": ("repair", "fix", "maintenance", "broken", "crack", "stain"),
}


def extract_service_type(problem: str) -> str:
    """Classify a problem description into a trade service."""
    text = (problem or "").lower()
    for service, keywords in SERVICE_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            return service
    return DEFAULT_SERVICE_TYPE


def _pick_number(*values: Any) -> float | int | None:
    for value in values:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = to_number(value)
            if number is not None:
                return number
    return None


def enrich_row(row: dict[str, Any], detail: dict[str, Any] | None) -> dict[str, Any]:
    """Overlay catalogue detail on a search hit; without detail the price range is null."""
    if detail is None:
        return {**row, "priceLow": None, "priceHigh": None, "searchScore": row.get("score")}

    def first(*keys: str, fallback: Any = None) -> Any:
        return next((detail[k] for k in keys if detail.get(k)), fallback)

    return {
        **row,
        "price": _pick_number(detail.get("price"), row.get("price")),
        "priceLow": _pick_number(detail.get("priceLow")),
        "priceHigh": _pick_number(detail.get("priceHigh")),
        "link": first("link", "productUrl", "url", fallback=row.get("link")),
        "productUrl": first("productUrl", "link", "url", fallback=row.get("productUrl")),
        "problems": (
            detail["problems"] if isinstance(detail.get("problems"), list) else row.get("problems")
        ),
        "rating": _pick_number(detail.get("rating"), row.get("rating")),
        "imageUrl": detail.get("imageUrl") or row.get("imageUrl"),
        "lastUpdated": detail.get("lastUpdated") or row.get("lastUpdated"),
        "state": detail.get("state") or row.get("state"),
        "postcode": _pick_number(detail.get("postcode"), row.get("postcode")),
        "searchScore": row.get("score"),
    }


def to_product_match(row: dict[str, Any]) -> ProductMatch:
    problems = row.get("problems")
    return ProductMatch(
        id=str(row.get("id")),
        name=row.get("name"),
        category=row.get("category"),
        price=_pick_number(row.get("price")),
        price_low=_pick_number(row.get("priceLow")),
        price_high=_pick_number(row.get("priceHigh")),
        supplier=row.get("supplier"),
        location=row.get("location"),
        state=row.get("state"),
        postcode=_pick_number(row.get("postcode")),
        problems=problems if isinstance(problems, list) else [],
        rating=_pick_number(row.get("rating")),
        link=row.get("link"),
        product_url=row.get("productUrl"),
        image_url=row.get("imageUrl"),
        last_updated=row.get("lastUpdated"),
        search_score=_pick_number(row.get("searchScore"), row.get("score")),
    )


def to_professional_match(profile: ProfessionalProfile) -> ProfessionalMatch:
    return ProfessionalMatch(
        id=profile.id,
        name=profile.business_name or None,
        services=profile.services,
        service_areas=profile.service_areas,
        phone=profile.phone,
        website=profile.website,
        state=profile.state,
        rating=profile.rating,
    )


class ProductMatcherService:
    """Service class for product and professional lookups."""

    def __init__(
        self,
        search_client: SearchClient,
        product_repository: ProductRepository,
        professional_repository: ProfessionalRepository,
    ):
        self.search = search_client
        self.products = product_repository
        self.professionals = professional_repository

    async def _enrich(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        enriched = []
        for row in rows:
            detail = None
            if row.get("id") and row.get("category"):
                try:
                    detail = await self.products.get(str(row["id"]), str(row["category"]))
                except DocumentStoreError as e:
                    logger.warning(
                        "Product detail lookup failed", product_id=row.get("id"), error=str(e)
                    )
            enriched.append(enrich_row(row, detail))
        return enriched

    async def match(self, request: MatchRequest) -> MatchResponse:
        """
        Find products and professionals for a repair problem.

        Raises:
            ValidationError: If no problem description is given
            SearchError: If the search index call fails
        """
        location = normalise_location(
            {
                "location": request.location,
                "state": request.state,
                "postcode": request.postcode,
            }
        )
        problem = request.problem
        if not problem or not isinstance(problem, str):
            raise ValidationError("Problem description required")

        filter_expression = build_filter(
            category=request.category,
            max_price=request.max_price,
            state=location.state,
            postcode=location.postcode,
            city=location.city,
        )
        rows = await self.search.search_products(problem, filter_expression)
        products = [to_product_match(row) for row in await self._enrich(rows)]

        service = extract_service_type(problem)
        professionals = await self.professionals.find_by_service(
            service,
            state=location.state,
            city=location.city,
            limit=MAX_PROFESSIONALS,
        )

        logger.info(
            "Matched products and professionals",
            service=service,
            products=len(products),
            professionals=len(professionals),
            state=location.state,
        )
        return MatchResponse(
            products=products,
            professionals=[to_professional_match(p) for p in professionals],
            location=location,
            search_query=problem,
            total_results=len(rows),
        )
