"""Product matcher router (no sign-in required)."""

from fastapi import APIRouter, Depends

from homerepair.matching.dependencies import get_product_matcher_service
from homerepair.matching.schemas import MatchRequest, MatchResponse
from homerepair.matching.service import ProductMatcherService

router = APIRouter(tags=["Matching"])


@router.post("/product-matcher", response_model=MatchResponse)
async def match_products(
    request: MatchRequest,
    matcher: ProductMatcherService = Depends(get_product_matcher_service),
) -> MatchResponse:
    """
    Find products and local professionals for a described repair problem.

    Args:
        request: Problem description plus optional category, price cap and
            location (free text, state, postcode)

    Returns:
        MatchResponse: Up to 10 products and 5 professionals, with the parsed
        location
    """
    return await matcher.match(request)
