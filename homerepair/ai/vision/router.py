"""Image analyzer router (no sign-in required)."""

from fastapi import APIRouter, Depends

from homerepair.ai.vision.dependencies import get_image_analysis_service
from homerepair.ai.vision.schemas import ImageAnalysisRequest, ImageAnalysisResponse
from homerepair.ai.vision.service import ImageAnalysisService

router = APIRouter(tags=["Vision"])


@router.post("/image-analyzer", response_model=ImageAnalysisResponse)
async def analyze_image(
    request: ImageAnalysisRequest,
    service: ImageAnalysisService = Depends(get_image_analysis_service),
) -> ImageAnalysisResponse:
    """
    Analyze a repair photo.

    Base64 ``imageData`` is uploaded to blob storage first when no
    ``imageUrl`` is given.
    """
    return await service.analyze(request)
