"""Repair photo analysis service."""

from homerepair.ai.vision.analysis import process_image_for_repairs
from homerepair.ai.vision.client import VisionClient
from homerepair.ai.vision.features import sanitize_features
from homerepair.ai.vision.schemas import ImageAnalysisRequest, ImageAnalysisResponse
from homerepair.exceptions import ValidationError
from homerepair.storage.blob import BlobStorage
from homerepair.utils.logger import logger


class ImageAnalysisService:
    """Uploads (when needed) and analyzes a repair photo."""

    def __init__(self, vision_client: VisionClient, blob_storage: BlobStorage):
        self.vision = vision_client
        self.blobs = blob_storage

    async def analyze(self, request: ImageAnalysisRequest) -> ImageAnalysisResponse:
        """
        Analyze an image given by URL or as base64 data.

        Raises:
            ValidationError: If neither image source is given, or the data is
                not valid base64
            VisionError: If the vision service call fails
        """
        image_url = (request.image_url or "").strip()
        if not image_url and request.image_data:
            image_url = self.blobs.upload_image(request.image_data)
        if not image_url:
            raise ValidationError("Image URL or image data required")

        features = sanitize_features(request.features, self.vision.settings.endpoint)
        raw_analysis = await self.vision.analyze(image_url, features)
        analysis = process_image_for_repairs(raw_analysis, request.problem_context)

        logger.info(
            "Image analyzed",
            features=features,
            relevant_tags=len(analysis["relevantTags"]),
            suggestions=len(analysis["repairSuggestions"]),
        )
        return ImageAnalysisResponse(
            image_url=image_url,
            used_features=features,
            analysis=analysis,
            raw_analysis=raw_analysis,
        )
