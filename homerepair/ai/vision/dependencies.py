"""FastAPI dependencies for image analysis."""

from fastapi import Depends

from homerepair.ai.vision.client import VisionClient
from homerepair.ai.vision.service import ImageAnalysisService
from homerepair.storage.blob import BlobStorage

_vision_client: VisionClient | None = None


def get_vision_client() -> VisionClient:
    global _vision_client
    if _vision_client is None:
        _vision_client = VisionClient()
    return _vision_client


async def close_vision_client() -> None:
    global _vision_client
    if _vision_client is not None:
        await _vision_client.close()
        _vision_client = None


def get_blob_storage() -> BlobStorage:
    return BlobStorage()


async def get_image_analysis_service(
    vision_client: VisionClient = Depends(get_vision_client),
    blob_storage: BlobStorage = Depends(get_blob_storage),
) -> ImageAnalysisService:
    return ImageAnalysisService(vision_client, blob_storage)
