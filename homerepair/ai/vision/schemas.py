"""Image analyzer request and response schemas."""

from typing import Any

from pydantic import ConfigDict, field_validator

from homerepair.schemas import CamelModel


class ImageAnalysisRequest(CamelModel):
    """Body of POST /image-analyzer. One of imageUrl or imageData is required."""

    model_config = ConfigDict(extra="ignore")

    image_data: str | None = None
    image_url: str | None = None
    problem_context: str | None = None
    features: list[Any] | None = None

    @field_validator("image_data", "image_url", "problem_context", mode="before")
    @classmethod
    def drop_non_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("features", mode="before")
    @classmethod
    def features_list(cls, value: Any) -> list[Any] | None:
        return value if isinstance(value, list) else None


class ImageAnalysisResponse(CamelModel):
    image_url: str
    used_features: list[str]
    analysis: dict[str, Any]
    raw_analysis: dict[str, Any]
