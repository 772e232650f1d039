"""Image analysis (Azure AI Vision 4.0 compatible) configuration."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from homerepair.utils.logger import logger


class VisionSettings(BaseSettings):
    """Settings for the image analysis endpoint.

    Attributes:
        endpoint: Resource endpoint, either
            ``https://<resource>.cognitiveservices.azure.com`` or the regional
            ``https://<region>.api.cognitive.microsoft.com`` form
        api_key: Subscription key
        api_version: Image Analysis REST API version
        timeout: Request timeout in seconds
    """

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="VISION_"
    )

    endpoint: str = Field(
        validation_alias=AliasChoices("VISION_ENDPOINT", "COMPUTER_VISION_ENDPOINT", "endpoint")
    )
    api_key: str = Field(
        validation_alias=AliasChoices("VISION_API_KEY", "COMPUTER_VISION_KEY", "api_key")
    )
    api_version: str = Field(default="2024-02-01")
    timeout: float = Field(default=10.0, gt=0)


# Global settings instance
_vision_settings: VisionSettings | None = None


def get_vision_settings() -> VisionSettings:
    """
    Get the global vision settings instance.

    Returns:
        VisionSettings: The global settings instance
    """
    global _vision_settings
    if _vision_settings is None:
        _vision_settings = VisionSettings()
        logger.info("VisionSettings loaded", endpoint=_vision_settings.endpoint)
    return _vision_settings


def set_vision_settings(settings: VisionSettings | None) -> None:
    global _vision_settings
    _vision_settings = settings
