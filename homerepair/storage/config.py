"""
Configuration management for blob storage.

Uploaded images are written to S3 and handed to the vision service as
presigned GET URLs.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from homerepair.utils.logger import logger


class BlobStorageSettings(BaseSettings):
    """S3 configuration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="BLOB_"
    )

    bucket: str = Field(default="repair-images", description="Bucket for uploaded images")
    region: str = Field(
        default="ap-southeast-2",
        validation_alias=AliasChoices("BLOB_REGION", "AWS_REGION", "region"),
    )
    endpoint_url: str | None = Field(default=None, description="Override S3 endpoint")
    url_expiry_seconds: int = Field(
        default=3600, gt=0, description="Lifetime of the presigned image URLs"
    )


# Global settings instance
_blob_storage_settings: BlobStorageSettings | None = None


def get_blob_storage_settings() -> BlobStorageSettings:
    """
    Get the global blob storage settings instance.

    Returns:
        BlobStorageSettings: The global settings instance
    """
    global _blob_storage_settings
    if _blob_storage_settings is None:
        _blob_storage_settings = BlobStorageSettings()
        logger.info("BlobStorageSettings loaded", bucket=_blob_storage_settings.bucket)
    return _blob_storage_settings


def set_blob_storage_settings(settings: BlobStorageSettings | None) -> None:
    global _blob_storage_settings
    _blob_storage_settings = settings
