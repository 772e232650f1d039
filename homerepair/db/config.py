"""
Configuration management for the document store.

This module handles DynamoDB configuration using Pydantic settings.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from homerepair.utils.logger import logger


class DocumentStoreSettings(BaseSettings):
    """DynamoDB configuration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="DYNAMODB_"
    )

    region: str = Field(
        default="ap-southeast-2",
        validation_alias=AliasChoices("DYNAMODB_REGION", "AWS_REGION", "region"),
        description="AWS region hosting the tables",
    )
    table_prefix: str = Field(
        default="homerepair",
        description="Prefix for table names; tables are named '<prefix>-<collection>'",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Override endpoint, e.g. http://localhost:8000 for DynamoDB Local",
    )


# Global settings instance
_document_store_settings: DocumentStoreSettings | None = None


def get_document_store_settings() -> DocumentStoreSettings:
    """
    Get the global document store settings instance.

    Returns:
        DocumentStoreSettings: The global settings instance
    """
    global _document_store_settings
    if _document_store_settings is None:
        _document_store_settings = DocumentStoreSettings()
        logger.info(
            "DocumentStoreSettings loaded",
            region=_document_store_settings.region,
            table_prefix=_document_store_settings.table_prefix,
        )
    return _document_store_settings


def set_document_store_settings(settings: DocumentStoreSettings | None) -> None:
    """
    Set the global document store settings instance.

    Useful for testing.

    Args:
        settings: The settings to set (None forces a reload from the environment)
    """
    global _document_store_settings
    _document_store_settings = settings
