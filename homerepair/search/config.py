"""
Configuration management for the product search index.

The index is an Azure AI Search compatible service queried over REST.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from homerepair.utils.logger import logger


class SearchSettings(BaseSettings):
    """Configuration for the search index using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="SEARCH_"
    )

    endpoint: str = Field(
        description="Search service URL, e.g. https://<name>.search.windows.net"
    )
    api_key: str = Field(description="Query or admin API key")
    index: str = Field(default="products-index", description="Product index name")
    api_version: str = Field(default="2024-07-01", description="REST API version")
    timeout: float = Field(default=8.0, description="Request timeout in seconds")


# Global settings instance
_search_settings: SearchSettings | None = None


def get_search_settings() -> SearchSettings:
    """
    Get the global search settings instance.

    Returns:
        SearchSettings: The global settings instance
    """
    global _search_settings
    if _search_settings is None:
        _search_settings = SearchSettings()
        logger.info("SearchSettings loaded", index=_search_settings.index)
    return _search_settings


def set_search_settings(settings: SearchSettings | None) -> None:
    """
    Set the global search settings instance.

    Args:
        settings: The settings to set
    """
    global _search_settings
    _search_settings = settings
