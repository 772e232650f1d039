"""OpenAI API configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """Settings for the chat completion backend.

    Attributes:
        api_key: API key for authentication
        model_name: Model (or Azure deployment) used for chat completions
        azure_endpoint: Azure OpenAI resource endpoint; when set the Azure
            client is used and ``model_name`` is the deployment name
        api_version: Azure OpenAI API version
        temperature: Sampling temperature
        max_tokens: Max output tokens for a chat reply
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = Field(
        ...,
        description="OpenAI (or Azure OpenAI) API key",
    )
    model_name: str = Field(
        default="gpt-4o-mini",
        description="Chat model, or the deployment name when using Azure",
    )
    azure_endpoint: str | None = Field(
        default=None,
        description="Azure OpenAI endpoint, e.g. https://<resource>.openai.azure.com",
    )
    api_version: str = Field(
        default="2024-10-21",
        description="Azure OpenAI API version (ignored for api.openai.com)",
    )
    temperature: float = Field(
        default=0.5,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for chat replies",
    )
    max_tokens: int = Field(
        default=1200,
        gt=0,
        description="Max output tokens for a chat reply",
    )
    request_timeout: int = Field(
        default=60,
        gt=0,
        description="HTTP request timeout in seconds",
    )


@lru_cache
def get_openai_settings() -> OpenAISettings:
    """Get cached OpenAI settings instance.

    Returns:
        OpenAISettings: Cached settings instance
    """
    return OpenAISettings()
