from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environments."""

    DEVELOPMENT = "dev"
    STAGING = "staging"
    PRODUCTION = "prod"


class AppSettings(BaseSettings):
    """Process-wide settings shared by every router."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment (dev, staging or prod)",
    )
    cors_allowed_origin: str = Field(
        default="*",
        description="The single browser origin allowed to call the API",
    )
    api_prefix: str = Field(
        default="/api", description="Path prefix every router is mounted under"
    )

    @property
    def docs_enabled(self) -> bool:
        """Interactive API docs are served outside production only."""
        return self.environment is not Environment.PRODUCTION


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings
