"""
Configuration management for the auth package.

This module handles environment variable configuration for bearer-token
validation using Pydantic settings. Tokens are issued by an external OIDC
provider (a CIAM tenant); this service only verifies them.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from homerepair.utils.logger import logger


def _sanitize(value: str | None) -> str:
    return value.strip().rstrip("/") if value else ""


class AuthSettings(BaseSettings):
    """Configuration for the auth system using Pydantic settings."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    ciam_tenant: str | None = Field(
        default=None, description="CIAM tenant name, used to derive the authority"
    )
    ciam_authority: str | None = Field(
        default=None, description="Explicit authority URL (overrides the tenant)"
    )
    token_issuer: str | None = Field(
        default=None, description="Exact 'iss' expected in tokens"
    )
    token_audience: str | None = Field(
        default=None, description="Expected 'aud' (the SPA client id)"
    )
    jwks_uri: str | None = Field(default=None, description="JWKS endpoint URL")
    jwks_cache_seconds: int = Field(
        default=3600, gt=0, description="How long fetched signing keys are reused"
    )
    jwks_timeout_seconds: int = Field(default=10, gt=0)

    def get_authority(self) -> str:
        explicit = _sanitize(self.ciam_authority)
        if explicit:
            return explicit
        tenant = _sanitize(self.ciam_tenant)
        return f"https://{tenant}.ciamlogin.com/{tenant}/v2.0" if tenant else ""

    def get_issuer(self) -> str | None:
        return _sanitize(self.token_issuer) or self.get_authority() or None

    def get_jwks_uri(self) -> str | None:
        explicit = _sanitize(self.jwks_uri)
        if explicit:
            return explicit
        authority = self.get_authority()
        if not authority:
            return None
        base = authority[: -len("/v2.0")] if authority.lower().endswith("/v2.0") else authority
        return f"{base}/discovery/v2.0/keys"


# Global settings instance
_auth_settings: AuthSettings | None = None


def get_auth_settings() -> AuthSettings:
    """
    Get the global auth settings instance.

    Returns:
        AuthSettings: The global settings instance
    """
    global _auth_settings
    if _auth_settings is None:
        _auth_settings = AuthSettings()
        logger.info(
            "AuthSettings loaded",
            issuer=_auth_settings.get_issuer(),
            jwks_uri=_auth_settings.get_jwks_uri(),
        )
    return _auth_settings


def set_auth_settings(settings: AuthSettings | None) -> None:
    """
    Set the global auth settings instance.

    Args:
        settings: The settings to set
    """
    global _auth_settings
    _auth_settings = settings
