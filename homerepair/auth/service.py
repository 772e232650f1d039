"""
Bearer-token verification.

Tokens are RS256 JWTs issued by an external CIAM tenant. The signing keys are
fetched from the tenant's JWKS endpoint and reused for
``jwks_cache_seconds``.
"""

import time
from typing import Any

import requests
from jose import JWTError, jwt

from homerepair.auth.config import AuthSettings, get_auth_settings
from homerepair.exceptions import AuthError
from homerepair.utils.logger import logger

ALGORITHMS = ["RS256"]


class TokenVerifier:
    """Validates bearer tokens against the tenant's published signing keys."""

    def __init__(self, settings: AuthSettings | None = None):
        self.settings = settings or get_auth_settings()
        self._jwks: dict[str, Any] | None = None
        self._fetched_at: float = 0.0

    def _get_jwks(self, force_refresh: bool = False) -> dict[str, Any]:
        jwks_uri = self.settings.get_jwks_uri()
        if not jwks_uri:
            logger.error("[TokenVerifier] JWKS endpoint is not configured")
            raise AuthError()

        now = time.time()
        stale = now - self._fetched_at > self.settings.jwks_cache_seconds
        if self._jwks is None or stale or force_refresh:
            try:
                response = requests.get(
                    jwks_uri, timeout=self.settings.jwks_timeout_seconds
                )
                response.raise_for_status()
                self._jwks = response.json()
            except (requests.RequestException, ValueError) as e:
                logger.error(
                    "[TokenVerifier] Failed to fetch JWKS",
                    jwks_uri=jwks_uri,
                    error=str(e),
                )
                raise AuthError() from e
            self._fetched_at = now
            logger.info("[TokenVerifier] Refreshed JWKS", jwks_uri=jwks_uri)
        return self._jwks

    def _find_key(self, kid: str | None) -> dict[str, Any] | None:
        keys = self._get_jwks().get("keys", [])
        key = next((k for k in keys if k.get("kid") == kid), None)
        if key is None:
            # Keys may have rotated since the last fetch
            keys = self._get_jwks(force_refresh=True).get("keys", [])
            key = next((k for k in keys if k.get("kid") == kid), None)
        return key

    def verify(self, token: str | None) -> dict[str, Any]:
        """
        Verify a bearer token and return its claims.

        Args:
            token: The raw JWT (without the "Bearer " prefix)

        Returns:
            dict: The verified claims

        Raises:
            AuthError: If the token is missing, malformed, signed by an unknown
                key, has a bad signature, is expired, fails the issuer or
                audience checks, or carries no subject
        """
        if not token:
            raise AuthError("No token")

        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise AuthError("Invalid token") from e

        key = self._find_key(header.get("kid"))
        if key is None:
            logger.info("[TokenVerifier] Unknown signing key", kid=header.get("kid"))
            raise AuthError("Invalid token")

        audience = self.settings.token_audience or None
        try:
            claims = jwt.decode(
                token,
                key,
                algorithms=ALGORITHMS,
                audience=audience,
                issuer=self.settings.get_issuer(),
                options={"verify_aud": audience is not None},
            )
        except JWTError as e:
            logger.info("[TokenVerifier] Token rejected", error=str(e))
            raise AuthError("Invalid token") from e

        if not claims.get("sub"):
            raise AuthError("Invalid token")
        return claims
