"""
Authentication dependencies.

This module provides FastAPI dependencies that resolve the caller from the
``Authorization: Bearer <token>`` header.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from homerepair.auth.schemas import AuthenticatedUser
from homerepair.auth.service import TokenVerifier
from homerepair.exceptions import AuthError

# auto_error off: a missing header raises AuthError (401), not a FastAPI 403
security = HTTPBearer(auto_error=False)

_token_verifier: TokenVerifier | None = None


def get_token_verifier() -> TokenVerifier:
    """Shared verifier, so the JWKS cache lives for the whole process."""
    global _token_verifier
    if _token_verifier is None:
        _token_verifier = TokenVerifier()
    return _token_verifier


def set_token_verifier(verifier: TokenVerifier | None) -> None:
    global _token_verifier
    _token_verifier = verifier


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedUser:
    """
    Get the authenticated caller.

    Raises:
        AuthError: If the token is missing or invalid
    """
    if credentials is None:
        raise AuthError()
    claims = verifier.verify(credentials.credentials)
    return AuthenticatedUser.from_claims(claims)


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> AuthenticatedUser | None:
    """Get the caller if a valid token was sent, otherwise None."""
    if credentials is None:
        return None
    try:
        claims = verifier.verify(credentials.credentials)
    except AuthError:
        return None
    return AuthenticatedUser.from_claims(claims)
