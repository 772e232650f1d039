"""Tests for bearer-token verification against a JWKS endpoint."""

import time
from unittest.mock import MagicMock, patch

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jose import jwk, jwt

from homerepair.auth.config import AuthSettings, set_auth_settings
from homerepair.auth.dependencies import get_token_verifier, set_token_verifier
from homerepair.auth.schemas import AuthenticatedUser
from homerepair.auth.service import TokenVerifier
from homerepair.exceptions import AuthError

ISSUER = "https://contoso.ciamlogin.com/contoso/v2.0"
AUDIENCE = "spa-client-id"
KID = "test-key"


def _generate_key_pair():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem.decode("utf-8"), public_pem.decode("utf-8")


PRIVATE_PEM, PUBLIC_PEM = _generate_key_pair()
OTHER_PRIVATE_PEM, _ = _generate_key_pair()


def jwks(kid=KID):
    key = jwk.construct(PUBLIC_PEM, "RS256").to_dict()
    key["kid"] = kid
    key["use"] = "sig"
    return {"keys": [key]}


def make_token(private_pem=PRIVATE_PEM, kid=KID, **overrides):
    now = int(time.time())
    claims = {
        "sub": "user-1",
        "email": "user@example.com",
        "iss": ISSUER,
        "aud": AUDIENCE,
        "iat": now,
        "exp": now + 300,
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": kid})


def jwks_response(body):
    response = MagicMock()
    response.json.return_value = body
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def settings():
    return AuthSettings(ciam_tenant="contoso", token_audience=AUDIENCE)


@pytest.fixture
def mock_get():
    with patch("homerepair.auth.service.requests.get") as mocked:
        mocked.return_value = jwks_response(jwks())
        yield mocked


class TestAuthSettings:
    def test_derived_from_tenant(self, settings):
        assert settings.get_authority() == ISSUER
        assert settings.get_issuer() == ISSUER
        assert (
            settings.get_jwks_uri()
            == "https://contoso.ciamlogin.com/contoso/discovery/v2.0/keys"
        )

    def test_explicit_values_win(self):
        settings = AuthSettings(
            ciam_tenant="contoso",
            ciam_authority="https://login.example.com/tenant/v2.0/",
            token_issuer="https://issuer.example.com/",
            jwks_uri="https://keys.example.com/jwks",
        )

        assert settings.get_authority() == "https://login.example.com/tenant/v2.0"
        assert settings.get_issuer() == "https://issuer.example.com"
        assert settings.get_jwks_uri() == "https://keys.example.com/jwks"

    def test_unconfigured(self):
        settings = AuthSettings()

        assert settings.get_issuer() is None
        assert settings.get_jwks_uri() is None


class TestTokenVerifier:
    def test_valid_token(self, settings, mock_get):
        claims = TokenVerifier(settings).verify(make_token())

        assert claims["sub"] == "user-1"
        mock_get.assert_called_once_with(
            "https://contoso.ciamlogin.com/contoso/discovery/v2.0/keys", timeout=10
        )

    def test_keys_are_cached(self, settings, mock_get):
        verifier = TokenVerifier(settings)

        verifier.verify(make_token())
        verifier.verify(make_token(sub="user-2"))

        assert mock_get.call_count == 1

    def test_unknown_kid_refetches_once(self, settings, mock_get):
        verifier = TokenVerifier(settings)
        verifier.verify(make_token())

        with pytest.raises(AuthError, match="Invalid token"):
            verifier.verify(make_token(kid="rotated"))

        assert mock_get.call_count == 2

    @pytest.mark.parametrize(
        "token",
        [
            make_token(private_pem=OTHER_PRIVATE_PEM),
            make_token(exp=int(time.time()) - 60),
            make_token(iss="https://evil.example.com/v2.0"),
            make_token(aud="another-client"),
            make_token(sub=None),
            "not-a-jwt",
        ],
        ids=["bad-signature", "expired", "wrong-issuer", "wrong-audience", "no-subject", "garbage"],
    )
    def test_rejected_tokens(self, settings, mock_get, token):
        with pytest.raises(AuthError, match="Invalid token"):
            TokenVerifier(settings).verify(token)

    def test_missing_token(self, settings):
        with pytest.raises(AuthError, match="No token"):
            TokenVerifier(settings).verify("")

    def test_audience_not_checked_when_unset(self, mock_get):
        verifier = TokenVerifier(AuthSettings(ciam_tenant="contoso"))

        assert verifier.verify(make_token(aud="anything"))["sub"] == "user-1"

    def test_jwks_fetch_failure(self, settings):
        with patch(
            "homerepair.auth.service.requests.get",
            side_effect=requests.ConnectionError("down"),
        ):
            with pytest.raises(AuthError):
                TokenVerifier(settings).verify(make_token())

    def test_jwks_not_configured(self):
        with pytest.raises(AuthError):
            TokenVerifier(AuthSettings()).verify(make_token())


class TestAuthenticatedUser:
    def test_email_claim(self):
        user = AuthenticatedUser.from_claims({"sub": "u", "email": "a@example.com"})

        assert user.email == "a@example.com"

    def test_emails_claim_fallback(self):
        user = AuthenticatedUser.from_claims({"sub": "u", "emails": ["b@example.com"]})

        assert user.email == "b@example.com"
        assert user.claims["emails"] == ["b@example.com"]


class TestAuthDependencies:
    def test_bearer_token_resolves_user(self, client, auth_headers):
        response = client.get("/api/get-profile", headers=auth_headers("user-1"))

        assert response.status_code == 200

    def test_non_bearer_scheme_is_unauthorized(self, client):
        response = client.get("/api/get-profile", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_shared_verifier_uses_configured_settings(self, settings):
        set_auth_settings(settings)
        set_token_verifier(None)
        try:
            verifier = get_token_verifier()

            assert verifier is get_token_verifier()
            assert verifier.settings is settings
        finally:
            set_token_verifier(None)
            set_auth_settings(None)
