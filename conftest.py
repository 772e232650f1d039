"""
Shared test fixtures.

Every test that touches the document store runs against moto's in-memory
DynamoDB. API tests go through ``TestClient`` with token verification and the
chat completion client replaced by fakes.
"""

import os

import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from homerepair.ai.chat.dependencies import get_chat_client
from homerepair.auth.dependencies import get_token_verifier
from homerepair.db.config import DocumentStoreSettings, set_document_store_settings
from homerepair.db.dynamodb_client import get_dynamodb_resource
from homerepair.db.tables import create_tables
from homerepair.exceptions import AuthError
from homerepair.main import app

INVALID_TOKEN = "invalid"


class FakeTokenVerifier:
    """Treats the bearer token itself as the subject."""

    def verify(self, token):
        if not token or token == INVALID_TOKEN:
            raise AuthError("Invalid token")
        return {"sub": token, "email": f"{token}@example.com"}


class FakeChatClient:
    """Records every prompt and answers with ``reply``."""

    def __init__(self, reply="Tighten the tap washer. Difficulty: Easy. Cost about $25."):
        self.reply = reply
        self.calls = []
        self.error = None

    async def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def dynamodb(aws_credentials):
    """Create every table in a mocked DynamoDB."""
    with mock_aws():
        set_document_store_settings(
            DocumentStoreSettings(region="us-east-1", table_prefix="test")
        )
        get_dynamodb_resource.cache_clear()
        create_tables()
        yield get_dynamodb_resource()
        get_dynamodb_resource.cache_clear()
        set_document_store_settings(None)


@pytest.fixture
def chat_client():
    return FakeChatClient()


@pytest.fixture
def client(dynamodb, chat_client):
    """Create a test client with fake auth and a fake chat model."""
    app.dependency_overrides[get_token_verifier] = FakeTokenVerifier
    app.dependency_overrides[get_chat_client] = lambda: chat_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build headers that authenticate as ``user_id``."""

    def _headers(user_id):
        return {"Authorization": f"Bearer {user_id}"}

    return _headers


@pytest.fixture
def professional_payload():
    """A registration form that passes every validation rule."""
    return {
        "businessName": "Ace Plumbing",
        "phone": "0400 000 000",
        "website": "https://aceplumbing.example.com",
        "state": "New South Wales",
        "serviceAreas": ["Sydney", "Parramatta"],
        "services": "Plumbing, Leak detection",
        "abn": "12 345 678 901",
        "tradeQualifications": ["Cert III Plumbing"],
        "certifications": ["Gasfitting"],
        "licenceNumbers": ["L12345"],
        "yearsExperience": "12",
        "insuranceProvider": "QBE",
    }
