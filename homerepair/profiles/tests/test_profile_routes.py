"""API tests for profile registration and lookup."""

from decimal import Decimal

import pytest

from homerepair.db.dynamodb_client import Collection, get_table_name


@pytest.fixture
def user(auth_headers):
    return auth_headers("user-1")


class TestRegisterUser:
    def test_register_with_contact_email(self, client, user):
        response = client.post(
            "/api/register-user",
            json={
                "preferredUsername": "  Sam  ",
                "contactEmail": "sam@example.org",
                "mobileNumber": "+61 400 000 000",
                "address": "1 George St, Sydney NSW 2000",
            },
            headers=user,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["user"]["id"] == "user-1"
        assert body["user"]["preferredUsername"] == "Sam"
        assert body["user"]["displayName"] == "Sam"
        assert body["user"]["contactEmail"] == "sam@example.org"
        assert body["user"]["mobileNumber"] == "+61 400 000 000"

    def test_email_falls_back_to_token_claims(self, client, user):
        response = client.post(
            "/api/register-user", json={"displayName": "Sam"}, headers=user
        )

        assert response.status_code == 200
        assert response.json()["user"]["contactEmail"] == "user-1@example.com"

    def test_invalid_contact_email_falls_back(self, client, user):
        response = client.post(
            "/api/register-user",
            json={"displayName": "Sam", "contactEmail": "not-an-email"},
            headers=user,
        )

        assert response.json()["user"]["contactEmail"] == "user-1@example.com"

    def test_reregistration_keeps_created_at(self, client, user):
        first = client.post("/api/register-user", json={"displayName": "Sam"}, headers=user)
        second = client.post("/api/register-user", json={"displayName": "Samuel"}, headers=user)

        assert second.json()["user"]["displayName"] == "Samuel"
        assert second.json()["user"]["createdAt"] == first.json()["user"]["createdAt"]

    @pytest.mark.parametrize(
        "payload, error",
        [
            ({}, "preferredUsername is required (<=100 chars)"),
            ({"preferredUsername": "x" * 101}, "preferredUsername is required (<=100 chars)"),
            ({"displayName": "Sam", "mobileNumber": "call me"}, "mobileNumber invalid"),
            ({"displayName": "Sam", "address": "a" * 281}, "address must be 280 characters or fewer"),
        ],
    )
    def test_validation(self, client, user, payload, error):
        response = client.post("/api/register-user", json=payload, headers=user)

        assert response.status_code == 400
        assert response.json() == {"error": error}

    def test_requires_sign_in(self, client):
        response = client.post("/api/register-user", json={"displayName": "Sam"})

        assert response.status_code == 401


class TestRegisterProfessional:
    def test_register(self, client, user, professional_payload):
        response = client.post(
            "/api/register-professional", json=professional_payload, headers=user
        )

        assert response.status_code == 200
        professional = response.json()["professional"]
        assert professional["id"] == "user-1"
        assert professional["ownerId"] == "user-1"
        assert professional["state"] == "NSW"
        assert professional["abn"] == "12345678901"
        assert professional["services"] == ["Plumbing", "Leak detection"]
        assert professional["servicesConcat"] == "plumbing,leak detection"
        assert professional["yearsExperience"] == 12
        assert professional["verificationStatus"] == "pending_review"

    def test_update_keeps_verification(self, client, user, professional_payload, dynamodb):
        first = client.post(
            "/api/register-professional", json=professional_payload, headers=user
        )
        dynamodb.Table(get_table_name(Collection.PROFESSIONALS)).update_item(
            Key={"id": "user-1"},
            UpdateExpression="SET rating = :rating",
            ExpressionAttributeValues={":rating": Decimal("4.2")},
        )
        professional_payload["businessName"] = "Ace Plumbing & Gas"
        second = client.post(
            "/api/register-professional", json=professional_payload, headers=user
        )

        updated = second.json()["professional"]
        assert updated["businessName"] == "Ace Plumbing & Gas"
        assert updated["createdAt"] == first.json()["professional"]["createdAt"]
        assert updated["verificationStatus"] == "pending_review"
        assert updated["rating"] == 4.2

    @pytest.mark.parametrize(
        "field, value, error",
        [
            ("businessName", "", "businessName is required (<=150 chars)"),
            ("state", "Texas", "state is required (AUS state/territory)"),
            ("serviceAreas", [], "Provide at least one service area"),
            ("services", " , ", "Provide at least one service offered"),
            ("tradeQualifications", None, "At least one trade qualification is required"),
            ("certifications", [], "At least one certification is required"),
            ("licenceNumbers", [], "At least one licence number is required"),
            ("yearsExperience", 0, "yearsExperience must be between 1 and 80"),
            ("yearsExperience", "lots", "yearsExperience must be between 1 and 80"),
            ("insuranceProvider", "Q", "insuranceProvider is required"),
            ("phone", "call me", "phone invalid"),
            ("website", "example.com", "website must start with http(s)://"),
            ("abn", "1234", "ABN must be 11 digits (no spaces)"),
        ],
    )
    def test_validation(self, client, user, professional_payload, field, value, error):
        professional_payload[field] = value

        response = client.post(
            "/api/register-professional", json=professional_payload, headers=user
        )

        assert response.status_code == 400
        assert response.json() == {"error": error}


class TestGetProfile:
    def test_empty_profile(self, client, user):
        response = client.get("/api/get-profile", headers=user)

        assert response.status_code == 200
        assert response.json() == {"user": None, "professional": None}

    def test_both_profiles(self, client, user, professional_payload):
        client.post("/api/register-user", json={"displayName": "Sam"}, headers=user)
        client.post("/api/register-professional", json=professional_payload, headers=user)

        body = client.get("/api/get-profile", headers=user).json()

        assert body["user"]["displayName"] == "Sam"
        assert body["professional"]["businessName"] == "Ace Plumbing"
