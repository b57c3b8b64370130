"""Integration tests for sign-up, sign-in and the caller's profile.

Run with: pytest tests/test_auth.py -v
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest
from rest_framework.test import APIClient

from accounts.models import Role, User


@pytest.mark.django_db
class TestSignUp:
    """Tests for POST /api/auth/signup"""

    def test_signup_returns_user_and_token(self, api_client: APIClient):
        """Given valid details, returns 201 with the user and a bearer token."""
        response = api_client.post(
            "/api/auth/signup",
            {
                "first_name": "Amaka",
                "last_name": "Nwosu",
                "email": "Amaka@Example.com",
                "password": "secret123",
                "role": "creator",
            },
            format="json",
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["user"]["email"] == "amaka@example.com"
        assert body["data"]["user"]["role"] == "creator"
        assert body["data"]["token"]
        assert "password" not in body["data"]["user"]

    def test_signup_defaults_to_eventee(self, api_client: APIClient):
        """Given no role, returns an eventee account."""
        response = api_client.post(
            "/api/auth/signup",
            {"first_name": "Tunde", "last_name": "Bello", "email": "tunde@example.com", "password": "secret123"},
            format="json",
        )

        assert response.status_code == 201
        assert User.objects.get(email="tunde@example.com").role == Role.EVENTEE

    def test_signup_duplicate_email(self, api_client: APIClient, eventee):
        """Given an email already in use, returns 400."""
        response = api_client.post(
            "/api/auth/signup",
            {"first_name": "Ada", "last_name": "Obi", "email": "EVENTEE@example.com", "password": "secret123"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_TAKEN"

    def test_signup_short_password(self, api_client: APIClient):
        """Given a password under six characters, returns 400 with field errors."""
        response = api_client.post(
            "/api/auth/signup",
            {"first_name": "Ada", "last_name": "Obi", "email": "ada@example.com", "password": "abc"},
            format="json",
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_FAILED"
        assert "password" in body["data"]["errors"]


@pytest.mark.django_db
class TestSignIn:
    """Tests for POST /api/auth/signin"""

    def test_signin_returns_token(self, api_client: APIClient, eventee):
        """Given correct credentials, returns a token that authenticates."""
        response = api_client.post(
            "/api/auth/signin", {"email": "eventee@example.com", "password": "secret123"}, format="json"
        )

        assert response.status_code == 200
        token = response.json()["data"]["token"]
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        profile = api_client.get("/api/auth/profile")
        assert profile.status_code == 200
        assert profile.json()["data"]["email"] == "eventee@example.com"

    def test_signin_wrong_password(self, api_client: APIClient, eventee):
        """Given a wrong password, returns 401."""
        response = api_client.post(
            "/api/auth/signin", {"email": "eventee@example.com", "password": "wrong-pass"}, format="json"
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


@pytest.mark.django_db
class TestProfile:
    """Tests for GET/PATCH /api/auth/profile"""

    def test_profile_requires_token(self, api_client: APIClient):
        """Given no token, returns 401."""
        response = api_client.get("/api/auth/profile")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_profile_rejects_garbage_token(self, api_client: APIClient):
        """Given a malformed token, returns 401."""
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not.a.jwt")

        assert api_client.get("/api/auth/profile").status_code == 401

    def test_update_profile(self, eventee_client: APIClient, eventee):
        """Given profile changes, returns the updated user."""
        response = eventee_client.patch(
            "/api/auth/profile", {"bio": "Live music fan", "default_reminder": "3_days"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["data"]["bio"] == "Live music fan"
        eventee.refresh_from_db()
        assert eventee.default_reminder == "3_days"

    def test_profile_rejects_single_segment_token(self, api_client: APIClient):
        """Given a token that is not a JWT at all, returns 401."""
        api_client.credentials(HTTP_AUTHORIZATION="Bearer opaque")

        assert api_client.get("/api/auth/profile").status_code == 401


class TestUrlConf:
    """Tests for importing the URL configuration."""

    def test_urls_import_in_fresh_process(self):
        """Given a cold interpreter, the URL conf and the bearer authentication load together."""
        env = {**os.environ, "DJANGO_SETTINGS_MODULE": "eventful.settings"}
        script = (
            "import django; django.setup(); "
            "import eventful.urls; "
            "from rest_framework.views import APIView; "
            "print(APIView.authentication_classes[0].__name__)"
        )

        result = subprocess.run(
            [sys.executable, "-c", script],
            cwd=Path(__file__).resolve().parents[1],
            env=env,
            capture_output=True,
            text=True,
            timeout=60,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout.strip() == "BearerTokenAuthentication"
