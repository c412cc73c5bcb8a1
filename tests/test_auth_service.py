# tests/test_auth_service.py
"""Unit tests for sign-in and the legacy password verification fallback."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import httpx
from unittest.mock import MagicMock
from app.backend_client import RemoteBackend, UninitializedBackend
from app.errors import AuthenticationError, BackendError, NotFoundError, ValidationError
from app.local_backend import hash_password
from app.services.auth_service import login, demo_login


def add_user(backend, email="admin@example.com", password="s3cret", confirmed=True):
    backend.table("users").insert([{
        "email": email,
        "password_hash": hash_password(password),
        "full_name": "Fleet Admin",
        "is_confirmed": confirmed,
    }]).execute()


class TestLogin:
    def test_empty_fields(self, backend):
        with pytest.raises(ValidationError) as exc:
            login(backend, "", "s3cret")
        assert exc.value.message == "Please fill in all fields"

    def test_successful_sign_in(self, backend):
        add_user(backend)
        result = login(backend, "admin@example.com", "s3cret")
        assert result.success is True
        assert result.legacy is False
        assert result.message == "Login successful!"
        assert result.access_token

    def test_wrong_password(self, backend):
        add_user(backend)
        result = login(backend, "admin@example.com", "nope")
        assert result.success is False
        assert result.message == "Invalid email or password."

    def test_unconfirmed_account_uses_legacy_check(self, backend):
        add_user(backend, confirmed=False)
        result = login(backend, "admin@example.com", "s3cret")
        assert result.success is True
        assert result.legacy is True
        assert result.message == "Login successful (legacy)!"
        assert result.access_token is None

    def test_auth_outage_falls_back_to_legacy_check(self):
        backend = MagicMock()
        backend.sign_in_with_password.side_effect = BackendError("Network error: timed out")
        backend.rpc.return_value = [{"valid": True}]
        result = login(backend, "admin@example.com", "s3cret")
        assert result.success is True
        assert result.legacy is True
        assert result.message == "Login successful (legacy)!"

    def test_missing_backend_configuration(self):
        result = login(UninitializedBackend(), "admin@example.com", "s3cret")
        assert result.success is False
        assert result.message == "Login failed. Please try again."

    def test_auth_server_error_over_http(self):
        def handler(request: httpx.Request):
            if request.url.path == "/auth/v1/token":
                return httpx.Response(500, json={"message": "auth service down"})
            return httpx.Response(200, json=[{"valid": True}])

        backend = RemoteBackend("https://fleet.example.test", "anon-key", transport=httpx.MockTransport(handler))
        result = login(backend, "admin@example.com", "s3cret")
        assert result.success is True
        assert result.message == "Login successful (legacy)!"

    def test_legacy_rpc_failure(self):
        backend = MagicMock()
        backend.sign_in_with_password.side_effect = AuthenticationError("Invalid login credentials", 400)
        backend.rpc.side_effect = BackendError("function missing", status_code=404)
        result = login(backend, "admin@example.com", "s3cret")
        assert result.success is False
        assert result.message == "Invalid email or password."

    def test_empty_session_falls_back(self):
        backend = MagicMock()
        backend.sign_in_with_password.return_value = {}
        backend.rpc.return_value = [{"valid": True}]
        result = login(backend, "admin@example.com", "s3cret")
        assert result.legacy is True
        backend.rpc.assert_called_once_with(
            "verify_user_password", {"in_email": "admin@example.com", "in_password": "s3cret"}
        )


class TestDemoLogin:
    def test_not_configured(self, backend):
        with pytest.raises(NotFoundError):
            demo_login(backend, None, None)

    def test_demo_account(self, backend):
        add_user(backend, email="demo@example.com", password="demo1234")
        assert demo_login(backend, "demo@example.com", "demo1234").success is True
