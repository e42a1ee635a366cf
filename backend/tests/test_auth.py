"""Tests for caller identity, role checks and bearer-token authentication."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest
from fastapi.testclient import TestClient

from app.core.auth import Caller, ensure_authenticated, ensure_can_post, ensure_staff, issue_token
from app.core.config import settings
from app.core.errors import AuthorizationError
from app.main import app
from tests.conftest import auth_headers


@pytest.fixture
def client():
    return TestClient(app)


def _caller(role: str = "user", banned: bool = False) -> Caller:
    return Caller(user_id=uuid4(), external_id="ext", role=role, is_banned=banned)


class TestCaller:
    def test_staff_roles(self):
        assert _caller("admin").is_staff
        assert _caller("moderator").is_staff
        assert not _caller("user").is_staff

    def test_from_user(self, admin_user):
        caller = Caller.from_user(admin_user)
        assert caller.user_id == admin_user.id
        assert caller.external_id == "admin_ext"
        assert caller.role == "admin"
        assert caller.is_banned is False

    def test_ensure_staff_rejects_regular_user(self):
        with pytest.raises(AuthorizationError):
            ensure_staff(_caller("user"))

    def test_ensure_staff_rejects_missing_caller(self):
        with pytest.raises(AuthorizationError):
            ensure_staff(None)

    def test_ensure_staff_returns_caller(self):
        caller = _caller("moderator")
        assert ensure_staff(caller) is caller

    def test_ensure_authenticated(self):
        with pytest.raises(AuthorizationError):
            ensure_authenticated(None)

    def test_ensure_can_post_rejects_banned(self):
        with pytest.raises(AuthorizationError, match="Banned"):
            ensure_can_post(_caller(banned=True))

    def test_ensure_can_post_allows_active_user(self):
        caller = _caller()
        assert ensure_can_post(caller) is caller


class TestBearerAuth:
    def test_missing_header(self, client):
        response = client.get("/v1/users/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_wrong_scheme(self, client):
        response = client.get("/v1/users/me", headers={"Authorization": "Basic abc"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid authorization header format"

    def test_invalid_token(self, client):
        response = client.get("/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_wrong_secret(self, client, regular_user):
        token = jwt.encode({"sub": regular_user.external_id}, "other-secret", algorithm="HS256")
        response = client.get("/v1/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_expired_token(self, client, regular_user):
        token = jwt.encode(
            {"sub": regular_user.external_id, "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.AUTH_JWT_SECRET,
            algorithm=settings.AUTH_JWT_ALGORITHM,
        )
        response = client.get("/v1/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_unknown_subject(self, client):
        token = issue_token("nobody")
        response = client.get("/v1/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Unknown user"

    def test_valid_token(self, client, regular_user):
        response = client.get("/v1/users/me", headers=auth_headers(regular_user))
        assert response.status_code == 200
        assert response.json()["id"] == str(regular_user.id)

    def test_admin_route_rejects_regular_user(self, client, regular_user):
        response = client.get("/v1/admin/users", headers=auth_headers(regular_user))
        assert response.status_code == 403
        assert response.json()["detail"] == "Admin or moderator role required"

    def test_admin_route_rejects_anonymous(self, client):
        response = client.get("/v1/admin/stats")
        assert response.status_code == 401

    def test_admin_route_allows_moderator(self, client, moderator_user):
        response = client.get("/v1/admin/stats", headers=auth_headers(moderator_user))
        assert response.status_code == 200
