"""Tests for the error taxonomy, input validation and HTTP mapping."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.database import translate_db_errors
from app.core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    validate_input,
)
from app.main import app
from app.schemas.activity import ActivityParams
from tests.conftest import auth_headers


@pytest.fixture
def client():
    return TestClient(app)


class TestValidateInput:
    def test_defaults_from_none(self):
        params = validate_input(ActivityParams, None)
        assert params.limit == 50
        assert params.days == 7

    def test_passes_instances_through(self):
        params = ActivityParams(limit=5)
        assert validate_input(ActivityParams, params) is params

    def test_out_of_range_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(ActivityParams, {"limit": 0})
        assert exc_info.value.details[0]["loc"] == ("limit",)

    def test_wrong_type(self):
        with pytest.raises(ValidationError):
            validate_input(ActivityParams, {"days": "lots"})


class TestStatusCodes:
    @pytest.mark.parametrize(
        "error_class, status",
        [
            (ValidationError, 422),
            (AuthorizationError, 403),
            (NotFoundError, 404),
            (ConflictError, 409),
            (PersistenceError, 503),
        ],
    )
    def test_status_code(self, error_class, status):
        assert error_class.status_code == status


class TestTranslateDbErrors:
    def test_wraps_sqlalchemy_errors(self, db_session):
        with pytest.raises(PersistenceError) as exc_info:
            with translate_db_errors(db_session):
                raise OperationalError("SELECT 1", {}, Exception("database is locked"))
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_leaves_app_errors_alone(self, db_session):
        with pytest.raises(NotFoundError):
            with translate_db_errors(db_session):
                raise NotFoundError("missing")


class TestErrorHandlers:
    def test_not_found_body(self, client, admin_user):
        response = client.post(
            "/v1/admin/users/nobody_here/unban", headers=auth_headers(admin_user)
        )
        assert response.status_code == 404
        assert response.json() == {"detail": "User not found"}

    def test_persistence_error_maps_to_503(self, client, admin_user):
        with patch(
            "app.repositories.dashboard_repository.DashboardRepository.count_users",
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error")),
        ):
            response = client.get("/v1/admin/stats", headers=auth_headers(admin_user))
        assert response.status_code == 503
        assert "OperationalError" in response.json()["detail"]

    def test_query_bounds_rejected(self, client, admin_user):
        response = client.get("/v1/admin/activity?limit=0", headers=auth_headers(admin_user))
        assert response.status_code == 422

    def test_service_validation_error_body(self, client, regular_user):
        headers = auth_headers(regular_user)
        post_id = client.post("/v1/community/", json={"content": "plain"}, headers=headers).json()[
            "id"
        ]
        response = client.post(
            f"/v1/community/{post_id}/vote",
            json={"option_id": "00000000-0000-4000-8000-000000000000"},
            headers=headers,
        )
        assert response.status_code == 422
        assert response.json() == {"detail": "Only poll posts accept votes"}
