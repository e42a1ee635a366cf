"""Tests for sign-up, upload, comment and report flows and the notifications they emit."""

from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.auth import Caller, issue_token
from app.core.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from app.main import app
from app.repositories.notification_repository import AdminNotificationRepository
from app.services.comment_service import CommentService
from app.services.report_service import ReportService
from app.services.user_service import UserService
from app.services.video_service import VideoService
from tests.conftest import auth_headers


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def notifications(db_session):
    repo = AdminNotificationRepository(db_session)

    def _types() -> list[str]:
        return [n.type for n in repo.get_active(limit=100)]

    return _types


@pytest.fixture
def creator(regular_user):
    return Caller.from_user(regular_user)


@pytest.fixture
def store_down():
    """Make every admin notification insert fail."""
    with patch.object(
        AdminNotificationRepository,
        "create",
        side_effect=OperationalError("INSERT", {}, Exception("database is locked")),
    ):
        yield


class TestSignUp:
    def test_creates_user_and_notifies(self, db_session, notifications):
        user = UserService(db_session).sign_up({"external_id": "idp_1", "name": "Nia"})
        assert user.role == "user"
        assert user.is_banned is False
        assert notifications() == ["new_user_signup"]

    def test_repeat_sign_up_updates_profile_once(self, db_session, notifications):
        service = UserService(db_session)
        first = service.sign_up({"external_id": "idp_1", "name": "Nia"})
        second = service.sign_up(
            {"external_id": "idp_1", "name": "Nia B", "image_url": "https://img/x.png"}
        )
        assert second.id == first.id
        assert second.name == "Nia B"
        assert notifications() == ["new_user_signup"]

    def test_invalid(self, db_session):
        with pytest.raises(ValidationError):
            UserService(db_session).sign_up({"external_id": "", "name": "Nia"})

    def test_notification_failure_does_not_block_sign_up(self, db_session, store_down):
        user = UserService(db_session).sign_up({"external_id": "idp_2", "name": "Quiet"})
        assert user.name == "Quiet"


class TestVideoService:
    def test_upload_creates_pending_video(self, db_session, creator, notifications):
        video = VideoService(db_session).upload(creator, {"title": "My trip", "upload_id": "a1"})
        assert video.status == "pending"
        assert video.user_id == creator.user_id
        assert notifications() == ["new_video_upload"]

    def test_upload_duplicate_asset(self, db_session, creator):
        service = VideoService(db_session)
        service.upload(creator, {"title": "One", "upload_id": "dup"})
        with pytest.raises(ConflictError):
            service.upload(creator, {"title": "Two", "upload_id": "dup"})

    def test_banned_cannot_upload(self, db_session, make_user):
        banned = Caller.from_user(make_user("Banned", is_banned=True))
        with pytest.raises(AuthorizationError):
            VideoService(db_session).upload(banned, {"title": "Nope"})

    def test_upload_survives_notifier_failure(self, db_session, creator, store_down):
        video = VideoService(db_session).upload(creator, {"title": "Still here"})
        assert video.title == "Still here"
        assert video.status == "pending"

    def test_update_by_owner(self, db_session, creator, notifications):
        service = VideoService(db_session)
        video = service.upload(creator, {"title": "Draft title"})
        updated = service.update(creator, video.id, {"title": "Final title"})
        assert updated.title == "Final title"
        assert "video_updated" in notifications()

    def test_update_by_someone_else(self, db_session, creator, make_user):
        service = VideoService(db_session)
        video = service.upload(creator, {"title": "Mine"})
        other = Caller.from_user(make_user("Other"))
        with pytest.raises(AuthorizationError):
            service.update(other, video.id, {"title": "Stolen"})

    def test_update_missing(self, db_session, creator):
        with pytest.raises(NotFoundError):
            VideoService(db_session).update(creator, uuid4(), {"title": "x"})

    def test_nsfw_score_above_threshold_flags(self, db_session, creator, notifications):
        service = VideoService(db_session)
        video = service.upload(creator, {"title": "Beach"})
        flagged = service.record_nsfw_score(video.id, 0.92)
        assert flagged.is_nsfw is True
        assert flagged.nsfw_score == pytest.approx(0.92)
        assert "nsfw_flagged" in notifications()

    def test_nsfw_score_below_threshold(self, db_session, creator, notifications):
        service = VideoService(db_session)
        video = service.upload(creator, {"title": "Cats"})
        result = service.record_nsfw_score(video.id, 0.1)
        assert result.is_nsfw is False
        assert "nsfw_flagged" not in notifications()

    def test_nsfw_score_out_of_range(self, db_session):
        with pytest.raises(ValidationError):
            VideoService(db_session).record_nsfw_score(uuid4(), 1.5)


class TestCommentService:
    @pytest.fixture
    def video(self, make_user, make_video):
        return make_video(make_user("Host"))

    def test_clean_comment(self, db_session, creator, video, notifications):
        comment = CommentService(db_session).create(
            creator, {"video_id": video.id, "content": "Lovely"}
        )
        assert comment.is_toxic is False
        assert comment.is_hidden is False
        assert notifications() == ["new_comment"]

    def test_toxic_comment_flagged(self, db_session, creator, video, notifications):
        comment = CommentService(db_session).create(
            creator, {"video_id": video.id, "content": "Awful", "toxicity_score": 0.75}
        )
        assert comment.is_toxic is True
        assert comment.is_hidden is False
        assert notifications() == ["toxic_comment"]

    def test_very_toxic_comment_hidden(self, db_session, creator, video):
        comment = CommentService(db_session).create(
            creator, {"video_id": video.id, "content": "Vile", "toxicity_score": 0.95}
        )
        assert comment.is_toxic is True
        assert comment.is_hidden is True

    def test_unknown_video(self, db_session, creator):
        with pytest.raises(NotFoundError):
            CommentService(db_session).create(creator, {"video_id": uuid4(), "content": "Hi"})

    def test_comment_survives_notifier_failure(self, db_session, creator, video, store_down):
        comment = CommentService(db_session).create(
            creator, {"video_id": video.id, "content": "Still posted"}
        )
        assert comment.content == "Still posted"


class TestReportService:
    def test_create_report(self, db_session, creator, notifications):
        target_id = uuid4()
        report = ReportService(db_session).create(
            creator,
            {"target": {"target_type": "comment", "target_id": target_id}, "reason": "Spam"},
        )
        assert report.status == "pending"
        assert report.target_type == "comment"
        assert report.target_id == target_id
        assert report.reporter_id == creator.user_id
        assert notifications() == ["new_report"]

    def test_reports_cannot_target_reports(self, db_session, creator):
        with pytest.raises(ValidationError):
            ReportService(db_session).create(
                creator,
                {"target": {"target_type": "report", "target_id": uuid4()}, "reason": "Meta"},
            )

    def test_anonymous_rejected(self, db_session):
        with pytest.raises(AuthorizationError):
            ReportService(db_session).create(
                None, {"target": {"target_type": "user", "target_id": uuid4()}, "reason": "x"}
            )


class TestContentAPI:
    def test_sign_up_endpoint(self, client):
        headers = {"Authorization": f"Bearer {issue_token('idp_api')}"}
        response = client.post("/v1/users/signup", json={"name": "Api User"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["external_id"] == "idp_api"

        response = client.get("/v1/users/me", headers=headers)
        assert response.json()["name"] == "Api User"

    def test_upload_and_comment(self, client, regular_user, admin_user):
        headers = auth_headers(regular_user)
        response = client.post("/v1/videos/", json={"title": "Hello"}, headers=headers)
        assert response.status_code == 201
        video_id = response.json()["id"]

        response = client.post(
            "/v1/comments/",
            json={"video_id": video_id, "content": "bad", "toxicity_score": 0.99},
            headers=headers,
        )
        assert response.status_code == 201
        assert response.json()["is_hidden"] is True

        response = client.get(
            "/v1/admin/notifications/?priority=high", headers=auth_headers(admin_user)
        )
        assert [n["type"] for n in response.json()] == ["toxic_comment"]

    def test_banned_user_cannot_comment(self, client, make_user, make_video):
        banned = make_user("Banned", is_banned=True)
        video = make_video(make_user("Host"))
        response = client.post(
            "/v1/comments/",
            json={"video_id": str(video.id), "content": "hi"},
            headers=auth_headers(banned),
        )
        assert response.status_code == 403

    def test_nsfw_score_requires_staff(self, client, regular_user, make_video):
        video = make_video(regular_user)
        response = client.post(
            f"/v1/videos/{video.id}/nsfw_score",
            json={"score": 0.9},
            headers=auth_headers(regular_user),
        )
        assert response.status_code == 403

    def test_report_endpoint(self, client, regular_user):
        response = client.post(
            "/v1/reports/",
            json={
                "target": {"target_type": "video", "target_id": str(uuid4())},
                "reason": "Misleading",
            },
            headers=auth_headers(regular_user),
        )
        assert response.status_code == 201
        assert response.json()["status"] == "pending"
