"""Tests for the admin notifier, the notification store and the inbox API."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.auth import Caller
from app.core.errors import AuthorizationError, NotFoundError, PersistenceError, ValidationError
from app.main import app
from app.models.notification import AdminNotification
from app.repositories.notification_repository import AdminNotificationRepository
from app.services.notification_service import AdminNotificationService, AdminNotifier
from tests.conftest import auth_headers


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def repo(db_session):
    return AdminNotificationRepository(db_session)


@pytest.fixture
def notifier(db_session):
    return AdminNotifier(db_session)


@pytest.fixture
def service(db_session):
    return AdminNotificationService(db_session)


@pytest.fixture
def admin(admin_user):
    return Caller.from_user(admin_user)


def _seed(repo, title="Heads up", *, priority="medium", type="new_comment", minutes_ago=0):
    notification = repo.create(
        type=type,
        priority=priority,
        title=title,
        message=f"{title} message",
    )
    notification.created_at = datetime.now(UTC) - timedelta(minutes=minutes_ago)
    repo.db.commit()
    return notification


# ── Notifier ──────────────────────────────────────────────────────


class TestNotifier:
    def test_notify_defaults(self, notifier):
        n = notifier.notify({"type": "new_report", "title": "Reported", "message": "Spam"})
        assert n.priority == "medium"
        assert n.is_read is False
        assert n.is_dismissed is False
        assert n.created_at is not None
        assert n.target_type is None

    def test_notify_with_target_and_metadata(self, notifier):
        video_id = uuid4()
        actor_id = uuid4()
        n = notifier.notify(
            {
                "type": "nsfw_flagged",
                "priority": "high",
                "title": "NSFW",
                "message": "Flagged",
                "link": "/admin/videos",
                "actor_id": actor_id,
                "target": {"target_type": "video", "target_id": str(video_id)},
                "metadata": {"nsfw_score": 0.93},
            }
        )
        assert n.priority == "high"
        assert n.target_type == "video"
        assert n.target_id == video_id
        assert n.actor_id == actor_id
        assert n.metadata_ == {"nsfw_score": 0.93}

    def test_unknown_target_type_rejected(self, notifier):
        with pytest.raises(ValidationError):
            notifier.notify(
                {
                    "type": "new_comment",
                    "title": "x",
                    "message": "y",
                    "target": {"target_type": "playlist", "target_id": str(uuid4())},
                }
            )

    def test_empty_title_rejected(self, notifier):
        with pytest.raises(ValidationError):
            notifier.notify({"type": "new_comment", "title": "", "message": "y"})

    def test_unknown_type_rejected(self, notifier):
        with pytest.raises(ValidationError):
            notifier.notify({"type": "weather", "title": "x", "message": "y"})

    def test_store_failure_raises_persistence_error(self, notifier):
        with patch.object(
            AdminNotificationRepository,
            "create",
            side_effect=OperationalError("INSERT", {}, Exception("database is locked")),
        ):
            with pytest.raises(PersistenceError):
                notifier.notify({"type": "new_comment", "title": "x", "message": "y"})

    def test_notify_quietly_swallows_failures(self, notifier, repo, caplog):
        with patch.object(
            AdminNotificationRepository,
            "create",
            side_effect=OperationalError("INSERT", {}, Exception("database is locked")),
        ):
            result = notifier.notify_quietly({"type": "new_comment", "title": "x", "message": "y"})
        assert result is None
        assert "Admin notification dropped" in caplog.text
        assert repo.count_unread() == 0

    def test_notify_quietly_swallows_invalid_input(self, notifier):
        assert notifier.notify_quietly({"type": "new_comment"}) is None

    def test_event_helpers(self, notifier):
        user_id = uuid4()
        n = notifier.notify_user_signup(user_id=user_id, name="Nia")
        assert n.type == "new_user_signup"
        assert n.priority == "low"
        assert n.target_type == "user"
        assert n.target_id == user_id
        assert "Nia" in n.message

        n = notifier.notify_toxic_comment(
            comment_id=uuid4(),
            content="x" * 300,
            author_id=user_id,
            author_name="Nia",
            score=0.95,
            hidden=True,
        )
        assert n.type == "toxic_comment"
        assert n.priority == "high"
        assert n.title == "Toxic comment auto-hidden"
        assert n.message.endswith("…")
        assert n.metadata_ == {"toxicity_score": 0.95, "hidden": True}

        n = notifier.notify_new_report(
            report_id=uuid4(), target_type="community_post", reason="Spam", reporter_id=None
        )
        assert n.title == "New community post report"
        assert n.target_type == "report"
        assert n.actor_id is None


# ── Repository / state machine ────────────────────────────────────


class TestNotificationRepository:
    def test_get_active_excludes_dismissed(self, repo):
        keep = _seed(repo, "Keep")
        gone = _seed(repo, "Gone")
        repo.dismiss(gone.id)
        ids = [n.id for n in repo.get_active(limit=30)]
        assert ids == [keep.id]

    def test_get_active_newest_first(self, repo):
        old = _seed(repo, "Old", minutes_ago=10)
        new = _seed(repo, "New", minutes_ago=1)
        ids = [n.id for n in repo.get_active(limit=30)]
        assert ids == [new.id, old.id]

    def test_get_active_filters(self, repo):
        high = _seed(repo, "High", priority="high")
        _seed(repo, "Low", priority="low")
        read = _seed(repo, "Read", priority="high")
        repo.mark_as_read(read.id)

        assert [n.id for n in repo.get_active(limit=30, priority="high", unread_only=True)] == [
            high.id
        ]

    def test_get_active_type_filter(self, repo):
        report = _seed(repo, "Report", type="new_report")
        _seed(repo, "Comment", type="new_comment")
        assert [n.id for n in repo.get_active(limit=30, type="new_report")] == [report.id]

    def test_count_unread(self, repo):
        _seed(repo, "One")
        read = _seed(repo, "Two")
        dismissed = _seed(repo, "Three")
        repo.mark_as_read(read.id)
        repo.dismiss(dismissed.id)
        assert repo.count_unread() == 1

    def test_mark_as_read_idempotent(self, repo):
        n = _seed(repo)
        assert repo.mark_as_read(n.id).is_read is True
        assert repo.mark_as_read(n.id).is_read is True
        assert repo.count_unread() == 0

    def test_mark_as_read_leaves_dismissed_untouched(self, repo):
        n = _seed(repo)
        repo.dismiss(n.id)
        result = repo.mark_as_read(n.id)
        assert result.is_dismissed is True
        assert result.is_read is False

    def test_mark_as_read_missing(self, repo):
        assert repo.mark_as_read(uuid4()) is None

    def test_mark_all_as_read(self, repo):
        _seed(repo, "A")
        _seed(repo, "B")
        dismissed = _seed(repo, "C")
        repo.dismiss(dismissed.id)

        assert repo.mark_all_as_read() == 2
        assert repo.count_unread() == 0
        assert repo.mark_all_as_read() == 0

    def test_dismiss_idempotent(self, repo):
        n = _seed(repo)
        assert repo.dismiss(n.id).is_dismissed is True
        assert repo.dismiss(n.id).is_dismissed is True

    def test_dismiss_all_read_keeps_unread(self, repo):
        unread = _seed(repo, "Unread")
        read_a = _seed(repo, "Read A")
        read_b = _seed(repo, "Read B")
        repo.mark_as_read(read_a.id)
        repo.mark_as_read(read_b.id)

        assert repo.dismiss_all_read() == 2
        assert [n.id for n in repo.get_active(limit=30)] == [unread.id]
        assert repo.count_unread() == 1


# ── Service ───────────────────────────────────────────────────────


class TestNotificationService:
    def test_requires_staff(self, service, regular_user):
        caller = Caller.from_user(regular_user)
        with pytest.raises(AuthorizationError):
            service.list_notifications(caller)
        with pytest.raises(AuthorizationError):
            service.count_unread(caller)
        with pytest.raises(AuthorizationError):
            service.mark_all_read(caller)
        with pytest.raises(AuthorizationError):
            service.dismiss_all_read(caller)

    def test_auth_checked_before_query(self, service, regular_user):
        with patch.object(AdminNotificationRepository, "get_active") as get_active:
            with pytest.raises(AuthorizationError):
                service.list_notifications(Caller.from_user(regular_user))
        get_active.assert_not_called()

    def test_list_validates_limit(self, service, admin):
        with pytest.raises(ValidationError):
            service.list_notifications(admin, {"limit": 101})
        with pytest.raises(ValidationError):
            service.list_notifications(admin, {"priority": "urgent"})

    def test_list_default_limit(self, service, repo, admin):
        for i in range(35):
            _seed(repo, f"N{i}")
        assert len(service.list_notifications(admin)) == 30

    def test_count_includes_poll_interval(self, service, repo, admin):
        _seed(repo)
        result = service.count_unread(admin)
        assert result.unread_count == 1
        assert result.poll_interval_seconds == 30

    def test_mark_read_missing(self, service, admin):
        with pytest.raises(NotFoundError):
            service.mark_read(admin, uuid4())

    def test_dismiss_missing(self, service, admin):
        with pytest.raises(NotFoundError):
            service.dismiss(admin, uuid4())


# ── API ───────────────────────────────────────────────────────────


class TestNotificationsAPI:
    def test_list(self, client, repo, moderator_user):
        _seed(repo, "Older", minutes_ago=5)
        _seed(repo, "Newer", minutes_ago=1)
        response = client.get("/v1/admin/notifications/", headers=auth_headers(moderator_user))
        assert response.status_code == 200
        data = response.json()
        assert [n["title"] for n in data] == ["Newer", "Older"]
        assert data[0]["metadata"] is None
        assert data[0]["is_read"] is False

    def test_list_rejects_out_of_range_limit(self, client, admin_user):
        response = client.get(
            "/v1/admin/notifications/?limit=500", headers=auth_headers(admin_user)
        )
        assert response.status_code == 422

    def test_list_forbidden_for_users(self, client, regular_user):
        response = client.get("/v1/admin/notifications/", headers=auth_headers(regular_user))
        assert response.status_code == 403

    def test_unread_count(self, client, repo, admin_user):
        _seed(repo)
        _seed(repo)
        response = client.get(
            "/v1/admin/notifications/unread_count", headers=auth_headers(admin_user)
        )
        assert response.status_code == 200
        assert response.json() == {"unread_count": 2, "poll_interval_seconds": 30}

    def test_mark_read_and_dismiss_flow(self, client, repo, admin_user):
        n = _seed(repo)
        headers = auth_headers(admin_user)

        response = client.post(f"/v1/admin/notifications/{n.id}/read", headers=headers)
        assert response.status_code == 200
        assert response.json()["is_read"] is True

        response = client.post(f"/v1/admin/notifications/{n.id}/dismiss", headers=headers)
        assert response.status_code == 200
        assert response.json()["is_dismissed"] is True

        response = client.get("/v1/admin/notifications/", headers=headers)
        assert response.json() == []

    def test_mark_read_not_found(self, client, admin_user):
        response = client.post(
            f"/v1/admin/notifications/{uuid4()}/read", headers=auth_headers(admin_user)
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Notification not found"

    def test_read_all(self, client, repo, admin_user):
        _seed(repo)
        _seed(repo)
        response = client.post(
            "/v1/admin/notifications/read_all", headers=auth_headers(admin_user)
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 2}

    def test_dismiss_read(self, client, repo, admin_user):
        read = _seed(repo)
        _seed(repo)
        repo.mark_as_read(read.id)
        response = client.post(
            "/v1/admin/notifications/dismiss_read", headers=auth_headers(admin_user)
        )
        assert response.json() == {"success": True, "count": 1}
        assert repo.count_unread() == 1

    def test_type_filter(self, client, repo, admin_user):
        _seed(repo, "Report", type="new_report")
        _seed(repo, "Comment", type="new_comment")
        response = client.get(
            "/v1/admin/notifications/?type=new_report", headers=auth_headers(admin_user)
        )
        assert [n["title"] for n in response.json()] == ["Report"]


def test_rows_are_admin_notifications(repo):
    assert isinstance(_seed(repo), AdminNotification)
