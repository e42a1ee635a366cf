"""Shared test fixtures for all test modules."""

import contextlib
import os
import tempfile
import uuid
from datetime import datetime

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from app.core import database as db_module
from app.core.auth import issue_token
from app.core.database import Base, get_db
from app.models.comment import Comment
from app.models.report import Report, ReportStatus
from app.models.user import User, UserRole
from app.models.video import Video, VideoStatus

# File-backed SQLite so the activity timeline's worker threads each get their
# own connection to the same database.
_db_fd, _db_path = tempfile.mkstemp(prefix="vidmod-test-", suffix=".db")
os.close(_db_fd)
_test_engine = create_engine(
    f"sqlite:///{_db_path}",
    connect_args={"check_same_thread": False},
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)


def auth_headers(user: User) -> dict[str, str]:
    """Bearer header for a user, signed like the identity provider does."""
    return {"Authorization": f"Bearer {issue_token(str(user.external_id))}"}


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database():
    yield
    _test_engine.dispose()
    with contextlib.suppress(OSError):
        os.remove(_db_path)


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the test database. Clears data after each test.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository and service testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def make_user(db_session):
    def _make(
        name: str = "Test User",
        *,
        role: str = UserRole.USER.value,
        external_id: str | None = None,
        is_banned: bool = False,
        ban_reason: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> User:
        user = User(
            external_id=external_id or f"user_{uuid.uuid4().hex[:12]}",
            name=name,
            role=role,
            is_banned=is_banned,
            ban_reason=ban_reason,
        )
        if created_at is not None:
            user.created_at = created_at
        if updated_at is not None:
            user.updated_at = updated_at
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user("Ada Admin", role=UserRole.ADMIN.value, external_id="admin_ext")


@pytest.fixture
def moderator_user(make_user):
    return make_user("Max Moderator", role=UserRole.MODERATOR.value, external_id="mod_ext")


@pytest.fixture
def regular_user(make_user):
    return make_user("Rita Regular", external_id="regular_ext")


@pytest.fixture
def make_video(db_session):
    def _make(
        user: User,
        title: str = "Test Video",
        *,
        status: str = VideoStatus.PUBLISHED.value,
        upload_id: str | None = None,
        is_nsfw: bool = False,
        view_count: int = 0,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> Video:
        video = Video(
            user_id=user.id,
            title=title,
            status=status,
            upload_id=upload_id,
            is_nsfw=is_nsfw,
            view_count=view_count,
        )
        if created_at is not None:
            video.created_at = created_at
        if updated_at is not None:
            video.updated_at = updated_at
        db_session.add(video)
        db_session.commit()
        db_session.refresh(video)
        return video

    return _make


@pytest.fixture
def make_comment(db_session):
    def _make(
        user: User,
        video: Video,
        content: str = "Nice video",
        *,
        is_toxic: bool = False,
        is_hidden: bool = False,
        toxicity_score: float = 0,
        created_at: datetime | None = None,
    ) -> Comment:
        comment = Comment(
            user_id=user.id,
            video_id=video.id,
            content=content,
            is_toxic=is_toxic,
            is_hidden=is_hidden,
            toxicity_score=toxicity_score,
        )
        if created_at is not None:
            comment.created_at = created_at
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make


@pytest.fixture
def make_report(db_session):
    def _make(
        reporter: User | None,
        *,
        target_type: str = "video",
        target_id: uuid.UUID | None = None,
        reason: str = "Spam",
        status: str = ReportStatus.PENDING.value,
        created_at: datetime | None = None,
    ) -> Report:
        report = Report(
            reporter_id=reporter.id if reporter else None,
            target_type=target_type,
            target_id=target_id or uuid.uuid4(),
            reason=reason,
            status=status,
        )
        if created_at is not None:
            report.created_at = created_at
        db_session.add(report)
        db_session.commit()
        db_session.refresh(report)
        return report

    return _make
