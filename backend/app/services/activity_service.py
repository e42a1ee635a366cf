"""Merged moderation timeline built from six independent sources."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from app.core import database
from app.core.auth import Caller, ensure_staff
from app.core.config import settings
from app.core.database import translate_db_errors
from app.core.errors import validate_input
from app.models.report import ReportStatus
from app.models.shared import as_utc, utc_now
from app.repositories.activity_repository import ActivityRepository
from app.schemas.activity import ActivityItem, ActivityParams, ActivitySeverity, ActivityType

logger = logging.getLogger(__name__)

ActivitySource = Callable[[ActivityRepository, datetime, int], list[ActivityItem]]

UNKNOWN_NAME = "Unknown"
COMMENT_EXCERPT_LENGTH = 120


def truncate_text(text: str, length: int = COMMENT_EXCERPT_LENGTH) -> str:
    if len(text) <= length:
        return text
    return text[:length] + "…"


def ban_items(repo: ActivityRepository, since: datetime, limit: int) -> list[ActivityItem]:
    return [
        ActivityItem(
            id=f"ban-{row.id}",
            type=ActivityType.BAN,
            title=f"User banned: {row.name or UNKNOWN_NAME}",
            description=row.ban_reason or "No reason provided",
            timestamp=as_utc(row.updated_at),
            severity=ActivitySeverity.DANGER,
        )
        for row in repo.recent_bans(since, limit)
    ]


def report_items(repo: ActivityRepository, since: datetime, limit: int) -> list[ActivityItem]:
    return [
        ActivityItem(
            id=f"report-{row.id}",
            type=ActivityType.REPORT,
            title=f"{row.target_type} reported",
            description=f"{row.reason} — by {row.reporter_name or UNKNOWN_NAME}",
            timestamp=as_utc(row.created_at),
            severity=(
                ActivitySeverity.WARNING
                if row.status == ReportStatus.PENDING.value
                else ActivitySeverity.INFO
            ),
        )
        for row in repo.recent_reports(since, limit)
    ]


def toxic_comment_items(
    repo: ActivityRepository, since: datetime, limit: int
) -> list[ActivityItem]:
    return [
        ActivityItem(
            id=f"toxic-{row.id}",
            type=ActivityType.TOXIC_COMMENT,
            title=f"Toxic comment by {row.user_name or UNKNOWN_NAME}",
            description=truncate_text(row.content),
            timestamp=as_utc(row.created_at),
            severity=ActivitySeverity.DANGER,
        )
        for row in repo.recent_toxic_comments(since, limit)
    ]


def pending_video_items(
    repo: ActivityRepository, since: datetime, limit: int
) -> list[ActivityItem]:
    return [
        ActivityItem(
            id=f"pending-{row.id}",
            type=ActivityType.PENDING_VIDEO,
            title="Video pending review",
            description=f'"{row.title}" by {row.user_name or UNKNOWN_NAME}',
            timestamp=as_utc(row.created_at),
            severity=ActivitySeverity.WARNING,
        )
        for row in repo.recent_pending_videos(since, limit)
    ]


def nsfw_video_items(repo: ActivityRepository, since: datetime, limit: int) -> list[ActivityItem]:
    return [
        ActivityItem(
            id=f"nsfw-{row.id}",
            type=ActivityType.NSFW_VIDEO,
            title="NSFW flagged video",
            description=f'"{row.title}" by {row.user_name or UNKNOWN_NAME}',
            timestamp=as_utc(row.updated_at),
            severity=ActivitySeverity.DANGER,
        )
        for row in repo.recent_nsfw_videos(since, limit)
    ]


def signup_items(repo: ActivityRepository, since: datetime, limit: int) -> list[ActivityItem]:
    return [
        ActivityItem(
            id=f"user-{row.id}",
            type=ActivityType.NEW_USER,
            title="New user joined",
            description=row.name or UNKNOWN_NAME,
            timestamp=as_utc(row.created_at),
            severity=ActivitySeverity.INFO,
        )
        for row in repo.recent_signups(since, limit)
    ]


DEFAULT_SOURCES: tuple[ActivitySource, ...] = (
    ban_items,
    report_items,
    toxic_comment_items,
    pending_video_items,
    nsfw_video_items,
    signup_items,
)


class ActivityAggregator:
    """Fan out to every source in parallel, then merge newest first.

    Each source runs on its own session and returns at most ``limit``
    items, so the merge never holds more than ``len(sources) * limit``
    rows. Any source failure fails the whole call; partial timelines are
    never returned.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        sources: Sequence[ActivitySource] = DEFAULT_SOURCES,
        max_workers: int | None = None,
    ):
        self.session_factory = session_factory or database.new_session
        self.sources = tuple(sources)
        self.max_workers = max_workers or settings.ACTIVITY_MAX_WORKERS

    def get_recent_activity(
        self,
        caller: Caller,
        params: ActivityParams | Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> list[ActivityItem]:
        ensure_staff(caller)
        p = validate_input(ActivityParams, params)
        since = (now or utc_now()) - timedelta(days=p.days)

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self._run_source, source, since, p.limit) for source in self.sources]
            batches = [future.result() for future in futures]

        items = [item for batch in batches for item in batch]
        items.sort(key=lambda item: item.timestamp, reverse=True)
        return items[: p.limit]

    def _run_source(self, source: ActivitySource, since: datetime, limit: int) -> list[ActivityItem]:
        db = self.session_factory()
        try:
            with translate_db_errors(db):
                return source(ActivityRepository(db), since, limit)
        except Exception:
            logger.warning("Activity source %s failed", source.__name__)
            raise
        finally:
            db.close()
