from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.core.auth import Caller, ensure_can_post
from app.core.database import translate_db_errors
from app.core.errors import validate_input
from app.models.report import Report
from app.repositories.report_repository import ReportRepository
from app.schemas.report import ReportCreate
from app.services.notification_service import AdminNotifier


class ReportService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReportRepository(db)
        self.notifier = AdminNotifier(db)

    def create(self, caller: Caller | None, data: ReportCreate | Mapping[str, Any]) -> Report:
        caller = ensure_can_post(caller)
        params = validate_input(ReportCreate, data)
        with translate_db_errors(self.db):
            report = self.repo.create(
                reporter_id=caller.user_id,
                target_type=params.target.target_type,
                target_id=params.target.target_id,
                reason=params.reason,
                description=params.description,
            )

        self.notifier.notify_new_report(
            report_id=report.id,  # type: ignore[arg-type]
            target_type=params.target.target_type,
            reason=params.reason,
            reporter_id=caller.user_id,
        )
        return report
