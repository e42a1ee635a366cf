from uuid import UUID

from sqlalchemy.orm import Session

from app.models.report import Report


class ReportRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        *,
        reporter_id: UUID | None,
        target_type: str,
        target_id: UUID,
        reason: str,
        description: str | None = None,
    ) -> Report:
        report = Report(
            reporter_id=reporter_id,
            target_type=target_type,
            target_id=target_id,
            reason=reason,
            description=description,
        )
        self.db.add(report)
        self.db.commit()
        self.db.refresh(report)
        return report

    def get_by_id(self, report_id: UUID) -> Report | None:
        return self.db.query(Report).filter(Report.id == report_id).first()
