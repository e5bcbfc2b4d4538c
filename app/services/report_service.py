import logging

from sqlalchemy.orm import Session

from app.models.report import Report
from app.services.ownership import get_owned

logger = logging.getLogger(__name__)


def list_reports(db: Session, user_id: str) -> list[Report]:
    return (
        db.query(Report)
        .filter(Report.user_id == user_id)
        .order_by(Report.created_at.desc())
        .all()
    )


def get_owned_report(db: Session, user_id: str, report_id: str) -> Report:
    return get_owned(db, Report, user_id, report_id, "Report")


def delete_report(db: Session, report: Report) -> None:
    db.delete(report)
    db.commit()
    logger.info(f"Deleted report {report.id}")
