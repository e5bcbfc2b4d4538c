from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import record_errors
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.report import (
    ReportDetailResponse,
    ReportListResponse,
    ReportResponse,
    ReportSummary,
)
from app.services import report_service

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("", response_model=ReportListResponse)
def list_reports(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List report summaries, newest first."""
    reports = report_service.list_reports(db, current_user.id)
    return ReportListResponse(reports=[ReportSummary.from_model(r) for r in reports])


@router.get("/{report_id}", response_model=ReportDetailResponse)
def get_report(
    report_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with record_errors():
        report = report_service.get_owned_report(db, current_user.id, report_id)
    return ReportDetailResponse(report=ReportResponse.from_model(report))


@router.delete("/{report_id}")
def delete_report(
    report_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with record_errors():
        report = report_service.get_owned_report(db, current_user.id, report_id)
    report_service.delete_report(db, report)
    return {"success": True, "message": "Report deleted"}
