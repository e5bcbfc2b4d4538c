from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ReportSummary(BaseModel):
    """List entry; sections are only counted, not returned."""

    id: str
    title: str
    summary: Optional[str] = None
    format: str
    source_collection_id: Optional[str] = None
    workflow_id: Optional[str] = None
    section_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, report) -> "ReportSummary":
        sections = report.sections if isinstance(report.sections, list) else []
        return cls(
            id=report.id,
            title=report.title,
            summary=report.summary,
            format=report.format,
            source_collection_id=report.source_collection_id,
            workflow_id=report.workflow_id,
            section_count=len(sections),
            created_at=report.created_at,
            updated_at=report.updated_at,
        )


class ReportResponse(BaseModel):
    id: str
    title: str
    summary: Optional[str] = None
    format: str
    sections: List[Any] = []
    source_collection_id: Optional[str] = None
    workflow_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, report) -> "ReportResponse":
        return cls(
            id=report.id,
            title=report.title,
            summary=report.summary,
            format=report.format,
            sections=report.sections if isinstance(report.sections, list) else [],
            source_collection_id=report.source_collection_id,
            workflow_id=report.workflow_id,
            created_at=report.created_at,
            updated_at=report.updated_at,
        )


class ReportListResponse(BaseModel):
    reports: List[ReportSummary]


class ReportDetailResponse(BaseModel):
    report: ReportResponse
