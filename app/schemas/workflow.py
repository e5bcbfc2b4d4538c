from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WorkflowReportRef(BaseModel):
    id: str
    title: str


class WorkflowResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    query: str
    status: str
    current_step: int = 0
    total_steps: int = 0
    sources: List[Any] = []
    depth: str
    output_format: str
    error_message: Optional[str] = None
    failed_step: Optional[int] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    report: Optional[WorkflowReportRef] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, workflow) -> "WorkflowResponse":
        report = workflow.report
        return cls(
            id=workflow.id,
            title=workflow.title,
            description=workflow.description,
            query=workflow.query,
            status=workflow.status,
            current_step=workflow.current_step or 0,
            total_steps=workflow.total_steps or 0,
            sources=workflow.sources or [],
            depth=workflow.depth,
            output_format=workflow.output_format,
            error_message=workflow.error_message,
            failed_step=workflow.failed_step,
            created_at=workflow.created_at,
            completed_at=workflow.completed_at,
            report=WorkflowReportRef(id=report.id, title=report.title) if report else None,
        )


class WorkflowListResponse(BaseModel):
    workflows: List[WorkflowResponse]


class WorkflowActionResponse(BaseModel):
    success: bool = True
    message: str
