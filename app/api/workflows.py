from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import record_errors
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.workflow import WorkflowActionResponse, WorkflowListResponse, WorkflowResponse
from app.services import workflow_service

router = APIRouter(prefix="/api/workflows", tags=["workflows"])


@router.get("", response_model=WorkflowListResponse)
def list_workflows(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List workflows with their progress and generated report, newest first."""
    workflows = workflow_service.list_workflows(db, current_user.id)
    return WorkflowListResponse(workflows=[WorkflowResponse.from_model(w) for w in workflows])


@router.delete("/{workflow_id}", response_model=WorkflowActionResponse)
def delete_workflow(
    workflow_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with record_errors():
        workflow = workflow_service.get_owned_workflow(db, current_user.id, workflow_id)
    workflow_service.delete_workflow(db, workflow)
    return WorkflowActionResponse(message="Workflow deleted")


@router.post("/{workflow_id}/cancel", response_model=WorkflowActionResponse)
def cancel_workflow(
    workflow_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Cancel a pending or running workflow; anything else is a 400."""
    with record_errors():
        workflow = workflow_service.get_owned_workflow(db, current_user.id, workflow_id)
        workflow_service.cancel_workflow(db, workflow)
    return WorkflowActionResponse(message="Workflow cancelled")
