import logging

from sqlalchemy.orm import Session

from app.core.errors import WorkflowNotCancellable
from app.models.workflow import ACTIVE_STATUSES, Workflow, WorkflowExecution
from app.services.ownership import get_owned

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Cancelled by user"


def list_workflows(db: Session, user_id: str) -> list[Workflow]:
    return (
        db.query(Workflow)
        .filter(Workflow.user_id == user_id)
        .order_by(Workflow.created_at.desc())
        .all()
    )


def get_owned_workflow(db: Session, user_id: str, workflow_id: str) -> Workflow:
    return get_owned(db, Workflow, user_id, workflow_id, "Workflow")


def delete_workflow(db: Session, workflow: Workflow) -> None:
    """Delete a workflow with its executions; a generated report is kept and unlinked."""
    db.delete(workflow)
    db.commit()
    logger.info(f"Deleted workflow {workflow.id}")


def cancel_workflow(db: Session, workflow: Workflow) -> Workflow:
    """Stop a pending or running workflow by marking it failed at its current step.

    Unfinished executions are failed with it. Any other status raises
    ``WorkflowNotCancellable``.
    """
    if workflow.status not in ACTIVE_STATUSES:
        raise WorkflowNotCancellable(workflow.status)

    workflow.status = "failed"
    workflow.error_message = CANCELLED_MESSAGE
    workflow.failed_step = workflow.current_step
    (
        db.query(WorkflowExecution)
        .filter(
            WorkflowExecution.workflow_id == workflow.id,
            WorkflowExecution.status.in_(ACTIVE_STATUSES),
        )
        .update({"status": "failed", "error": CANCELLED_MESSAGE}, synchronize_session="fetch")
    )
    db.commit()
    db.refresh(workflow)
    logger.info(f"Cancelled workflow {workflow.id} at step {workflow.failed_step}")
    return workflow
