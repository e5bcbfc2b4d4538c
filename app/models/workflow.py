import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from app.core.database import Base

ACTIVE_STATUSES = ("pending", "running")


class Workflow(Base):
    """A multi-step research run and its progress.

    Rows are written by the workflow runner; this service only lists,
    deletes and cancels them.
    """

    __tablename__ = "workflows"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    query = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="pending")  # pending, running, completed, failed
    current_step = Column(Integer, nullable=False, default=0)
    total_steps = Column(Integer, nullable=False, default=0)
    sources = Column(JSON, nullable=False, default=list)
    depth = Column(String, nullable=False, default="standard")
    output_format = Column(String, nullable=False, default="report")
    error_message = Column(Text, nullable=True)
    failed_step = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    completed_at = Column(DateTime, nullable=True)

    user = relationship("User", backref="workflows")
    executions = relationship(
        "WorkflowExecution",
        back_populates="workflow",
        order_by="WorkflowExecution.step",
        cascade="all, delete-orphan",
    )
    report = relationship("Report", back_populates="workflow", uselist=False)


class WorkflowExecution(Base):
    """One step of a workflow run."""

    __tablename__ = "workflow_executions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    workflow_id = Column(
        String, ForeignKey("workflows.id", ondelete="CASCADE"), nullable=False, index=True
    )
    step = Column(Integer, nullable=False)
    name = Column(String, nullable=False, default="")
    status = Column(String, nullable=False, default="pending")
    error = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    workflow = relationship("Workflow", back_populates="executions")
