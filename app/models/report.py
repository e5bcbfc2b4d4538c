import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from app.core.database import Base


class Report(Base):
    """A generated write-up; ``sections`` is a list of section objects."""

    __tablename__ = "reports"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    summary = Column(Text, nullable=True)
    format = Column(String, nullable=False, default="markdown")
    sections = Column(JSON, nullable=False, default=list)
    source_collection_id = Column(
        String, ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )
    workflow_id = Column(
        String, ForeignKey("workflows.id", ondelete="SET NULL"), nullable=True, unique=True
    )
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", backref="reports")
    source_collection = relationship("Collection", backref="reports")
    workflow = relationship("Workflow", back_populates="report")
