import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.core.database import Base


class CalendarEvent(Base):
    """A dated reminder, optionally pointing at a collection to revisit."""

    __tablename__ = "calendar_events"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    scheduled_at = Column("datetime", DateTime, nullable=False, index=True)
    note = Column(Text, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    linked_collection_id = Column(
        String, ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", backref="calendar_events")
    linked_collection = relationship("Collection", backref="calendar_events")
