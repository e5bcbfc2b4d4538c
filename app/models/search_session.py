import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Index, JSON, Text
from sqlalchemy.orm import relationship
from app.core.database import Base


class SearchSession(Base):
    """Snapshot of one live search's ordered results.

    Rows are only ever inserted; the newest row for a
    (user_id, query, source) triple is the one bookmarks resolve against.
    """

    __tablename__ = "search_sessions"
    __table_args__ = (
        Index("ix_search_sessions_lookup", "user_id", "query", "source", "created_at"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    query = Column(Text, nullable=False)
    source = Column(String, nullable=False)  # google, pexels, github
    results = Column(JSON, nullable=False, default=list)
    result_count = Column(Integer, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", backref="search_sessions")
