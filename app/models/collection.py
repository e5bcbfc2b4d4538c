import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Collection(Base):
    __tablename__ = "collections"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_collections_user_name"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", backref="collections")
    items = relationship(
        "CollectionItem",
        back_populates="collection",
        order_by="CollectionItem.seq",
        cascade="all, delete-orphan",
    )


class CollectionItem(Base):
    """One bookmarked entry; ``seq`` gives insertion (display) order."""

    __tablename__ = "collection_items"
    __table_args__ = (
        UniqueConstraint("collection_id", "item_id", name="uq_collection_items_item_id"),
    )

    seq = Column(Integer, primary_key=True, autoincrement=True)
    collection_id = Column(
        String, ForeignKey("collections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_id = Column(String, nullable=False)
    type = Column(String, nullable=False, default="article")  # article, repo, image, pin
    url = Column(Text, nullable=False)
    title = Column(Text, nullable=False, default="Untitled")
    thumbnail = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    collection = relationship("Collection", back_populates="items")
