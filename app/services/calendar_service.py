import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidRecord
from app.models.calendar_event import CalendarEvent
from app.services.ownership import check_linked_collection, get_owned

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "scheduled_at", "note", "completed", "linked_collection_id")
# Columns that are NOT NULL; an explicit null in an update is rejected
REQUIRED_FIELDS = ("title", "scheduled_at", "completed")


def list_events(db: Session, user_id: str) -> list[CalendarEvent]:
    """The user's events in chronological order."""
    return (
        db.query(CalendarEvent)
        .filter(CalendarEvent.user_id == user_id)
        .order_by(CalendarEvent.scheduled_at.asc())
        .all()
    )


def get_owned_event(db: Session, user_id: str, event_id: str) -> CalendarEvent:
    return get_owned(db, CalendarEvent, user_id, event_id, "Event")


def create_event(
    db: Session,
    user_id: str,
    title: str,
    scheduled_at: Optional[datetime],
    note: Optional[str] = None,
    linked_collection_id: Optional[str] = None,
) -> CalendarEvent:
    title = title.strip()
    if not title:
        raise InvalidRecord("Event title is required")
    if scheduled_at is None:
        raise InvalidRecord("Event datetime is required")
    check_linked_collection(db, user_id, linked_collection_id)

    event = CalendarEvent(
        user_id=user_id,
        title=title,
        scheduled_at=scheduled_at,
        note=note,
        completed=False,
        linked_collection_id=linked_collection_id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info(f"Created calendar event {event.id} for {scheduled_at.isoformat()}")
    return event


def update_event(db: Session, event: CalendarEvent, changes: Dict[str, Any]) -> CalendarEvent:
    changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise InvalidRecord(f"{field} cannot be null")
    if "title" in changes:
        changes["title"] = changes["title"].strip()
        if not changes["title"]:
            raise InvalidRecord("Event title cannot be empty")
    if "linked_collection_id" in changes:
        check_linked_collection(db, event.user_id, changes["linked_collection_id"])

    for field, value in changes.items():
        setattr(event, field, value)
    db.commit()
    db.refresh(event)
    logger.info(f"Updated calendar event {event.id}")
    return event


def delete_event(db: Session, event: CalendarEvent) -> None:
    db.delete(event)
    db.commit()
    logger.info(f"Deleted calendar event {event.id}")
