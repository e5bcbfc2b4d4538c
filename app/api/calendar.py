from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import record_errors
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.calendar import (
    CalendarEventCreate,
    CalendarEventListResponse,
    CalendarEventResponse,
    CalendarEventResult,
    CalendarEventUpdate,
)
from app.services import calendar_service

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("", response_model=CalendarEventListResponse)
def list_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the current user's events, earliest first."""
    events = calendar_service.list_events(db, current_user.id)
    return CalendarEventListResponse(events=[CalendarEventResponse.from_model(e) for e in events])


@router.post("", response_model=CalendarEventResult, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: CalendarEventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with record_errors():
        event = calendar_service.create_event(
            db,
            current_user.id,
            payload.title,
            payload.scheduled_at,
            note=payload.note,
            linked_collection_id=payload.linked_collection_id,
        )
    return CalendarEventResult(event=CalendarEventResponse.from_model(event))


@router.patch("/{event_id}", response_model=CalendarEventResult)
def update_event(
    event_id: str,
    payload: CalendarEventUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the fields present in the body, e.g. mark an event completed."""
    with record_errors():
        event = calendar_service.get_owned_event(db, current_user.id, event_id)
        event = calendar_service.update_event(db, event, payload.model_dump(exclude_unset=True))
    return CalendarEventResult(event=CalendarEventResponse.from_model(event))


@router.delete("/{event_id}")
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with record_errors():
        event = calendar_service.get_owned_event(db, current_user.id, event_id)
    calendar_service.delete_event(db, event)
    return {"success": True}
