from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import record_errors
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.note import NoteCreate, NoteListResponse, NoteResponse, NoteResult, NoteUpdate
from app.services import note_service

router = APIRouter(prefix="/api/notes", tags=["notes"])


@router.get("", response_model=NoteListResponse)
def list_notes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the current user's notes, newest first."""
    notes = note_service.list_notes(db, current_user.id)
    return NoteListResponse(notes=[NoteResponse.from_model(n) for n in notes])


@router.post("", response_model=NoteResult, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with record_errors():
        note = note_service.create_note(
            db,
            current_user.id,
            payload.content,
            source_search=payload.source_search,
            linked_collection_id=payload.linked_collection_id,
        )
    return NoteResult(note=NoteResponse.from_model(note))


@router.patch("/{note_id}", response_model=NoteResult)
def update_note(
    note_id: str,
    payload: NoteUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the fields present in the body."""
    with record_errors():
        note = note_service.get_owned_note(db, current_user.id, note_id)
        note = note_service.update_note(db, note, payload.model_dump(exclude_unset=True))
    return NoteResult(note=NoteResponse.from_model(note))


@router.delete("/{note_id}")
def delete_note(
    note_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    with record_errors():
        note = note_service.get_owned_note(db, current_user.id, note_id)
    note_service.delete_note(db, note)
    return {"success": True}
