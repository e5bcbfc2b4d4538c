import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidRecord
from app.models.note import Note
from app.services.ownership import check_linked_collection, get_owned

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("content", "source_search", "linked_collection_id")


def list_notes(db: Session, user_id: str) -> list[Note]:
    return (
        db.query(Note)
        .filter(Note.user_id == user_id)
        .order_by(Note.created_at.desc())
        .all()
    )


def get_owned_note(db: Session, user_id: str, note_id: str) -> Note:
    return get_owned(db, Note, user_id, note_id, "Note")


def create_note(
    db: Session,
    user_id: str,
    content: str,
    source_search: Optional[str] = None,
    linked_collection_id: Optional[str] = None,
) -> Note:
    if not content.strip():
        raise InvalidRecord("Note content is required")
    check_linked_collection(db, user_id, linked_collection_id)

    note = Note(
        user_id=user_id,
        content=content,
        source_search=source_search,
        linked_collection_id=linked_collection_id,
    )
    db.add(note)
    db.commit()
    db.refresh(note)
    logger.info(f"Created note {note.id}")
    return note


def update_note(db: Session, note: Note, changes: Dict[str, Any]) -> Note:
    """Apply the fields present in ``changes``; absent fields keep their value."""
    changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
    if "content" in changes and not (changes["content"] or "").strip():
        raise InvalidRecord("Note content cannot be empty")
    if "linked_collection_id" in changes:
        check_linked_collection(db, note.user_id, changes["linked_collection_id"])

    for field, value in changes.items():
        setattr(note, field, value)
    db.commit()
    db.refresh(note)
    logger.info(f"Updated note {note.id}")
    return note


def delete_note(db: Session, note: Note) -> None:
    db.delete(note)
    db.commit()
    logger.info(f"Deleted note {note.id}")
