from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

from app.core.errors import RecordForbidden, RecordNotFound
from app.models.collection import Collection

T = TypeVar("T")


def get_owned(db: Session, model: Type[T], user_id: str, record_id: str, label: str) -> T:
    """Load a user-owned row by primary key.

    Raises ``RecordNotFound`` ("<label> not found") when the row is missing
    and ``RecordForbidden`` when another user owns it.
    """
    record = db.get(model, record_id)
    if record is None:
        raise RecordNotFound(f"{label} not found")
    if record.user_id != user_id:
        raise RecordForbidden("Forbidden")
    return record


def check_linked_collection(db: Session, user_id: str, collection_id: Optional[str]) -> None:
    """A note, event or report may only point at one of the user's own collections."""
    if collection_id is None:
        return
    get_owned(db, Collection, user_id, collection_id, "Collection")
