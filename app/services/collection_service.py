import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateCollectionName
from app.models.collection import Collection, CollectionItem
from app.schemas.collection import BookmarkItem
from app.services.ownership import get_owned

logger = logging.getLogger(__name__)


def find_collection(db: Session, user_id: str, name: str) -> Optional[Collection]:
    return (
        db.query(Collection)
        .filter(Collection.user_id == user_id, Collection.name == name)
        .first()
    )


def find_or_create(db: Session, user_id: str, name: str) -> Collection:
    """Return the user's collection with this name, creating an empty one if needed.

    The (user_id, name) unique constraint decides concurrent creates: the
    loser rolls back and fetches the row the winner inserted.
    """
    collection = find_collection(db, user_id, name)
    if collection:
        return collection

    collection = Collection(user_id=user_id, name=name)
    db.add(collection)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Collection \"{name}\" was created concurrently, reusing it")
        existing = find_collection(db, user_id, name)
        if existing is None:
            raise
        return existing

    db.refresh(collection)
    logger.info(f"Created collection \"{name}\" ({collection.id})")
    return collection


def append_items(db: Session, collection: Collection, items: Iterable[BookmarkItem]) -> Collection:
    """Append items after the existing ones.

    Each item is its own row, so concurrent appends to the same collection
    never overwrite one another.
    """
    rows = [
        CollectionItem(
            collection_id=collection.id,
            item_id=item.id,
            type=item.type,
            url=item.url,
            title=item.title,
            thumbnail=item.thumbnail,
        )
        for item in items
    ]
    db.add_all(rows)
    collection.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(collection)
    return collection


def list_collections(db: Session, user_id: str) -> list[Collection]:
    return (
        db.query(Collection)
        .filter(Collection.user_id == user_id)
        .order_by(Collection.updated_at.desc())
        .all()
    )


def get_owned_collection(db: Session, user_id: str, collection_id: str) -> Collection:
    return get_owned(db, Collection, user_id, collection_id, "Collection")


def create_collection(db: Session, user_id: str, name: str) -> Collection:
    """Explicitly create an empty collection; an existing name is a conflict."""
    existing = find_collection(db, user_id, name)
    if existing:
        raise DuplicateCollectionName(existing)

    collection = Collection(user_id=user_id, name=name)
    db.add(collection)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateCollectionName(find_collection(db, user_id, name))

    db.refresh(collection)
    logger.info(f"Created empty collection \"{name}\"")
    return collection


def rename_collection(db: Session, collection: Collection, name: str) -> Collection:
    if name == collection.name:
        return collection

    existing = find_collection(db, collection.user_id, name)
    if existing:
        raise DuplicateCollectionName(existing)

    collection.name = name
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateCollectionName(find_collection(db, collection.user_id, name))

    db.refresh(collection)
    logger.info(f"Renamed collection {collection.id} to \"{name}\"")
    return collection


def delete_collection(db: Session, collection: Collection) -> None:
    db.delete(collection)
    db.commit()
    logger.info(f"Deleted collection {collection.id}")


def remove_item(db: Session, collection: Collection, item_id: str) -> bool:
    """Remove one item by its id; returns False when the collection has no such item."""
    row = (
        db.query(CollectionItem)
        .filter(
            CollectionItem.collection_id == collection.id,
            CollectionItem.item_id == item_id,
        )
        .first()
    )
    if not row:
        return False

    db.delete(row)
    collection.updated_at = datetime.now(timezone.utc)
    db.commit()
    logger.info(f"Deleted item {item_id} from collection {collection.id}")
    return True
