from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import record_errors
from app.core.database import get_db
from app.core.errors import DuplicateCollectionName
from app.core.security import get_current_user
from app.models.collection import Collection
from app.models.user import User
from app.schemas.collection import (
    CollectionCreate,
    CollectionListResponse,
    CollectionResponse,
    CollectionUpdate,
)
from app.services import collection_service

router = APIRouter(prefix="/api/collections", tags=["collections"])


def _owned_or_error(db: Session, user: User, collection_id: str) -> Collection:
    with record_errors():
        return collection_service.get_owned_collection(db, user.id, collection_id)


def _conflict(e: DuplicateCollectionName) -> HTTPException:
    detail = {"error": str(e)}
    if e.collection is not None:
        detail["collection"] = CollectionResponse.from_model(e.collection).model_dump(
            mode="json", by_alias=True
        )
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


@router.get("", response_model=CollectionListResponse)
def list_collections(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the current user's collections, most recently updated first."""
    collections = collection_service.list_collections(db, current_user.id)
    return CollectionListResponse(
        collections=[CollectionResponse.from_model(c) for c in collections]
    )


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
def create_collection(
    payload: CollectionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create an empty collection."""
    name = payload.name.strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Collection name is required",
        )

    try:
        collection = collection_service.create_collection(db, current_user.id, name)
    except DuplicateCollectionName as e:
        raise _conflict(e)
    return CollectionResponse.from_model(collection)


@router.patch("/{collection_id}", response_model=CollectionResponse)
def update_collection(
    collection_id: str,
    payload: CollectionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Rename a collection."""
    collection = _owned_or_error(db, current_user, collection_id)

    if payload.name is not None:
        name = payload.name.strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Collection name cannot be empty",
            )
        try:
            collection = collection_service.rename_collection(db, collection, name)
        except DuplicateCollectionName as e:
            raise _conflict(e)

    return CollectionResponse.from_model(collection)


@router.delete("/{collection_id}")
def delete_collection(
    collection_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a collection and all of its items."""
    collection = _owned_or_error(db, current_user, collection_id)
    collection_service.delete_collection(db, collection)
    return {"success": True}


@router.delete("/{collection_id}/items/{item_id}")
def delete_collection_item(
    collection_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove a single bookmarked item from a collection."""
    collection = _owned_or_error(db, current_user, collection_id)
    if not collection_service.remove_item(db, collection, item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found",
        )
    return {"success": True}
