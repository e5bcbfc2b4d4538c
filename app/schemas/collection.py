from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ItemType(str, Enum):
    ARTICLE = "article"
    REPO = "repo"
    IMAGE = "image"
    PIN = "pin"


class BookmarkItem(BaseModel):
    """A normalized collection entry, as stored and as returned to clients."""

    id: str
    type: ItemType = ItemType.ARTICLE
    url: str
    title: str = "Untitled"
    thumbnail: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)

    @classmethod
    def from_row(cls, row) -> "BookmarkItem":
        return cls(
            id=row.item_id,
            type=row.type,
            url=row.url,
            title=row.title,
            thumbnail=row.thumbnail,
        )


class DirectItem(BaseModel):
    """Caller-supplied item; every field is optional on the wire."""

    type: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    thumbnail: Optional[str] = None


class AddToCollectionRequest(BaseModel):
    collection_name: Optional[str] = None
    items: Optional[List[DirectItem]] = None
    search_query: Optional[str] = None
    search_type: Optional[str] = None
    indices: Optional[List[int]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AddToCollectionResponse(BaseModel):
    success: bool
    collection_id: str = ""
    items_added: int = 0
    message: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CollectionCreate(BaseModel):
    name: str = ""


class CollectionUpdate(BaseModel):
    name: Optional[str] = None


class CollectionResponse(BaseModel):
    id: str
    name: str
    items: List[BookmarkItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, collection) -> "CollectionResponse":
        return cls(
            id=collection.id,
            name=collection.name,
            items=[BookmarkItem.from_row(row) for row in collection.items],
            created_at=collection.created_at,
            updated_at=collection.updated_at,
        )


class CollectionListResponse(BaseModel):
    collections: List[CollectionResponse]
