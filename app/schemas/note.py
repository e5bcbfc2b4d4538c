from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class NoteCreate(BaseModel):
    content: str = ""
    source_search: Optional[str] = None
    linked_collection_id: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    content: Optional[str] = None
    source_search: Optional[str] = None
    linked_collection_id: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteResponse(BaseModel):
    id: str
    content: str
    source_search: Optional[str] = None
    linked_collection_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, note) -> "NoteResponse":
        return cls(
            id=note.id,
            content=note.content,
            source_search=note.source_search,
            linked_collection_id=note.linked_collection_id,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteResult(BaseModel):
    success: bool = True
    note: NoteResponse


class NoteListResponse(BaseModel):
    notes: List[NoteResponse]
