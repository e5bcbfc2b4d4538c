from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SearchRequest(BaseModel):
    query: str
    limit: Optional[int] = Field(default=None, ge=1, le=100)


class SearchSessionCreate(BaseModel):
    query: str
    source: str
    results: List[Any] = Field(default_factory=list)


class SearchSessionResponse(BaseModel):
    session_id: Optional[str] = None
    query: Optional[str] = None
    source: Optional[str] = None
    results: List[Any] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, session) -> "SearchSessionResponse":
        return cls(
            session_id=session.id,
            query=session.query,
            source=session.source,
            results=list(session.results or []),
            created_at=session.created_at,
        )
