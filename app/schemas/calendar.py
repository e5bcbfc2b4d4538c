from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CalendarEventCreate(BaseModel):
    title: str = ""
    scheduled_at: Optional[datetime] = Field(None, alias="datetime")
    note: Optional[str] = None
    linked_collection_id: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalendarEventUpdate(BaseModel):
    title: Optional[str] = None
    scheduled_at: Optional[datetime] = Field(None, alias="datetime")
    note: Optional[str] = None
    completed: Optional[bool] = None
    linked_collection_id: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalendarEventResponse(BaseModel):
    id: str
    title: str
    scheduled_at: datetime = Field(alias="datetime")
    note: Optional[str] = None
    completed: bool = False
    linked_collection_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_model(cls, event) -> "CalendarEventResponse":
        return cls(
            id=event.id,
            title=event.title,
            scheduled_at=event.scheduled_at,
            note=event.note,
            completed=bool(event.completed),
            linked_collection_id=event.linked_collection_id,
            created_at=event.created_at,
        )


class CalendarEventResult(BaseModel):
    success: bool = True
    event: CalendarEventResponse


class CalendarEventListResponse(BaseModel):
    events: List[CalendarEventResponse]
