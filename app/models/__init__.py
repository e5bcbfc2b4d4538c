from app.models.user import User
from app.models.search_session import SearchSession
from app.models.collection import Collection, CollectionItem
from app.models.note import Note
from app.models.calendar_event import CalendarEvent
from app.models.workflow import Workflow, WorkflowExecution
from app.models.report import Report
from app.models.app_setting import AppSetting

__all__ = [
    "User",
    "SearchSession",
    "Collection",
    "CollectionItem",
    "Note",
    "CalendarEvent",
    "Workflow",
    "WorkflowExecution",
    "Report",
    "AppSetting",
]
