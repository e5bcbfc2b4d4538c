"""Domain exceptions raised by the service layer.

Routers translate these into HTTP responses; services never build
responses themselves.
"""


class BookmarkError(Exception):
    """Base class for collection and bookmarking errors."""


class BookmarkValidationError(BookmarkError):
    """The request cannot produce any item to bookmark."""


class RecordNotFound(BookmarkError):
    pass


class RecordForbidden(BookmarkError):
    """The record exists but belongs to another user."""


class InvalidRecord(BookmarkError):
    """A create or update would leave a record in an invalid state."""


class WorkflowNotCancellable(BookmarkError):
    def __init__(self, status: str):
        super().__init__(f"Cannot cancel workflow with status: {status}")
        self.status = status


class DuplicateCollectionName(BookmarkError):
    def __init__(self, collection):
        super().__init__("A collection with this name already exists")
        self.collection = collection
