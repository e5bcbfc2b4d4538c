from contextlib import contextmanager

from fastapi import HTTPException, status

from app.core.errors import InvalidRecord, RecordForbidden, RecordNotFound, WorkflowNotCancellable


@contextmanager
def record_errors():
    """Map service-layer record errors onto HTTP status codes."""
    try:
        yield
    except RecordNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RecordForbidden as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except (InvalidRecord, WorkflowNotCancellable) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
