import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import BookmarkValidationError
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.collection import AddToCollectionRequest, AddToCollectionResponse
from app.services import bookmark_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tools", tags=["tools"])


def _failure(status_code: int, message: str) -> JSONResponse:
    body = AddToCollectionResponse(success=False, collection_id="", items_added=0, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def _parse_request(request: Request) -> AddToCollectionRequest:
    """Read the body as a JSON object; raises ValueError for anything else."""
    payload = await request.json()
    if not isinstance(payload, dict):
        raise ValueError("request body must be a JSON object")
    return AddToCollectionRequest.model_validate(payload)


@router.post("/collection/add", response_model=AddToCollectionResponse)
async def add_to_collection(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Bookmark direct items, or items at given positions of a recent search, into a collection."""
    try:
        payload = await _parse_request(request)
    except ValidationError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, f"Invalid request: {e.errors()[0]['msg']}")
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too
        return _failure(status.HTTP_400_BAD_REQUEST, f"Invalid request: {e}")

    try:
        result = await bookmark_service.add_to_collection(db, current_user.id, payload)
    except BookmarkValidationError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.exception(f"Collection add error: {e}")
        db.rollback()
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e))

    return AddToCollectionResponse(
        success=True,
        collection_id=result.collection_id,
        items_added=result.items_added,
        message=result.message,
    )
