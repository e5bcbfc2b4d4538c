import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.search import SearchRequest, SearchSessionCreate, SearchSessionResponse
from app.services import search_service, search_session_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])


@router.post("/search/{search_type}", response_model=SearchSessionResponse)
async def run_search(
    search_type: str,
    payload: SearchRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Run a live search and snapshot its results as a new search session."""
    if not search_service.is_supported(search_type):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown search type. Must be one of: {', '.join(search_service.SEARCH_TYPE_SOURCES)}",
        )

    query = payload.query.strip()
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query cannot be empty",
        )

    try:
        results = await search_service.run_search(search_type, query, payload.limit)
    except (httpx.HTTPError, RuntimeError) as e:
        logger.error(f"{search_type} search failed for \"{query}\": {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Search provider error: {e}",
        )

    session = search_session_service.save_session(
        db,
        current_user.id,
        query,
        search_service.map_search_type_to_source(search_type),
        results,
    )
    return SearchSessionResponse.from_model(session)


@router.get("/search-sessions", response_model=SearchSessionResponse)
def load_search_session(
    query: str = Query(""),
    source: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the most recent session for a query, optionally limited to one source."""
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="query parameter is required",
        )

    session = search_session_service.find_latest_session(
        db, current_user.id, query, source or None
    )
    if not session:
        return SearchSessionResponse()
    return SearchSessionResponse.from_model(session)


@router.post(
    "/search-sessions",
    response_model=SearchSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
def save_search_session(
    payload: SearchSessionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store a result list the client has already displayed."""
    if not payload.query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="query is required",
        )

    session = search_session_service.save_session(
        db, current_user.id, payload.query, payload.source, payload.results
    )
    return SearchSessionResponse.from_model(session)
