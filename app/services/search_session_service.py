import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.search_session import SearchSession

logger = logging.getLogger(__name__)


def find_latest_session(
    db: Session, user_id: str, query: str, source: Optional[str]
) -> Optional[SearchSession]:
    """Return the newest session for the exact (user, query, source) triple.

    Matching is exact-string. A ``None`` source matches any source. Store
    errors are logged and reported as a miss.
    """
    try:
        q = db.query(SearchSession).filter(
            SearchSession.user_id == user_id,
            SearchSession.query == query,
        )
        if source is not None:
            q = q.filter(SearchSession.source == source)
        return q.order_by(SearchSession.created_at.desc()).first()
    except SQLAlchemyError as e:
        logger.warning(f"Search session lookup failed for \"{query}\" ({source}): {e}")
        db.rollback()
        return None


def save_session(
    db: Session, user_id: str, query: str, source: str, results: list[Any]
) -> SearchSession:
    """Record a new immutable snapshot of a search's results."""
    session = SearchSession(
        user_id=user_id,
        query=query,
        source=source,
        results=list(results),
        result_count=len(results),
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info(f"Saved search session {session.id}: \"{query}\" ({source}, {len(results)} results)")
    return session
