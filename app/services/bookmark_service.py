"""Bookmark search results or caller-supplied links into a named collection.

Search-based requests name items by their position in a result list the
user has already seen. Those positions are resolved against the user's
latest stored search session for the same query and source, so the
bookmarked items are the ones on screen. Only when no session exists is
the search re-run live, and then the results may differ from what the
user saw.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.core.errors import BookmarkValidationError
from app.schemas.collection import AddToCollectionRequest, BookmarkItem, DirectItem, ItemType
from app.services import collection_service, search_service, search_session_service
from app.services.extraction import IdFactory, extract, new_item_id

logger = logging.getLogger(__name__)

PATH_DIRECT = "direct"
PATH_SESSION = "session"
PATH_LIVE = "live"

MISSING_PATH_MESSAGE = (
    "Provide either 'items' array (direct) or "
    "'searchQuery' + 'searchType' + 'indices' (search-based)"
)


@dataclass
class BookmarkResult:
    collection_id: str
    items_added: int
    message: str
    path: str


def _direct_item(item: DirectItem, id_factory: IdFactory) -> Optional[BookmarkItem]:
    url = (item.url or "").strip()
    if not url:
        return None
    try:
        item_type = ItemType(item.type) if item.type else ItemType.ARTICLE
    except ValueError:
        item_type = ItemType.ARTICLE
    return BookmarkItem(
        id=id_factory(),
        type=item_type,
        url=url,
        title=item.title or "Untitled",
        thumbnail=item.thumbnail or None,
    )


def resolve_direct_items(
    items: list[DirectItem], id_factory: IdFactory = new_item_id
) -> list[BookmarkItem]:
    """Give each caller-supplied item a fresh id; items without a URL are dropped."""
    resolved = [_direct_item(item, id_factory) for item in items]
    return [item for item in resolved if item is not None]


async def resolve_search_results(
    db: Session, user_id: str, search_query: str, search_type: str
) -> tuple[list[Any], str]:
    """Result list the indices refer to, and the path it came from."""
    source = search_service.map_search_type_to_source(search_type)

    session = search_session_service.find_latest_session(db, user_id, search_query, source)
    if session is not None and isinstance(session.results, list) and session.results:
        logger.info(
            f"Using cached search session {session.id} with {len(session.results)} results"
        )
        return list(session.results), PATH_SESSION

    logger.info(f"No cached session for \"{search_query}\" ({source}), re-running search")
    results = await search_service.run_search(search_type, search_query)
    logger.info(f"Re-searched and got {len(results)} results")
    return results, PATH_LIVE


async def add_to_collection(
    db: Session,
    user_id: str,
    payload: AddToCollectionRequest,
    id_factory: IdFactory = new_item_id,
) -> BookmarkResult:
    """Resolve the requested items and append them to the named collection.

    Raises ``BookmarkValidationError`` before touching any collection when
    the request is malformed or resolves to no items.
    """
    collection_name = (payload.collection_name or "").strip()
    if not collection_name:
        raise BookmarkValidationError("collectionName is required")

    if payload.items:
        logger.info(
            f"Direct bookmark request: {len(payload.items)} items into \"{collection_name}\""
        )
        items = resolve_direct_items(payload.items, id_factory)
        path = PATH_DIRECT
    elif payload.search_query and payload.search_type and payload.indices is not None:
        logger.info(
            f"Search-based bookmark request: \"{payload.search_query}\" "
            f"({payload.search_type}) indices={payload.indices} into \"{collection_name}\""
        )
        results, path = await resolve_search_results(
            db, user_id, payload.search_query, payload.search_type
        )
        items = extract(results, payload.indices, payload.search_type, id_factory)
    else:
        raise BookmarkValidationError(MISSING_PATH_MESSAGE)

    if not items:
        raise BookmarkValidationError("No valid items to add")

    collection = collection_service.find_or_create(db, user_id, collection_name)
    collection_service.append_items(db, collection, items)

    logger.info(
        f"Added {len(items)} items to \"{collection_name}\" via {path}: "
        f"{[item.title for item in items]}"
    )
    return BookmarkResult(
        collection_id=collection.id,
        items_added=len(items),
        message=f"Added {len(items)} items to \"{collection_name}\"",
        path=path,
    )
