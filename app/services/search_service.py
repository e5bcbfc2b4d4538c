"""Uniform entry point over the live search providers.

Callers speak in search types (``web``, ``pexels``, ``github``); search
sessions are stored under source tags (``google``, ``pexels``,
``github``).
"""

import logging
from typing import Optional

from app.services import github_service, pexels_service, serpapi_service

logger = logging.getLogger(__name__)

SEARCH_TYPE_SOURCES = {
    "web": "google",
    "pexels": "pexels",
    "github": "github",
}

# Result-count cap applied when a search has to be re-run live
DEFAULT_LIMITS = {
    "web": 10,
    "pexels": 20,
    "github": 20,
}


def map_search_type_to_source(search_type: str) -> str:
    """Session source tag for a search type; unknown types pass through unchanged."""
    return SEARCH_TYPE_SOURCES.get(search_type, search_type)


def is_supported(search_type: str) -> bool:
    return search_type in SEARCH_TYPE_SOURCES


async def run_search(search_type: str, query: str, limit: Optional[int] = None) -> list[dict]:
    """Execute a live search and return the provider's result records in rank order.

    Unknown search types return an empty list. Provider errors propagate.
    """
    limit = limit or DEFAULT_LIMITS.get(search_type, 10)

    if search_type == "web":
        return await serpapi_service.search_web(query, num=limit)
    if search_type == "pexels":
        return await pexels_service.search_photos(query, per_page=limit)
    if search_type == "github":
        return await github_service.search_repositories(query, limit=limit)

    logger.warning(f"No live search provider for search type \"{search_type}\"")
    return []
