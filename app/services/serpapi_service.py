import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search"

FRESHNESS_CODES = {"day": "d", "week": "w", "month": "m"}


def _hostname(url: str) -> str:
    try:
        return urlparse(url).netloc
    except ValueError:
        return ""


async def search_web(
    query: str,
    num: int = 10,
    freshness: Optional[str] = None,
    api_key_override: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[dict]:
    """Run a Google web search through SerpAPI and return organic results in rank order."""
    api_key = api_key_override or settings.get_api_key("serpapi")
    if not api_key:
        raise RuntimeError("SerpAPI key is not configured. Please add it in Settings.")

    params = {
        "engine": "google",
        "q": query,
        "api_key": api_key,
        "num": str(num),
    }
    if freshness in FRESHNESS_CODES:
        params["tbs"] = f"qdr:{FRESHNESS_CODES[freshness]}"

    async with httpx.AsyncClient(timeout=15.0, transport=transport) as client:
        response = await client.get(SERPAPI_URL, params=params)
        response.raise_for_status()
        data = response.json()

    results = []
    for item in data.get("organic_results", []):
        link = item.get("link", "")
        position = item.get("position")
        results.append(
            {
                "id": str(position),
                "title": item.get("title", ""),
                "url": link,
                "snippet": item.get("snippet", ""),
                "thumbnail": item.get("thumbnail"),
                "source": item.get("source") or _hostname(link),
                "position": position,
            }
        )

    logger.info(f"SerpAPI web search: {len(results)} results for \"{query}\"")
    return results
