import logging
from typing import Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

PEXELS_SEARCH_URL = "https://api.pexels.com/v1/search"


def _photo_to_result(photo: dict) -> dict:
    src = photo.get("src") or {}
    photographer = photo.get("photographer", "")
    return {
        "id": str(photo.get("id", "")),
        "url": photo.get("url"),
        "imageUrl": src.get("large2x"),
        "thumbnail": src.get("medium"),
        "photographer": photographer,
        "title": f"Photo by {photographer}",
        "width": photo.get("width"),
        "height": photo.get("height"),
        "alt": photo.get("alt"),
        "src": src,
    }


async def search_photos(
    query: str,
    per_page: int = 20,
    page: int = 1,
    api_key_override: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[dict]:
    """Search Pexels stock photos."""
    api_key = api_key_override or settings.get_api_key("pexels")
    if not api_key:
        raise RuntimeError("Pexels API key is not configured. Please add it in Settings.")

    params = {"query": query, "per_page": str(per_page), "page": str(page)}
    headers = {"Authorization": api_key}

    async with httpx.AsyncClient(timeout=15.0, transport=transport) as client:
        response = await client.get(PEXELS_SEARCH_URL, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()

    results = [_photo_to_result(photo) for photo in data.get("photos", [])]
    logger.info(f"Pexels search: {len(results)} photos for \"{query}\"")
    return results
