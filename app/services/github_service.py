import logging
from typing import Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

GITHUB_REPO_SEARCH_URL = "https://api.github.com/search/repositories"


async def search_repositories(
    query: str,
    limit: int = 10,
    language: Optional[str] = None,
    min_stars: Optional[int] = None,
    sort: str = "stars",
    token_override: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[dict]:
    """Search GitHub repositories. The token is optional; unauthenticated calls are rate limited."""
    search_query = query
    if language:
        search_query += f" language:{language}"
    if min_stars:
        search_query += f" stars:>={min_stars}"

    headers = {"Accept": "application/vnd.github+json"}
    token = token_override or settings.get_api_key("github")
    if token:
        headers["Authorization"] = f"Bearer {token}"

    params = {"q": search_query, "sort": sort, "per_page": str(limit)}

    async with httpx.AsyncClient(timeout=15.0, transport=transport) as client:
        response = await client.get(GITHUB_REPO_SEARCH_URL, params=params, headers=headers)
        response.raise_for_status()
        data = response.json()

    results = []
    for repo in data.get("items", []):
        owner = repo.get("owner")
        if not owner:
            continue
        results.append(
            {
                "id": str(repo.get("id", "")),
                "name": repo.get("name", ""),
                "fullName": repo.get("full_name", ""),
                "description": repo.get("description") or "",
                "url": repo.get("html_url", ""),
                "stars": repo.get("stargazers_count", 0),
                "forks": repo.get("forks_count", 0),
                "language": repo.get("language") or "Unknown",
                "updatedAt": repo.get("updated_at"),
                "owner": {
                    "login": owner.get("login", ""),
                    "avatar_url": owner.get("avatar_url"),
                },
            }
        )

    logger.info(f"GitHub search: {len(results)} repositories for \"{search_query}\"")
    return results
