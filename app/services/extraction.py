"""Projection of stored search results into collection items.

Raw result records are loosely shaped and differ per provider, and
records saved by older clients may use the provider's native field names
(``link``, ``html_url``, ``full_name`` ...). Each provider gets an
adapter that reduces a record to a ``ResultView``; extraction then only
deals with that one shape.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from app.schemas.collection import BookmarkItem, ItemType

IdFactory = Callable[[], str]


def new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ResultView:
    url: str
    title: str
    thumbnail: Optional[str] = None


def _first(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def view_web_result(raw: dict) -> ResultView:
    return ResultView(
        url=_first(raw.get("url"), raw.get("link")) or "",
        title=raw.get("title") or "Untitled",
        thumbnail=_first(raw.get("thumbnail"), raw.get("imageUrl")),
    )


def view_pexels_result(raw: dict) -> ResultView:
    src = _as_dict(raw.get("src"))
    return ResultView(
        url=_first(raw.get("url"), src.get("original")) or "",
        title=_first(raw.get("title"), raw.get("alt")) or "Image",
        thumbnail=_first(raw.get("imageUrl"), src.get("medium"), src.get("small")),
    )


def view_github_result(raw: dict) -> ResultView:
    owner = _as_dict(raw.get("owner"))
    return ResultView(
        url=_first(raw.get("url"), raw.get("html_url")) or "",
        title=_first(raw.get("fullName"), raw.get("full_name"), raw.get("name")) or "Repo",
        thumbnail=owner.get("avatar_url") or None,
    )


# search type -> (item type, record adapter)
EXTRACTORS: dict[str, tuple[ItemType, Callable[[dict], ResultView]]] = {
    "web": (ItemType.ARTICLE, view_web_result),
    "pexels": (ItemType.IMAGE, view_pexels_result),
    "github": (ItemType.REPO, view_github_result),
}


def select_positions(results: Sequence[Any], positions: Iterable[int]) -> list[Any]:
    """Records at the given positions, in position order; out-of-range positions are skipped."""
    size = len(results)
    return [
        results[p]
        for p in positions
        if isinstance(p, int) and not isinstance(p, bool) and 0 <= p < size
    ]


def extract(
    results: Sequence[Any],
    positions: Iterable[int],
    search_type: str,
    id_factory: IdFactory = new_item_id,
) -> list[BookmarkItem]:
    """Build collection items for the selected positions of a result list."""
    extractor = EXTRACTORS.get(search_type)
    if extractor is None:
        return []

    item_type, view = extractor
    items = []
    for raw in select_positions(results, positions):
        result = view(_as_dict(raw))
        items.append(
            BookmarkItem(
                id=id_factory(),
                type=item_type,
                url=str(result.url),
                title=str(result.title),
                thumbnail=str(result.thumbnail) if result.thumbnail else None,
            )
        )
    return items
