from datetime import datetime, timedelta, timezone

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from app.models.search_session import SearchSession
from app.services import search_service, search_session_service
from tests.conftest import OTHER_USER_ID, TEST_USER_ID, auth_header


@pytest.mark.asyncio
async def test_live_search_snapshots_results(client, db_session, monkeypatch):
    async def run_search(search_type, query, limit=None):
        return [{"title": "Cat", "url": "https://pexels.com/cat", "imageUrl": "https://img/cat.jpg"}]

    monkeypatch.setattr(search_service, "run_search", run_search)

    resp = await client.post("/api/search/pexels", json={"query": " cats "}, headers=auth_header())

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["query"] == "cats"
    assert payload["source"] == "pexels"
    assert payload["sessionId"]
    stored = db_session.query(SearchSession).one()
    assert stored.user_id == TEST_USER_ID
    assert stored.result_count == 1
    assert stored.results[0]["title"] == "Cat"


@pytest.mark.asyncio
async def test_live_search_rejects_unknown_type_and_empty_query(client):
    unknown = await client.post("/api/search/dribbble", json={"query": "x"}, headers=auth_header())
    empty = await client.post("/api/search/web", json={"query": "  "}, headers=auth_header())

    assert unknown.status_code == 404
    assert empty.status_code == 400


@pytest.mark.asyncio
async def test_live_search_provider_error_is_bad_gateway(client, db_session, monkeypatch):
    async def run_search(search_type, query, limit=None):
        raise httpx.ConnectError("timed out")

    monkeypatch.setattr(search_service, "run_search", run_search)

    resp = await client.post("/api/search/web", json={"query": "x"}, headers=auth_header())

    assert resp.status_code == 502
    assert db_session.query(SearchSession).count() == 0


@pytest.mark.asyncio
async def test_load_latest_session(client, db_session):
    now = datetime.now(timezone.utc)
    for offset, title in ((2, "oldest"), (1, "older")):
        db_session.add(
            SearchSession(
                user_id=TEST_USER_ID,
                query="cats",
                source="google",
                results=[{"title": title}],
                created_at=now - timedelta(minutes=offset),
            )
        )
    db_session.commit()
    await client.post(
        "/api/search-sessions",
        json={"query": "cats", "source": "google", "results": [{"title": "newest"}]},
        headers=auth_header(),
    )

    resp = await client.get(
        "/api/search-sessions", params={"query": "cats", "source": "google"}, headers=auth_header()
    )

    assert resp.status_code == 200
    assert resp.json()["results"] == [{"title": "newest"}]


@pytest.mark.asyncio
async def test_load_session_is_exact_match_and_per_user(client, db_session):
    db_session.add(
        SearchSession(user_id=OTHER_USER_ID, query="cats", source="google", results=[{"title": "theirs"}])
    )
    db_session.commit()

    other_user = await client.get(
        "/api/search-sessions", params={"query": "cats"}, headers=auth_header()
    )
    different_case = await client.get(
        "/api/search-sessions", params={"query": "Cats"}, headers=auth_header(OTHER_USER_ID)
    )
    missing_query = await client.get("/api/search-sessions", headers=auth_header())

    assert other_user.json() == {
        "sessionId": None,
        "query": None,
        "source": None,
        "results": [],
        "createdAt": None,
    }
    assert different_case.json()["sessionId"] is None
    assert missing_query.status_code == 400


@pytest.mark.asyncio
async def test_blank_source_matches_any_source(client):
    await client.post(
        "/api/search-sessions",
        json={"query": "cats", "source": "pexels", "results": [{"url": "https://pexels.com/1"}]},
        headers=auth_header(),
    )

    resp = await client.get(
        "/api/search-sessions", params={"query": "cats", "source": ""}, headers=auth_header()
    )

    assert resp.status_code == 200
    assert resp.json()["source"] == "pexels"
    assert resp.json()["results"] == [{"url": "https://pexels.com/1"}]


def test_find_latest_session_swallows_store_errors():
    class BrokenSession:
        rolled_back = False

        def query(self, *entities):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        def rollback(self):
            self.rolled_back = True

    db = BrokenSession()
    assert search_session_service.find_latest_session(db, TEST_USER_ID, "cats", "google") is None
    assert db.rolled_back is True
