import httpx
import pytest

from app.models.collection import Collection
from app.models.search_session import SearchSession
from app.services import search_service
from tests.conftest import TEST_USER_ID, auth_header

ADD_URL = "/api/tools/collection/add"


def _failing_search(error):
    async def run_search(search_type, query, limit=None):
        raise error

    return run_search


@pytest.mark.asyncio
async def test_requires_authentication(client, db_session):
    resp = await client.post(ADD_URL, json={"collectionName": "Reading", "items": [{"url": "http://a"}]})
    assert resp.status_code == 401
    assert db_session.query(Collection).count() == 0


@pytest.mark.asyncio
async def test_rejects_invalid_token(client):
    resp = await client.post(
        ADD_URL,
        json={"collectionName": "Reading", "items": [{"url": "http://a"}]},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_direct_items_create_then_append(client, db_session):
    body = {"collectionName": "Reading", "items": [{"url": "http://a", "title": "A"}]}

    first = await client.post(ADD_URL, json=body, headers=auth_header())
    assert first.status_code == 200
    first_payload = first.json()
    assert first_payload["success"] is True
    assert first_payload["itemsAdded"] == 1
    assert first_payload["message"] == 'Added 1 items to "Reading"'

    second = await client.post(ADD_URL, json=body, headers=auth_header())
    assert second.status_code == 200
    assert second.json()["collectionId"] == first_payload["collectionId"]

    listing = await client.get("/api/collections", headers=auth_header())
    collections = listing.json()["collections"]
    assert len(collections) == 1
    items = collections[0]["items"]
    assert [i["title"] for i in items] == ["A", "A"]
    assert items[0]["type"] == "article"
    assert items[0]["id"] != items[1]["id"]


@pytest.mark.asyncio
async def test_search_based_request_uses_cached_code_search(client, db_session, monkeypatch):
    monkeypatch.setattr(search_service, "run_search", _failing_search(AssertionError("no live search")))
    await client.post(
        "/api/search-sessions",
        json={
            "query": "http client",
            "source": "github",
            "results": [
                {"fullName": "psf/requests", "url": "https://github.com/psf/requests"},
                {"fullName": "pallets/flask", "url": "https://github.com/pallets/flask"},
                {"name": "httpx", "url": "https://github.com/encode/httpx"},
            ],
        },
        headers=auth_header(),
    )

    resp = await client.post(
        ADD_URL,
        json={
            "collectionName": "Libraries",
            "searchQuery": "http client",
            "searchType": "github",
            "indices": [0, 2],
        },
        headers=auth_header(),
    )

    assert resp.status_code == 200
    assert resp.json()["itemsAdded"] == 2
    collection = db_session.query(Collection).filter(Collection.name == "Libraries").one()
    assert [(i.type, i.title) for i in collection.items] == [("repo", "psf/requests"), ("repo", "httpx")]


@pytest.mark.asyncio
async def test_missing_paths_is_bad_request(client, db_session):
    resp = await client.post(ADD_URL, json={"collectionName": "Reading"}, headers=auth_header())

    assert resp.status_code == 400
    payload = resp.json()
    assert payload == {
        "success": False,
        "collectionId": "",
        "itemsAdded": 0,
        "message": "Provide either 'items' array (direct) or "
        "'searchQuery' + 'searchType' + 'indices' (search-based)",
    }
    assert db_session.query(Collection).count() == 0


@pytest.mark.asyncio
async def test_missing_collection_name_is_bad_request(client):
    resp = await client.post(ADD_URL, json={"items": [{"url": "http://a"}]}, headers=auth_header())
    assert resp.status_code == 400
    assert resp.json()["message"] == "collectionName is required"


@pytest.mark.asyncio
async def test_malformed_indices_are_bad_request(client):
    resp = await client.post(
        ADD_URL,
        json={"collectionName": "Reading", "searchQuery": "q", "searchType": "web", "indices": ["first"]},
        headers=auth_header(),
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_non_object_body_is_bad_request(client, db_session):
    resp = await client.post(ADD_URL, json=[{"url": "http://a"}], headers=auth_header())

    assert resp.status_code == 400
    payload = resp.json()
    assert payload["success"] is False
    assert payload["collectionId"] == ""
    assert payload["itemsAdded"] == 0
    assert payload["message"].startswith("Invalid request")
    assert db_session.query(Collection).count() == 0


@pytest.mark.asyncio
async def test_unparseable_body_is_bad_request(client, db_session):
    headers = {**auth_header(), "Content-Type": "application/json"}
    resp = await client.post(ADD_URL, content=b"{not json", headers=headers)

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert resp.json()["message"].startswith("Invalid request")
    assert db_session.query(Collection).count() == 0


@pytest.mark.asyncio
async def test_out_of_range_indices_leave_collection_untouched(client, db_session):
    await client.post(
        ADD_URL,
        json={"collectionName": "Reading", "items": [{"url": "http://a", "title": "A"}]},
        headers=auth_header(),
    )
    db_session.add(
        SearchSession(
            user_id=TEST_USER_ID,
            query="cats",
            source="pexels",
            results=[{"url": "https://pexels.com/1"}],
            result_count=1,
        )
    )
    db_session.commit()

    resp = await client.post(
        ADD_URL,
        json={"collectionName": "Reading", "searchQuery": "cats", "searchType": "pexels", "indices": [5, -1]},
        headers=auth_header(),
    )

    assert resp.status_code == 400
    assert resp.json()["message"] == "No valid items to add"
    collection = db_session.query(Collection).one()
    assert len(collection.items) == 1


@pytest.mark.asyncio
async def test_live_search_failure_is_server_error(client, db_session, monkeypatch):
    monkeypatch.setattr(search_service, "run_search", _failing_search(httpx.ConnectError("provider down")))

    resp = await client.post(
        ADD_URL,
        json={"collectionName": "Reading", "searchQuery": "q", "searchType": "web", "indices": [0]},
        headers=auth_header(),
    )

    assert resp.status_code == 500
    assert resp.json() == {
        "success": False,
        "collectionId": "",
        "itemsAdded": 0,
        "message": "provider down",
    }
    assert db_session.query(Collection).count() == 0


@pytest.mark.asyncio
async def test_live_fallback_when_no_session(client, monkeypatch):
    async def run_search(search_type, query, limit=None):
        assert (search_type, query) == ("web", "fastapi")
        return [{"title": "FastAPI", "link": "https://fastapi.tiangolo.com"}]

    monkeypatch.setattr(search_service, "run_search", run_search)

    resp = await client.post(
        ADD_URL,
        json={"collectionName": "Docs", "searchQuery": "fastapi", "searchType": "web", "indices": [0]},
        headers=auth_header(),
    )

    assert resp.status_code == 200
    assert resp.json()["itemsAdded"] == 1
