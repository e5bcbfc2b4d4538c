import pytest

from app.core import config
from app.core.config import Settings
from tests.conftest import auth_header


@pytest.fixture
def key_store(monkeypatch):
    store = {}
    monkeypatch.setattr(config, "_get_db_setting", lambda key: store.get(key))
    monkeypatch.setattr(config, "_set_db_setting", lambda key, value: store.__setitem__(key, value))
    return store


def test_api_key_prefers_database_value(key_store):
    settings = Settings(SERPAPI_API_KEY="from-env", PEXELS_API_KEY="pexels-env")
    key_store["SERPAPI_API_KEY"] = "from-db"

    assert settings.get_api_key("serpapi") == "from-db"
    assert settings.get_api_key("pexels") == "pexels-env"
    assert settings.get_api_key("unknown") == ""


def test_masked_keys(key_store):
    settings = Settings(SERPAPI_API_KEY="abcdefghijkl", PEXELS_API_KEY="short", GITHUB_TOKEN="")

    masked = settings.get_all_api_keys_masked()

    assert masked["serpapi"] == {"configured": True, "masked_key": "abc...jkl"}
    assert masked["pexels"] == {"configured": True, "masked_key": "***"}
    assert masked["github"] == {"configured": False, "masked_key": ""}


@pytest.mark.asyncio
async def test_settings_endpoints_store_keys(client, key_store, monkeypatch):
    monkeypatch.setattr(config.settings, "GITHUB_TOKEN", "")

    resp = await client.put("/api/settings/keys", json={"github": " ghp_1234567890 "}, headers=auth_header())

    assert resp.status_code == 200
    assert key_store["GITHUB_TOKEN"] == "ghp_1234567890"
    assert resp.json()["github"] == {"configured": True, "masked_key": "ghp...890"}

    status = await client.get("/api/settings", headers=auth_header())
    assert status.json()["github"]["configured"] is True
