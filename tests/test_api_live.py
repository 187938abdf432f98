"""
Integration tests for the live channel API endpoints.
"""
from fastapi.testclient import TestClient

from app.main import app
from app.api.dependencies import get_refresh_coordinator
from app.core.providers.playlist_fetcher import PlaylistFetchError
from app.models.live import CachedChannels


client = TestClient(app)


def test_missing_source_parameter(override_dependencies):
    response = client.get("/api/v1/live/channels")

    assert response.status_code == 400
    assert response.json() == {"error": "missing source parameter"}


def test_empty_source_parameter(override_dependencies):
    response = client.get("/api/v1/live/channels", params={"source": ""})

    assert response.status_code == 400
    assert response.json() == {"error": "missing source parameter"}


def test_unknown_source(override_dependencies, mock_fetcher):
    response = client.get("/api/v1/live/channels", params={"source": "nope"})

    assert response.status_code == 404
    assert response.json() == {"error": "source not found"}
    mock_fetcher.fetch_and_parse.assert_not_called()


def test_disabled_source(override_dependencies, mock_fetcher):
    response = client.get("/api/v1/live/channels", params={"source": "off"})

    assert response.status_code == 400
    assert response.json() == {"error": "source disabled"}
    mock_fetcher.fetch_and_parse.assert_not_called()


def test_refresh_then_cache_hit(override_dependencies, mock_fetcher, channel_cache, config_store, clock):
    """First request fetches, the next one inside the TTL is served from the cache."""
    response = client.get("/api/v1/live/channels", params={"source": "k1"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["source"] == {"key": "k1", "name": "N"}
    assert data["cached"] is False
    assert data["updateTime"] == 1000
    assert [channel["name"] for channel in data["channels"]] == [
        "Channel 1",
        "Channel 2",
        "Channel 3",
    ]
    assert data["channels"][0] == {
        "id": "1",
        "tvgId": "",
        "name": "Channel 1",
        "logo": "",
        "group": "News",
        "url": "http://x/stream/1",
    }
    assert channel_cache.get("k1").expire_time == 1000 + 1_800_000
    assert config_store.configs[0].channel_number == 3
    assert "X-Request-ID" in response.headers

    clock.now = 1500
    response = client.get("/api/v1/live/channels", params={"source": "k1"})

    assert response.status_code == 200
    data = response.json()
    assert data["cached"] is True
    assert data["updateTime"] == 1000
    assert mock_fetcher.fetch_and_parse.await_count == 1


def test_fresh_cache_entry_is_served_verbatim(override_dependencies, mock_fetcher, channel_cache, channels, clock):
    channel_cache.set("k1", CachedChannels(channels=channels[:2], update_time=700, expire_time=2000))
    clock.now = 1500

    response = client.get("/api/v1/live/channels", params={"source": "k1"})

    data = response.json()
    assert data["cached"] is True
    assert data["updateTime"] == 700
    assert len(data["channels"]) == 2
    mock_fetcher.fetch_and_parse.assert_not_called()


def test_fetch_failure(override_dependencies, mock_fetcher, channel_cache):
    mock_fetcher.fetch_and_parse.side_effect = PlaylistFetchError("upstream returned HTTP 503")

    response = client.get("/api/v1/live/channels", params={"source": "k1"})

    assert response.status_code == 500
    assert response.json() == {"error": "parse/fetch failed: upstream returned HTTP 503"}
    assert channel_cache.get("k1") is None


def test_config_write_failure(override_dependencies, config_store, channel_cache, channels):
    config_store.fail_writes = True

    response = client.get("/api/v1/live/channels", params={"source": "k1"})

    assert response.status_code == 500
    assert response.json() == {"error": "parse/fetch failed: config store unavailable"}
    assert channel_cache.get("k1").channels == channels


def test_unclassified_error_is_internal_failure():
    class BrokenCoordinator:
        async def get_channels(self, source_key):
            raise RuntimeError("boom")

    app.dependency_overrides[get_refresh_coordinator] = lambda: BrokenCoordinator()
    try:
        safe_client = TestClient(app, raise_server_exceptions=False)
        response = safe_client.get("/api/v1/live/channels", params={"source": "k1"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "internal failure"}


def test_list_live_sources(override_dependencies):
    response = client.get("/api/v1/live/sources")

    assert response.status_code == 200
    assert response.json() == [
        {"key": "k1", "name": "N", "url": "http://x", "ua": None, "disabled": False, "channelNumber": 0},
        {"key": "off", "name": "Off", "url": "http://off", "ua": None, "disabled": True, "channelNumber": 0},
    ]


def test_health_check():
    """Test GET /health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "project" in data
