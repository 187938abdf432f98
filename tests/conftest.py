"""
Shared pytest fixtures and configuration.
"""
from typing import Optional, Sequence
from unittest.mock import AsyncMock

import pytest

from app.main import app
from app.api.dependencies import get_refresh_coordinator
from app.core.cache import ChannelCache
from app.core.providers.config_store import ConfigStore
from app.core.providers.playlist_fetcher import PlaylistFetcher
from app.models.live import Channel, LiveSourceConfig
from app.services.refresh_coordinator import RefreshCoordinator


TTL_SECONDS = 30 * 60


class InMemoryConfigStore(ConfigStore):
    """ConfigStore kept in a list, recording every write."""

    def __init__(self, configs: Optional[Sequence[LiveSourceConfig]] = None):
        self.configs: list[LiveSourceConfig] = list(configs or [])
        self.writes: list[list[LiveSourceConfig]] = []
        self.fail_writes = False

    async def get_live_configs(self) -> list[LiveSourceConfig]:
        return list(self.configs)

    async def set_live_configs(self, configs: Sequence[LiveSourceConfig]) -> None:
        if self.fail_writes:
            raise RuntimeError("config store unavailable")
        self.configs = list(configs)
        self.writes.append(list(configs))


@pytest.fixture
def live_source():
    """An enabled live source."""
    return LiveSourceConfig(key="k1", name="N", url="http://x", disabled=False, channel_number=0)


@pytest.fixture
def disabled_source():
    """A disabled live source."""
    return LiveSourceConfig(key="off", name="Off", url="http://off", disabled=True)


@pytest.fixture
def channels():
    """Three parsed channels."""
    return [
        Channel(id=str(i), name=f"Channel {i}", url=f"http://x/stream/{i}", group="News")
        for i in range(1, 4)
    ]


@pytest.fixture
def config_store(live_source, disabled_source):
    """In-memory config store holding the enabled and disabled sources."""
    return InMemoryConfigStore([live_source, disabled_source])


@pytest.fixture
def mock_fetcher(channels):
    """PlaylistFetcher mock returning the three channels."""
    fetcher = AsyncMock(spec=PlaylistFetcher)
    fetcher.fetch_and_parse.return_value = channels
    return fetcher


@pytest.fixture
def channel_cache():
    """Empty channel cache."""
    return ChannelCache(maxsize=16)


@pytest.fixture
def clock():
    """Fixed clock at t=1000ms. Tests may move it through clock.now."""
    class FixedClock:
        now = 1000

        def __call__(self) -> int:
            return self.now

    return FixedClock()


@pytest.fixture
def coordinator(config_store, mock_fetcher, channel_cache, clock):
    """RefreshCoordinator wired to in-memory collaborators."""
    return RefreshCoordinator(
        config_store=config_store,
        playlist_fetcher=mock_fetcher,
        channel_cache=channel_cache,
        ttl_seconds=TTL_SECONDS,
        fetch_timeout=5.0,
        clock=clock,
    )


@pytest.fixture
def override_dependencies(coordinator):
    """Override FastAPI dependencies for testing."""
    app.dependency_overrides[get_refresh_coordinator] = lambda: coordinator

    yield

    app.dependency_overrides.clear()


@pytest.fixture
def make_config_store():
    """Factory building an InMemoryConfigStore from a list of configs."""
    return InMemoryConfigStore
