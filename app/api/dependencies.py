"""
Dependency injection factories for FastAPI.

The cache, collaborators and coordinator are process-wide singletons: the
coordinator's config lock and in-flight registry only work when every
request shares them.
"""
from functools import lru_cache

from fastapi import Depends

from app.core.cache import ChannelCache
from app.core.config import settings
from app.core.db import AsyncSessionLocal
from app.core.providers.config_store import ConfigStore
from app.core.providers.m3u_fetcher import M3UPlaylistFetcher
from app.core.providers.playlist_fetcher import PlaylistFetcher
from app.core.providers.sql_config_store import SqlConfigStore
from app.services.refresh_coordinator import RefreshCoordinator


# =============================================================================
# COLLABORATOR FACTORIES
# =============================================================================

@lru_cache
def get_channel_cache() -> ChannelCache:
    """Get the in-memory live channel cache."""
    return ChannelCache(maxsize=settings.LIVE_CACHE_MAXSIZE)


@lru_cache
def get_config_store() -> ConfigStore:
    """Get the live source config store backed by the database."""
    return SqlConfigStore(session_factory=AsyncSessionLocal)


@lru_cache
def get_playlist_fetcher() -> PlaylistFetcher:
    """Get the HTTP M3U playlist fetcher."""
    return M3UPlaylistFetcher(
        timeout=settings.LIVE_FETCH_TIMEOUT_SECONDS,
        default_user_agent=settings.LIVE_DEFAULT_USER_AGENT,
    )


# =============================================================================
# SERVICE FACTORIES
# =============================================================================

@lru_cache
def get_refresh_coordinator() -> RefreshCoordinator:
    """
    Get the refresh coordinator.

    Wires together:
    - ConfigStore for source lookup and channel count updates
    - PlaylistFetcher for upstream refreshes
    - ChannelCache for cached listings
    """
    return RefreshCoordinator(
        config_store=get_config_store(),
        playlist_fetcher=get_playlist_fetcher(),
        channel_cache=get_channel_cache(),
        ttl_seconds=settings.LIVE_CACHE_TTL_SECONDS,
        fetch_timeout=settings.LIVE_FETCH_TIMEOUT_SECONDS,
    )


def get_source_store(
    coordinator: RefreshCoordinator = Depends(get_refresh_coordinator),
) -> ConfigStore:
    """Get the config store the coordinator reads from."""
    return coordinator.config_store
