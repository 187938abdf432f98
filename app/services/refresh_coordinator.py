"""
Read-through refresh logic for live channel listings.
"""
import asyncio
from typing import Optional

from loguru import logger

from app.core.cache import ChannelCache
from app.core.clock import Clock, system_clock
from app.core.constants import ErrorMessages, LiveCacheConfig
from app.core.exceptions import (
    FetchOrParseError,
    InvalidRequestError,
    SourceDisabledError,
    SourceNotFoundError,
)
from app.core.providers.config_store import ConfigStore
from app.core.providers.playlist_fetcher import PlaylistFetcher
from app.models.live import (
    CachedChannels,
    Channel,
    LiveChannelsResult,
    LiveSourceConfig,
)


class RefreshCoordinator:
    """
    Serves live channel listings from the cache and refreshes them on demand.

    This service handles:
    1. Resolving the requested source and rejecting unknown or disabled ones.
    2. Returning a fresh cached listing without touching the network.
    3. Fetching the playlist on a miss or a stale entry, then writing the
       cache and the source's channel count.

    Concurrent refreshes of one source share a single upstream fetch.
    Channel count updates go through one store-wide lock because the config
    store only supports replace-all writes.

    A single instance must be shared by all requests for the lock and the
    in-flight registry to have any effect.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        playlist_fetcher: PlaylistFetcher,
        channel_cache: ChannelCache,
        ttl_seconds: int,
        fetch_timeout: Optional[float] = None,
        clock: Clock = system_clock,
    ):
        """
        Initialize the RefreshCoordinator.

        Args:
            config_store: Store holding the live source configs.
            playlist_fetcher: Fetcher used on cache miss or staleness.
            channel_cache: Cache of fetched channel lists.
            ttl_seconds: Lifetime of a cache entry from the moment it is written.
            fetch_timeout: Upper bound in seconds for one fetch. None disables it.
            clock: Source of the current time in epoch milliseconds.
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self.config_store = config_store
        self.playlist_fetcher = playlist_fetcher
        self.channel_cache = channel_cache
        self.ttl_ms = ttl_seconds * LiveCacheConfig.MS_PER_SECOND
        self.fetch_timeout = fetch_timeout
        self.clock = clock

        self._config_lock = asyncio.Lock()
        self._in_flight: dict[str, asyncio.Task[LiveChannelsResult]] = {}

    async def get_channels(
        self,
        source_key: Optional[str],
        now: Optional[int] = None,
    ) -> LiveChannelsResult:
        """
        Return the channel listing for a live source.

        Args:
            source_key: Key of the configured source.
            now: Current time in epoch milliseconds. Read from the clock if omitted.

        Returns:
            LiveChannelsResult with cached=True for a fresh cache hit and
            cached=False after a successful refresh.

        Raises:
            InvalidRequestError: If source_key is missing or empty.
            SourceNotFoundError: If no source has this key.
            SourceDisabledError: If the source is disabled, whatever the cache holds.
            FetchOrParseError: If the refresh fails. A failed fetch leaves cache
                and configs untouched. A failed channel count write keeps the
                new cache entry.
        """
        if not source_key:
            raise InvalidRequestError()

        if now is None:
            now = self.clock()

        configs = await self.config_store.get_live_configs()
        source = next((config for config in configs if config.key == source_key), None)

        if source is None:
            raise SourceNotFoundError(source_key)

        if source.disabled:
            raise SourceDisabledError(source_key)

        cached = self.channel_cache.get(source_key)
        if cached is not None and cached.is_fresh(now):
            logger.debug(f"Cache hit for live source '{source_key}'")
            return LiveChannelsResult(
                source=source,
                channels=cached.channels,
                cached=True,
                update_time=cached.update_time,
            )

        logger.debug(
            f"Cache {'stale' if cached is not None else 'miss'} for live source '{source_key}'"
        )
        return await self._refresh_once(source, now)

    async def _refresh_once(
        self, source: LiveSourceConfig, now: int
    ) -> LiveChannelsResult:
        """
        Run a refresh, or wait for the one already running for this source.

        The refresh runs in its own task, so a cancelled caller does not
        cancel it for the other callers waiting on the same source.
        """
        task = self._in_flight.get(source.key)
        if task is None:
            task = asyncio.create_task(self._refresh(source, now))
            self._in_flight[source.key] = task
            task.add_done_callback(
                lambda done, key=source.key: self._forget_refresh(key, done)
            )
        else:
            logger.debug(f"Joining in-flight refresh for live source '{source.key}'")

        return await asyncio.shield(task)

    def _forget_refresh(
        self, source_key: str, task: "asyncio.Task[LiveChannelsResult]"
    ) -> None:
        if self._in_flight.get(source_key) is task:
            del self._in_flight[source_key]
        # Mark as retrieved so a refresh whose callers all left logs nothing
        if not task.cancelled():
            task.exception()

    async def _refresh(self, source: LiveSourceConfig, now: int) -> LiveChannelsResult:
        channels = await self._fetch(source)

        entry = CachedChannels(
            channels=channels,
            update_time=now,
            expire_time=now + self.ttl_ms,
        )
        self.channel_cache.set(source.key, entry)

        await self._store_channel_number(source.key, len(channels))

        logger.info(f"Refreshed live source '{source.key}': {len(channels)} channels")
        return LiveChannelsResult(
            source=source,
            channels=entry.channels,
            cached=False,
            update_time=entry.update_time,
        )

    async def _fetch(self, source: LiveSourceConfig) -> list[Channel]:
        try:
            return await asyncio.wait_for(
                self.playlist_fetcher.fetch_and_parse(source.url, source.user_agent),
                timeout=self.fetch_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                f"Fetching live source '{source.key}' timed out after {self.fetch_timeout}s"
            )
            raise FetchOrParseError(f"timed out after {self.fetch_timeout}s") from e
        except Exception as e:
            logger.warning(f"Fetching live source '{source.key}' failed: {e}")
            raise FetchOrParseError(str(e) or ErrorMessages.UNKNOWN_FETCH_ERROR) from e

    async def _store_channel_number(self, source_key: str, channel_number: int) -> None:
        """
        Persist the new channel count for one source.

        The collection is re-read under the store lock so concurrent updates
        of other sources are not overwritten. A store failure leaves the
        already written cache entry in place and is raised as FetchOrParseError.
        """
        async with self._config_lock:
            try:
                configs = await self.config_store.get_live_configs()
                if not any(config.key == source_key for config in configs):
                    logger.warning(
                        f"Live source '{source_key}' was removed during refresh; "
                        "channel count not stored"
                    )
                    return

                updated = [
                    config.model_copy(update={"channel_number": channel_number})
                    if config.key == source_key
                    else config
                    for config in configs
                ]
                await self.config_store.set_live_configs(updated)
            except Exception as e:
                logger.opt(exception=e).warning(
                    f"Failed to store channel count for live source '{source_key}': {e}"
                )
                raise FetchOrParseError(str(e) or ErrorMessages.UNKNOWN_FETCH_ERROR) from e
