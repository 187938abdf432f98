"""
HTTP implementation of PlaylistFetcher for M3U playlists.
"""
from typing import Optional

import httpx
from loguru import logger

from app.core.providers.playlist_fetcher import PlaylistFetcher, PlaylistFetchError
from app.models.live import Channel
from app.services.m3u_parser import parse_m3u


class M3UPlaylistFetcher(PlaylistFetcher):
    """
    Downloads M3U playlists over HTTP with httpx and parses them.

    A single AsyncClient is reused for every request and must be released
    with aclose() on shutdown.
    """

    def __init__(
        self,
        timeout: float,
        default_user_agent: str,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Per-request timeout in seconds.
            default_user_agent: User-Agent used when a source sets none.
            client: Optional preconfigured client (used by tests).
        """
        self.default_user_agent = default_user_agent
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
        )

    async def fetch_and_parse(
        self,
        url: str,
        user_agent: Optional[str] = None,
    ) -> list[Channel]:
        headers = {"User-Agent": user_agent or self.default_user_agent}
        try:
            response = await self.client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PlaylistFetchError(
                f"upstream returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise PlaylistFetchError(str(e) or type(e).__name__) from e

        channels = parse_m3u(response.text)
        logger.debug(f"Parsed {len(channels)} channels from {url}")
        return channels

    async def aclose(self) -> None:
        await self.client.aclose()
