"""
Abstract base class for playlist fetchers.

A fetcher downloads a remote playlist document and turns it into an
ordered list of channels. Concrete implementations decide the transport
and the playlist format.
"""
from abc import ABC, abstractmethod
from typing import Optional

from app.models.live import Channel


class PlaylistFetchError(Exception):
    """The playlist could not be downloaded or parsed."""


class PlaylistParseError(PlaylistFetchError):
    """The downloaded document is not a readable playlist."""


class PlaylistFetcher(ABC):
    """
    Abstract interface for playlist fetchers.

    Example:
        fetcher = M3UPlaylistFetcher(timeout=30.0, default_user_agent="...")
        channels = await fetcher.fetch_and_parse("http://host/list.m3u")
    """

    @abstractmethod
    async def fetch_and_parse(
        self,
        url: str,
        user_agent: Optional[str] = None,
    ) -> list[Channel]:
        """
        Download and parse a playlist.

        Args:
            url: Location of the playlist document.
            user_agent: Optional User-Agent override for the request.

        Returns:
            Channels in playlist order.

        Raises:
            PlaylistFetchError: If the download or the parse fails.
        """
        ...

    async def aclose(self) -> None:
        """Release any held resources. No-op by default."""
        return None
