"""
Collaborator abstractions for configuration storage and playlist fetching.
"""
from app.core.providers.config_store import ConfigStore
from app.core.providers.playlist_fetcher import (
    PlaylistFetcher,
    PlaylistFetchError,
    PlaylistParseError,
)

__all__ = [
    # Config
    "ConfigStore",
    # Playlists
    "PlaylistFetcher",
    "PlaylistFetchError",
    "PlaylistParseError",
]
