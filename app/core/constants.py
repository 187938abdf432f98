"""
Application-wide constants.

Grouped into static classes for namespace management and discoverability.
"""


class LiveCacheConfig:
    """Configuration for the live channel cache."""
    KEY_PREFIX = "live_channels:"
    MS_PER_SECOND = 1000


class ErrorMessages:
    """Client-facing error messages for the live channel endpoints."""
    MISSING_SOURCE = "missing source parameter"
    SOURCE_NOT_FOUND = "source not found"
    SOURCE_DISABLED = "source disabled"
    FETCH_FAILED_PREFIX = "parse/fetch failed: "
    INTERNAL_FAILURE = "internal failure"
    UNKNOWN_FETCH_ERROR = "unknown error"


class M3UConfig:
    """Markers and defaults used when reading M3U playlists."""
    HEADER = "#EXTM3U"
    ENTRY = "#EXTINF"
    DEFAULT_GROUP = "Default"
