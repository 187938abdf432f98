import re
from typing import List, Optional

from app.core.constants import M3UConfig
from app.core.providers.playlist_fetcher import PlaylistParseError
from app.models.live import Channel

ATTRIBUTE_PATTERN = re.compile(r'([A-Za-z0-9_-]+)="([^"]*)"')


def _split_display_name(extinf: str) -> tuple[str, str]:
    """
    Splits an #EXTINF line into its attribute part and the display name.

    The display name follows the last comma that is not inside a quoted
    attribute value.
    """
    in_quotes = False
    split_at = -1
    for index, char in enumerate(extinf):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            split_at = index
    if split_at == -1:
        return extinf, ""
    return extinf[:split_at], extinf[split_at + 1:].strip()


def parse_m3u(content: str) -> List[Channel]:
    """
    Parses an M3U playlist document into channels.

    Each #EXTINF line is paired with the next non-comment line, which holds
    the stream URL. Entries without a URL are skipped.

    Args:
        content: Raw text of the playlist.

    Returns:
        Channels in document order.

    Raises:
        PlaylistParseError: If the text has neither an #EXTM3U header nor
            any #EXTINF entry.
    """
    lines = [line.strip() for line in content.lstrip("\ufeff").splitlines()]
    lines = [line for line in lines if line]

    has_header = bool(lines) and lines[0].upper().startswith(M3UConfig.HEADER)
    has_entries = any(line.upper().startswith(M3UConfig.ENTRY) for line in lines)
    if not has_header and not has_entries:
        raise PlaylistParseError("content is not an M3U playlist")

    channels: List[Channel] = []
    pending: Optional[str] = None

    for line in lines:
        if line.upper().startswith(M3UConfig.ENTRY):
            pending = line
            continue
        if line.startswith("#"):
            continue
        if pending is None:
            continue

        attribute_part, display_name = _split_display_name(pending)
        attributes = dict(ATTRIBUTE_PATTERN.findall(attribute_part))
        name = display_name or attributes.get("tvg-name") or line

        channels.append(
            Channel(
                id=str(len(channels)),
                tvg_id=attributes.get("tvg-id", ""),
                name=name,
                logo=attributes.get("tvg-logo", ""),
                group=attributes.get("group-title") or M3UConfig.DEFAULT_GROUP,
                url=line,
            )
        )
        pending = None

    return channels
