from .live import Channel, LiveSourceConfig, CachedChannels, LiveChannelsResult
from .api import SourceRef, LiveChannelsResponse, LiveSourceResponse
