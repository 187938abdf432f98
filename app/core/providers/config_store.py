"""
Abstract base class for live source configuration stores.

The store holds the ordered collection of LiveSourceConfig records.
Writes replace the whole collection, so callers that read, modify and
write back must serialize those steps themselves.
"""
from abc import ABC, abstractmethod
from typing import Sequence

from app.models.live import LiveSourceConfig


class ConfigStore(ABC):
    """
    Abstract interface for live source configuration persistence.

    Example:
        store = SqlConfigStore(session_factory=AsyncSessionLocal)
        configs = await store.get_live_configs()
        await store.set_live_configs([*configs, new_config])
    """

    @abstractmethod
    async def get_live_configs(self) -> list[LiveSourceConfig]:
        """
        Load every configured live source.

        Returns:
            Sources in their configured order.
        """
        ...

    @abstractmethod
    async def set_live_configs(self, configs: Sequence[LiveSourceConfig]) -> None:
        """
        Replace the stored collection with the given sequence.

        Args:
            configs: The complete new collection, in order.
        """
        ...
