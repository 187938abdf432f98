"""
SQLAlchemy implementation of ConfigStore.
"""
from typing import Sequence

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.providers.config_store import ConfigStore
from app.models.live import LiveSourceConfig
from app.models.sql import LiveSourceModel


class SqlConfigStore(ConfigStore):
    """
    ConfigStore backed by the `live_sources` table.

    Opens a short-lived session per call so one instance can be shared by
    every request in the process.

    Example:
        store = SqlConfigStore(session_factory=AsyncSessionLocal)
        configs = await store.get_live_configs()
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize the store.

        Args:
            session_factory: Factory producing async sessions bound to the database.
        """
        self.session_factory = session_factory

    async def get_live_configs(self) -> list[LiveSourceConfig]:
        async with self.session_factory() as session:
            query = select(LiveSourceModel).order_by(LiveSourceModel.position)
            result = await session.execute(query)
            return [self._to_config(row) for row in result.scalars().all()]

    async def set_live_configs(self, configs: Sequence[LiveSourceConfig]) -> None:
        """
        Replace all rows with the given sequence in a single transaction.

        Duplicate keys keep their first occurrence.
        """
        rows: list[LiveSourceModel] = []
        seen: set[str] = set()
        for config in configs:
            if config.key in seen:
                logger.warning(f"Dropping duplicate live source key '{config.key}'")
                continue
            seen.add(config.key)
            rows.append(self._to_model(config, position=len(rows)))

        async with self.session_factory() as session:
            async with session.begin():
                await session.execute(delete(LiveSourceModel))
                session.add_all(rows)

        logger.debug(f"Stored {len(rows)} live source configs")

    @staticmethod
    def _to_config(row: LiveSourceModel) -> LiveSourceConfig:
        return LiveSourceConfig(
            key=row.key,
            name=row.name,
            url=row.url,
            user_agent=row.user_agent,
            disabled=bool(row.disabled),
            channel_number=row.channel_number or 0,
        )

    @staticmethod
    def _to_model(config: LiveSourceConfig, position: int) -> LiveSourceModel:
        return LiveSourceModel(
            key=config.key,
            position=position,
            name=config.name,
            url=config.url,
            user_agent=config.user_agent,
            disabled=config.disabled,
            channel_number=config.channel_number,
        )
