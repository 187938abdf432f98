from sqlalchemy import Boolean, Column, Integer, String

from app.core.db import Base


class LiveSourceModel(Base):
    """
    SQLAlchemy ORM model representing a configured live playlist source.

    Attributes:
        key (str): Stable unique identifier of the source (Primary Key).
        position (int): Position of the source in the configured sequence.
        name (str): Display name.
        url (str): URL of the remote M3U playlist.
        user_agent (str): Optional User-Agent override used when fetching.
        disabled (bool): Disabled sources are never served.
        channel_number (int): Channel count seen on the last successful refresh.
    """
    __tablename__ = "live_sources"

    key = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, default=0, index=True)
    name = Column(String, nullable=False)
    url = Column(String, nullable=False)
    user_agent = Column(String, nullable=True)
    disabled = Column(Boolean, nullable=False, default=False)
    channel_number = Column(Integer, nullable=False, default=0)
