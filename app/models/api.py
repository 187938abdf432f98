"""
Pydantic models for API response schemas.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.live import Channel, LiveChannelsResult, LiveSourceConfig


class SourceRef(BaseModel):
    """Short reference to the source a channel list belongs to."""

    key: str
    name: str

    model_config = ConfigDict(frozen=True)


class LiveChannelsResponse(BaseModel):
    """Response model for a live channel listing."""

    success: bool = True
    source: SourceRef
    channels: List[Channel]
    cached: bool
    update_time: int

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def from_result(cls, result: LiveChannelsResult) -> "LiveChannelsResponse":
        return cls(
            source=SourceRef(key=result.source.key, name=result.source.name),
            channels=result.channels,
            cached=result.cached,
            update_time=result.update_time,
        )


class LiveSourceResponse(BaseModel):
    """Response model for live source list items."""

    key: str
    name: str
    url: str
    user_agent: Optional[str] = Field(default=None, alias="ua")
    disabled: bool
    channel_number: int

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @classmethod
    def from_config(cls, config: LiveSourceConfig) -> "LiveSourceResponse":
        return cls.model_validate(config.model_dump())
