from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# --- Core Data Models ---

class Channel(BaseModel):
    id: str
    tvg_id: str = ""
    name: str
    logo: str = ""
    group: str = ""
    url: str

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LiveSourceConfig(BaseModel):
    key: str
    name: str
    url: str
    user_agent: Optional[str] = Field(default=None, alias="ua")
    disabled: bool = False
    channel_number: int = 0

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CachedChannels(BaseModel):
    """A cached channel list. Times are epoch milliseconds."""

    channels: List[Channel] = Field(default_factory=list)
    update_time: int
    expire_time: int

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def check_expiry_after_update(self) -> "CachedChannels":
        if self.expire_time <= self.update_time:
            raise ValueError("expire_time must be later than update_time")
        return self

    def is_fresh(self, now: int) -> bool:
        return self.expire_time > now


class LiveChannelsResult(BaseModel):
    source: LiveSourceConfig
    channels: List[Channel]
    cached: bool
    update_time: int

    model_config = ConfigDict(frozen=True)
