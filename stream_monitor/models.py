"""Monitor record models.

A record holds one creator's profile and last observed live status. The status
is a tagged union on ``is_live``: live carries the stream id, thumbnail and the
time the live alert went out; offline only remembers when the last alert went out.
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field


class CreatorProfile(BaseModel):
    """Display data fetched once per creator."""

    creator_id: str
    display_name: str = ""
    profile_image_url: str = ""
    offline_image_url: str = ""


class Offline(BaseModel):
    is_live: Literal[False] = False
    # Stamp of the last alerted session, kept so the cooldown spans short gaps
    last_notified_at: Optional[datetime] = None


class Live(BaseModel):
    is_live: Literal[True] = True
    stream_id: str
    thumbnail_url: str = ""
    # Set only after the alert for this stream was delivered
    notified_at: Optional[datetime] = None


LiveStatus = Union[Live, Offline]


class MonitorRecord(BaseModel):
    """Persisted state of one creator monitor."""

    creator_id: str
    profile: CreatorProfile
    status: LiveStatus = Field(default_factory=Offline)

    @classmethod
    def new(cls, creator_id: str) -> "MonitorRecord":
        """Empty record for a creator seen for the first time."""
        return cls(creator_id=creator_id, profile=CreatorProfile(creator_id=creator_id))

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "MonitorRecord":
        return cls.model_validate(payload)
