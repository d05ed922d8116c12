"""Helix response models.

GET /helix/streams: https://dev.twitch.tv/docs/api/reference/#get-streams
GET /helix/users:   https://dev.twitch.tv/docs/api/reference/#get-users
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class LiveStreamInfo(BaseModel):
    """One entry of the streams list."""

    id: str
    user_id: str
    user_login: str
    user_name: str
    game_id: str = ""
    game_name: str = ""
    type: str = Field(..., description='"live" for live streams, "" on error')
    title: str = ""
    viewer_count: int = 0
    started_at: str = ""
    language: str = ""
    thumbnail_url: str
    tags: List[str] = Field(default_factory=list)
    is_mature: bool = False

    @property
    def is_live(self) -> bool:
        return self.type == "live"


class Pagination(BaseModel):
    cursor: Optional[str] = None


class StreamsResponse(BaseModel):
    data: List[LiveStreamInfo]
    pagination: Pagination = Field(default_factory=Pagination)


class UserInfo(BaseModel):
    """One entry of the users list."""

    id: str
    login: str
    display_name: str
    type: str = ""
    broadcaster_type: str = ""
    description: str = ""
    profile_image_url: str = ""
    offline_image_url: str = ""
    created_at: str = ""


class UsersResponse(BaseModel):
    data: List[UserInfo]
