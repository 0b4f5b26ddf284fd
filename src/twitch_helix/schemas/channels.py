"""Schemas for ``/channels`` and the related ads/commercial endpoints."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import Field

from twitch_helix.schemas.common import (
    DataResponse,
    HelixModel,
    HelixRequestModel,
    PaginatedResponse,
    TotalPaginatedResponse,
)


class ChannelInformation(HelixModel):
    broadcaster_id: Optional[str] = None
    broadcaster_login: Optional[str] = None
    broadcaster_name: Optional[str] = None
    broadcaster_language: Optional[str] = None
    game_id: Optional[str] = None
    game_name: Optional[str] = None
    title: Optional[str] = None
    delay: Optional[int] = None
    tags: list[str] = Field(default_factory=list)
    content_classification_labels: list[str] = Field(default_factory=list)
    is_branded_content: Optional[bool] = None


class GetChannelInformationResponse(DataResponse[ChannelInformation]):
    pass


class ContentClassificationLabel(HelixRequestModel):
    id: str
    is_enabled: bool


class ModifyChannelInformationRequest(HelixRequestModel):
    """Fields to update; anything left as ``None`` is not sent."""

    game_id: Optional[str] = None
    broadcaster_language: Optional[str] = None
    title: Optional[str] = None
    delay: Optional[int] = None
    tags: Optional[list[str]] = None
    content_classification_labels: Optional[list[ContentClassificationLabel]] = None
    is_branded_content: Optional[bool] = None


class ChannelEditor(HelixModel):
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    created_at: Optional[str] = None


class GetChannelEditorsResponse(DataResponse[ChannelEditor]):
    pass


class ChannelVIP(HelixModel):
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    user_login: Optional[str] = None


class GetVIPsResponse(PaginatedResponse[ChannelVIP]):
    pass


class FollowedChannel(HelixModel):
    broadcaster_id: Optional[str] = None
    broadcaster_login: Optional[str] = None
    broadcaster_name: Optional[str] = None
    followed_at: Optional[str] = None


class GetFollowedChannelsResponse(TotalPaginatedResponse[FollowedChannel]):
    pass


class ChannelFollower(HelixModel):
    user_id: Optional[str] = None
    user_login: Optional[str] = None
    user_name: Optional[str] = None
    followed_at: Optional[str] = None


class GetChannelFollowersResponse(TotalPaginatedResponse[ChannelFollower]):
    pass


# ---------------------------------------------------------------------------
# Ads
# ---------------------------------------------------------------------------

# Twitch reports some ad timestamps as Unix seconds and others as RFC3339
# strings, depending on the endpoint revision.
_Timestamp = Union[int, str]


class AdSchedule(HelixModel):
    snooze_count: Optional[int] = None
    snooze_refresh_at: Optional[_Timestamp] = None
    next_ad_at: Optional[_Timestamp] = None
    duration: Optional[int] = None
    last_ad_at: Optional[_Timestamp] = None
    preroll_free_time: Optional[int] = None


class GetAdScheduleResponse(DataResponse[AdSchedule]):
    pass


class SnoozeNextAd(HelixModel):
    snooze_count: Optional[int] = None
    snooze_refresh_at: Optional[_Timestamp] = None
    next_ad_at: Optional[_Timestamp] = None


class SnoozeNextAdResponse(DataResponse[SnoozeNextAd]):
    pass


class StartCommercialRequest(HelixRequestModel):
    broadcaster_id: str
    length: int


class Commercial(HelixModel):
    length: Optional[int] = None
    message: Optional[str] = None
    retry_after: Optional[int] = None


class StartCommercialResponse(DataResponse[Commercial]):
    pass
