"""Channels component: channel information, editors, VIPs, followers and ads."""

from __future__ import annotations

import logging

from twitch_helix.core.base import ApiBase
from twitch_helix.core.exceptions import MissingParameterError
from twitch_helix.core.request_builder import HttpMethod, QueryParams
from twitch_helix.core.validation import (
    optional_items,
    require_items,
    require_max_length,
    require_page_size,
    require_range,
    require_string,
)
from twitch_helix.schemas.channels import (
    GetAdScheduleResponse,
    GetChannelEditorsResponse,
    GetChannelFollowersResponse,
    GetChannelInformationResponse,
    GetFollowedChannelsResponse,
    GetVIPsResponse,
    ModifyChannelInformationRequest,
    SnoozeNextAdResponse,
    StartCommercialRequest,
    StartCommercialResponse,
)

logger = logging.getLogger(__name__)

MAX_CHANNEL_TAGS: int = 10
MAX_TAG_LENGTH: int = 25
#: Partner stream delay cap, in seconds.
MAX_STREAM_DELAY_SECONDS: int = 900
MAX_COMMERCIAL_LENGTH_SECONDS: int = 180


class Channels(ApiBase):
    """Wraps the ``/channels`` endpoints."""

    component_name = "channels"

    async def get_channel_information(
        self,
        broadcaster_ids: list[str],
        *,
        access_token: str | None = None,
    ) -> GetChannelInformationResponse | None:
        """Fetch information about 1 to 100 channels."""
        broadcaster_ids = require_items(broadcaster_ids, "broadcaster_ids", minimum=1, maximum=100)

        params = QueryParams().extend("broadcaster_id", broadcaster_ids)
        return await self._call_for_value(
            HttpMethod.GET,
            "/channels",
            GetChannelInformationResponse,
            params=params,
            access_token=access_token,
        )

    async def modify_channel_information(
        self,
        broadcaster_id: str,
        request: ModifyChannelInformationRequest,
        *,
        access_token: str | None = None,
    ) -> bool:
        """Update a channel's title, category, language, delay, tags or labels.

        At least one field of *request* must be set.  ``title`` cannot be
        blank, ``delay`` is limited to 0-900 seconds, and at most 10 tags of
        up to 25 characters each are accepted.
        """
        require_string(broadcaster_id, "broadcaster_id")
        if not request.model_dump(exclude_none=True):
            raise MissingParameterError("request", "must set at least one field")
        if request.title is not None:
            require_string(request.title, "title")
        if request.delay is not None:
            require_range(request.delay, "delay", 0, MAX_STREAM_DELAY_SECONDS)
        if request.tags is not None:
            require_range(len(request.tags), "tags", 0, MAX_CHANNEL_TAGS)
            for index, tag in enumerate(request.tags):
                require_string(tag, f"tags[{index}]")
                require_max_length(tag, f"tags[{index}]", MAX_TAG_LENGTH)

        params = QueryParams().add("broadcaster_id", broadcaster_id)
        return await self._call_for_success(
            HttpMethod.PATCH,
            "/channels",
            params=params,
            body=request,
            access_token=access_token,
        )

    async def get_channel_editors(
        self,
        broadcaster_id: str,
        *,
        access_token: str | None = None,
    ) -> GetChannelEditorsResponse | None:
        require_string(broadcaster_id, "broadcaster_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id)
        return await self._call_for_value(
            HttpMethod.GET,
            "/channels/editors",
            GetChannelEditorsResponse,
            params=params,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # VIPs
    # ------------------------------------------------------------------

    async def get_vips(
        self,
        broadcaster_id: str,
        user_ids: list[str] | None = None,
        first: int | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetVIPsResponse | None:
        """List the channel's VIPs, optionally filtered to *user_ids*."""
        require_string(broadcaster_id, "broadcaster_id")
        user_ids = optional_items(user_ids, "user_ids")
        require_page_size(first)

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .extend("user_id", user_ids)
            .add_optional("after", after)
            .add_optional("first", first)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/channels/vips",
            GetVIPsResponse,
            params=params,
            access_token=access_token,
        )

    async def add_channel_vip(
        self,
        broadcaster_id: str,
        user_id: str,
        *,
        access_token: str | None = None,
    ) -> bool:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(user_id, "user_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("user_id", user_id)
        return await self._call_for_success(
            HttpMethod.POST,
            "/channels/vips",
            params=params,
            access_token=access_token,
        )

    async def remove_channel_vip(
        self,
        broadcaster_id: str,
        user_id: str,
        *,
        access_token: str | None = None,
    ) -> bool:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(user_id, "user_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("user_id", user_id)
        return await self._call_for_success(
            HttpMethod.DELETE,
            "/channels/vips",
            params=params,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Followers
    # ------------------------------------------------------------------

    async def get_followed_channels(
        self,
        user_id: str,
        broadcaster_id: str | None = None,
        first: int | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetFollowedChannelsResponse | None:
        """List channels *user_id* follows, or check one when *broadcaster_id* is set."""
        require_string(user_id, "user_id")
        require_page_size(first)

        params = (
            QueryParams()
            .add("user_id", user_id)
            .add_optional("broadcaster_id", broadcaster_id)
            .add_optional("after", after)
            .add_optional("first", first)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/channels/followed",
            GetFollowedChannelsResponse,
            params=params,
            access_token=access_token,
        )

    async def get_channel_followers(
        self,
        broadcaster_id: str,
        user_id: str | None = None,
        first: int | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetChannelFollowersResponse | None:
        require_string(broadcaster_id, "broadcaster_id")
        require_page_size(first)

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .add_optional("user_id", user_id)
            .add_optional("after", after)
            .add_optional("first", first)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/channels/followers",
            GetChannelFollowersResponse,
            params=params,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Ads
    # ------------------------------------------------------------------

    async def get_ad_schedule(
        self,
        broadcaster_id: str,
        *,
        access_token: str | None = None,
    ) -> GetAdScheduleResponse | None:
        require_string(broadcaster_id, "broadcaster_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id)
        return await self._call_for_value(
            HttpMethod.GET,
            "/channels/ads",
            GetAdScheduleResponse,
            params=params,
            access_token=access_token,
        )

    async def snooze_next_ad(
        self,
        broadcaster_id: str,
        *,
        access_token: str | None = None,
    ) -> SnoozeNextAdResponse | None:
        """Push back the next scheduled mid-roll by five minutes."""
        require_string(broadcaster_id, "broadcaster_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id)
        return await self._call_for_value(
            HttpMethod.POST,
            "/channels/ads/schedule/snooze",
            SnoozeNextAdResponse,
            params=params,
            access_token=access_token,
        )

    async def start_commercial(
        self,
        request: StartCommercialRequest,
        *,
        access_token: str | None = None,
    ) -> StartCommercialResponse | None:
        """Start a commercial of 1 to 180 seconds on the broadcaster's channel."""
        require_string(request.broadcaster_id, "broadcaster_id")
        require_range(request.length, "length", 1, MAX_COMMERCIAL_LENGTH_SECONDS)

        return await self._call_for_value(
            HttpMethod.POST,
            "/channels/commercial",
            StartCommercialResponse,
            body=request,
            access_token=access_token,
        )
