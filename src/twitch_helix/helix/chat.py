"""Chat component: channel, global and emote-set emotes."""

from __future__ import annotations

from twitch_helix.core.base import ApiBase
from twitch_helix.core.request_builder import HttpMethod, QueryParams
from twitch_helix.core.validation import require_items, require_string
from twitch_helix.schemas.chat import (
    GetChannelEmotesResponse,
    GetEmoteSetsResponse,
    GetGlobalEmotesResponse,
)

#: Twitch accepts at most 25 ``emote_set_id`` values per request.
MAX_EMOTE_SETS: int = 25


class Chat(ApiBase):
    """Wraps the ``/chat/emotes`` endpoints."""

    component_name = "chat"

    async def get_channel_emotes(
        self,
        broadcaster_id: str,
        *,
        access_token: str | None = None,
    ) -> GetChannelEmotesResponse | None:
        require_string(broadcaster_id, "broadcaster_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id)
        return await self._call_for_value(
            HttpMethod.GET,
            "/chat/emotes",
            GetChannelEmotesResponse,
            params=params,
            access_token=access_token,
        )

    async def get_global_emotes(
        self,
        *,
        access_token: str | None = None,
    ) -> GetGlobalEmotesResponse | None:
        return await self._call_for_value(
            HttpMethod.GET,
            "/chat/emotes/global",
            GetGlobalEmotesResponse,
            access_token=access_token,
        )

    async def get_emote_sets(
        self,
        emote_set_ids: list[str],
        *,
        access_token: str | None = None,
    ) -> GetEmoteSetsResponse | None:
        """Fetch the emotes of 1 to 25 emote sets."""
        emote_set_ids = require_items(emote_set_ids, "emote_set_ids", maximum=MAX_EMOTE_SETS)

        params = QueryParams().extend("emote_set_id", emote_set_ids)
        return await self._call_for_value(
            HttpMethod.GET,
            "/chat/emotes/set",
            GetEmoteSetsResponse,
            params=params,
            access_token=access_token,
        )
