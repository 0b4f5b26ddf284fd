"""Moderation component: bans, moderators, AutoMod, blocked terms and more.

Every method validates its arguments before any I/O, then delegates to the
shared call pipeline in :class:`~twitch_helix.core.base.ApiBase`.  Methods
that Twitch answers with ``204 No Content`` return ``True``.

Query parameters follow the library-wide order: required identifiers,
optional filters, pagination cursors, page size.
"""

from __future__ import annotations

import logging

from twitch_helix.core.base import ApiBase
from twitch_helix.core.exceptions import (
    MissingParameterError,
    OutOfRangeError,
    ValidationError,
)
from twitch_helix.core.request_builder import HttpMethod, QueryParams
from twitch_helix.core.validation import (
    MAX_BAN_DURATION_SECONDS,
    MAX_MODERATION_TEXT_LENGTH,
    MAX_PAGE_SIZE,
    optional_items,
    require_length,
    require_max_length,
    require_member,
    require_page_size,
    require_range,
    require_string,
)
from twitch_helix.schemas.moderation import (
    AddBlockedTermRequest,
    AddBlockedTermResponse,
    AutoModCheckMessage,
    AutomodSettingsRequest,
    BanUserBody,
    BanUserRequest,
    BanUserResponse,
    CheckAutoModStatusRequest,
    CheckAutoModStatusResponse,
    GetAutomodSettingsResponse,
    GetBannedUsersResponse,
    GetBlockedTermsResponse,
    GetModeratedChannelsResponse,
    GetModeratorsResponse,
    GetShieldModeStatusResponse,
    GetUnbanRequestsResponse,
    ManageHeldAutoModMessageRequest,
    ResolveUnbanRequestsResponse,
    ShieldModeStatusRequest,
    UpdateAutomodSettingsResponse,
    UpdateShieldModeStatusResponse,
    WarnChatUserBody,
    WarnChatUserRequest,
    WarnChatUserResponse,
)

logger = logging.getLogger(__name__)

HELD_MESSAGE_ACTIONS: frozenset[str] = frozenset({"ALLOW", "DENY"})

UNBAN_REQUEST_STATUSES: frozenset[str] = frozenset(
    {"pending", "approved", "denied", "acknowledged", "canceled"}
)

UNBAN_RESOLUTION_STATUSES: frozenset[str] = frozenset({"approved", "denied"})

#: AutoMod levels run from 0 (off) to 4 (most aggressive).
MAX_AUTOMOD_LEVEL: int = 4

#: Blocked terms must be between 2 and 500 characters.
MIN_BLOCKED_TERM_LENGTH: int = 2


class Moderation(ApiBase):
    """Wraps the ``/moderation`` endpoints."""

    component_name = "moderation"

    # ------------------------------------------------------------------
    # AutoMod
    # ------------------------------------------------------------------

    async def manage_held_automod_message(
        self,
        user_id: str,
        msg_id: str,
        action: str,
        *,
        access_token: str | None = None,
    ) -> bool:
        """Allow or deny a message AutoMod is holding for review.

        Args:
            user_id: Moderator approving or denying the message.
            msg_id: ID of the held message.
            action: ``"ALLOW"`` or ``"DENY"`` (case-sensitive).
        """
        require_string(user_id, "user_id")
        require_string(msg_id, "msg_id")
        require_member(action, "action", HELD_MESSAGE_ACTIONS)

        body = ManageHeldAutoModMessageRequest(user_id=user_id, msg_id=msg_id, action=action)
        return await self._call_for_success(
            HttpMethod.POST,
            "/moderation/automod/message",
            body=body,
            access_token=access_token,
        )

    async def check_automod_status(
        self,
        broadcaster_id: str,
        messages: list[AutoModCheckMessage],
        *,
        access_token: str | None = None,
    ) -> CheckAutoModStatusResponse | None:
        """Check whether AutoMod would flag the given messages."""
        require_string(broadcaster_id, "broadcaster_id")
        if not messages:
            raise MissingParameterError("messages", "must contain at least 1 item(s)")
        if len(messages) > MAX_PAGE_SIZE:
            raise OutOfRangeError(
                "messages", f"must contain at most {MAX_PAGE_SIZE} items (got {len(messages)})"
            )
        for index, message in enumerate(messages):
            require_string(message.msg_id, f"messages[{index}].msg_id")
            require_string(message.msg_text, f"messages[{index}].msg_text")

        params = QueryParams().add("broadcaster_id", broadcaster_id)
        return await self._call_for_value(
            HttpMethod.POST,
            "/moderation/enforcements/status",
            CheckAutoModStatusResponse,
            params=params,
            body=CheckAutoModStatusRequest(data=list(messages)),
            access_token=access_token,
        )

    async def get_automod_settings(
        self,
        broadcaster_id: str,
        moderator_id: str,
        *,
        access_token: str | None = None,
    ) -> GetAutomodSettingsResponse | None:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("moderator_id", moderator_id)
        return await self._call_for_value(
            HttpMethod.GET,
            "/moderation/automod/settings",
            GetAutomodSettingsResponse,
            params=params,
            access_token=access_token,
        )

    async def update_automod_settings(
        self,
        broadcaster_id: str,
        moderator_id: str,
        settings: AutomodSettingsRequest,
        *,
        access_token: str | None = None,
    ) -> UpdateAutomodSettingsResponse | None:
        """Replace the broadcaster's AutoMod settings.

        Set either ``overall_level`` or any combination of individual levels.
        Every level must be between 0 and 4.
        """
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        individual = settings.individual_levels()
        if settings.overall_level is not None and individual:
            raise ValidationError(
                "overall_level", "cannot be combined with individual AutoMod levels"
            )
        if settings.overall_level is not None:
            require_range(settings.overall_level, "overall_level", 0, MAX_AUTOMOD_LEVEL)
        for name, level in individual.items():
            require_range(level, name, 0, MAX_AUTOMOD_LEVEL)

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("moderator_id", moderator_id)
        return await self._call_for_value(
            HttpMethod.PUT,
            "/moderation/automod/settings",
            UpdateAutomodSettingsResponse,
            params=params,
            body=settings,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Bans
    # ------------------------------------------------------------------

    async def get_banned_users(
        self,
        broadcaster_id: str,
        user_ids: list[str] | None = None,
        first: int | None = None,
        after: str | None = None,
        before: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetBannedUsersResponse | None:
        """List users banned in a channel.

        Args:
            broadcaster_id: Channel whose bans to list.
            user_ids: Only return these users (up to 100), in this order.
            first: Page size, 1 to 100.  Omitted when ``None``.
            after: Cursor for the next page.
            before: Cursor for the previous page.
        """
        require_string(broadcaster_id, "broadcaster_id")
        user_ids = optional_items(user_ids, "user_ids")
        require_page_size(first)

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .extend("user_id", user_ids)
            .add_optional("after", after)
            .add_optional("before", before)
            .add_optional("first", first)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/moderation/banned",
            GetBannedUsersResponse,
            params=params,
            access_token=access_token,
        )

    async def ban_user(
        self,
        broadcaster_id: str,
        moderator_id: str,
        request: BanUserRequest,
        *,
        access_token: str | None = None,
    ) -> BanUserResponse | None:
        """Ban a user, or time them out when ``request.duration`` is set.

        ``duration`` must be between 1 second and two weeks; ``reason`` is
        limited to 500 characters.
        """
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_string(request.user_id, "user_id")
        if request.duration is not None:
            require_range(request.duration, "duration", 1, MAX_BAN_DURATION_SECONDS)
        require_max_length(request.reason, "reason", MAX_MODERATION_TEXT_LENGTH)

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("moderator_id", moderator_id)
        return await self._call_for_value(
            HttpMethod.POST,
            "/moderation/bans",
            BanUserResponse,
            params=params,
            body=BanUserBody(data=request),
            access_token=access_token,
        )

    async def unban_user(
        self,
        broadcaster_id: str,
        moderator_id: str,
        user_id: str,
        *,
        access_token: str | None = None,
    ) -> bool:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_string(user_id, "user_id")

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .add("moderator_id", moderator_id)
            .add("user_id", user_id)
        )
        return await self._call_for_success(
            HttpMethod.DELETE,
            "/moderation/bans",
            params=params,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Moderators
    # ------------------------------------------------------------------

    async def get_moderators(
        self,
        broadcaster_id: str,
        user_ids: list[str] | None = None,
        first: int | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetModeratorsResponse | None:
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
            "/moderation/moderators",
            GetModeratorsResponse,
            params=params,
            access_token=access_token,
        )

    async def add_channel_moderator(
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
            "/moderation/moderators",
            params=params,
            access_token=access_token,
        )

    async def remove_channel_moderator(
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
            "/moderation/moderators",
            params=params,
            access_token=access_token,
        )

    async def get_moderated_channels(
        self,
        user_id: str,
        first: int | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetModeratedChannelsResponse | None:
        """List channels in which *user_id* has moderator privileges."""
        require_string(user_id, "user_id")
        require_page_size(first)

        params = (
            QueryParams()
            .add("user_id", user_id)
            .add_optional("after", after)
            .add_optional("first", first)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/moderation/channels",
            GetModeratedChannelsResponse,
            params=params,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Blocked terms
    # ------------------------------------------------------------------

    async def get_blocked_terms(
        self,
        broadcaster_id: str,
        moderator_id: str,
        first: int | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetBlockedTermsResponse | None:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_page_size(first)

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .add("moderator_id", moderator_id)
            .add_optional("after", after)
            .add_optional("first", first)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/moderation/blocked_terms",
            GetBlockedTermsResponse,
            params=params,
            access_token=access_token,
        )

    async def add_blocked_term(
        self,
        broadcaster_id: str,
        moderator_id: str,
        text: str,
        *,
        access_token: str | None = None,
    ) -> AddBlockedTermResponse | None:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_length(text, "text", MIN_BLOCKED_TERM_LENGTH, MAX_MODERATION_TEXT_LENGTH)

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("moderator_id", moderator_id)
        return await self._call_for_value(
            HttpMethod.POST,
            "/moderation/blocked_terms",
            AddBlockedTermResponse,
            params=params,
            body=AddBlockedTermRequest(text=text),
            access_token=access_token,
        )

    async def delete_blocked_term(
        self,
        broadcaster_id: str,
        moderator_id: str,
        term_id: str,
        *,
        access_token: str | None = None,
    ) -> bool:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_string(term_id, "term_id")

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .add("moderator_id", moderator_id)
            .add("id", term_id)
        )
        return await self._call_for_success(
            HttpMethod.DELETE,
            "/moderation/blocked_terms",
            params=params,
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Chat messages
    # ------------------------------------------------------------------

    async def delete_chat_messages(
        self,
        broadcaster_id: str,
        moderator_id: str,
        message_id: str | None = None,
        *,
        access_token: str | None = None,
    ) -> bool:
        """Delete one chat message, or every message when *message_id* is unset."""
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .add("moderator_id", moderator_id)
            .add_optional("message_id", message_id)
        )
        return await self._call_for_success(
            HttpMethod.DELETE,
            "/moderation/chat",
            params=params,
            access_token=access_token,
        )

    async def warn_chat_user(
        self,
        broadcaster_id: str,
        moderator_id: str,
        request: WarnChatUserRequest,
        *,
        access_token: str | None = None,
    ) -> WarnChatUserResponse | None:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_string(request.user_id, "user_id")
        require_max_length(request.reason, "reason", MAX_MODERATION_TEXT_LENGTH)

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("moderator_id", moderator_id)
        return await self._call_for_value(
            HttpMethod.POST,
            "/moderation/warnings",
            WarnChatUserResponse,
            params=params,
            body=WarnChatUserBody(data=request),
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Shield Mode
    # ------------------------------------------------------------------

    async def get_shield_mode_status(
        self,
        broadcaster_id: str,
        moderator_id: str,
        *,
        access_token: str | None = None,
    ) -> GetShieldModeStatusResponse | None:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("moderator_id", moderator_id)
        return await self._call_for_value(
            HttpMethod.GET,
            "/moderation/shield_mode",
            GetShieldModeStatusResponse,
            params=params,
            access_token=access_token,
        )

    async def update_shield_mode_status(
        self,
        broadcaster_id: str,
        moderator_id: str,
        is_active: bool,
        *,
        access_token: str | None = None,
    ) -> UpdateShieldModeStatusResponse | None:
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")

        params = QueryParams().add("broadcaster_id", broadcaster_id).add("moderator_id", moderator_id)
        return await self._call_for_value(
            HttpMethod.PUT,
            "/moderation/shield_mode",
            UpdateShieldModeStatusResponse,
            params=params,
            body=ShieldModeStatusRequest(is_active=is_active),
            access_token=access_token,
        )

    # ------------------------------------------------------------------
    # Unban requests
    # ------------------------------------------------------------------

    async def get_unban_requests(
        self,
        broadcaster_id: str,
        moderator_id: str,
        status: str,
        user_id: str | None = None,
        first: int | None = None,
        after: str | None = None,
        *,
        access_token: str | None = None,
    ) -> GetUnbanRequestsResponse | None:
        """List unban requests in a given state.

        Args:
            status: One of ``pending``, ``approved``, ``denied``,
                ``acknowledged`` or ``canceled`` (case-sensitive).
            user_id: Only return requests filed by this user.
        """
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_member(status, "status", UNBAN_REQUEST_STATUSES)
        require_page_size(first)

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .add("moderator_id", moderator_id)
            .add("status", status)
            .add_optional("user_id", user_id)
            .add_optional("after", after)
            .add_optional("first", first)
        )
        return await self._call_for_value(
            HttpMethod.GET,
            "/moderation/unban_requests",
            GetUnbanRequestsResponse,
            params=params,
            access_token=access_token,
        )

    async def resolve_unban_request(
        self,
        broadcaster_id: str,
        moderator_id: str,
        unban_request_id: str,
        status: str,
        resolution_text: str | None = None,
        *,
        access_token: str | None = None,
    ) -> ResolveUnbanRequestsResponse | None:
        """Approve or deny an unban request."""
        require_string(broadcaster_id, "broadcaster_id")
        require_string(moderator_id, "moderator_id")
        require_string(unban_request_id, "unban_request_id")
        require_member(status, "status", UNBAN_RESOLUTION_STATUSES)
        require_max_length(resolution_text, "resolution_text", MAX_MODERATION_TEXT_LENGTH)

        params = (
            QueryParams()
            .add("broadcaster_id", broadcaster_id)
            .add("moderator_id", moderator_id)
            .add("unban_request_id", unban_request_id)
            .add("status", status)
            .add_optional("resolution_text", resolution_text)
        )
        return await self._call_for_value(
            HttpMethod.PATCH,
            "/moderation/unban_requests",
            ResolveUnbanRequestsResponse,
            params=params,
            access_token=access_token,
        )
