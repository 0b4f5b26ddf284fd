"""Tests for the Moderation component.

Covers:
- get_banned_users(): decoding, page-size bounds, query order, repeated user_id
- ban_user(): duration and reason bounds, JSON body shape
- unban_user() and the other 204 endpoints returning True
- get_unban_requests(): case-sensitive status
- update_automod_settings(): overall vs individual levels
- check_automod_status(): message list bounds
- error paths: HTTP 429, HTTP 400 body, malformed JSON

HTTP is mocked with respx; validation failures must never reach the network.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from twitch_helix.core.exceptions import (
    BadRequestError,
    DecodeError,
    InvalidEnumValueError,
    MissingParameterError,
    OutOfRangeError,
    TooLongError,
    TooManyRequestsError,
    ValidationError,
)
from twitch_helix.schemas.moderation import (
    AutoModCheckMessage,
    AutomodSettingsRequest,
    BanUserRequest,
    WarnChatUserRequest,
)

HELIX_BASE = "https://api.twitch.tv/helix"
BANNED_URL = f"{HELIX_BASE}/moderation/banned"
BANS_URL = f"{HELIX_BASE}/moderation/bans"


# ---------------------------------------------------------------------------
# get_banned_users()
# ---------------------------------------------------------------------------


class TestGetBannedUsers:
    @pytest.mark.asyncio
    @respx.mock
    async def test_decodes_recorded_response(self, api, load_fixture) -> None:
        respx.get(BANNED_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("helix/moderation/get_banned_users.json"))
        )

        response = await api.helix.moderation.get_banned_users("198704263")

        assert len(response.data) == 2
        first = response.data[0]
        assert first.user_login == "glowillig"
        assert first.user_id == "423374343"
        assert first.reason == "Does not like pineapple on pizza."
        assert response.data[1].expires_at == ""
        assert response.cursor is not None

    @pytest.mark.asyncio
    @respx.mock
    async def test_page_size_100_is_sent_without_cursors(self, api) -> None:
        route = respx.get(BANNED_URL).mock(return_value=httpx.Response(200, json={"data": []}))

        await api.helix.moderation.get_banned_users("1", first=100)

        assert route.calls.last.request.url.params.multi_items() == [
            ("broadcaster_id", "1"),
            ("first", "100"),
        ]

    @pytest.mark.asyncio
    @respx.mock
    async def test_page_size_omitted_when_unset(self, api) -> None:
        route = respx.get(BANNED_URL).mock(return_value=httpx.Response(200, json={"data": []}))

        await api.helix.moderation.get_banned_users("1")

        assert "first" not in route.calls.last.request.url.params

    @pytest.mark.asyncio
    @pytest.mark.parametrize("first", [0, 101, -5])
    async def test_page_size_out_of_range_fails_before_io(self, api, first: int) -> None:
        with respx.mock(assert_all_called=False) as respx_mock:
            route = respx_mock.get(BANNED_URL).mock(return_value=httpx.Response(200, json={"data": []}))
            with pytest.raises(OutOfRangeError) as exc_info:
                await api.helix.moderation.get_banned_users("1", first=first)

        assert exc_info.value.field == "first"
        assert not route.called

    @pytest.mark.asyncio
    @respx.mock
    async def test_user_ids_repeat_in_caller_order(self, api) -> None:
        route = respx.get(BANNED_URL).mock(return_value=httpx.Response(200, json={"data": []}))

        await api.helix.moderation.get_banned_users(
            "1", user_ids=["30", "10", "20"], first=5, after="next", before="prev"
        )

        assert route.calls.last.request.url.params.multi_items() == [
            ("broadcaster_id", "1"),
            ("user_id", "30"),
            ("user_id", "10"),
            ("user_id", "20"),
            ("after", "next"),
            ("before", "prev"),
            ("first", "5"),
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("broadcaster_id", ["", "   ", None])
    async def test_blank_broadcaster_id_is_rejected(self, api, broadcaster_id) -> None:
        with pytest.raises(MissingParameterError) as exc_info:
            await api.helix.moderation.get_banned_users(broadcaster_id)

        assert exc_info.value.field == "broadcaster_id"

    @pytest.mark.asyncio
    async def test_more_than_100_user_ids_is_rejected(self, api) -> None:
        with pytest.raises(OutOfRangeError):
            await api.helix.moderation.get_banned_users("1", user_ids=[str(i) for i in range(101)])


# ---------------------------------------------------------------------------
# ban_user() / unban_user()
# ---------------------------------------------------------------------------


class TestBanUser:
    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout_body_and_response(self, api, load_fixture) -> None:
        route = respx.post(BANS_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("helix/moderation/ban_user.json"))
        )

        response = await api.helix.moderation.ban_user(
            "1234", "5678", BanUserRequest(user_id="9876", duration=300, reason="no reason")
        )

        sent = route.calls.last.request
        assert sent.url.params.multi_items() == [("broadcaster_id", "1234"), ("moderator_id", "5678")]
        assert json.loads(sent.content) == {
            "data": {"user_id": "9876", "duration": 300, "reason": "no reason"}
        }
        assert response.data[0].end_time == "2021-09-28T19:22:31Z"

    @pytest.mark.asyncio
    @respx.mock
    async def test_permanent_ban_omits_duration(self, api, load_fixture) -> None:
        route = respx.post(BANS_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("helix/moderation/ban_user.json"))
        )

        await api.helix.moderation.ban_user("1234", "5678", BanUserRequest(user_id="9876"))

        assert json.loads(route.calls.last.request.content) == {"data": {"user_id": "9876"}}

    @pytest.mark.asyncio
    @respx.mock
    async def test_two_week_duration_is_accepted(self, api, load_fixture) -> None:
        respx.post(BANS_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("helix/moderation/ban_user.json"))
        )

        response = await api.helix.moderation.ban_user(
            "1234", "5678", BanUserRequest(user_id="9876", duration=1_209_600)
        )

        assert response is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("duration", [0, 1_209_601])
    async def test_duration_out_of_range_is_rejected(self, api, duration: int) -> None:
        with pytest.raises(OutOfRangeError) as exc_info:
            await api.helix.moderation.ban_user(
                "1234", "5678", BanUserRequest(user_id="9876", duration=duration)
            )

        assert exc_info.value.field == "duration"

    @pytest.mark.asyncio
    async def test_reason_longer_than_500_is_rejected(self, api) -> None:
        with pytest.raises(TooLongError):
            await api.helix.moderation.ban_user(
                "1234", "5678", BanUserRequest(user_id="9876", reason="x" * 501)
            )

    @pytest.mark.asyncio
    @respx.mock
    async def test_unban_returns_true_on_no_content(self, api) -> None:
        route = respx.delete(BANS_URL).mock(return_value=httpx.Response(204))

        assert await api.helix.moderation.unban_user("1234", "5678", "9876") is True
        assert route.calls.last.request.url.params["user_id"] == "9876"


# ---------------------------------------------------------------------------
# 204 endpoints
# ---------------------------------------------------------------------------


class TestNoContentEndpoints:
    @pytest.mark.asyncio
    @respx.mock
    async def test_add_and_remove_moderator(self, api) -> None:
        respx.post(f"{HELIX_BASE}/moderation/moderators").mock(return_value=httpx.Response(204))
        respx.delete(f"{HELIX_BASE}/moderation/moderators").mock(return_value=httpx.Response(204))

        assert await api.helix.moderation.add_channel_moderator("1", "2") is True
        assert await api.helix.moderation.remove_channel_moderator("1", "2") is True

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_blocked_term_sends_id(self, api) -> None:
        route = respx.delete(f"{HELIX_BASE}/moderation/blocked_terms").mock(
            return_value=httpx.Response(204)
        )

        assert await api.helix.moderation.delete_blocked_term("1", "2", "term-1") is True
        assert route.calls.last.request.url.params.multi_items() == [
            ("broadcaster_id", "1"),
            ("moderator_id", "2"),
            ("id", "term-1"),
        ]

    @pytest.mark.asyncio
    @respx.mock
    async def test_delete_all_chat_messages_omits_message_id(self, api) -> None:
        route = respx.delete(f"{HELIX_BASE}/moderation/chat").mock(return_value=httpx.Response(204))

        assert await api.helix.moderation.delete_chat_messages("1", "2") is True
        assert "message_id" not in route.calls.last.request.url.params

    @pytest.mark.asyncio
    @respx.mock
    async def test_manage_held_message_body(self, api) -> None:
        route = respx.post(f"{HELIX_BASE}/moderation/automod/message").mock(
            return_value=httpx.Response(204)
        )

        assert await api.helix.moderation.manage_held_automod_message("9", "msg-1", "ALLOW") is True
        assert json.loads(route.calls.last.request.content) == {
            "user_id": "9",
            "msg_id": "msg-1",
            "action": "ALLOW",
        }

    @pytest.mark.asyncio
    async def test_manage_held_message_action_is_case_sensitive(self, api) -> None:
        with pytest.raises(InvalidEnumValueError):
            await api.helix.moderation.manage_held_automod_message("9", "msg-1", "allow")


# ---------------------------------------------------------------------------
# Unban requests
# ---------------------------------------------------------------------------


class TestUnbanRequests:
    @pytest.mark.asyncio
    @respx.mock
    async def test_approved_status_is_accepted(self, api, load_fixture) -> None:
        route = respx.get(f"{HELIX_BASE}/moderation/unban_requests").mock(
            return_value=httpx.Response(200, json=load_fixture("helix/moderation/get_unban_requests.json"))
        )

        response = await api.helix.moderation.get_unban_requests("274637212", "141981764", "approved")

        assert route.calls.last.request.url.params["status"] == "approved"
        assert response.data[0].resolution_text == "Second chance."
        assert response.cursor is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["Approved", "APPROVED", "open"])
    async def test_other_status_spellings_are_rejected(self, api, status: str) -> None:
        with pytest.raises(InvalidEnumValueError) as exc_info:
            await api.helix.moderation.get_unban_requests("1", "2", status)

        assert exc_info.value.field == "status"

    @pytest.mark.asyncio
    async def test_resolution_only_accepts_approved_or_denied(self, api) -> None:
        with pytest.raises(InvalidEnumValueError):
            await api.helix.moderation.resolve_unban_request("1", "2", "req-1", "pending")

    @pytest.mark.asyncio
    @respx.mock
    async def test_resolve_sends_query_only(self, api) -> None:
        route = respx.patch(f"{HELIX_BASE}/moderation/unban_requests").mock(
            return_value=httpx.Response(200, json={"data": [{"id": "req-1", "status": "denied"}]})
        )

        response = await api.helix.moderation.resolve_unban_request(
            "1", "2", "req-1", "denied", resolution_text="No."
        )

        sent = route.calls.last.request
        assert sent.content == b""
        assert sent.url.params.multi_items() == [
            ("broadcaster_id", "1"),
            ("moderator_id", "2"),
            ("unban_request_id", "req-1"),
            ("status", "denied"),
            ("resolution_text", "No."),
        ]
        assert response.data[0].status == "denied"


# ---------------------------------------------------------------------------
# AutoMod
# ---------------------------------------------------------------------------


class TestAutoMod:
    @pytest.mark.asyncio
    @respx.mock
    async def test_get_settings_decodes_null_overall_level(self, api, load_fixture) -> None:
        respx.get(f"{HELIX_BASE}/moderation/automod/settings").mock(
            return_value=httpx.Response(200, json=load_fixture("helix/moderation/get_automod_settings.json"))
        )

        response = await api.helix.moderation.get_automod_settings("1234", "5678")

        settings = response.data[0]
        assert settings.overall_level is None
        assert settings.swearing == 0

    @pytest.mark.asyncio
    @respx.mock
    async def test_update_with_overall_level_only(self, api) -> None:
        route = respx.put(f"{HELIX_BASE}/moderation/automod/settings").mock(
            return_value=httpx.Response(200, json={"data": [{"overall_level": 3}]})
        )

        response = await api.helix.moderation.update_automod_settings(
            "1234", "5678", AutomodSettingsRequest(overall_level=3)
        )

        assert json.loads(route.calls.last.request.content) == {"overall_level": 3}
        assert response.data[0].overall_level == 3

    @pytest.mark.asyncio
    async def test_overall_and_individual_levels_are_exclusive(self, api) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await api.helix.moderation.update_automod_settings(
                "1234", "5678", AutomodSettingsRequest(overall_level=2, swearing=1)
            )

        assert exc_info.value.field == "overall_level"

    @pytest.mark.asyncio
    async def test_level_above_four_is_rejected(self, api) -> None:
        with pytest.raises(OutOfRangeError) as exc_info:
            await api.helix.moderation.update_automod_settings(
                "1234", "5678", AutomodSettingsRequest(bullying=5)
            )

        assert exc_info.value.field == "bullying"

    @pytest.mark.asyncio
    async def test_check_status_requires_messages(self, api) -> None:
        with pytest.raises(MissingParameterError):
            await api.helix.moderation.check_automod_status("1", [])

    @pytest.mark.asyncio
    async def test_check_status_rejects_blank_message_text(self, api) -> None:
        with pytest.raises(MissingParameterError) as exc_info:
            await api.helix.moderation.check_automod_status(
                "1", [AutoModCheckMessage(msg_id="a", msg_text="  ")]
            )

        assert exc_info.value.field == "messages[0].msg_text"

    @pytest.mark.asyncio
    @respx.mock
    async def test_check_status_posts_messages(self, api) -> None:
        route = respx.post(f"{HELIX_BASE}/moderation/enforcements/status").mock(
            return_value=httpx.Response(200, json={"data": [{"msg_id": "a", "is_permitted": False}]})
        )

        response = await api.helix.moderation.check_automod_status(
            "1", [AutoModCheckMessage(msg_id="a", msg_text="hello")]
        )

        assert json.loads(route.calls.last.request.content) == {
            "data": [{"msg_id": "a", "msg_text": "hello"}]
        }
        assert response.data[0].is_permitted is False


# ---------------------------------------------------------------------------
# Blocked terms, warnings, Shield Mode
# ---------------------------------------------------------------------------


class TestOtherModerationCalls:
    @pytest.mark.asyncio
    async def test_single_character_blocked_term_is_rejected(self, api) -> None:
        with pytest.raises(OutOfRangeError) as exc_info:
            await api.helix.moderation.add_blocked_term("1", "2", "a")

        assert exc_info.value.field == "text"

    @pytest.mark.asyncio
    async def test_blocked_term_longer_than_500_is_too_long(self, api) -> None:
        with pytest.raises(TooLongError) as exc_info:
            await api.helix.moderation.add_blocked_term("1", "2", "x" * 501)

        assert exc_info.value.field == "text"

    @pytest.mark.asyncio
    @respx.mock
    async def test_blocked_term_of_500_characters_is_sent(self, api) -> None:
        route = respx.post(f"{HELIX_BASE}/moderation/blocked_terms").mock(
            return_value=httpx.Response(200, json={"data": [{"id": "term-1", "text": "x" * 500}]})
        )

        response = await api.helix.moderation.add_blocked_term("1", "2", "x" * 500)

        assert json.loads(route.calls.last.request.content) == {"text": "x" * 500}
        assert response.data[0].id == "term-1"

    @pytest.mark.asyncio
    @respx.mock
    async def test_warn_chat_user_wraps_body_in_data(self, api) -> None:
        route = respx.post(f"{HELIX_BASE}/moderation/warnings").mock(
            return_value=httpx.Response(200, json={"data": [{"user_id": "9", "reason": "stop"}]})
        )

        response = await api.helix.moderation.warn_chat_user(
            "1", "2", WarnChatUserRequest(user_id="9", reason="stop")
        )

        assert json.loads(route.calls.last.request.content) == {"data": {"user_id": "9", "reason": "stop"}}
        assert response.data[0].reason == "stop"

    @pytest.mark.asyncio
    @respx.mock
    async def test_update_shield_mode_decodes_status(self, api) -> None:
        route = respx.put(f"{HELIX_BASE}/moderation/shield_mode").mock(
            return_value=httpx.Response(
                200, json={"data": [{"is_active": True, "moderator_login": "twitchdev"}]}
            )
        )

        response = await api.helix.moderation.update_shield_mode_status("1", "2", True)

        assert json.loads(route.calls.last.request.content) == {"is_active": True}
        assert response.data[0].is_active is True


# ---------------------------------------------------------------------------
# Error paths
# ---------------------------------------------------------------------------


class TestModerationErrors:
    @pytest.mark.asyncio
    @respx.mock
    async def test_429_raises_too_many_requests(self, api) -> None:
        respx.get(BANNED_URL).mock(
            return_value=httpx.Response(
                429,
                json={"error": "Too Many Requests", "status": 429, "message": "slow down"},
                headers={"Ratelimit-Reset": "1700000000"},
            )
        )

        with pytest.raises(TooManyRequestsError) as exc_info:
            await api.helix.moderation.get_banned_users("1")

        assert exc_info.value.reset_at == 1700000000.0

    @pytest.mark.asyncio
    @respx.mock
    async def test_400_carries_twitch_message(self, api) -> None:
        respx.post(BANS_URL).mock(
            return_value=httpx.Response(
                400,
                json={"error": "Bad Request", "status": 400, "message": "user is already banned"},
            )
        )

        with pytest.raises(BadRequestError, match="already banned"):
            await api.helix.moderation.ban_user("1", "2", BanUserRequest(user_id="3"))

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_json_raises_decode_error(self, api) -> None:
        respx.get(BANNED_URL).mock(return_value=httpx.Response(200, text='{"data": [}'))

        with pytest.raises(DecodeError):
            await api.helix.moderation.get_banned_users("1")
