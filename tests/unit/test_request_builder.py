"""Unit tests for QueryParams, build_request() and encode_body()."""

from __future__ import annotations

import json

import pytest

from twitch_helix.core.exceptions import MissingParameterError
from twitch_helix.core.request_builder import (
    ApiVersion,
    HelixRequest,
    HttpMethod,
    QueryParams,
    build_request,
    encode_body,
)
from twitch_helix.schemas.moderation import BanUserBody, BanUserRequest


class TestQueryParams:
    def test_pairs_keep_insertion_order_and_repeat_keys(self) -> None:
        params = (
            QueryParams()
            .add("broadcaster_id", "1234")
            .extend("user_id", ["3", "1", "2"])
            .add_optional("after", "cursor-a")
            .add_optional("first", 100)
        )

        assert params.items() == [
            ("broadcaster_id", "1234"),
            ("user_id", "3"),
            ("user_id", "1"),
            ("user_id", "2"),
            ("after", "cursor-a"),
            ("first", "100"),
        ]
        assert params.get_all("user_id") == ["3", "1", "2"]

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_add_optional_skips_unset_values(self, value: str | None) -> None:
        params = QueryParams().add_optional("after", value)

        assert len(params) == 0
        assert "after" not in params

    def test_extend_with_none_adds_nothing(self) -> None:
        assert QueryParams().extend("user_id", None).items() == []

    def test_booleans_render_lowercase(self) -> None:
        params = QueryParams().add("force_verify", True).add("is_active", False)

        assert params.items() == [("force_verify", "true"), ("is_active", "false")]

    def test_zero_is_not_treated_as_unset(self) -> None:
        assert QueryParams().add_optional("delay", 0).items() == [("delay", "0")]


class TestBuildRequest:
    def test_builds_immutable_request(self) -> None:
        params = QueryParams().add("broadcaster_id", "1234")
        request = build_request(HttpMethod.GET, "/channels", params=params)

        assert isinstance(request, HelixRequest)
        assert request.api_version is ApiVersion.HELIX
        assert request.query_params == (("broadcaster_id", "1234"),)
        assert request.requires_auth is True
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]

    @pytest.mark.parametrize("path", ["", "  "])
    def test_blank_path_raises(self, path: str) -> None:
        with pytest.raises(MissingParameterError) as exc_info:
            build_request(HttpMethod.GET, path)

        assert exc_info.value.field == "path"

    def test_blank_access_token_means_not_set(self) -> None:
        request = build_request(HttpMethod.GET, "/channels", access_token="  ")

        assert request.access_token is None

    def test_later_changes_to_params_do_not_leak_into_request(self) -> None:
        params = QueryParams().add("id", "1")
        request = build_request(HttpMethod.DELETE, "/eventsub/conduits", params=params)
        params.add("id", "2")

        assert request.query_params == (("id", "1"),)


class TestEncodeBody:
    def test_none_fields_are_omitted(self) -> None:
        body = BanUserBody(data=BanUserRequest(user_id="9876"))

        assert json.loads(encode_body(body)) == {"data": {"user_id": "9876"}}

    def test_set_fields_are_serialized(self) -> None:
        body = BanUserBody(data=BanUserRequest(user_id="9876", duration=300, reason="spam"))

        assert json.loads(encode_body(body)) == {
            "data": {"user_id": "9876", "duration": 300, "reason": "spam"}
        }
