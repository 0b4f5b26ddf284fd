"""Tests for the TwitchAPI facade: construction and lifecycle."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest
import respx

from twitch_helix import TwitchAPI
from twitch_helix.config.settings import Settings
from twitch_helix.core.rate_limiter import RedisRateLimiter, UnlimitedRateLimiter


def _settings(**overrides) -> Settings:
    values = {"client_id": "cid", "access_token": "env-token"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestFromSettings:
    def test_without_redis_uses_unlimited_limiter(self) -> None:
        api = TwitchAPI.from_settings(_settings(redis_url=None))

        assert isinstance(api.rate_limiter, UnlimitedRateLimiter)
        assert api.credentials.get_current_token() == "env-token"

    def test_with_redis_uses_namespaced_limiter(self) -> None:
        with patch("twitch_helix.client.get_redis_client", return_value=MagicMock()) as get_client:
            api = TwitchAPI.from_settings(
                _settings(redis_url="redis://localhost:6379/3", rate_limit_timeout_seconds=5)
            )

        get_client.assert_called_once_with("redis://localhost:6379/3")
        assert isinstance(api.rate_limiter, RedisRateLimiter)
        assert api.rate_limiter.namespace == "cid"
        assert api.rate_limiter.timeout == 5

    def test_components_share_one_handler(self) -> None:
        api = TwitchAPI.from_settings(_settings())

        assert api.helix.moderation.http is api.http
        assert api.helix.eventsub.http is api.http
        assert api.auth.http is api.http

    def test_from_env_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TWITCH_CLIENT_ID", "from-env")
        monkeypatch.delenv("TWITCH_REDIS_URL", raising=False)

        api = TwitchAPI.from_env()

        assert api.settings.client_id == "from-env"


class TestLifecycle:
    @pytest.mark.asyncio
    @respx.mock
    async def test_context_manager_closes_owned_client(self) -> None:
        respx.get("https://api.twitch.tv/helix/chat/emotes/global").mock(
            return_value=httpx.Response(200, json={"data": []})
        )

        async with TwitchAPI.from_settings(_settings()) as api:
            await api.helix.chat.get_global_emotes()
            client = api.http._http_client

        assert client is not None
        assert client.is_closed

    @pytest.mark.asyncio
    async def test_injected_client_stays_open(self) -> None:
        injected = httpx.AsyncClient()

        async with TwitchAPI.from_settings(_settings(), http_client=injected):
            pass

        assert not injected.is_closed
        await injected.aclose()
