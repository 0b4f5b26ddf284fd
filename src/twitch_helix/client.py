"""``TwitchAPI``: the entry point that wires every component together.

Usage::

    from twitch_helix import TwitchAPI

    async with TwitchAPI.from_env() as api:
        bans = await api.helix.moderation.get_banned_users("1234", first=100)
        for ban in bans.data:
            print(ban.user_login, ban.expires_at)

The facade owns one :class:`~twitch_helix.core.http.HttpCallHandler` (and
through it one ``httpx.AsyncClient``) shared by all components.  Closing the
facade closes that client unless it was injected by the caller.
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from twitch_helix.auth import Auth
from twitch_helix.config.settings import Settings, get_settings
from twitch_helix.core.credentials import ApiSettings, CredentialStore
from twitch_helix.core.http import HttpCallHandler
from twitch_helix.core.rate_limiter import (
    RateLimiter,
    RedisRateLimiter,
    UnlimitedRateLimiter,
    get_redis_client,
)
from twitch_helix.helix import Helix

logger = logging.getLogger(__name__)


class TwitchAPI:
    """Async client for the Helix API and the legacy OAuth endpoints.

    Args:
        settings: Context with Client ID, credentials and base URLs.
        rate_limiter: Gate consulted before every call.  Defaults to
            :class:`~twitch_helix.core.rate_limiter.UnlimitedRateLimiter`.
        http_client: Optional ``httpx.AsyncClient`` to reuse.  It is left
            open by :meth:`aclose`.

    Attributes:
        helix: Helix components (``moderation``, ``channels``, ``chat``,
            ``eventsub``).
        auth: OAuth token flows.
    """

    def __init__(
        self,
        settings: ApiSettings,
        rate_limiter: RateLimiter | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.http = HttpCallHandler(settings, rate_limiter=rate_limiter, http_client=http_client)
        self.helix = Helix(self.http)
        self.auth = Auth(self.http)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> TwitchAPI:
        """Build a client from :class:`Settings`.

        A :class:`~twitch_helix.core.rate_limiter.RedisRateLimiter` namespaced
        by Client ID is used when ``settings.redis_url`` is set.
        """
        rate_limiter: RateLimiter
        if settings.redis_url:
            rate_limiter = RedisRateLimiter(
                get_redis_client(settings.redis_url),
                namespace=settings.client_id or "default",
                timeout=settings.rate_limit_timeout_seconds,
            )
            logger.info("twitch: using Redis rate limiter (namespace=%s)", rate_limiter.namespace)
        else:
            rate_limiter = UnlimitedRateLimiter()
        return cls(ApiSettings.from_settings(settings), rate_limiter=rate_limiter, http_client=http_client)

    @classmethod
    def from_env(cls) -> TwitchAPI:
        """Build a client from ``TWITCH_*`` environment variables."""
        return cls.from_settings(get_settings())

    @property
    def credentials(self) -> CredentialStore:
        """The store holding the default access token."""
        return self.settings.credentials

    @property
    def rate_limiter(self) -> RateLimiter:
        return self.http.rate_limiter

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> TwitchAPI:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
