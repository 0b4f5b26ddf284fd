"""Client settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.  All
variables are prefixed with ``TWITCH_`` and may also be supplied through an
optional ``.env`` file in the working directory.

Usage::

    from twitch_helix.config.settings import get_settings

    settings = get_settings()
    client_id = settings.client_id
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for :class:`~twitch_helix.client.TwitchAPI`.

    Nothing here is strictly required at construction time: an application
    may build a client with only a ``client_id`` and supply per-call access
    tokens, or call the token endpoints first and store the result in the
    credential store.
    """

    model_config = SettingsConfigDict(
        env_prefix="TWITCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Application credentials
    # ------------------------------------------------------------------

    client_id: Optional[str] = None
    """Twitch application Client ID, sent as the ``Client-Id`` header."""

    client_secret: Optional[str] = None
    """Twitch application secret.  Only used by the OAuth token endpoints."""

    access_token: Optional[str] = None
    """Default access token (app or user).  Individual calls may override it."""

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    helix_base_url: str = "https://api.twitch.tv/helix"
    """Base URL for the Helix REST API."""

    auth_base_url: str = "https://id.twitch.tv/oauth2"
    """Base URL for the OAuth 2.0 endpoints (token, validate, revoke, authorize)."""

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    request_timeout_seconds: float = Field(default=30.0, gt=0)
    """Per-call timeout applied to the HTTP transport step."""

    user_agent: str = "twitch-helix/0.1"
    """``User-Agent`` header sent with every request."""

    # ------------------------------------------------------------------
    # Rate limiting
    # ------------------------------------------------------------------

    redis_url: Optional[str] = None
    """Redis URL for the shared sliding-window rate limiter.

    When ``None`` the client does not gate calls locally and relies on
    Twitch's own ``429`` responses.
    """

    rate_limit_timeout_seconds: float = Field(default=60.0, gt=0)
    """Maximum time a call may wait for a rate-limit permit."""

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""


@lru_cache
def get_settings() -> Settings:
    """Return the cached :class:`Settings` instance.

    Call ``get_settings.cache_clear()`` in tests after patching the
    environment.
    """
    return Settings()
