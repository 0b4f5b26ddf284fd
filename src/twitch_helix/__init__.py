"""Async client for the Twitch Helix API.

Re-exports the symbols most callers need::

    from twitch_helix import TwitchAPI, ApiSettings, HelixError
"""

from __future__ import annotations

from twitch_helix.client import TwitchAPI
from twitch_helix.core.credentials import ApiSettings, CredentialStore
from twitch_helix.core.exceptions import (
    ApiError,
    AuthenticationMissingError,
    DecodeError,
    HelixError,
    RateLimitTimeoutError,
    TransportError,
    ValidationError,
)

__all__ = [
    "ApiError",
    "ApiSettings",
    "AuthenticationMissingError",
    "CredentialStore",
    "DecodeError",
    "HelixError",
    "RateLimitTimeoutError",
    "TransportError",
    "TwitchAPI",
    "ValidationError",
]
