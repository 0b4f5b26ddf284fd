"""Credential store and the per-client API context.

The client never reads a global token.  Instead an :class:`ApiSettings`
object, holding the application Client ID and a :class:`CredentialStore`, is
passed to the HTTP call handler and to every component.  A token-refresh
collaborator outside the library can swap the stored token at any time with
:meth:`CredentialStore.set_token`; calls already in flight keep the token
they resolved.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from twitch_helix.config.settings import Settings

logger = logging.getLogger(__name__)


class CredentialStore:
    """Thread-safe holder for the default access token.

    Reads vastly outnumber writes; the lock only guards the swap so that a
    refresh running in another thread never exposes a half-updated pair of
    access/refresh tokens.

    Args:
        access_token: Initial default token, or ``None``.
        refresh_token: Optional refresh token paired with *access_token*.
    """

    def __init__(
        self,
        access_token: str | None = None,
        refresh_token: str | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._access_token = access_token or None
        self._refresh_token = refresh_token or None

    def get_current_token(self) -> str | None:
        """Return the current default access token, or ``None`` if unset."""
        with self._lock:
            return self._access_token

    @property
    def refresh_token(self) -> str | None:
        with self._lock:
            return self._refresh_token

    def set_token(self, access_token: str | None, refresh_token: str | None = None) -> None:
        """Replace the stored token (and refresh token, when given)."""
        with self._lock:
            self._access_token = access_token or None
            if refresh_token is not None:
                self._refresh_token = refresh_token or None
        logger.debug("credential store updated; has_token=%s", access_token is not None)

    def clear(self) -> None:
        """Forget both tokens."""
        with self._lock:
            self._access_token = None
            self._refresh_token = None


@dataclass
class ApiSettings:
    """Context threaded through the call pipeline.

    Attributes:
        client_id: Application Client ID sent as the ``Client-Id`` header.
        client_secret: Application secret, used only by the OAuth endpoints.
        credentials: Store holding the default access token.
        helix_base_url: Base URL for ``ApiVersion.HELIX`` requests.
        auth_base_url: Base URL for ``ApiVersion.AUTH`` requests.
        timeout_seconds: Transport timeout per call.
        user_agent: ``User-Agent`` header value.
    """

    client_id: str | None = None
    client_secret: str | None = None
    credentials: CredentialStore = field(default_factory=CredentialStore)
    helix_base_url: str = "https://api.twitch.tv/helix"
    auth_base_url: str = "https://id.twitch.tv/oauth2"
    timeout_seconds: float = 30.0
    user_agent: str = "twitch-helix/0.1"

    @classmethod
    def from_settings(cls, settings: Settings) -> ApiSettings:
        """Build the context from environment-backed :class:`Settings`."""
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            credentials=CredentialStore(access_token=settings.access_token),
            helix_base_url=settings.helix_base_url.rstrip("/"),
            auth_base_url=settings.auth_base_url.rstrip("/"),
            timeout_seconds=settings.request_timeout_seconds,
            user_agent=settings.user_agent,
        )
