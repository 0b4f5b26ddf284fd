"""Legacy OAuth endpoints on ``id.twitch.tv/oauth2``.

These calls go through the same pipeline as Helix calls but target the
``auth`` API family: a different base URL, the ``OAuth`` authorization
scheme, and their own rate-limit bucket.  The token endpoints take the
client credentials as query parameters and need no bearer token.

Example usage::

    url = api.auth.get_authorization_url("http://localhost:3000", ["chat:read"])
    tokens = await api.auth.get_access_token_from_code(code, "http://localhost:3000")
    info = await api.auth.validate_access_token(tokens.access_token)
"""

from __future__ import annotations

import logging

import httpx

from twitch_helix.core.base import ApiBase
from twitch_helix.core.exceptions import MissingParameterError, UnauthorizedError
from twitch_helix.core.request_builder import ApiVersion, HttpMethod, QueryParams
from twitch_helix.core.validation import is_blank, require_string
from twitch_helix.schemas.auth import (
    AppAccessTokenResponse,
    AuthCodeResponse,
    RefreshResponse,
    ValidateAccessTokenResponse,
)

logger = logging.getLogger(__name__)


class Auth(ApiBase):
    """Authorization-code, client-credentials, refresh, validate and revoke flows."""

    api_version = ApiVersion.AUTH
    component_name = "auth"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _client_id(self, client_id: str | None) -> str:
        resolved = client_id if not is_blank(client_id) else self.settings.client_id
        return require_string(resolved, "client_id")

    def _client_secret(self, client_secret: str | None) -> str:
        resolved = client_secret if not is_blank(client_secret) else self.settings.client_secret
        return require_string(resolved, "client_secret")

    # ------------------------------------------------------------------
    # Authorization URL
    # ------------------------------------------------------------------

    def get_authorization_url(
        self,
        redirect_uri: str,
        scopes: list[str],
        state: str | None = None,
        force_verify: bool | None = None,
        client_id: str | None = None,
    ) -> str:
        """Build the URL that sends a user to Twitch's consent page.

        No request is made.  Scopes are joined with spaces, as Twitch expects;
        at least one non-blank scope is required.
        """
        require_string(redirect_uri, "redirect_uri")
        if not scopes:
            raise MissingParameterError("scopes", "must contain at least 1 item(s)")
        for index, scope in enumerate(scopes):
            require_string(scope, f"scopes[{index}]")
        params = (
            QueryParams()
            .add("client_id", self._client_id(client_id))
            .add("redirect_uri", redirect_uri)
            .add("response_type", "code")
            .add("scope", " ".join(scopes))
            .add_optional("state", state)
            .add_optional("force_verify", force_verify)
        )
        base = self.http.base_url(ApiVersion.AUTH)
        return str(httpx.URL(f"{base}/authorize", params=params.items()))

    # ------------------------------------------------------------------
    # Token grants
    # ------------------------------------------------------------------

    async def get_app_access_token(
        self,
        scopes: list[str] | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
    ) -> AppAccessTokenResponse | None:
        """Obtain an app access token via the client-credentials grant."""
        params = (
            QueryParams()
            .add("client_id", self._client_id(client_id))
            .add("client_secret", self._client_secret(client_secret))
            .add("grant_type", "client_credentials")
        )
        if scopes:
            params.add("scope", " ".join(scopes))
        return await self._call_for_value(
            HttpMethod.POST,
            "/token",
            AppAccessTokenResponse,
            params=params,
            requires_auth=False,
        )

    async def get_access_token_from_code(
        self,
        code: str,
        redirect_uri: str,
        client_id: str | None = None,
        client_secret: str | None = None,
    ) -> AuthCodeResponse | None:
        """Exchange an authorization code for user access and refresh tokens."""
        require_string(code, "code")
        require_string(redirect_uri, "redirect_uri")

        params = (
            QueryParams()
            .add("client_id", self._client_id(client_id))
            .add("client_secret", self._client_secret(client_secret))
            .add("code", code)
            .add("grant_type", "authorization_code")
            .add("redirect_uri", redirect_uri)
        )
        return await self._call_for_value(
            HttpMethod.POST,
            "/token",
            AuthCodeResponse,
            params=params,
            requires_auth=False,
        )

    async def refresh_access_token(
        self,
        refresh_token: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        update_credentials: bool = False,
    ) -> RefreshResponse | None:
        """Trade a refresh token for a new access token.

        Args:
            refresh_token: Token to redeem; defaults to the one held by the
                credential store.
            update_credentials: When ``True``, the new token pair replaces
                the store's, so later calls use it by default.
        """
        store = self.settings.credentials
        refresh_token = require_string(refresh_token or store.refresh_token, "refresh_token")

        params = (
            QueryParams()
            .add("client_id", self._client_id(client_id))
            .add("client_secret", self._client_secret(client_secret))
            .add("grant_type", "refresh_token")
            .add("refresh_token", refresh_token)
        )
        response: RefreshResponse | None = await self._call_for_value(
            HttpMethod.POST,
            "/token",
            RefreshResponse,
            params=params,
            requires_auth=False,
        )
        if update_credentials and response is not None and response.access_token:
            store.set_token(response.access_token, response.refresh_token or refresh_token)
            logger.info("auth: stored refreshed access token (expires_in=%s)", response.expires_in)
        return response

    # ------------------------------------------------------------------
    # Validate / revoke
    # ------------------------------------------------------------------

    async def validate_access_token(
        self,
        access_token: str | None = None,
    ) -> ValidateAccessTokenResponse | None:
        """Return what Twitch knows about a token, or ``None`` if it is invalid.

        Uses the stored token when *access_token* is not given.
        """
        try:
            return await self._call_for_value(
                HttpMethod.GET,
                "/validate",
                ValidateAccessTokenResponse,
                access_token=access_token,
            )
        except UnauthorizedError:
            logger.info("auth: access token rejected by /validate")
            return None

    async def revoke_access_token(
        self,
        access_token: str | None = None,
        client_id: str | None = None,
    ) -> bool:
        """Invalidate *access_token* (or the stored token) at Twitch."""
        token = access_token if not is_blank(access_token) else self.settings.credentials.get_current_token()
        if is_blank(token):
            raise MissingParameterError("access_token", "must be set")

        params = QueryParams().add("client_id", self._client_id(client_id)).add("token", token)
        return await self._call_for_success(
            HttpMethod.POST,
            "/revoke",
            params=params,
            requires_auth=False,
        )
