"""HTTP call handler: the transport step of the call pipeline.

:class:`HttpCallHandler` turns a :class:`~twitch_helix.core.request_builder.HelixRequest`
into a :class:`RawResponse`:

1. acquire a permit from the rate limiter for the request's API family,
2. resolve the access token (per-call override, else the credential store),
3. compose the URL from the family's base URL, the path and the query pairs,
4. attach ``Authorization`` / ``Client-Id`` / ``Content-Type`` headers,
5. send with a bounded timeout for the whole call, mapping network failures to
   :class:`~twitch_helix.core.exceptions.TransportError`,
6. return status, body text and headers verbatim.

The status code is not interpreted here; that is the deserializer's job.
Nothing is retried.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import TracebackType

import httpx

from twitch_helix.core.credentials import ApiSettings
from twitch_helix.core.exceptions import AuthenticationMissingError, TransportError
from twitch_helix.core.logging_config import call_id_var
from twitch_helix.core.rate_limiter import RateLimiter, UnlimitedRateLimiter
from twitch_helix.core.request_builder import ApiVersion, HelixRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Status, body and headers of one completed HTTP exchange.

    Attributes:
        status_code: HTTP status code.
        body_text: Decoded response body; empty for ``204 No Content``.
        headers: Response headers (case-insensitive when built from httpx).
    """

    status_code: int
    body_text: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)


class HttpCallHandler:
    """Sends :class:`HelixRequest` objects over a shared ``httpx.AsyncClient``.

    Args:
        settings: Context with Client ID, base URLs, timeout and credentials.
        rate_limiter: Gate consulted before each call.  Defaults to
            :class:`~twitch_helix.core.rate_limiter.UnlimitedRateLimiter`.
        http_client: Optional injected client.  An injected client is never
            closed by :meth:`aclose`; one created here is.
    """

    def __init__(
        self,
        settings: ApiSettings,
        rate_limiter: RateLimiter | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.rate_limiter: RateLimiter = rate_limiter or UnlimitedRateLimiter()
        self._http_client = http_client
        self._owns_client = http_client is None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.timeout_seconds),
                headers={"User-Agent": self.settings.user_agent},
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the underlying client if this handler created it."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> HttpCallHandler:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Request composition
    # ------------------------------------------------------------------

    def base_url(self, api_version: ApiVersion) -> str:
        if api_version is ApiVersion.AUTH:
            return self.settings.auth_base_url.rstrip("/")
        return self.settings.helix_base_url.rstrip("/")

    def resolve_token(self, request: HelixRequest) -> str | None:
        """Return the token to send, or ``None`` for unauthenticated calls.

        Calls with ``requires_auth=False`` only ever send an explicit
        override; the stored token is never attached to them.

        Raises:
            AuthenticationMissingError: If the call requires a token and
                neither an override nor a stored token is available.
        """
        if not request.requires_auth:
            return request.access_token
        token = request.access_token or self.settings.credentials.get_current_token()
        if token is None:
            raise AuthenticationMissingError(request.path)
        return token

    def build_headers(self, request: HelixRequest, token: str | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if request.api_version is ApiVersion.HELIX:
            if self.settings.client_id:
                headers["Client-Id"] = self.settings.client_id
            if token:
                headers["Authorization"] = f"Bearer {token}"
        elif token:
            # The OAuth endpoints use the legacy "OAuth" scheme.
            headers["Authorization"] = f"OAuth {token}"
        if request.body is not None:
            headers["Content-Type"] = "application/json"
        return headers

    # ------------------------------------------------------------------
    # Send
    # ------------------------------------------------------------------

    async def send(self, request: HelixRequest) -> RawResponse:
        """Execute *request* and return the raw response.

        Raises:
            RateLimitTimeoutError: If the rate limiter refuses a permit.
            AuthenticationMissingError: If no token is available.
            TransportError: On connection failure or timeout.
        """
        await self.rate_limiter.acquire(request.api_version.value)
        token = self.resolve_token(request)

        url = f"{self.base_url(request.api_version)}{request.path}"
        client = self._get_client()
        http_request = client.build_request(
            request.method.value,
            url,
            params=list(request.query_params),
            headers=self.build_headers(request, token),
            content=request.body.encode("utf-8") if request.body is not None else None,
            timeout=httpx.Timeout(self.settings.timeout_seconds),
        )

        reset_token = call_id_var.set(uuid.uuid4().hex[:12])
        try:
            # httpx bounds each connect/read/write step; this bounds the whole call.
            return await asyncio.wait_for(
                self._exchange(client, http_request, request),
                timeout=self.settings.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"helix: call exceeded {self.settings.timeout_seconds}s on "
                f"{request.method.value} {request.path}",
                path=request.path,
            ) from exc
        finally:
            call_id_var.reset(reset_token)

    async def _exchange(
        self,
        client: httpx.AsyncClient,
        http_request: httpx.Request,
        request: HelixRequest,
    ) -> RawResponse:
        started = time.monotonic()
        try:
            response = await client.send(http_request, stream=True)
            try:
                await response.aread()
            finally:
                # Runs on cancellation too; the connection returns to the pool.
                await response.aclose()
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"helix: timed out after {self.settings.timeout_seconds}s on "
                f"{request.method.value} {request.path}",
                path=request.path,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"helix: request error on {request.method.value} {request.path}: {exc}",
                path=request.path,
            ) from exc

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug(
            "helix: %s %s -> %d (%.0f ms)",
            request.method.value,
            request.path,
            response.status_code,
            elapsed_ms,
        )
        if response.headers.get("Ratelimit-Remaining") == "0":
            logger.warning(
                "helix: rate-limit bucket exhausted after %s %s; resets at %s",
                request.method.value,
                request.path,
                response.headers.get("Ratelimit-Reset"),
            )

        return RawResponse(
            status_code=response.status_code,
            body_text=response.text,
            headers=response.headers,
        )
