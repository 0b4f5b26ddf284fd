"""Base class shared by every endpoint component.

Every endpoint method follows the same five steps::

    validate -> build -> send -> decode -> return

Validation is done inline by the method (see :mod:`twitch_helix.core.validation`);
the remaining steps are provided here so that component methods stay a
short description of *which* path, parameters and response model they use.

Example usage::

    from twitch_helix.core.base import ApiBase

    class Moderation(ApiBase):
        async def get_moderators(self, broadcaster_id, *, access_token=None):
            require_string(broadcaster_id, "broadcaster_id")
            params = QueryParams().add("broadcaster_id", broadcaster_id)
            return await self._call_for_value(
                HttpMethod.GET, "/moderation/moderators", GetModeratorsResponse,
                params=params, access_token=access_token,
            )
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from twitch_helix.core.credentials import ApiSettings
from twitch_helix.core.deserializer import TypedResult, decode
from twitch_helix.core.http import HttpCallHandler
from twitch_helix.core.request_builder import (
    ApiVersion,
    HttpMethod,
    QueryParams,
    build_request,
    encode_body,
)

logger = logging.getLogger(__name__)


class ApiBase:
    """Holds the shared :class:`HttpCallHandler` and runs the call pipeline.

    Class Attributes:
        api_version: API family every call of the component targets.
        component_name: Short label used in log messages.

    Args:
        http: The call handler shared by every component of one client.
    """

    api_version: ApiVersion = ApiVersion.HELIX
    component_name: str = "helix"

    def __init__(self, http: HttpCallHandler) -> None:
        self.http = http

    @property
    def settings(self) -> ApiSettings:
        return self.http.settings

    # ------------------------------------------------------------------
    # Pipeline helpers
    # ------------------------------------------------------------------

    async def _call(
        self,
        method: HttpMethod,
        path: str,
        model: Any = None,
        *,
        params: QueryParams | None = None,
        body: BaseModel | None = None,
        access_token: str | None = None,
        requires_auth: bool = True,
    ) -> TypedResult[Any]:
        """Build, send and decode one request.

        Args:
            method: HTTP verb.
            path: Path relative to the component's base URL.
            model: Expected response shape; ``None`` for calls whose success
                carries no body worth decoding.
            params: Ordered query parameters.
            body: Typed request body, serialized with :func:`encode_body`.
            access_token: Per-call token override.
            requires_auth: Whether the call needs a token at all.

        Returns:
            The decoded :class:`TypedResult`.
        """
        request = build_request(
            method,
            path,
            api_version=self.api_version,
            params=params,
            body=encode_body(body) if body is not None else None,
            access_token=access_token,
            requires_auth=requires_auth,
        )
        raw = await self.http.send(request)
        result = decode(raw, model if model is not None else Any)
        logger.debug(
            "%s: %s %s decoded (status=%d, has_value=%s)",
            self.component_name,
            method.value,
            path,
            result.status_code,
            result.has_value,
        )
        return result

    async def _call_for_value(
        self,
        method: HttpMethod,
        path: str,
        model: Any,
        **kwargs: Any,
    ) -> Any:
        """Run :meth:`_call` and return only the decoded value (or ``None``)."""
        result = await self._call(method, path, model, **kwargs)
        return result.value

    async def _call_for_success(
        self,
        method: HttpMethod,
        path: str,
        **kwargs: Any,
    ) -> bool:
        """Run :meth:`_call` for an endpoint that answers ``204 No Content``.

        Returns ``True`` for any 2xx response; failures raise instead of
        returning ``False``.
        """
        result = await self._call(method, path, None, **kwargs)
        return result.ok
