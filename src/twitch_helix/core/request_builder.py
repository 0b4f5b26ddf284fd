"""Request assembly for the call pipeline.

Builds the immutable :class:`HelixRequest` value that
:class:`~twitch_helix.core.http.HttpCallHandler` sends.  Query parameters are
kept as an ordered list of ``(key, value)`` pairs rather than a mapping,
because Helix expresses multi-value filters by repeating the key
(``?user_id=1&user_id=2``).

Conventional parameter order used by every endpoint method:

1. required identifiers (``broadcaster_id``, ``moderator_id``, ...)
2. optional filters (repeated ``user_id``, ``status``, ...)
3. pagination cursors (``after``, ``before``)
4. page size (``first``)

Optional parameters that are unset are omitted entirely; the builder never
emits a key with an empty value on the caller's behalf.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from twitch_helix.core.exceptions import MissingParameterError
from twitch_helix.core.validation import is_blank


class ApiVersion(str, Enum):
    """API family a request targets; selects the base URL and auth header style.

    Attributes:
        HELIX: ``https://api.twitch.tv/helix`` with ``Bearer`` tokens.
        AUTH: ``https://id.twitch.tv/oauth2`` with ``OAuth`` tokens.
    """

    HELIX = "helix"
    AUTH = "auth"


class HttpMethod(str, Enum):
    """HTTP verbs used by the Helix API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class QueryParams:
    """Ordered, multi-value query-string builder.

    Example::

        params = QueryParams()
        params.add("broadcaster_id", "1234")
        params.extend("user_id", ["1", "2"])
        params.add_optional("after", cursor)
        params.add_optional("first", first)
        params.items()
        # [("broadcaster_id", "1234"), ("user_id", "1"), ("user_id", "2"), ...]
    """

    __slots__ = ("_pairs",)

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    def add(self, key: str, value: Any) -> QueryParams:
        """Append a required parameter.  It is always emitted."""
        self._pairs.append((key, _render(value)))
        return self

    def add_optional(self, key: str, value: Any) -> QueryParams:
        """Append *value* only when it is set (not ``None`` and not blank)."""
        if value is None:
            return self
        if isinstance(value, str) and is_blank(value):
            return self
        return self.add(key, value)

    def extend(self, key: str, values: Iterable[Any] | None) -> QueryParams:
        """Append one ``key=value`` pair per element, preserving input order."""
        if values is None:
            return self
        for value in values:
            self.add(key, value)
        return self

    def items(self) -> list[tuple[str, str]]:
        """Return a copy of the accumulated pairs."""
        return list(self._pairs)

    def keys(self) -> list[str]:
        return [key for key, _ in self._pairs]

    def get_all(self, key: str) -> list[str]:
        """Return every value supplied for *key*, in insertion order."""
        return [value for k, value in self._pairs if k == key]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self._pairs)

    def __repr__(self) -> str:
        return f"QueryParams({self._pairs!r})"


@dataclass(frozen=True)
class HelixRequest:
    """One outbound API call, fully assembled and immutable.

    Attributes:
        method: HTTP verb.
        path: Path relative to the API family's base URL (e.g. ``"/channels"``).
        api_version: API family selecting base URL and header style.
        query_params: Ordered ``(key, value)`` pairs; keys may repeat.
        body: Serialized JSON text, or ``None`` for parameter-only calls.
        access_token: Per-call token override; ``None`` uses the stored token.
        requires_auth: When ``False`` the call may go out without any token.
    """

    method: HttpMethod
    path: str
    api_version: ApiVersion = ApiVersion.HELIX
    query_params: tuple[tuple[str, str], ...] = ()
    body: str | None = None
    access_token: str | None = None
    requires_auth: bool = True


def build_request(
    method: HttpMethod,
    path: str,
    api_version: ApiVersion = ApiVersion.HELIX,
    params: QueryParams | Iterable[tuple[str, str]] | None = None,
    body: str | None = None,
    access_token: str | None = None,
    requires_auth: bool = True,
) -> HelixRequest:
    """Assemble a :class:`HelixRequest`.

    Args:
        method: HTTP verb.
        path: Non-empty path relative to the API base URL.
        api_version: Target API family.
        params: Query parameters in the order they should be sent.
        body: Pre-serialized JSON body (see :func:`encode_body`); opaque here.
        access_token: Optional per-call token override.  Blank means "not set".
        requires_auth: Whether the call needs a token at all.

    Raises:
        MissingParameterError: If *path* is blank.
    """
    if is_blank(path):
        raise MissingParameterError("path", "must be set")
    pairs = tuple(params.items() if isinstance(params, QueryParams) else (params or ()))
    return HelixRequest(
        method=method,
        path=path,
        api_version=api_version,
        query_params=pairs,
        body=body,
        access_token=None if is_blank(access_token) else access_token,
        requires_auth=requires_auth,
    )


def encode_body(payload: BaseModel) -> str:
    """Serialize a typed request body to compact JSON text.

    Models are dumped by alias with ``None`` fields dropped, so an unset
    optional field is omitted from the body rather than sent as ``null``.
    """
    return payload.model_dump_json(by_alias=True, exclude_none=True)
