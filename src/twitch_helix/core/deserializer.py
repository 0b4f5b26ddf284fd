"""Response deserialization: raw HTTP exchange to typed result or typed error.

:func:`decode` is generic over the expected response type.  Anything pydantic
can validate works as *model*: a ``BaseModel`` subclass, ``list[Model]``,
``dict[str, Any]`` and so on.

Status handling:

- ``2xx`` with a body → JSON parsed and validated into *model*.
- ``204`` or ``2xx`` with an empty body → success with no value.
- ``4xx`` / ``5xx`` → :class:`~twitch_helix.core.exceptions.ApiError`
  (or a status-specific subclass) carrying Twitch's own message.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from twitch_helix.core.exceptions import (
    ApiError,
    BadRequestError,
    ConflictError,
    DecodeError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TooManyRequestsError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from twitch_helix.core.http import RawResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
}


@dataclass(frozen=True)
class TypedResult(Generic[T]):
    """Outcome of a successful call.

    Attributes:
        status_code: HTTP status of the response.
        value: The decoded body, or ``None`` for no-content successes.
    """

    status_code: int
    value: T | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def has_value(self) -> bool:
        return self.value is not None


@lru_cache(maxsize=256)
def _adapter(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


def raise_for_status(raw: RawResponse) -> None:
    """Raise the :class:`ApiError` matching *raw* if it is not a 2xx response."""
    status = raw.status_code
    if 200 <= status < 300:
        return

    error_label, message = _parse_error_body(raw.body_text)
    if message is None:
        message = f"Twitch returned HTTP {status}"

    if status == 429:
        raise TooManyRequestsError(
            status,
            message,
            error=error_label,
            reset_at=_parse_reset(raw.headers.get("Ratelimit-Reset")),
        )
    if status >= 500:
        raise ServerError(status, message, error=error_label)
    raise _STATUS_ERRORS.get(status, ApiError)(status, message, error=error_label)


def decode(raw: RawResponse, model: Any) -> TypedResult[Any]:
    """Map *raw* into a :class:`TypedResult` of *model*.

    Args:
        raw: The response returned by the HTTP call handler.
        model: Expected shape of the JSON body.

    Returns:
        A :class:`TypedResult` whose ``value`` is ``None`` for ``204`` or an
        empty body.

    Raises:
        ApiError: For any non-2xx status (or a status-specific subclass).
        DecodeError: If a 2xx body is not valid JSON or does not fit *model*.
    """
    raise_for_status(raw)

    if raw.status_code == 204 or not raw.body_text.strip():
        return TypedResult(status_code=raw.status_code, value=None)

    try:
        payload = json.loads(raw.body_text)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            f"response body is not valid JSON: {exc.msg}",
            status_code=raw.status_code,
            body_text=raw.body_text,
        ) from exc

    try:
        value = _adapter(model).validate_python(payload)
    except PydanticValidationError as exc:
        logger.debug("decode: body does not match %r: %s", model, exc)
        raise DecodeError(
            f"response body does not match {getattr(model, '__name__', model)!s}: "
            f"{exc.error_count()} error(s)",
            status_code=raw.status_code,
            body_text=raw.body_text,
        ) from exc

    return TypedResult(status_code=raw.status_code, value=value)


def _parse_error_body(body_text: str) -> tuple[str | None, str | None]:
    """Extract ``(error, message)`` from Twitch's ``{error, status, message}`` body."""
    if not body_text.strip():
        return None, None
    try:
        payload = json.loads(body_text)
    except json.JSONDecodeError:
        return None, None
    if not isinstance(payload, dict):
        return None, None
    error = payload.get("error")
    message = payload.get("message")
    return (
        str(error) if error is not None else None,
        str(message) if message else None,
    )


def _parse_reset(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None
