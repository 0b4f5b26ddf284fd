"""Library-wide exception hierarchy for twitch-helix.

All custom exceptions subclass ``HelixError``, so callers can catch every
failure raised by the client with a single ``except`` clause while still
being able to distinguish local validation problems from transport and
upstream API failures.

Hierarchy::

    HelixError
    ├── ValidationError              (field, message)
    │   ├── MissingParameterError
    │   ├── OutOfRangeError
    │   ├── InvalidEnumValueError
    │   └── TooLongError
    ├── AuthenticationMissingError
    ├── TransportError
    ├── RateLimitTimeoutError        (bucket, timeout)
    ├── ApiError                     (status_code, message, error)
    │   ├── BadRequestError          (400)
    │   ├── UnauthorizedError        (401)
    │   ├── ForbiddenError           (403)
    │   ├── NotFoundError            (404)
    │   ├── ConflictError            (409)
    │   ├── UnprocessableEntityError (422)
    │   ├── TooManyRequestsError     (429, reset_at)
    │   └── ServerError              (5xx)
    └── DecodeError                  (status_code, body_text)
"""

from __future__ import annotations


class HelixError(Exception):
    """Base class for all twitch-helix exceptions."""


# ---------------------------------------------------------------------------
# Validation exceptions (raised before any network I/O)
# ---------------------------------------------------------------------------


class ValidationError(HelixError):
    """Raised when a call argument fails a local constraint check.

    Args:
        field: Name of the offending parameter (e.g. ``"broadcaster_id"``).
        message: Human-readable description of the violated constraint.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class MissingParameterError(ValidationError):
    """Raised when a required value is ``None``, empty, or whitespace-only."""


class OutOfRangeError(ValidationError):
    """Raised when a numeric value or a list size falls outside its bounds."""


class InvalidEnumValueError(ValidationError):
    """Raised when a value is not a (case-sensitive) member of the allowed set."""


class TooLongError(ValidationError):
    """Raised when a string exceeds its maximum character length."""


# ---------------------------------------------------------------------------
# Pipeline exceptions
# ---------------------------------------------------------------------------


class AuthenticationMissingError(HelixError):
    """Raised when an authenticated call has neither an override nor a stored token."""

    def __init__(self, path: str | None = None) -> None:
        msg = "No access token available"
        if path:
            msg += f" for '{path}'"
        msg += "; pass access_token= or configure the credential store"
        super().__init__(msg)
        self.path = path


class TransportError(HelixError):
    """Raised on network-level failure (connection refused, DNS, timeout).

    The original ``httpx`` exception is always chained as ``__cause__``.

    Args:
        message: Description of the failure.
        path: Request path that was being called.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RateLimitTimeoutError(HelixError):
    """Raised when the rate limiter cannot grant a permit in time.

    Attributes:
        bucket: The rate-limit bucket that was exhausted.
        timeout: The timeout value (seconds) that was exceeded.
    """

    def __init__(self, bucket: str, timeout: float) -> None:
        self.bucket = bucket
        self.timeout = timeout
        super().__init__(
            f"Rate limit permit for '{bucket}' not acquired within {timeout:.1f}s timeout."
        )


# ---------------------------------------------------------------------------
# Upstream API exceptions
# ---------------------------------------------------------------------------


class ApiError(HelixError):
    """Raised when Twitch rejects a request with a 4xx or 5xx status.

    Args:
        status_code: HTTP status returned by Twitch.
        message: The upstream ``message`` field, or a generic description.
        error: The upstream ``error`` field (e.g. ``"Bad Request"``), if any.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error: str | None = None,
    ) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.error = error


class BadRequestError(ApiError):
    """HTTP 400: a parameter was rejected by Twitch."""


class UnauthorizedError(ApiError):
    """HTTP 401: the token is invalid, expired, or lacks a required scope."""


class ForbiddenError(ApiError):
    """HTTP 403: the token's user may not perform this action."""


class NotFoundError(ApiError):
    """HTTP 404: the addressed resource does not exist."""


class ConflictError(ApiError):
    """HTTP 409: the request conflicts with the resource's current state."""


class UnprocessableEntityError(ApiError):
    """HTTP 422: the body was well-formed but semantically rejected."""


class TooManyRequestsError(ApiError):
    """HTTP 429: the Helix rate-limit bucket is empty.

    Args:
        status_code: Always ``429``.
        message: Upstream message.
        error: Upstream error label.
        reset_at: Unix timestamp from the ``Ratelimit-Reset`` header, when sent.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error: str | None = None,
        reset_at: float | None = None,
    ) -> None:
        super().__init__(status_code, message, error)
        self.reset_at = reset_at


class ServerError(ApiError):
    """HTTP 5xx: Twitch failed to process the request."""


# ---------------------------------------------------------------------------
# Deserialization exceptions
# ---------------------------------------------------------------------------


class DecodeError(HelixError):
    """Raised when a successful response body cannot be mapped to the expected type.

    Args:
        message: Description of the decoding failure.
        status_code: HTTP status of the (successful) response.
        body_text: The raw body, kept for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body_text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_text = body_text
