"""Parameter validators run before any request is built.

Each function checks one kind of constraint and raises the matching
:class:`~twitch_helix.core.exceptions.ValidationError` subclass on failure.
Endpoint methods call them in sequence, so the first failing check wins.

Whitespace-only strings count as empty everywhere.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from twitch_helix.core.exceptions import (
    InvalidEnumValueError,
    MissingParameterError,
    OutOfRangeError,
    TooLongError,
)

#: Maximum page size accepted by paginated Helix endpoints.
MAX_PAGE_SIZE: int = 100

#: Longest ban/timeout Helix accepts, in seconds (two weeks).
MAX_BAN_DURATION_SECONDS: int = 1_209_600

#: Maximum length of moderation free-text (ban reason, warning, resolution).
MAX_MODERATION_TEXT_LENGTH: int = 500


def is_blank(value: str | None) -> bool:
    """Return ``True`` for ``None``, ``""`` and whitespace-only strings."""
    return value is None or not value.strip()


def require_string(value: str | None, field: str) -> str:
    """Ensure *value* is a non-blank string and return it unchanged."""
    if is_blank(value):
        raise MissingParameterError(field, "must be set")
    return value  # type: ignore[return-value]


def require_range(value: int, field: str, minimum: int, maximum: int) -> int:
    """Ensure ``minimum <= value <= maximum`` (both bounds inclusive)."""
    if value < minimum or value > maximum:
        raise OutOfRangeError(
            field, f"must be between {minimum} and {maximum} (got {value})"
        )
    return value


def require_page_size(first: int | None, field: str = "first") -> int | None:
    """Validate an optional page size against ``1..MAX_PAGE_SIZE``."""
    if first is None:
        return None
    return require_range(first, field, 1, MAX_PAGE_SIZE)


def require_member(value: str | None, field: str, allowed: Collection[str]) -> str:
    """Ensure *value* is an exact, case-sensitive member of *allowed*."""
    require_string(value, field)
    if value not in allowed:
        raise InvalidEnumValueError(
            field, f"must be one of {sorted(allowed)} (got {value!r})"
        )
    return value  # type: ignore[return-value]


def require_max_length(value: str | None, field: str, maximum: int) -> str | None:
    """Ensure *value* is at most *maximum* characters.  ``None`` passes."""
    if value is not None and len(value) > maximum:
        raise TooLongError(
            field, f"cannot be longer than {maximum} characters (got {len(value)})"
        )
    return value


def require_length(value: str | None, field: str, minimum: int, maximum: int) -> str:
    """Ensure *value* is non-blank and ``minimum..maximum`` characters long.

    Too short raises :class:`OutOfRangeError`; too long raises
    :class:`TooLongError`, like every other fixed character maximum.
    """
    require_string(value, field)
    if len(value) < minimum:  # type: ignore[arg-type]
        raise OutOfRangeError(
            field, f"must be at least {minimum} characters (got {len(value)})"  # type: ignore[arg-type]
        )
    require_max_length(value, field, maximum)
    return value  # type: ignore[return-value]


def require_items(
    values: Sequence[str] | None,
    field: str,
    minimum: int = 1,
    maximum: int = MAX_PAGE_SIZE,
) -> list[str]:
    """Validate a list of identifiers.

    An absent or empty list raises :class:`MissingParameterError` (when
    *minimum* is at least one); a list longer than *maximum* raises
    :class:`OutOfRangeError`.  Every element must itself be non-blank.

    Returns:
        The values as a new list, in their original order.
    """
    items = list(values or [])
    if len(items) < minimum:
        if not items:
            raise MissingParameterError(field, f"must contain at least {minimum} item(s)")
        raise OutOfRangeError(field, f"must contain at least {minimum} items")
    if len(items) > maximum:
        raise OutOfRangeError(
            field, f"must contain at most {maximum} items (got {len(items)})"
        )
    for index, item in enumerate(items):
        require_string(item, f"{field}[{index}]")
    return items


def optional_items(
    values: Sequence[str] | None,
    field: str,
    maximum: int = MAX_PAGE_SIZE,
) -> list[str] | None:
    """Validate an optional filter list; ``None`` and ``[]`` both mean "not set"."""
    if not values:
        return None
    return require_items(values, field, minimum=1, maximum=maximum)
