"""Structured logging configuration using structlog.

The library itself only ever logs through the stdlib ``logging`` API, so it
stays silent unless the host application configures handlers.  Applications
that want structured output can call ``configure_logging()`` once at startup:

Stdlib usage (what the library modules do)::

    import logging
    logger = logging.getLogger(__name__)
    logger.debug("helix: GET /channels -> %d", 200)

Structlog usage (richer context binding in application code)::

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("moderation sweep", broadcaster_id="1234")

A ``call_id`` context variable is set by
:class:`~twitch_helix.core.http.HttpCallHandler` for the duration of each API
call and is merged into every log record emitted while that call is running.

Secrets are redacted before rendering: values under credential-like keys,
and credential query parameters inside any logged URL, including the request
lines httpx itself emits.
"""

from __future__ import annotations

import logging
import logging.config
import re
import sys
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, WrappedLogger

# ---------------------------------------------------------------------------
# Context variable: set by the call pipeline, read by the log processor
# ---------------------------------------------------------------------------

call_id_var: ContextVar[str | None] = ContextVar("call_id", default=None)
"""Per-call ID propagated from the HTTP call handler to log processors."""


# ---------------------------------------------------------------------------
# Custom processors
# ---------------------------------------------------------------------------


_SECRET_SUBSTRINGS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "bearer",
    "authorization",
    "client-secret",
    "auth_code",
})
"""Lower-cased substrings that identify log event-dict keys whose values
must be redacted before the record reaches any renderer."""

_SECRET_QUERY_RE = re.compile(
    r"(?i)\b(access_token|refresh_token|client_secret|token|code)=[^&\s#'\"]+"
)
"""Credential-bearing parameters in OAuth query strings and form bodies.

httpx logs each request line with its full URL, so a token grant logs as
``POST https://id.twitch.tv/oauth2/token?client_id=..&client_secret=..``.
"""

_REDACTED = "[REDACTED]"


def _is_secret_key(key: object) -> bool:
    key_lower = str(key).lower()
    return any(secret in key_lower for secret in _SECRET_SUBSTRINGS)


def _scrub_query(value: object) -> object:
    """Redact credential values inside a URL or ``a=b&c=d`` string."""
    if isinstance(value, str) and "=" in value:
        return _SECRET_QUERY_RE.sub(rf"\1={_REDACTED}", value)
    return value


def _redact_secrets(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Replace secret values with a redaction marker.

    Two passes over the event dict, including nested ``dict`` values one
    level deep (e.g. ``headers={...}``):

    - values of keys matching :data:`_SECRET_SUBSTRINGS` are replaced whole;
    - string values, the ``event`` message included, have credential query
      parameters (``client_secret=``, ``access_token=``, ``code=`` ...)
      rewritten so ``client_id`` and ``grant_type`` stay readable.

    Args:
        logger: The wrapped logger instance (unused).
        method_name: The log method name (unused).
        event_dict: Mutable event dictionary being assembled.

    Returns:
        The event dict with sensitive values replaced by ``"[REDACTED]"``.
    """
    for key in list(event_dict.keys()):
        if _is_secret_key(key):
            event_dict[key] = _REDACTED
            continue
        val = event_dict[key]
        if isinstance(val, dict):
            for nested_key in list(val.keys()):
                if _is_secret_key(nested_key):
                    val[nested_key] = _REDACTED
                else:
                    val[nested_key] = _scrub_query(val[nested_key])
        else:
            event_dict[key] = _scrub_query(val)
    return event_dict


def _inject_call_id(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Inject the current API call ID into the log event dict if set."""
    cid = call_id_var.get()
    if cid is not None and "call_id" not in event_dict:
        event_dict["call_id"] = cid
    return event_dict


# ---------------------------------------------------------------------------
# Public configuration entry-point
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog with JSON output, or console output at DEBUG.

    Standard fields added to every log record:

    - ``timestamp``: ISO 8601 string.
    - ``level``: Log level name.
    - ``logger``: Module name that emitted the record.
    - ``call_id``: Current API call ID (omitted outside a call).
    - ``event``: The log message string.

    Calling this more than once is safe; the root handlers are replaced.

    Args:
        log_level: One of ``"DEBUG"``, ``"INFO"``, ``"WARNING"``, ``"ERROR"``,
            ``"CRITICAL"``.  Case-insensitive.
    """
    level_upper = log_level.upper()
    numeric_level = getattr(logging, level_upper, logging.INFO)
    is_development = level_upper == "DEBUG"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _inject_call_id,
        _redact_secrets,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if is_development:
        final_renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(
            colors=True,
        )
    else:
        final_renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            final_renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    # httpx logs every request line at INFO, including full URLs.
    if not is_development:
        for noisy_logger in ("httpx", "httpcore"):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
