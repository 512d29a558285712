"""
Structured logging for the Inkwell API.

Every event goes through structlog, is scrubbed of credentials and personal
data, and is then rendered to a single line that the standard library
handlers (console, optional file) write out. Development gets a readable
console renderer with rich tracebacks, every other environment gets JSON.

What is scrubbed:

- values of credential fields (``password``, ``new_password``, ...)
- session JWTs, wherever they appear in a string
- email addresses of readers, commenters and admins
- ``Cookie`` / ``Authorization`` style headers

Examples
--------
>>> from app.monitoring import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Post published", post_id=7)
"""

from collections.abc import Mapping
from re import Pattern
from re import compile as re_compile
from typing import Any

from structlog import configure
from structlog import get_logger as struct_logger
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.dev import ConsoleRenderer, RichTracebackFormatter
from structlog.processors import (
    JSONRenderer,
    StackInfoRenderer,
    TimeStamper,
    UnicodeDecoder,
    add_log_level,
    format_exc_info,
)
from structlog.processors import json as struct_json
from structlog.stdlib import (
    BoundLogger,
    LoggerFactory,
    PositionalArgumentsFormatter,
    add_logger_name,
    filter_by_level,
)
from structlog.types import EventDict, Processor, WrappedLogger

from app.configs.settings import settings

REDACTED = "[REDACTED]"

SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie"},
)

# Event keys whose values are never logged, whatever they contain
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"password", "current_password", "new_password", "password_hash", "token", "session"},
)

# JWTs contain dots and must be matched before emails
PII_PATTERNS: tuple[tuple[Pattern[str], str], ...] = (
    (re_compile(r"eyJ[\w-]*\.eyJ[\w-]*\.[\w-]*"), "[REDACTED_JWT]"),
    (re_compile(r"[\w.%+-]+@[\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,}"), "[REDACTED_EMAIL]"),
)

# Escaped rather than dropped so a forged line break stays visible
CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""})

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def sanitize_log_message(message: str) -> str:
    r"""
    Escape control characters so one event is always one log line.

    Examples
    --------
    >>> sanitize_log_message("Hello\nWorld")
    'Hello\\nWorld'
    """
    return message.translate(CONTROL_CHARS)


def redact_pii(message: str) -> str:
    """
    Replace session tokens and email addresses inside free text.

    Examples
    --------
    >>> redact_pii("Comment from guest@example.com held for review")
    'Comment from [REDACTED_EMAIL] held for review'
    """
    for pattern, replacement in PII_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of ``headers`` with credential-bearing values replaced."""
    return {
        name: REDACTED if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def _scrub(key: str, value: Any) -> Any:
    if key.lower() in SENSITIVE_KEYS:
        return REDACTED
    if isinstance(value, str):
        return redact_pii(sanitize_log_message(value))
    if key.lower() == "headers" and isinstance(value, Mapping):
        return sanitize_headers(value)
    return value


def sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Processor that scrubs every value of an event before rendering.

    Args:
        logger: The wrapped logger instance.
        method_name: The name of the logging method being called.
        event_dict: The event dictionary being built.

    Returns:
        EventDict: The same dictionary, scrubbed in place.
    """
    for key, value in event_dict.items():
        event_dict[key] = _scrub(key, value)
    return event_dict


def get_renderer() -> Processor:
    """Console renderer for development, JSON lines everywhere else."""
    if settings.ENVIRONMENT == "development":
        return ConsoleRenderer(
            colors=False,
            pad_level=False,
            exception_formatter=RichTracebackFormatter(),
        )
    return JSONRenderer(serializer=struct_json.dumps)


def configure_logging() -> None:
    """
    Install the structlog processor chain.

    Events are rendered to a string and handed to the standard library logger
    of the same name, so the handlers installed at startup decide where the
    line ends up and ``LOG_LEVEL`` filters structlog and stdlib alike.
    """
    configure(
        processors=[
            filter_by_level,
            merge_contextvars,
            add_logger_name,
            add_log_level,
            TimeStamper(fmt=TIMESTAMP_FORMAT, utc=True, key="timestamp"),
            sanitize_event_dict,
            PositionalArgumentsFormatter(),
            StackInfoRenderer(),
            format_exc_info,
            UnicodeDecoder(),
            get_renderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> BoundLogger:
    return struct_logger(name)


def bind_request_id(request_id: str) -> None:
    """Attach ``request_id`` to every event logged until the context is cleared."""
    bind_contextvars(request_id=request_id)


def clear_context() -> None:
    clear_contextvars()
