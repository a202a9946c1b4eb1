"""structlog setup for authbase.

Every entry carries a level, an ISO timestamp, the logger name and the
request's correlation id. Credentials and tokens are scrubbed before
rendering. Development and ``log_format="console"`` render coloured lines;
anything else renders one JSON object per line.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from authbase.core.config import Settings, get_settings

REDACTED = "[redacted]"

# Keys whose values must never reach a log sink
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "access",
        "refresh",
        "refresh_token",
        "access_token",
        "authorization",
        "jwt_secret",
    }
)


def new_correlation_id() -> str:
    """Generate a short correlation ID for requests without one."""
    return f"cid_{uuid.uuid4().hex[:12]}"


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Fill in ``correlation_id`` for entries logged outside a request."""
    event_dict.setdefault("correlation_id", new_correlation_id())
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    # PrintLogger has no name; fall back to the package name
    event_dict["logger"] = getattr(logger, "name", None) or "authbase"
    return event_dict


def redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace the values of credential and token keys with a placeholder.

    Example:
        >>> redact_secrets(None, "info", {"event": "x", "refresh": "eyJ..."})
        {'event': 'x', 'refresh': '[redacted]'}
    """
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Emit the log line text as ``message`` instead of structlog's ``event``."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Install the structlog pipeline and align stdlib logging with it.

    Safe to call more than once; the last call wins.

    Args:
        settings: Settings to read the level and format from. Defaults to the
            cached environment settings.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
        redact_secrets,
    ]

    console = settings.is_development or settings.log_format == "console"
    if console:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors += [
            structlog.processors.format_exc_info,
            rename_message_field,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not console,
    )

    # uvicorn, sqlalchemy and redis log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, named after the calling module by convention."""
    return structlog.get_logger(name or "authbase")


def bind_correlation_id(correlation_id: str) -> None:
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Drop request-scoped context so it does not leak into the next request."""
    structlog.contextvars.clear_contextvars()
