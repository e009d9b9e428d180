"""Structured logging for the CLI and services.

Everything goes to stderr so command output on stdout (filled templates,
grading tables) can be piped. SQL statements are logged through the same
pipeline when ``db_echo`` is set instead of SQLAlchemy's own echo handler.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from jobprep_core.config.settings import Settings

REDACTED = "***"
SECRET_KEYS = frozenset({"api_key", "anthropic_api_key", "authorization", "password"})

# Client libraries that log every request at INFO
NOISY_LOGGERS: tuple[str, ...] = ("anthropic", "instructor", "httpx", "httpcore", "aiosqlite")
SQL_LOGGER = "sqlalchemy.engine"


def redact_secrets(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask credential values passed as log keys."""
    for key in event_dict.keys() & SECRET_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def configure_logging(settings: Settings) -> None:
    """Configure structlog with JSON or console rendering on stderr."""
    shared_processors: list[structlog.types.Processor] = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    level = _resolve_level(settings.log_level)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.getLogger(SQL_LOGGER).setLevel(
        logging.INFO if settings.db_echo else max(level, logging.WARNING)
    )


def bind_user_context(user_id: str | None, **extra: object) -> None:
    """Bind user_id (and any extra keys) to subsequent log entries."""
    bind_contextvars(user_id=user_id, **extra)


def clear_user_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()


def _resolve_level(level_name: str) -> int:
    """Convert a level name to a logging level, INFO when unknown."""
    return logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)
