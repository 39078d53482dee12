"""Structured logging configuration for the Skirmish combat core.

Logging uses structlog with a human-readable console renderer during
development and a JSON renderer for machine consumption. Log events are
diagnostics only; the text shown to the player goes through Narration.

Unless told otherwise, configure_logging reads its level and renderer from
the loaded Settings (SKIRMISH_LOG_LEVEL, SKIRMISH_JSON_LOGS).

Example:
    >>> from skirmish.core.logging import get_logger, log_context
    >>> logger = get_logger(__name__)
    >>> with log_context(battle="Hero vs Goblin"):
    ...     logger.info("Round started", round=1)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["app"] = "skirmish"
    return event_dict


def _renderer(json_format: bool) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Logging level name; defaults to settings.log_level.
        json_format: Render JSON lines; defaults to settings.json_logs.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    if level is None or json_format is None:
        from skirmish.core.config import get_settings

        settings = get_settings()
        level = settings.log_level if level is None else level
        json_format = settings.json_logs if json_format is None else json_format

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        *_renderer(json_format),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key/value pairs to every later log entry in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind key/value pairs for the duration of a with block.

    Keys bound by the caller before the block are restored afterwards.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_context",
]
