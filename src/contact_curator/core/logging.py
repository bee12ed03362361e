"""
Structured logging for contact-curator.

Configuration is read from ``CuratorSettings`` (``CURATOR_LOG_LEVEL``,
``CURATOR_LOG_FORMAT``) unless passed explicitly.

Usage:
    from contact_curator.core.logging import configure_logging, get_logger, log_step

    configure_logging()
    log = get_logger(__name__)

    with LogContext(contact="people/jane.md"):
        with log_step("processor.mutate", processor="uid"):
            ...

Output (console format):
    2026-01-05T10:00:00Z [info] processor.mutate.done  contact=people/jane.md duration_ms=0.4

Tags:
    logging, structlog, observability, contact-curator

Doc-Types:
    api-reference
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Literal

import structlog
from structlog.types import Processor

# Track if logging has been configured
_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at startup (CLI entry). Subsequent calls are
    no-ops unless ``force=True``.

    Args:
        level: Log level (overrides CURATOR_LOG_LEVEL)
        format: Output format (overrides CURATOR_LOG_FORMAT)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    if level is None or format is None:
        from contact_curator.core.settings import get_settings

        settings = get_settings()
        level = level or settings.log_level
        format = format or settings.log_format

    log_level = getattr(logging, level.upper())

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )
    logging.getLogger("contact_curator").setLevel(log_level)

    _configured = True


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(contact="people/jane.md"):
            log.info("pass.started")
        # contact unbound here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        unbind_context(*self._context.keys())


@contextmanager
def log_step(step: str, **fields: Any) -> Iterator[dict[str, Any]]:
    """
    Log the start, end and duration of a block.

    Logs ``<step>.start`` at DEBUG and ``<step>.done`` at INFO with
    ``duration_ms``. If the block raises, ``<step>.error`` is logged at
    ERROR and the exception propagates. The yielded dict collects extra
    metrics for the completion line.

    Usage:
        with log_step("runner.pass", contact=contact.path) as metrics:
            metrics["processors"] = 5
    """
    log = get_logger("contact_curator.timing")
    metrics: dict[str, Any] = {}
    started = time.perf_counter()
    log.debug(f"{step}.start", **fields)
    try:
        yield metrics
    except Exception as e:
        log.error(
            f"{step}.error",
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            error_type=type(e).__name__,
            error_message=str(e),
            **fields,
        )
        raise
    log.info(
        f"{step}.done",
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
        **fields,
        **metrics,
    )


__all__ = [
    "configure_logging",
    "is_configured",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
    "log_step",
]
