"""Structured logging for stylebuild.

This module provides:
- Structured logging setup via structlog
- A ``build_step`` context manager that logs the outcome of a build step
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
import sys
import time
from typing import TYPE_CHECKING, Any, Iterator

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

LOGGER_NAME = "stylebuild"

_logger: BoundLogger | None = None


def configure_logging(verbose: bool = False, *, colors: bool = True) -> None:
    """Configure structlog for console output on stderr.

    Args:
        verbose: If True, emit debug events.
        colors: If False, render without ANSI colors.

    Example:
        >>> configure_logging(verbose=True)
        >>> get_logger().debug("file_compiled", source="src/scss/main.scss")
    """
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # Resolve sys.stderr per logger so redirected streams are honoured
        logger_factory=lambda *args: structlog.PrintLogger(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger() -> BoundLogger:
    """Get the package logger, creating it if necessary.

    Returns:
        structlog BoundLogger instance.
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(LOGGER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


@contextmanager
def build_step(name: str, **attributes: Any) -> Iterator[dict[str, Any]]:
    """Log the start, completion and failure of a build step.

    The yielded dict can be updated with attributes that should appear
    on the completion event.

    Args:
        name: Step name (e.g., "build", "rebuild").
        **attributes: Attributes attached to every event.

    Yields:
        Mutable dict of extra completion attributes.

    Example:
        >>> with build_step("build", source_glob="src/scss/*.scss") as result:
        ...     result["files"] = 2
    """
    logger = get_logger()
    extra: dict[str, Any] = {}
    started = time.perf_counter()
    logger.debug(f"{name}_started", **attributes)
    try:
        yield extra
    except Exception as exc:
        logger.error(f"{name}_failed", error=str(exc), **attributes)
        raise
    duration_ms = round((time.perf_counter() - started) * 1000, 1)
    logger.info(f"{name}_completed", duration_ms=duration_ms, **attributes, **extra)
