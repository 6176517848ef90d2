"""Logging infrastructure for bundle analysis.

Provides structured logging with configurable levels and a per-analysis
correlation id, so records emitted by worker threads can be tied back to
the bundle they belong to.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Analysis ID tracking for per-bundle correlation
analysis_id_ctx: ContextVar[str | None] = ContextVar("analysis_id", default=None)


def get_analysis_id() -> str | None:
    """Get the current analysis ID if available."""
    return analysis_id_ctx.get()


@contextmanager
def analysis_context(analysis_id: str | None = None) -> Iterator[str]:
    """Bind an analysis ID for the duration of one analysis call.

    A call nested inside another analysis keeps the outer ID.
    """
    value = analysis_id or get_analysis_id() or uuid.uuid4().hex[:12]
    token = analysis_id_ctx.set(value)
    try:
        yield value
    finally:
        analysis_id_ctx.reset(token)


class _AnalysisIdFilter(logging.Filter):
    """Supply a placeholder so the format string never fails."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "analysis_id"):
            record.analysis_id = get_analysis_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to LOGGING_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "INFO")

    if format_string is None:
        format_string = (
            "%(asctime)s [%(levelname)s] [%(name)s] [analysis=%(analysis_id)s] %(message)s"
        )

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    # stdout carries the MCP stdio transport
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(_AnalysisIdFilter())
    logger.addHandler(console_handler)

    # Disable noisy third-party loggers
    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("asyncio").propagate = False

    return logger


class AnalysisLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that automatically adds the analysis ID to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        analysis_id = get_analysis_id()
        if analysis_id is not None:
            extra["analysis_id"] = analysis_id
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> AnalysisLoggerAdapter:
    """Create and return a logger for a module.

    Args:
        name: The module name (typically __name__).
    """
    return AnalysisLoggerAdapter(logging.getLogger(name), {})
