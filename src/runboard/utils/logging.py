"""Structured logging configuration using structlog."""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from runboard.config.settings import LoggingConfig


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    """Print logger bound to whatever sys.stderr is at call time."""
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """
    Configure structured logging for the dashboard.

    Log lines go to stderr; stdout is reserved for reports and
    JSON snapshots.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, emit one JSON object per log line.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    # Not cached: stderr is looked up again for every logger.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: "LoggingConfig", *, verbose: bool = False) -> None:
    """
    Configure logging from the logging section of a DashboardConfig.

    Args:
        settings: Logging configuration.
        verbose: Force DEBUG regardless of the configured level.
    """
    level = "DEBUG" if verbose else settings.level
    configure_logging(level=level, json_output=settings.json_output)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module).

    Returns:
        Configured structlog logger.
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind context to every log line emitted inside the block.

    Example:
        with log_context(upload="runs.csv"):
            log.warning("Row validation failed")  # carries upload=runs.csv

    Args:
        **kwargs: Key-value pairs to add to log context.

    Returns:
        Context manager that binds the values.
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
