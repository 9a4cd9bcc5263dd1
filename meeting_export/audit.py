"""
Logging infrastructure for the export service.

Provides structured logging with structlog for:
- Export lifecycle events (started, completed, failed)
- Best-effort failures (history writes, progress subscribers)
- Export history records
"""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """
    Configure structlog with JSON output.

    Uses stdout for container compatibility (no file configuration).
    Called once by the application entry point, never on library import.

    Args:
        level: Minimum level name, e.g. "INFO" or "DEBUG"
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a bound logger with the specified module name.

    Args:
        name: Module name for log attribution (e.g., "coordinator")

    Returns:
        BoundLogger instance with module context
    """
    return structlog.get_logger(module=name)
