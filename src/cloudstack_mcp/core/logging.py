"""Structured logging configuration for the CloudStack MCP server.

- structlog for structured logging
- Context propagation via contextvars (service, version, tool)
- Configurable JSON/console rendering
- Logs go to stderr: stdout carries the MCP stdio stream
- Silences noisy library loggers (httpx, httpcore, etc.)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


def setup_logging(
    service_name: str,
    service_version: str = "0.1.0",
    log_level: str = "INFO",
    log_format: str = "console",
) -> None:
    """Configure structured logging for the server.

    Args:
        service_name: Name of the service (e.g., "cloudstack-mcp")
        service_version: Service version (e.g., "0.1.0")
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Output format - "json" for production, "console" for development
    """
    # Silence noisy library loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("mcp").setLevel(logging.WARNING)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # No colors: stderr is usually captured by the MCP host, not a terminal
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        service=service_name,
        version=service_version,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance with optional name binding.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger


def bind_context(**kwargs: Any) -> None:
    """Bind additional context variables to all subsequent logs.

    Example:
        bind_context(tool="destroy_virtual_machine")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific context variables.

    Args:
        keys: Names of context variables to remove
    """
    structlog.contextvars.unbind_contextvars(*keys)
