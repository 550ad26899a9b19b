#!/usr/bin/env python3
"""
Structured Logging Module using structlog

This module provides structured logging for the cache-aside layer with:
- Operation ID correlation across concurrent cache operations
- Stage numbering for execution flow (see constants.Stage)
- JSON formatting for log aggregation
- Context processors for automatic field injection

Architectural Decision: structlog for production logging
- Context-aware logging with automatic field injection
- JSON output for log aggregation (ELK, Splunk, etc.)
- Async-safe correlation through context variables

Author: System Architect
Date: 2026-10-19
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, WrappedLogger

from cachekit.core.config.settings import get_settings

# Context variable for operation ID (task-local under asyncio)
operation_id_ctx: ContextVar[str | None] = ContextVar("operation_id", default=None)


def add_operation_id(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add operation ID to log event from context variable.

    This processor automatically adds the operation ID from context to every log entry,
    so interleaved logs from concurrent cache operations can be told apart.
    """
    operation_id = operation_id_ctx.get()
    if operation_id:
        event_dict["operation_id"] = operation_id
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return event_dict


def add_log_level_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Upper-case the log level injected by structlog.stdlib.add_log_level."""
    if "level" in event_dict:
        event_dict["level"] = event_dict["level"].upper()
    return event_dict


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Setup structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')

    Performance Impact:
    - Debug-level stage logs are filtered by the stdlib level before rendering
    - Async-safe with context variables
    """
    settings = get_settings()

    # Use settings if not provided
    log_level = log_level or settings.logging.LOG_LEVEL
    log_format = log_format or settings.logging.LOG_FORMAT

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s", stream=sys.stdout, level=getattr(logging, log_level.upper())
    )

    # Choose renderer based on format
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # Merge context variables
            add_operation_id,  # Add operation ID from context
            add_timestamp,  # Add ISO timestamp
            structlog.stdlib.add_log_level,  # Add log level
            add_log_level_name,  # Convert log level to uppercase
            structlog.stdlib.PositionalArgumentsFormatter(),  # Format positional args
            structlog.processors.StackInfoRenderer(),  # Render stack info
            structlog.processors.format_exc_info,  # Format exception info
            renderer,  # JSON or console renderer
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Usage:
        logger = get_logger(__name__)
        logger.info("message", key="value", stage=Stage.CACHE_READ)
    """
    return structlog.get_logger(name)


def set_operation_id(operation_id: str) -> None:
    """
    Set operation ID in context for the current task.

    Call at the start of a unit of work (request handler, job) so every
    cache log line it produces carries the same correlation ID.
    """
    operation_id_ctx.set(operation_id)


def get_operation_id() -> str | None:
    """Get current operation ID from context."""
    return operation_id_ctx.get()


def clear_operation_id() -> None:
    """Clear operation ID from context."""
    operation_id_ctx.set(None)


# Convenience function for logging with stage information
def log_stage(
    logger: structlog.stdlib.BoundLogger, stage: str, message: str, level: str = "info", **kwargs
) -> None:
    """
    Log a message with stage information.

    Args:
        logger: Logger instance
        stage: Stage identifier (e.g., Stage.CACHE_READ, "R_RETRY_LOGIC")
        message: Log message
        level: Log level (debug, info, warning, error, critical)
        **kwargs: Additional fields to log

    Usage:
        log_stage(logger, Stage.CACHE_READ, "Cache hit", cache_key="user:42")
    """
    log_func = getattr(logger, level.lower())
    log_func(message, stage=str(stage), **kwargs)
