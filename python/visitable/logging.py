"""Structured logging for the visitable package.

This module provides structured logging functions that attach a flat
dictionary of string fields to every record, so resolution decisions can
be correlated and filtered regardless of the handler configuration of the
host application.

Records are emitted on the ``visitable`` logger. Applications configure
handlers and levels with the standard ``logging`` machinery; the fields
are available on each record as ``record.fields``.

Example:
    >>> from visitable import log_info, log_error
    >>>
    >>> log_info("Dispatch resolved", {
    ...     "visited_type": "Operator",
    ...     "handler_name": "acceptAdd"
    ... })
    >>>
    >>> try:
    ...     visit(operator, visitor)
    ... except VisitableError as e:
    ...     log_error(f"Dispatch failed: {e}", {
    ...         "error_type": type(e).__name__
    ...     })
"""

from __future__ import annotations

import logging as _stdlib_logging
from typing import Any

from .types import LogContext

TRACE = 5
_stdlib_logging.addLevelName(TRACE, "TRACE")

LOGGER_NAME = "visitable"

_logger = _stdlib_logging.getLogger(LOGGER_NAME)


def log_error(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an ERROR level message with structured fields.

    Use this for misconfiguration that aborts a dispatch.

    Args:
        message: The log message.
        fields: Optional structured fields for context. Can be a dict
                or a LogContext instance.

    Example:
        >>> log_error("Unable to derive discriminant", {
        ...     "visited_type": "Operator",
        ...     "visit_key": "value"
        ... })
    """
    _emit(_stdlib_logging.ERROR, message, fields)


def log_warn(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a WARN level message with structured fields.

    Use this for suspicious but recoverable situations, such as a
    handler registration overwriting an existing one.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(_stdlib_logging.WARNING, message, fields)


def log_info(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log an INFO level message with structured fields.

    Use this for registry lifecycle events.

    Args:
        message: The log message.
        fields: Optional structured fields for context.

    Example:
        >>> log_info("Registered handler", {
        ...     "prefix": "acceptOperator",
        ...     "discriminant": "Add"
        ... })
    """
    _emit(_stdlib_logging.INFO, message, fields)


def log_debug(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a DEBUG level message with structured fields.

    Use this for per-call resolution details.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(_stdlib_logging.DEBUG, message, fields)


def log_trace(message: str, fields: dict[str, Any] | LogContext | None = None) -> None:
    """Log a TRACE level message with structured fields.

    Use this for very verbose logging, like argument parsing.
    This level is typically disabled in production.

    Args:
        message: The log message.
        fields: Optional structured fields for context.
    """
    _emit(TRACE, message, fields)


def _emit(
    level: int,
    message: str,
    fields: dict[str, Any] | LogContext | None,
) -> None:
    if not _logger.isEnabledFor(level):
        return
    fields_dict = _normalize_fields(fields)
    _logger.log(level, message, extra={"fields": fields_dict or {}})


def _normalize_fields(
    fields: dict[str, Any] | LogContext | None,
) -> dict[str, str] | None:
    """Normalize fields to a dict of strings.

    Args:
        fields: Input fields as dict, LogContext, or None.

    Returns:
        Dict with string values, or None if no fields.
    """
    if fields is None:
        return None

    if isinstance(fields, LogContext):
        # Convert LogContext to dict, excluding None values
        return {k: str(v) for k, v in fields.model_dump().items() if v is not None}

    # Convert all values to strings
    return {k: str(v) for k, v in fields.items()}


__all__ = [
    "TRACE",
    "LOGGER_NAME",
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]
