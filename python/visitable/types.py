"""Pydantic models for the visitable package.

This module provides the configuration and result models used by the
resolver, using Pydantic v2 for validation and serialization.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .config import (
    ERROR_MODE_ENV,
    UNKNOWN_SUFFIX_ENV,
    UNKNOWN_VISITED_SUFFIX,
)


class ErrorMode(str, Enum):
    """How the resolver reports configuration errors from visit()."""

    RAISE = "raise"
    """Log the error and raise it to the caller."""

    LOG = "log"
    """Log the error and return None, leaving the caller unaware."""


class OutcomeStatus(str, Enum):
    """What a single dispatch ended up doing."""

    HANDLED = "handled"
    """The primary handler was invoked."""

    FALLBACK = "fallback"
    """The unknown-visited handler was invoked."""

    UNHANDLED = "unhandled"
    """Neither handler exists on the visitor; nothing was invoked."""

    FAILED = "failed"
    """Resolution failed before any handler could be invoked."""


class VisitableConfig(BaseModel):
    """Configuration for a DispatchResolver.

    Example:
        >>> config = VisitableConfig(error_mode="log")
        >>> resolver = DispatchResolver(config)
    """

    error_mode: ErrorMode = Field(
        default=ErrorMode.RAISE,
        description="Whether visit() raises or only logs configuration errors.",
    )
    unknown_suffix: str = Field(
        default=UNKNOWN_VISITED_SUFFIX,
        min_length=1,
        description="Suffix appended to the effective prefix to name the fallback handler.",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_env(cls) -> VisitableConfig:
        """Build a configuration from environment variables.

        Unset variables fall back to the model defaults.

        Returns:
            The configuration.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        data: dict[str, Any] = {}
        error_mode = os.environ.get(ERROR_MODE_ENV)
        if error_mode:
            data["error_mode"] = error_mode.strip().lower()
        unknown_suffix = os.environ.get(UNKNOWN_SUFFIX_ENV)
        if unknown_suffix:
            data["unknown_suffix"] = unknown_suffix
        return cls.model_validate(data)


class DispatchOutcome(BaseModel):
    """Structured result of one dispatch.

    Returned by DispatchResolver.dispatch() so that callers can tell a
    handled call from an unhandled one, and observe configuration errors
    without catching exceptions.

    Example:
        >>> outcome = dispatch(operator, visitor, "acceptOperator")
        >>> if outcome.status is OutcomeStatus.FAILED:
        ...     print(outcome.error["message"])
        >>> else:
        ...     print(outcome.handler_name, outcome.result)
    """

    status: OutcomeStatus = Field(description="What the dispatch did.")
    handler_name: str | None = Field(
        default=None,
        description="Name of the handler that was invoked, if any.",
    )
    result: Any = Field(
        default=None,
        description="Return value of the invoked handler.",
    )
    error: dict[str, Any] | None = Field(
        default=None,
        description="Serialized VisitableError when status is FAILED.",
    )

    @property
    def invoked(self) -> bool:
        """True if a handler ran."""
        return self.status in (OutcomeStatus.HANDLED, OutcomeStatus.FALLBACK)

    @classmethod
    def handled(cls, handler_name: str, result: Any) -> DispatchOutcome:
        return cls(status=OutcomeStatus.HANDLED, handler_name=handler_name, result=result)

    @classmethod
    def fallback(cls, handler_name: str, result: Any) -> DispatchOutcome:
        return cls(status=OutcomeStatus.FALLBACK, handler_name=handler_name, result=result)

    @classmethod
    def unhandled(cls) -> DispatchOutcome:
        return cls(status=OutcomeStatus.UNHANDLED)

    @classmethod
    def failed(cls, error: dict[str, Any]) -> DispatchOutcome:
        return cls(status=OutcomeStatus.FAILED, error=error)


class LogContext(BaseModel):
    """Context fields for structured logging.

    Example:
        >>> context = LogContext(
        ...     visited_type="Operator",
        ...     prefix="acceptOperator",
        ...     handler_name="acceptOperatorAdd"
        ... )
        >>> log_debug("Dispatch resolved", context)
    """

    visited_type: str | None = Field(
        default=None,
        description="Type name of the visited object.",
    )
    visitor_type: str | None = Field(
        default=None,
        description="Type name of the visitor object.",
    )
    prefix: str | None = Field(
        default=None,
        description="Effective handler-name prefix.",
    )
    discriminant: str | None = Field(
        default=None,
        description="Derived discriminant.",
    )
    handler_name: str | None = Field(
        default=None,
        description="Handler name looked up on the visitor.",
    )
    error_type: str | None = Field(
        default=None,
        description="Error class name, when logging a failure.",
    )


__all__ = [
    "ErrorMode",
    "OutcomeStatus",
    "VisitableConfig",
    "DispatchOutcome",
    "LogContext",
]
