"""Custom exceptions for the visitable package.

This module provides the hierarchy of errors a dispatch can fail with.
Every error raised by the resolver itself is a VisitableError and is
raised before any handler runs. Errors raised by a handler are never
wrapped; they reach the caller unchanged.

Example:
    >>> from visitable import visit, VisitableError
    >>>
    >>> try:
    ...     visit(operator, visitor, 42)
    ... except VisitableError as e:
    ...     print(e.to_dict())
"""

from __future__ import annotations

from typing import Any


class VisitableError(Exception):
    """Base class for all visitable errors.

    All exceptions raised by the resolver inherit from this class,
    making it easy to catch every dispatch configuration failure.

    Attributes:
        message: Human-readable error message
        metadata: Additional error context (visited type, prefix, ...)
    """

    def __init__(
        self,
        message: str,
        *,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Error message
            metadata: Additional context
        """
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured outcomes and logging.

        Returns:
            Dictionary with error details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "metadata": self.metadata,
        }


class InvalidVisitorError(VisitableError):
    """Raised when the visitor cannot receive dispatch.

    The visitor is neither a CallableHost nor an object whose methods
    can be probed (None, numbers, strings and bytes are rejected).

    Example:
        >>> visit(operator, None)
        Traceback (most recent call last):
        InvalidVisitorError: ...
    """

    pass


class InvalidArgumentError(VisitableError):
    """Raised when the trailing visit arguments have the wrong shape.

    Valid shapes are: nothing, a prefix string, a context mapping, or a
    prefix string followed by a context mapping.

    Example:
        >>> visit(operator, visitor, 42)
        Traceback (most recent call last):
        InvalidArgumentError: ...
    """

    pass


class DiscriminantResolutionError(VisitableError):
    """Raised when no discriminant can be derived for the visited object.

    Common causes:
    - The property named by visit_key is missing, empty or not a string
    - The property value does not start with a word character
    - The visited object has no usable type name
    """

    pass


class HandlerNameConstructionError(VisitableError):
    """Raised when the effective prefix or discriminant is empty."""

    pass


class HandlerTableLoadError(VisitableError):
    """Raised when a declared handler table cannot be loaded.

    Example:
        >>> load_handler_registry("handlers.yaml")
        Traceback (most recent call last):
        HandlerTableLoadError: Cannot import module 'missing.module' ...
    """

    pass


__all__ = [
    "VisitableError",
    "InvalidVisitorError",
    "InvalidArgumentError",
    "DiscriminantResolutionError",
    "HandlerNameConstructionError",
    "HandlerTableLoadError",
]
