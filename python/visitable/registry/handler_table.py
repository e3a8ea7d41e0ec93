"""Explicit handler table for one dispatch purpose.

A HandlerTable maps discriminants to handler callables under a single
prefix, instead of relying on methods whose names are built by string
concatenation. Two purposes that visit the same objects use two tables
with different prefixes, so their handlers never collide.

Example:
    >>> render = HandlerTable("render")
    >>> render.register("Add", lambda op, ctx: "+")
    >>> render.register_unknown(lambda op, ctx: "?")
    >>>
    >>> visit(Operator("add"), render, "render")
    '+'
    >>> visit(Operator("divide"), render, "render")
    '?'
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from ..config import DEFAULT_ACCEPT_PREFIX, unknown_suffix_from_env
from ..logging import log_debug, log_info, log_warn

Handler = Callable[[Any, Any], Any]


class HandlerTable:
    """Registry of handlers keyed by discriminant under one prefix.

    Implements the CallableHost protocol: a handler registered for
    discriminant "Add" on a table with prefix "accept" answers to the
    handler name "acceptAdd". The unknown-visited handler answers to
    prefix + unknown_suffix ("UnknownVisited" unless configured).

    Thread-safe for concurrent registration and resolution.

    Attributes:
        prefix: Prefix shared by every handler name in the table.
        unknown_suffix: Suffix naming the unknown-visited handler.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_ACCEPT_PREFIX,
        *,
        unknown_suffix: str | None = None,
    ) -> None:
        """Initialize an empty table.

        Args:
            prefix: Prefix of the handler names this table answers to.
            unknown_suffix: Suffix of the unknown-visited handler name.
                Defaults to VISITABLE_UNKNOWN_SUFFIX, else "UnknownVisited",
                the same suffix a resolver built from the environment uses.

        Raises:
            ValueError: If prefix or unknown_suffix is empty.
        """
        if not prefix:
            raise ValueError("HandlerTable prefix must be a non-empty string")
        if unknown_suffix is None:
            unknown_suffix = unknown_suffix_from_env()
        if not unknown_suffix:
            raise ValueError("HandlerTable unknown_suffix must be a non-empty string")
        self._prefix = prefix
        self._unknown_suffix = unknown_suffix
        self._handlers: dict[str, Handler] = {}
        self._lock = threading.RLock()

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def unknown_suffix(self) -> str:
        return self._unknown_suffix

    def register(self, discriminant: str, handler: Handler) -> HandlerTable:
        """Register a handler for a discriminant.

        Args:
            discriminant: Discriminant as produced by the resolver
                (e.g. "Add", not "add").
            handler: Callable taking (visited, context).

        Returns:
            Self for method chaining.

        Raises:
            ValueError: If discriminant is empty or handler is not callable.
        """
        if not discriminant:
            raise ValueError("discriminant must be a non-empty string")
        if not callable(handler):
            raise ValueError(f"handler must be callable, got {handler!r}")

        with self._lock:
            if discriminant in self._handlers:
                log_warn(
                    f"HandlerTable: Overwriting handler {self._prefix}{discriminant}",
                    {"prefix": self._prefix, "discriminant": discriminant},
                )
            self._handlers[discriminant] = handler
        log_info(
            f"HandlerTable: Registered {self._prefix}{discriminant}",
            {"prefix": self._prefix, "discriminant": discriminant},
        )
        return self

    def register_unknown(self, handler: Handler) -> HandlerTable:
        """Register the handler invoked when no discriminant matches.

        Args:
            handler: Callable taking (visited, context).

        Returns:
            Self for method chaining.
        """
        return self.register(self._unknown_suffix, handler)

    def on(self, discriminant: str) -> Callable[[Handler], Handler]:
        """Decorator form of register().

        Example:
            >>> table = HandlerTable("accept")
            >>> @table.on("Add")
            ... def accept_add(op, context):
            ...     return op.left + op.right
        """

        def decorator(handler: Handler) -> Handler:
            self.register(discriminant, handler)
            return handler

        return decorator

    def unregister(self, discriminant: str) -> bool:
        """Remove the handler for a discriminant.

        Args:
            discriminant: Discriminant to remove.

        Returns:
            True if a handler was removed, False if none was registered.
        """
        with self._lock:
            if discriminant in self._handlers:
                del self._handlers[discriminant]
                log_debug(f"HandlerTable: Unregistered {self._prefix}{discriminant}")
                return True
            return False

    def get(self, discriminant: str) -> Handler | None:
        """Get the handler registered for a discriminant, or None."""
        return self._handlers.get(discriminant)

    def has_callable(self, name: str) -> bool:
        """Check whether the table answers to a full handler name.

        Args:
            name: Full handler name, prefix included.

        Returns:
            True if a handler is registered under that name.
        """
        return self._lookup(name) is not None

    def invoke_callable(self, name: str, visited: Any, context: Any) -> Any:
        """Invoke the handler registered under a full handler name.

        Args:
            name: Full handler name, prefix included.
            visited: The visited object.
            context: Context forwarded unchanged.

        Returns:
            The handler's return value.

        Raises:
            KeyError: If no handler answers to the name.
        """
        handler = self._lookup(name)
        if handler is None:
            raise KeyError(name)
        return handler(visited, context)

    def registered_callables(self) -> list[str]:
        """Return the full handler names this table answers to.

        Returns:
            List of handler names, prefix included.
        """
        with self._lock:
            return [self._prefix + discriminant for discriminant in self._handlers]

    def __contains__(self, discriminant: object) -> bool:
        return discriminant in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"HandlerTable(prefix={self._prefix!r}, handlers={sorted(self._handlers)!r})"

    def _lookup(self, name: str) -> Handler | None:
        if not name.startswith(self._prefix):
            return None
        return self._handlers.get(name[len(self._prefix) :])
