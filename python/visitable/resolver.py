"""Dispatch Resolver - double dispatch from visited object to visitor.

The DispatchResolver computes the name of the handler a visitor should
expose for a visited object and invokes it with (visited, context).

Resolution Contract:
1. The visitor must be able to receive dispatch (CallableHost, or a
   plain object whose methods are probed through ReflectiveHost)
2. Effective prefix = per-call override, else the visited visit_prefix
3. Discriminant = value of the visit_key property with its first
   character upper-cased, else the visited simple type name
4. Primary handler name = prefix + discriminant
5. Invoke the primary handler if exposed, else the fallback
   prefix + "UnknownVisited", else return None

Trailing Arguments:
    visit(visited, visitor)                          # default prefix
    visit(visited, visitor, "acceptOperator")        # prefix override
    visit(visited, visitor, {"apply": True})         # context
    visit(visited, visitor, "acceptOperator", {...}) # both

Usage:
    # Module-level functions use a resolver configured from environment
    result = visit(operator, calculator)

    # Or hold a resolver with explicit configuration
    resolver = DispatchResolver(VisitableConfig(error_mode="log"))
    outcome = resolver.dispatch(operator, calculator, "acceptOperator")
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .config import DEFAULT_ACCEPT_PREFIX
from .exceptions import (
    DiscriminantResolutionError,
    InvalidArgumentError,
    InvalidVisitorError,
    VisitableError,
)
from .logging import log_debug, log_error, log_trace
from .protocols import CallableHost, PropertyReadable, TypeIdentifiable
from .registry.handler_name import HandlerName
from .registry.reflective_host import ReflectiveHost
from .types import DispatchOutcome, ErrorMode, LogContext, VisitableConfig

# Values that can never hold handler methods
_SCALAR_TYPES = (bool, int, float, complex, str, bytes, bytearray)

# A discriminant value must start with a word character
_DISCRIMINANT_PATTERN = re.compile(r"^\w", re.ASCII)


def parse_visit_args(args: tuple[Any, ...]) -> tuple[str | None, Any]:
    """Split the trailing visit arguments into prefix override and context.

    Args:
        args: The arguments following (visited, visitor).

    Returns:
        Tuple of (prefix override or None, context or None).

    Raises:
        InvalidArgumentError: If the arguments match none of the accepted
            shapes: (), (prefix,), (context,), (prefix, context).

    Example:
        >>> parse_visit_args(("acceptOperator",))
        ('acceptOperator', None)
        >>> parse_visit_args(({"x": 1},))
        (None, {'x': 1})
    """
    if len(args) == 0:
        return None, None

    if len(args) == 1:
        arg = args[0]
        if isinstance(arg, str):
            return arg, None
        if isinstance(arg, Mapping):
            return None, arg
        raise InvalidArgumentError(
            f"accept prefix is of an invalid type: {type(arg).__name__}",
            metadata={"argument_type": type(arg).__name__},
        )

    if len(args) == 2:
        prefix, context = args
        if not isinstance(prefix, str):
            raise InvalidArgumentError(
                f"accept prefix is of an invalid type: {type(prefix).__name__}",
                metadata={"argument_type": type(prefix).__name__},
            )
        if not isinstance(context, Mapping):
            raise InvalidArgumentError(
                f"context is of an invalid type: {type(context).__name__}",
                metadata={"argument_type": type(context).__name__},
            )
        return prefix, context

    raise InvalidArgumentError(
        f"Too many arguments supplied to visit: expected at most 2, got {len(args)}",
        metadata={"argument_count": len(args)},
    )


def capitalize_first(value: str) -> str:
    """Upper-case the first character and keep the rest verbatim.

    Example:
        >>> capitalize_first("aBC")
        'ABC'
        >>> capitalize_first("subtract")
        'Subtract'
    """
    return value[:1].upper() + value[1:]


def simple_type_name(obj: Any) -> str | None:
    """Return the trailing component of an object's type identifier.

    Objects implementing TypeIdentifiable name themselves; any other
    object is named by its class __qualname__. Only the part after the
    last "." is kept, so nested classes yield their own name.

    Returns:
        The simple type name, or None if none can be determined.

    Example:
        >>> class Outer:
        ...     class Inner:
        ...         pass
        >>> simple_type_name(Outer.Inner())
        'Inner'
    """
    if isinstance(obj, TypeIdentifiable) and not isinstance(obj, type):
        identifier = obj.simple_type_name()
    else:
        identifier = type(obj).__qualname__

    if not isinstance(identifier, str):
        return None
    name = identifier.rsplit(".", 1)[-1]
    return name or None


def read_property(obj: Any, name: str) -> Any | None:
    """Read a named property off a visited object.

    Uses get_property() for PropertyReadable objects, item lookup for
    mappings, and attribute lookup otherwise.
    """
    if isinstance(obj, PropertyReadable) and not isinstance(obj, type):
        return obj.get_property(name)
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def as_callable_host(visitor: Any) -> CallableHost:
    """Adapt a visitor to the CallableHost protocol.

    Args:
        visitor: A CallableHost, or a plain object whose methods act as
            handlers.

    Returns:
        The visitor itself, or a ReflectiveHost wrapping it.

    Raises:
        InvalidVisitorError: If the visitor is None or a scalar value.
    """
    if visitor is None or isinstance(visitor, _SCALAR_TYPES):
        raise InvalidVisitorError(
            f"can not accept visitor, visitor must be an object exposing handlers: {visitor!r}",
            metadata={"visitor_type": type(visitor).__name__},
        )
    if isinstance(visitor, CallableHost) and not isinstance(visitor, type):
        return visitor
    return ReflectiveHost(visitor)


class DispatchResolver:
    """Resolves and invokes visitor handlers for visited objects.

    The resolver holds only immutable configuration, so one instance can
    be shared across threads.

    Attributes:
        config: The resolver configuration.
    """

    def __init__(self, config: VisitableConfig | None = None) -> None:
        """Initialize the resolver.

        Args:
            config: Configuration; defaults to VisitableConfig().
        """
        self._config = config or VisitableConfig()

    @classmethod
    def default(cls) -> DispatchResolver:
        """Create a resolver configured from environment variables.

        Returns:
            Resolver using VisitableConfig.from_env().
        """
        return cls(VisitableConfig.from_env())

    @property
    def config(self) -> VisitableConfig:
        return self._config

    def derive_discriminant(self, visited: Any) -> str:
        """Derive the discriminant of a visited object.

        Args:
            visited: The visited object.

        Returns:
            The discriminant (e.g. "Add" for value "add", or "Circle").

        Raises:
            DiscriminantResolutionError: If the visit_key property holds no
                usable value, or no type name can be determined.
        """
        visit_key = getattr(visited, "visit_key", None)
        if visit_key is None:
            name = simple_type_name(visited)
            if not name:
                raise DiscriminantResolutionError(
                    f"unable to find a type name for {visited!r}",
                    metadata={"visited_type": type(visited).__name__},
                )
            return name

        metadata = {"visited_type": type(visited).__name__, "visit_key": str(visit_key)}
        if not isinstance(visit_key, str) or not visit_key:
            raise DiscriminantResolutionError(
                f"visit_key must be a non-empty string, got {visit_key!r}",
                metadata=metadata,
            )

        value = read_property(visited, visit_key)
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(value, str) or not _DISCRIMINANT_PATTERN.match(value):
            raise DiscriminantResolutionError(
                f"unable to generate name from visit key's value: {value!r}",
                metadata=metadata,
            )
        return capitalize_first(value)

    def resolve_handler_name(self, visited: Any, prefix: str | None = None) -> HandlerName:
        """Compute the primary and fallback handler names without invoking.

        Args:
            visited: The visited object.
            prefix: Optional per-call prefix override.

        Returns:
            The handler names.

        Raises:
            DiscriminantResolutionError: If no discriminant can be derived.
            HandlerNameConstructionError: If prefix or discriminant is empty.
        """
        if prefix is None:
            prefix = getattr(visited, "visit_prefix", DEFAULT_ACCEPT_PREFIX)
        discriminant = self.derive_discriminant(visited)
        return HandlerName(
            prefix=prefix,
            discriminant=discriminant,
            unknown_suffix=self._config.unknown_suffix,
        )

    def visit(self, visited: Any, visitor: Any, *args: Any) -> Any:
        """Dispatch a visited object to the matching visitor handler.

        Args:
            visited: The visited object.
            visitor: The visitor (CallableHost or plain object).
            *args: Optional prefix string and/or context mapping.

        Returns:
            The invoked handler's return value, or None if the visitor
            exposes neither the primary nor the fallback handler.

        Raises:
            VisitableError: On misconfiguration, when the error mode is
                ErrorMode.RAISE. In ErrorMode.LOG the error is only logged.
        """
        try:
            host, handler_name, context = self._prepare(visited, visitor, args)
        except VisitableError as e:
            self._report(e, visited, visitor)
            if self._config.error_mode is ErrorMode.RAISE:
                raise
            return None

        return self._invoke(host, handler_name, visited, context).result

    def dispatch(self, visited: Any, visitor: Any, *args: Any) -> DispatchOutcome:
        """Dispatch like visit(), returning a structured outcome.

        Configuration errors are reported in the outcome instead of being
        raised. Errors raised by the handler itself still propagate.

        Args:
            visited: The visited object.
            visitor: The visitor (CallableHost or plain object).
            *args: Optional prefix string and/or context mapping.

        Returns:
            DispatchOutcome describing what happened.
        """
        try:
            host, handler_name, context = self._prepare(visited, visitor, args)
        except VisitableError as e:
            self._report(e, visited, visitor)
            return DispatchOutcome.failed(e.to_dict())

        return self._invoke(host, handler_name, visited, context)

    def _prepare(
        self,
        visited: Any,
        visitor: Any,
        args: tuple[Any, ...],
    ) -> tuple[CallableHost, HandlerName, Any]:
        host = as_callable_host(visitor)
        prefix, context = parse_visit_args(args)
        log_trace(
            "DispatchResolver: Parsed visit arguments",
            {"prefix_override": prefix, "has_context": context is not None},
        )
        handler_name = self.resolve_handler_name(visited, prefix)
        return host, handler_name, context

    def _invoke(
        self,
        host: CallableHost,
        handler_name: HandlerName,
        visited: Any,
        context: Any,
    ) -> DispatchOutcome:
        if host.has_callable(handler_name.primary):
            log_debug(
                f"DispatchResolver: Invoking {handler_name.primary}",
                self._log_context(visited, host, handler_name),
            )
            result = host.invoke_callable(handler_name.primary, visited, context)
            return DispatchOutcome.handled(handler_name.primary, result)

        if host.has_callable(handler_name.fallback):
            log_debug(
                f"DispatchResolver: No {handler_name.primary}, invoking {handler_name.fallback}",
                self._log_context(visited, host, handler_name),
            )
            result = host.invoke_callable(handler_name.fallback, visited, context)
            return DispatchOutcome.fallback(handler_name.fallback, result)

        log_debug(
            f"DispatchResolver: Visitor exposes neither {handler_name.primary} "
            f"nor {handler_name.fallback}",
            self._log_context(visited, host, handler_name),
        )
        return DispatchOutcome.unhandled()

    def _report(self, error: VisitableError, visited: Any, visitor: Any) -> None:
        log_error(
            f"DispatchResolver: {error.message}",
            LogContext(
                visited_type=type(visited).__name__,
                visitor_type=type(visitor).__name__,
                error_type=type(error).__name__,
            ),
        )

    def _log_context(
        self,
        visited: Any,
        host: CallableHost,
        handler_name: HandlerName,
    ) -> LogContext:
        target = host.unwrap() if isinstance(host, ReflectiveHost) else host
        return LogContext(
            visited_type=type(visited).__name__,
            visitor_type=type(target).__name__,
            prefix=handler_name.prefix,
            discriminant=handler_name.discriminant,
            handler_name=handler_name.primary,
        )


_default_resolver: DispatchResolver | None = None


def get_default_resolver() -> DispatchResolver:
    """Get the shared resolver used by the module-level functions.

    Created from environment variables on first access.
    """
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = DispatchResolver.default()
    return _default_resolver


def reset_default_resolver() -> None:
    """Drop the shared resolver so the next call re-reads the environment.

    This is primarily for testing.
    """
    global _default_resolver
    _default_resolver = None


def visit(visited: Any, visitor: Any, *args: Any) -> Any:
    """Dispatch with the default resolver. See DispatchResolver.visit()."""
    return get_default_resolver().visit(visited, visitor, *args)


def dispatch(visited: Any, visitor: Any, *args: Any) -> DispatchOutcome:
    """Dispatch with the default resolver. See DispatchResolver.dispatch()."""
    return get_default_resolver().dispatch(visited, visitor, *args)


def resolve_handler_name(visited: Any, prefix: str | None = None) -> HandlerName:
    """Handler names for a visited object. See DispatchResolver.resolve_handler_name()."""
    return get_default_resolver().resolve_handler_name(visited, prefix)


__all__ = [
    "DispatchResolver",
    "as_callable_host",
    "capitalize_first",
    "dispatch",
    "get_default_resolver",
    "parse_visit_args",
    "read_property",
    "reset_default_resolver",
    "resolve_handler_name",
    "simple_type_name",
    "visit",
]
