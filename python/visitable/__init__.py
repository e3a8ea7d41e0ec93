"""
Visitable

This package implements double dispatch for Python objects: a visited
object derives the name of a handler from its type or from one of its
properties, and the resolver invokes that handler on a visitor.

Example:
    >>> import visitable
    >>> visitable.version()
    '0.1.0'

    >>> # Dispatch by type name
    >>> from visitable import Visitable, visit
    >>> class Shape(Visitable):
    ...     pass
    >>> class Circle(Shape):
    ...     pass
    >>> class Renderer:
    ...     def acceptCircle(self, shape, context):
    ...         return "circle"
    >>> visit(Circle(), Renderer())
    'circle'

    >>> # Dispatch by property value, with a prefix override and context
    >>> class Operator(Visitable):
    ...     visit_key = "value"
    ...     def __init__(self, value):
    ...         self.value = value
    >>> class Calculator:
    ...     def acceptOperatorAdd(self, op, context):
    ...         return context["x"] + 1
    >>> Operator("add").visit(Calculator(), "acceptOperator", {"x": 1})
    2

    >>> # Explicit handler tables instead of named methods
    >>> from visitable import HandlerTable
    >>> table = HandlerTable("accept").register("Add", lambda op, ctx: "+")
    >>> visit(Operator("add"), table)
    '+'
"""

from __future__ import annotations

from visitable.config import DEFAULT_ACCEPT_PREFIX, UNKNOWN_VISITED_SUFFIX
from visitable.exceptions import (
    DiscriminantResolutionError,
    HandlerNameConstructionError,
    HandlerTableLoadError,
    InvalidArgumentError,
    InvalidVisitorError,
    VisitableError,
)
from visitable.logging import (
    log_debug,
    log_error,
    log_info,
    log_trace,
    log_warn,
)
from visitable.protocols import (
    CallableHost,
    PropertyReadable,
    TypeIdentifiable,
    Visitable,
)
from visitable.registry import (
    HandlerName,
    HandlerRegistry,
    HandlerTable,
    ReflectiveHost,
    load_handler_registry,
)
from visitable.resolver import (
    DispatchResolver,
    capitalize_first,
    dispatch,
    parse_visit_args,
    resolve_handler_name,
    simple_type_name,
    visit,
)
from visitable.types import (
    DispatchOutcome,
    ErrorMode,
    LogContext,
    OutcomeStatus,
    VisitableConfig,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "version",
    # Defaults
    "DEFAULT_ACCEPT_PREFIX",
    "UNKNOWN_VISITED_SUFFIX",
    # Resolver
    "DispatchResolver",
    "visit",
    "dispatch",
    "resolve_handler_name",
    "parse_visit_args",
    "capitalize_first",
    "simple_type_name",
    # Protocols
    "Visitable",
    "PropertyReadable",
    "TypeIdentifiable",
    "CallableHost",
    # Handler hosts
    "HandlerName",
    "HandlerTable",
    "HandlerRegistry",
    "ReflectiveHost",
    "load_handler_registry",
    # Types
    "VisitableConfig",
    "DispatchOutcome",
    "OutcomeStatus",
    "ErrorMode",
    "LogContext",
    # Exceptions
    "VisitableError",
    "InvalidVisitorError",
    "InvalidArgumentError",
    "DiscriminantResolutionError",
    "HandlerNameConstructionError",
    "HandlerTableLoadError",
    # Logging
    "log_error",
    "log_warn",
    "log_info",
    "log_debug",
    "log_trace",
]


def version() -> str:
    """Return the package version.

    Returns:
        The version string (e.g., "0.1.0")
    """
    return __version__
