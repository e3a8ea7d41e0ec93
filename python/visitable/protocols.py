"""Collaborator interfaces consumed by the resolver.

The resolver needs three capabilities from the surrounding object model:

- PropertyReadable: read a named property off the visited object
- TypeIdentifiable: obtain a simple type name for the visited object
- CallableHost: test for and invoke a named handler on the visitor

Visited objects usually get the first two by implementing the Visitable
trait. Visitors get CallableHost from a HandlerTable, a HandlerRegistry,
or implicitly through ReflectiveHost when they are plain objects.

Example:
    >>> class Operator(Visitable):
    ...     visit_key = "value"
    ...
    ...     def __init__(self, value):
    ...         self.value = value
    ...
    >>> Operator("add").visit(visitor)  # calls visitor.acceptAdd(op, None)
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable

from .config import DEFAULT_ACCEPT_PREFIX


@runtime_checkable
class PropertyReadable(Protocol):
    """Visited-side capability: read a named property."""

    def get_property(self, name: str) -> Any | None: ...


@runtime_checkable
class TypeIdentifiable(Protocol):
    """Visited-side capability: name the object's type."""

    def simple_type_name(self) -> str | None: ...


@runtime_checkable
class CallableHost(Protocol):
    """Visitor-side capability: look up and invoke named handlers."""

    def has_callable(self, name: str) -> bool: ...

    def invoke_callable(self, name: str, visited: Any, context: Any) -> Any: ...


class Visitable:
    """Trait for objects that accept visitors.

    Subclasses configure dispatch through class attributes:

    Class Attributes:
        visit_key: Name of a property whose value is the discriminant.
            None dispatches by type name (or visit_tag).
        visit_prefix: Default prefix of the handler name.
        visit_tag: Stable discriminant for tagged variants. When set it
            replaces the runtime class name.

    Example:
        >>> class Shape(Visitable):
        ...     visit_prefix = "draw"
        ...
        >>> class Circle(Shape):
        ...     pass
        ...
        >>> Circle().visit(renderer)  # renderer.drawCircle(circle, None)
    """

    visit_key: ClassVar[str | None] = None
    visit_prefix: ClassVar[str] = DEFAULT_ACCEPT_PREFIX
    visit_tag: ClassVar[str | None] = None

    def get_property(self, name: str) -> Any | None:
        return getattr(self, name, None)

    def simple_type_name(self) -> str | None:
        if self.visit_tag is not None:
            return self.visit_tag
        return type(self).__qualname__.rsplit(".", 1)[-1]

    def visit(self, visitor: Any, *args: Any) -> Any:
        """Dispatch this object to the visitor.

        Args:
            visitor: The object that wants to visit.
            *args: Optional prefix string and/or context mapping.

        Returns:
            Whatever the invoked handler returns, or None.
        """
        from .resolver import visit

        return visit(self, visitor, *args)


__all__ = [
    "PropertyReadable",
    "TypeIdentifiable",
    "CallableHost",
    "Visitable",
]
