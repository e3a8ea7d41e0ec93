"""Reflective adapter for plain visitor objects.

This module provides the ReflectiveHost class that lets any object act
as a CallableHost: a handler name resolves to the object's method of
the same name.

Example:
    >>> class Calculator:
    ...     def acceptAdd(self, op, context):
    ...         return op.left + op.right
    ...
    >>> host = ReflectiveHost(Calculator())
    >>> host.has_callable("acceptAdd")
    True
    >>> host.has_callable("acceptSubtract")
    False
"""

from __future__ import annotations

from typing import Any


class ReflectiveHost:
    """CallableHost backed by attribute lookup on a wrapped object.

    A name is considered exposed when the wrapped object has an attribute
    of that name and the attribute is callable at lookup time.
    """

    def __init__(self, target: Any) -> None:
        """Initialize the adapter.

        Args:
            target: The visitor object to wrap.
        """
        self._target = target

    def has_callable(self, name: str) -> bool:
        """Check whether the wrapped object exposes a callable member.

        Args:
            name: Member name.

        Returns:
            True if the member exists and is callable.
        """
        return callable(getattr(self._target, name, None))

    def invoke_callable(self, name: str, visited: Any, context: Any) -> Any:
        """Invoke a member of the wrapped object with (visited, context).

        Args:
            name: Member name.
            visited: The visited object.
            context: Context forwarded unchanged.

        Returns:
            The member's return value.

        Raises:
            AttributeError: If the member does not exist.
        """
        method = getattr(self._target, name)
        return method(visited, context)

    def unwrap(self) -> Any:
        """Get the original unwrapped visitor.

        Returns:
            The wrapped visitor instance.
        """
        return self._target

    def __repr__(self) -> str:
        return f"ReflectiveHost({self._target.__class__.__name__})"
