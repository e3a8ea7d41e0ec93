"""Handler Registry - handler tables for several dispatch purposes.

The HandlerRegistry groups HandlerTables keyed by prefix, so one visitor
object can serve several purposes (rendering, evaluation, validation ...)
over the same visited objects without handler names clobbering each
other.

Lookup Contract:
1. Tables are tried longest prefix first, so "acceptOperatorAdd" is
   answered by the "acceptOperator" table before the "accept" table.
2. The first table that answers to the name wins.
3. A name no table answers to is reported as missing, never an error.

Usage:
    registry = HandlerRegistry()
    registry.table("render").register("Add", render_add)
    registry.table("evaluate").register("Add", evaluate_add)

    visit(add, registry, "render")    # render_add(add, None)
    visit(add, registry, "evaluate")  # evaluate_add(add, None)
"""

from __future__ import annotations

import threading
from typing import Any

from ..logging import log_debug, log_warn
from .handler_table import Handler, HandlerTable


class HandlerRegistry:
    """Prefix-keyed collection of handler tables.

    Implements the CallableHost protocol by delegating to its tables.
    Writers hold the lock and publish a new tuple of tables; readers
    iterate whichever tuple is current without locking.

    Attributes:
        tables: Tables in lookup order (longest prefix first).
    """

    def __init__(self, *, unknown_suffix: str | None = None) -> None:
        """Initialize an empty registry.

        Args:
            unknown_suffix: Suffix used by tables created through table().
                Defaults to the environment-configured suffix.
        """
        self._unknown_suffix = unknown_suffix
        self._tables: tuple[HandlerTable, ...] = ()
        self._tables_by_prefix: dict[str, HandlerTable] = {}
        self._lock = threading.RLock()

    def table(self, prefix: str) -> HandlerTable:
        """Get the table for a prefix, creating it if needed.

        Args:
            prefix: Handler-name prefix of the table.

        Returns:
            The table registered under the prefix.
        """
        with self._lock:
            existing = self._tables_by_prefix.get(prefix)
            if existing is not None:
                return existing
            table = HandlerTable(prefix, unknown_suffix=self._unknown_suffix)
            self._insert(table)
            return table

    def add_table(self, table: HandlerTable) -> HandlerRegistry:
        """Add a prebuilt table, replacing any table with the same prefix.

        Args:
            table: Table to add.

        Returns:
            Self for method chaining.
        """
        with self._lock:
            if table.prefix in self._tables_by_prefix:
                log_warn(f"HandlerRegistry: Replacing table for prefix '{table.prefix}'")
                self._tables = tuple(t for t in self._tables if t.prefix != table.prefix)
            self._insert(table)
        return self

    def remove_table(self, prefix: str) -> HandlerTable | None:
        """Remove a table by prefix.

        Args:
            prefix: Prefix of the table to remove.

        Returns:
            Removed table or None if not found.
        """
        with self._lock:
            table = self._tables_by_prefix.pop(prefix, None)
            if table is not None:
                self._tables = tuple(t for t in self._tables if t is not table)
            return table

    def get_table(self, prefix: str) -> HandlerTable | None:
        return self._tables_by_prefix.get(prefix)

    def register(self, prefix: str, discriminant: str, handler: Handler) -> HandlerRegistry:
        """Register a handler (convenience for table(prefix).register()).

        Args:
            prefix: Handler-name prefix.
            discriminant: Discriminant the handler answers to.
            handler: Callable taking (visited, context).

        Returns:
            Self for method chaining.
        """
        self.table(prefix).register(discriminant, handler)
        return self

    def has_callable(self, name: str) -> bool:
        return self._find_table(name) is not None

    def invoke_callable(self, name: str, visited: Any, context: Any) -> Any:
        """Invoke a handler by full name.

        Raises:
            KeyError: If no table answers to the name.
        """
        table = self._find_table(name)
        if table is None:
            raise KeyError(name)
        return table.invoke_callable(name, visited, context)

    def registered_callables(self) -> list[str]:
        """Get all handler names across all tables.

        Returns:
            List of full handler names.
        """
        callables: list[str] = []
        for table in self._tables:
            callables.extend(table.registered_callables())
        return callables

    @property
    def prefixes(self) -> list[str]:
        """Prefixes in lookup order."""
        return [t.prefix for t in self._tables]

    def registry_info(self) -> list[dict[str, Any]]:
        """Get registry info for debugging.

        Returns:
            List of table info dicts.
        """
        return [
            {
                "prefix": table.prefix,
                "handlers": len(table),
            }
            for table in self._tables
        ]

    def __len__(self) -> int:
        return len(self._tables)

    def _insert(self, table: HandlerTable) -> None:
        self._tables = tuple(sorted((*self._tables, table), key=lambda t: len(t.prefix), reverse=True))
        self._tables_by_prefix[table.prefix] = table
        log_debug(f"HandlerRegistry: Added table for prefix '{table.prefix}'")

    def _find_table(self, name: str) -> HandlerTable | None:
        for table in self._tables:
            if table.has_callable(name):
                return table
        return None
