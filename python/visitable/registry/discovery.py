"""YAML-declared handler tables.

Handler tables can be declared in a YAML file and loaded into a
HandlerRegistry, which keeps the mapping from discriminants to handler
functions in configuration rather than in code:

    tables:
      - prefix: acceptOperator
        handlers:
          Add: calculator.ops.handle_add
          Subtract: calculator.ops.handle_subtract
        unknown: calculator.ops.handle_unknown

Each handler is given as a dotted path "package.module.attribute" and is
resolved with importlib when the file is loaded.

Example:
    >>> registry = load_handler_registry(Path("config/handlers.yaml"))
    >>> visit(Operator("add"), registry, "acceptOperator")
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import yaml

from ..config import unknown_suffix_from_env
from ..exceptions import HandlerTableLoadError
from ..logging import log_debug, log_info
from .handler_registry import HandlerRegistry
from .handler_table import Handler, HandlerTable


def load_handler_registry(
    path: str | Path,
    *,
    unknown_suffix: str | None = None,
) -> HandlerRegistry:
    """Load a HandlerRegistry from a YAML file.

    Args:
        path: Path to the YAML file.
        unknown_suffix: Suffix of the unknown-visited handler names.
            Defaults to the environment-configured suffix.

    Returns:
        Registry holding one table per declared prefix.

    Raises:
        HandlerTableLoadError: If the file cannot be read or parsed, or a
            handler path cannot be resolved.
    """
    path = Path(path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise HandlerTableLoadError(
            f"Failed to read handler tables from {path}: {e}",
            metadata={"path": str(path)},
        ) from e

    registry = build_handler_registry(data, unknown_suffix=unknown_suffix)
    log_info(
        f"Loaded {len(registry)} handler tables from {path}",
        {"path": str(path), "handlers": len(registry.registered_callables())},
    )
    return registry


def build_handler_registry(
    data: Any,
    *,
    unknown_suffix: str | None = None,
) -> HandlerRegistry:
    """Build a HandlerRegistry from parsed YAML data.

    Args:
        data: Parsed document, a mapping with a "tables" list.
        unknown_suffix: Suffix of the unknown-visited handler names.
            Defaults to the environment-configured suffix.

    Returns:
        The populated registry.

    Raises:
        HandlerTableLoadError: If the document is malformed or a handler
            path cannot be resolved.
    """
    if not isinstance(data, dict) or not isinstance(data.get("tables"), list):
        raise HandlerTableLoadError("Handler table document must be a mapping with a 'tables' list")

    if unknown_suffix is None:
        unknown_suffix = unknown_suffix_from_env()
    registry = HandlerRegistry(unknown_suffix=unknown_suffix)
    for index, entry in enumerate(data["tables"]):
        registry.add_table(_build_table(index, entry, unknown_suffix))
    return registry


def import_callable(dotted_path: str) -> Handler:
    """Import a callable from a "module.attribute" path.

    Args:
        dotted_path: Full path (e.g., "calculator.ops.handle_add").

    Returns:
        The callable.

    Raises:
        HandlerTableLoadError: If the module or attribute is missing or
            the attribute is not callable.
    """
    if not isinstance(dotted_path, str) or "." not in dotted_path:
        raise HandlerTableLoadError(
            f"Handler path must look like 'module.attribute', got {dotted_path!r}",
            metadata={"handler_path": str(dotted_path)},
        )

    module_path, attribute = dotted_path.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise HandlerTableLoadError(
            f"Cannot import module '{module_path}' for handler '{dotted_path}': {e}",
            metadata={"handler_path": dotted_path},
        ) from e

    handler = getattr(module, attribute, None)
    if handler is None:
        raise HandlerTableLoadError(
            f"Module '{module_path}' has no attribute '{attribute}'",
            metadata={"handler_path": dotted_path},
        )
    if not callable(handler):
        raise HandlerTableLoadError(
            f"Handler '{dotted_path}' is not callable",
            metadata={"handler_path": dotted_path},
        )

    log_debug(f"Resolved handler path {dotted_path}")
    return handler


def _build_table(index: int, entry: Any, unknown_suffix: str) -> HandlerTable:
    if not isinstance(entry, dict):
        raise HandlerTableLoadError(f"tables[{index}] must be a mapping")

    prefix = entry.get("prefix")
    if not isinstance(prefix, str) or not prefix:
        raise HandlerTableLoadError(f"tables[{index}].prefix must be a non-empty string")

    handlers = entry.get("handlers") or {}
    if not isinstance(handlers, dict):
        raise HandlerTableLoadError(f"tables[{index}].handlers must be a mapping")

    table = HandlerTable(prefix, unknown_suffix=unknown_suffix)
    for discriminant, dotted_path in handlers.items():
        table.register(str(discriminant), import_callable(dotted_path))

    unknown = entry.get("unknown")
    if unknown is not None:
        table.register_unknown(import_callable(unknown))

    return table
