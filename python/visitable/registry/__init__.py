r"""Visitor-side handler hosts.

This package provides the CallableHost implementations the resolver
dispatches to.

Built-in Hosts:
- HandlerTable: explicit discriminant -> handler mapping under one prefix
- HandlerRegistry: several HandlerTables, one per dispatch purpose
- ReflectiveHost: methods of a plain object, looked up by name

Declarative Tables:
Handler tables can be declared in YAML and loaded with
load_handler_registry():

    from visitable.registry import load_handler_registry

    registry = load_handler_registry("config/handlers.yaml")
"""

from __future__ import annotations

from .discovery import build_handler_registry, import_callable, load_handler_registry
from .handler_name import HandlerName
from .handler_registry import HandlerRegistry
from .handler_table import Handler, HandlerTable
from .reflective_host import ReflectiveHost

__all__ = [
    # Core types
    "Handler",
    "HandlerName",
    # Hosts
    "HandlerTable",
    "HandlerRegistry",
    "ReflectiveHost",
    # Declarative tables
    "build_handler_registry",
    "import_callable",
    "load_handler_registry",
]
