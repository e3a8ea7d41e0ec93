"""pytest configuration and fixtures for visitable tests.

This module provides shared fixtures for testing the resolver, including
a recording visitor and families of visited objects dispatched by type
name, by custom prefix, and by property value.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest

from tests.handlers.visited import Foo, Mah, Operator, RecordingVisitor
from visitable.config import ERROR_MODE_ENV, UNKNOWN_SUFFIX_ENV
from visitable.resolver import reset_default_resolver

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give every test a default resolver built from a clean environment."""
    monkeypatch.delenv(ERROR_MODE_ENV, raising=False)
    monkeypatch.delenv(UNKNOWN_SUFFIX_ENV, raising=False)
    reset_default_resolver()
    yield
    reset_default_resolver()


@pytest.fixture
def visitor() -> RecordingVisitor:
    """Provide a fresh recording visitor."""
    return RecordingVisitor()


@pytest.fixture
def foo() -> Foo:
    return Foo()


@pytest.fixture
def mah() -> Mah:
    return Mah()


@pytest.fixture
def add() -> Operator:
    return Operator("add")


@pytest.fixture
def subtract() -> Operator:
    return Operator("subtract")


@pytest.fixture
def multiply() -> Operator:
    return Operator("multiply")

