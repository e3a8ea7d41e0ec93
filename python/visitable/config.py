"""Defaults and environment configuration for the resolver.

Environment variables:
- VISITABLE_ERROR_MODE: ``raise`` (default) or ``log``
- VISITABLE_UNKNOWN_SUFFIX: suffix of the fallback handler name
"""

from __future__ import annotations

import os

DEFAULT_ACCEPT_PREFIX = "accept"
UNKNOWN_VISITED_SUFFIX = "UnknownVisited"

ERROR_MODE_ENV = "VISITABLE_ERROR_MODE"
UNKNOWN_SUFFIX_ENV = "VISITABLE_UNKNOWN_SUFFIX"


def unknown_suffix_from_env() -> str:
    """Get the fallback handler suffix, honouring VISITABLE_UNKNOWN_SUFFIX.

    Returns:
        The environment value when set and non-empty, else UnknownVisited.
    """
    return os.environ.get(UNKNOWN_SUFFIX_ENV) or UNKNOWN_VISITED_SUFFIX


__all__ = [
    "DEFAULT_ACCEPT_PREFIX",
    "UNKNOWN_VISITED_SUFFIX",
    "ERROR_MODE_ENV",
    "UNKNOWN_SUFFIX_ENV",
    "unknown_suffix_from_env",
]
