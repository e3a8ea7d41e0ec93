"""Handler name value type.

This module defines the HandlerName dataclass that carries the pieces a
handler name is built from: the effective prefix, the discriminant and
the unknown-visited suffix.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import UNKNOWN_VISITED_SUFFIX
from ..exceptions import HandlerNameConstructionError


@dataclass(frozen=True)
class HandlerName:
    """Primary and fallback handler names for one dispatch.

    Attributes:
        prefix: Effective prefix (per-call override or visited default).
        discriminant: Derived discriminant (e.g. "Add" or "Circle").
        unknown_suffix: Suffix naming the fallback handler.

    Example:
        >>> name = HandlerName(prefix="acceptOperator", discriminant="Add")
        >>> name.primary
        'acceptOperatorAdd'
        >>> name.fallback
        'acceptOperatorUnknownVisited'
    """

    prefix: str
    discriminant: str
    unknown_suffix: str = UNKNOWN_VISITED_SUFFIX

    def __post_init__(self) -> None:
        if not (
            isinstance(self.prefix, str)
            and isinstance(self.discriminant, str)
            and self.prefix
            and self.discriminant
        ):
            raise HandlerNameConstructionError(
                f"Unable to construct a handler name from prefix {self.prefix!r} "
                f"and discriminant {self.discriminant!r}",
                metadata={"prefix": self.prefix, "discriminant": self.discriminant},
            )

    @property
    def primary(self) -> str:
        """Handler name for the visited discriminant."""
        return self.prefix + self.discriminant

    @property
    def fallback(self) -> str:
        """Handler name invoked when the primary one is missing."""
        return self.prefix + self.unknown_suffix

    def __str__(self) -> str:
        return self.primary
