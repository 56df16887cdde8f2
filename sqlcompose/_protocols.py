"""Statement protocol definitions.

Builders embed each other by reference (sub-selects, CTE members, union
members).  The embedding side depends only on these protocols, never on a
concrete class, so any object that renders text and exposes bindings can be
nested.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from ._types import WhereKind


@runtime_checkable
class Statement(Protocol):
    """Anything that renders to SQL text with a parallel binding map."""

    def render(self) -> str:
        """Return the SQL text.

        Every clause block is newline terminated, so the text of a non-empty
        statement always ends with a newline.
        """
        ...

    @property
    def bindings(self) -> dict[str, Any]:
        """Return the final label -> value map, children merged in."""
        ...


@runtime_checkable
class WhereClause(Protocol):
    """One predicate inside a WHERE section."""

    kind: WhereKind

    def render(self) -> str:
        ...

    @property
    def bindings(self) -> Mapping[str, Any]:
        ...
