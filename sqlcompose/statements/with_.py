"""WITH (common table expression) composer.

Output shape::

    WITH RECURSIVE
    "tree"("id", "parentId") AS
    (
        <union>
    ),
    "recent" AS
    (
        <statement>
    )
    <suffix statement>

The recursive member is only emitted once both its alias and its union are
set, and only on dialects that support ``WITH RECURSIVE``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Self

from .._protocols import Statement
from ..quoting import Quoter
from ..stacks import Indenter
from .base import BaseStatement

logger = logging.getLogger(__name__)


def _cte_block(alias: str, statement: Statement, indenter: Indenter, fields: str = "") -> str:
    return f"{alias}{fields} AS\n(\n{indenter.indent_statement(statement, 1)})"


class RecursiveMember:
    """The self-referencing member of a ``WITH RECURSIVE`` query."""

    __slots__ = ("_alias", "_union", "_fields")

    def __init__(self) -> None:
        self._alias = ""
        self._union: Statement | None = None
        self._fields: list[str] = []

    @property
    def alias(self) -> str:
        return self._alias

    @property
    def union(self) -> Statement | None:
        return self._union

    def set_union(self, alias: str, union: Statement) -> RecursiveMember:
        self._alias = alias
        self._union = union
        return self

    def set_fields(self, fields: Sequence[str]) -> RecursiveMember:
        self._fields = list(fields)
        return self

    def is_ready(self) -> bool:
        return bool(self._alias) and self._union is not None

    def render(self, quoter: Quoter, indenter: Indenter) -> str:
        if not self.is_ready():
            return ""
        fields = ""
        if self._fields:
            fields = "(" + ", ".join(quoter.quote_field(f) for f in self._fields) + ")"
        return _cte_block(quoter.quote_field(self._alias), self._union, indenter, fields)  # type: ignore[arg-type]


class With(BaseStatement):
    """Named sub-statements followed by the statement that consumes them."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._members: dict[str, Statement] = {}
        self._suffix: Statement | None = None
        self._recursive = RecursiveMember()

    @property
    def recursive(self) -> RecursiveMember:
        return self._recursive

    def set_statement(self, alias: str, statement: Statement) -> Self:
        """Add a member, or replace the one already registered under *alias*."""
        self._members[alias] = statement
        return self

    def set_suffix(self, statement: Statement) -> Self:
        self._suffix = statement
        return self

    def set_recursive(self, alias: str, union: Statement, fields: Sequence[str] | None = None) -> Self:
        if not self._rules.supports_recursive_cte:
            logger.debug("WITH RECURSIVE is not supported by %s; ignoring %s", self._rules.name, alias)
            return self

        self._recursive.set_union(alias, union)
        if fields:
            self._recursive.set_fields(fields)
        return self

    def _build(self) -> str:
        ready = self._recursive.is_ready()
        if not self._members and not ready:
            return ""

        blocks = []
        if ready:
            blocks.append(self._recursive.render(self._quoter, self._indenter))
        for alias, statement in self._members.items():
            blocks.append(_cte_block(self._quoter.quote_field(alias), statement, self._indenter))

        sql = "WITH RECURSIVE\n" if ready else "WITH\n"
        sql += ",\n".join(blocks) + "\n"
        if self._suffix is not None:
            sql += self._suffix.render()
        return sql

    def _child_bindings(self) -> Iterable[Mapping[str, Any]]:
        if self._recursive.is_ready():
            yield self._recursive.union.bindings  # type: ignore[union-attr]
        for statement in self._members.values():
            yield statement.bindings
        if self._suffix is not None:
            yield self._suffix.bindings
