"""Shared statement machinery.

Statements are composed from small parts rather than mixed together: each
one owns a :class:`~sqlcompose.bindings.BindingRegistry`, a
:class:`~sqlcompose.quoting.Quoter`, and an
:class:`~sqlcompose.stacks.Indenter`.  :class:`FilterableStatement` adds
the clause stacks and the WHERE chain used by SELECT, UPDATE and DELETE.

Nothing here raises on malformed input.  Ignored calls are logged at DEBUG
and leave the statement unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, ClassVar, Self

from .._protocols import Statement
from .._types import DEFAULT_INDENT, UNSET
from ..bindings import BindingRegistry, LabelGenerator, default_label_generator
from ..dialects.base import DialectRules
from ..quoting import Quoter
from ..stacks import ClauseStacks, Indenter
from ..where import Where

logger = logging.getLogger(__name__)


class BaseStatement:
    """Common state and binding behavior for every statement kind.

    Dialect-bound subclasses set :attr:`rules`; a rules object passed to the
    constructor takes precedence.
    """

    rules: ClassVar[DialectRules]

    def __init__(
        self,
        rules: DialectRules | None = None,
        *,
        labels: LabelGenerator | None = None,
        indent: int = DEFAULT_INDENT,
        quoting: bool = True,
    ) -> None:
        self._rules: DialectRules = rules if rules is not None else type(self).rules
        self._labels = labels if labels is not None else default_label_generator()
        self._registry = BindingRegistry(self._labels)
        self._quoter = Quoter(self._rules, enabled=quoting)
        self._indenter = Indenter(indent)

    # -- output -------------------------------------------------------------

    def render(self) -> str:
        return self._build()

    def _build(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        text = self.render()
        return text if text.endswith("\n") else text + "\n"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} dialect={self._rules.name}>"

    # -- bindings -----------------------------------------------------------

    @property
    def bindings(self) -> dict[str, Any]:
        """Own bindings plus those of every embedded part; own entries win."""
        merged = self._registry.copy()
        for child in self._child_bindings():
            merged.merge_from(child)
        return merged.as_dict()

    def _child_bindings(self) -> Iterable[Mapping[str, Any]]:
        return ()

    def init_bindings(self) -> Self:
        self._registry.init()
        return self

    def set_binding(self, label: str, value: Any) -> Self:
        self._registry.set_binding(label, value)
        return self

    def set_bindings(self, bindings: Mapping[str, Any]) -> Self:
        self._registry.set_bindings(bindings)
        return self

    def merge_bindings(self, bindings: Mapping[str, Any]) -> Self:
        """Add entries from *bindings* whose label is not bound here yet."""
        self._registry.merge_from(bindings)
        return self

    def generate_label(self) -> str:
        return self._registry.generate_label()

    # -- quoting / layout ---------------------------------------------------

    @property
    def quoter(self) -> Quoter:
        return self._quoter

    @property
    def dialect(self) -> DialectRules:
        return self._rules

    @property
    def labels(self) -> LabelGenerator:
        return self._labels

    @property
    def indent_width(self) -> int:
        return self._indenter.width

    def enable_quoting(self, flag: bool) -> Self:
        self._quoter.enable_quoting(flag)
        return self

    def set_indent(self, spaces: int) -> Self:
        self._indenter.set_width(spaces)
        return self

    def _fields_list(self, fields: str | Sequence[str]) -> list[str]:
        if isinstance(fields, str):
            fields = [fields]
        return [self._quoter.quote_field(f) for f in fields]


class ReturningClause:
    """The RETURNING section shared by INSERT, UPDATE and DELETE."""

    __slots__ = ("_fields",)

    def __init__(self) -> None:
        self._fields: list[str] = []

    def set(self, fields: list[str]) -> None:
        self._fields = fields

    def render(self, indenter: Indenter) -> str:
        if not self._fields:
            return ""
        return f"RETURNING\n{indenter.indent()}{', '.join(self._fields)}\n"


class ReturningStatement(BaseStatement):
    """Statement that may request output columns."""

    def __init__(self, rules: DialectRules | None = None, **kwargs: Any) -> None:
        super().__init__(rules, **kwargs)
        self._returning = ReturningClause()

    def returning(self, fields: str | Sequence[str]) -> Self:
        """Request output columns; a silent no-op where RETURNING is unsupported."""
        if not self._rules.supports_returning:
            logger.debug("RETURNING is not supported by %s; ignoring", self._rules.name)
            return self
        self._returning.set(self._fields_list(fields))
        return self


class FilterableStatement(ReturningStatement):
    """Statement with clause stacks and a WHERE chain."""

    def __init__(self, rules: DialectRules | None = None, **kwargs: Any) -> None:
        super().__init__(rules, **kwargs)
        self._stacks = ClauseStacks()

    def _new_where(self) -> Where:
        return Where(self._quoter, self._indenter, self._labels)

    def _push_where(self, where: Where) -> None:
        if where.is_set():
            self._stacks.where.push(where)

    def where(self, criteria: str, bind_values: Any = UNSET) -> Self:
        """Add a free-text predicate; ``?`` placeholders bind *bind_values* in order."""
        where = self._new_where().set_criteria(criteria, bind_values)
        self._push_where(where)
        return self

    def where_in(self, field: str, values: Sequence[Any]) -> Self:
        return self._where_values(field, values, True)

    def where_not_in(self, field: str, values: Sequence[Any]) -> Self:
        return self._where_values(field, values, False)

    def where_in_sub(self, field: str, select: Statement) -> Self:
        where = self._new_where().set_in_select(field, select, True)
        self._push_where(where)
        return self

    def where_not_in_sub(self, field: str, select: Statement) -> Self:
        where = self._new_where().set_in_select(field, select, False)
        self._push_where(where)
        return self

    def _where_values(self, field: str, values: Sequence[Any], is_in: bool) -> Self:
        values = list(values)
        if not values:
            logger.debug("Empty value list for %s; membership test not added", field)
            return self
        where = self._new_where().set_in_list(field, values, is_in)
        self._push_where(where)
        return self

    def where_reset(self) -> Self:
        self._stacks.where.reset()
        return self

    def _build_where(self) -> str:
        if not self._stacks.where:
            return ""
        ind = self._indenter.indent()
        delimiter = f"\n{ind}AND\n{ind}"
        clauses = [w.render() for w in self._stacks.where]
        return f"WHERE\n{ind}{delimiter.join(clauses)}\n"

    def _child_bindings(self) -> Iterable[Mapping[str, Any]]:
        for where in self._stacks.where:
            yield where.bindings
