"""SELECT statement builder.

Sections always render in this order::

    SELECT [DISTINCT [ON (...)]]
        <fields, or * when none were added>
    FROM
    <joins>
    WHERE
    GROUP BY
    HAVING
    ORDER BY
    LIMIT
    OFFSET

Every section is a newline-terminated block that is omitted when empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Self

from .._protocols import Statement
from .._types import UNSET, JoinType, NullOrder, OrderDirection
from ..bindings import normalize_bind_values
from ..stacks import Indenter
from .base import FilterableStatement
from .case import CaseExpressionBuilder

logger = logging.getLogger(__name__)


def _join_type(direction: str | JoinType) -> JoinType | None:
    try:
        return JoinType(str(getattr(direction, "value", direction)).upper())
    except ValueError:
        return None


class Select(FilterableStatement):
    """Fluent SELECT builder."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._distinct = False
        self._distinct_expression = ""
        self._limit: int | None = None
        self._offset: int | None = None
        self._subselects: list[Statement] = []

    # -- DISTINCT -----------------------------------------------------------

    def distinct(self, flag: bool, expression: str = "") -> Self:
        """Toggle DISTINCT; *expression* is a comma separated DISTINCT ON list."""
        self._distinct = bool(flag)
        if not expression:
            self._distinct_expression = ""
            return self

        if not self._rules.supports_distinct_on:
            logger.debug("DISTINCT ON is not supported by %s; dropping %r", self._rules.name, expression)
            self._distinct_expression = ""
            return self

        parts = [self._quoter.quote_field(part.strip()) for part in expression.split(",")]
        self._distinct_expression = ", ".join(parts)
        return self

    # -- fields -------------------------------------------------------------

    def field(self, name: str) -> Self:
        self._stacks.fields.push(self._quoter.quote_field(name))
        return self

    def fields(self, names: Sequence[str]) -> Self:
        """Replace every field with *names*."""
        self._stacks.fields.replace([self._quoter.quote_field(n) for n in names])
        return self

    def field_reset(self) -> Self:
        self._stacks.fields.reset()
        return self

    def case_field(self) -> CaseExpressionBuilder:
        return CaseExpressionBuilder(self)

    def case_where(self) -> CaseExpressionBuilder:
        return CaseExpressionBuilder(self, as_where=True)

    # -- FROM ---------------------------------------------------------------

    def from_(self, table: str) -> Self:
        self._stacks.from_.push(self._quoter.quote_table(table))
        return self

    def from_sub(self, alias: str, select: Statement) -> Self:
        """Use a sub-select as a FROM item.  It is rendered when this statement is."""
        self._subselects.append(select)
        self._stacks.from_.push(_SubFrom(select, self._quoter.quote_field(alias), self._indenter))
        return self

    def from_values(self, values: Sequence[Any], alias: str, bind: bool = True) -> Self:
        """Use a ``VALUES`` list as a FROM item.

        Scalars become one-column rows and sequences become rows.  Each value
        is bound under a generated label unless *bind* is false, in which case
        it is written verbatim.
        """
        if not self._rules.supports_from_values:
            logger.debug("FROM VALUES is not supported by %s; ignoring", self._rules.name)
            return self
        if not values:
            logger.debug("Empty VALUES list for %s; ignoring", alias)
            return self

        rows = []
        for value in values:
            row = value if isinstance(value, (list, tuple)) else [value]
            cells = []
            for cell in row:
                if bind:
                    label = self._registry.generate_label()
                    self._registry.set_binding(label, cell)
                    cells.append(label)
                else:
                    cells.append(str(cell))
            rows.append("(" + ", ".join(cells) + ")")

        self._stacks.from_.push(f"(VALUES {', '.join(rows)}) AS {self._quoter.quote_table(alias)}")
        return self

    def from_reset(self) -> Self:
        self._stacks.from_.reset()
        self._subselects = []
        return self

    # -- JOIN ---------------------------------------------------------------

    def _on_criteria(self, criteria: str, bind_values: Any) -> str:
        if bind_values is not UNSET:
            criteria = self._registry.bind_positional(criteria, normalize_bind_values(bind_values))
        return self._quoter.quote_field(criteria)

    def _using_list(self, criteria: str) -> str:
        parts = [self._quoter.quote_field(part.strip()) for part in criteria.split(",")]
        return "(" + ", ".join(parts) + ")"

    def join(self, table: str, on_criteria: str, bind_values: Any = UNSET) -> Self:
        table = self._quoter.quote_table(table)
        on = self._on_criteria(on_criteria, bind_values)
        self._stacks.joins.push(f"JOIN {table}\n{self._indenter.indent(2)}ON {on}")
        return self

    def join_using(self, table: str, criteria: str) -> Self:
        table = self._quoter.quote_table(table)
        using = self._using_list(criteria)
        self._stacks.joins.push(f"JOIN {table}\n{self._indenter.indent(2)}USING {using}")
        return self

    def join_natural(self, table: str) -> Self:
        self._stacks.joins.push(f"NATURAL JOIN {self._quoter.quote_table(table)}")
        return self

    def join_outer(
        self, direction: str | JoinType, table: str, on_criteria: str, bind_values: Any = UNSET
    ) -> Self:
        join_type = _join_type(direction)
        if join_type is None:
            logger.debug("Unknown outer join direction %r; ignoring", direction)
            return self

        table = self._quoter.quote_table(table)
        on = self._on_criteria(on_criteria, bind_values)
        self._stacks.joins.push(f"{join_type.value} OUTER JOIN {table}\n{self._indenter.indent(2)}ON {on}")
        return self

    def join_outer_using(self, direction: str | JoinType, table: str, criteria: str) -> Self:
        join_type = _join_type(direction)
        if join_type is None:
            logger.debug("Unknown outer join direction %r; ignoring", direction)
            return self

        table = self._quoter.quote_table(table)
        using = self._using_list(criteria)
        self._stacks.joins.push(f"{join_type.value} JOIN {table}\n{self._indenter.indent(2)}USING {using}")
        return self

    def join_reset(self) -> Self:
        self._stacks.joins.reset()
        return self

    # -- GROUP BY / HAVING / ORDER BY ---------------------------------------

    def group_by(self, field: str) -> Self:
        self._stacks.group.push(self._quoter.quote_field(field))
        return self

    def group_by_fields(self, fields: Iterable[str]) -> Self:
        for field in fields:
            self.group_by(field)
        return self

    def group_reset(self) -> Self:
        self._stacks.group.reset()
        return self

    def having(self, criteria: str, bind_values: Any = UNSET) -> Self:
        """Add a HAVING predicate.  The text is never quoted."""
        if bind_values is not UNSET:
            criteria = self._registry.bind_positional(criteria, normalize_bind_values(bind_values))
        self._stacks.having.push(criteria)
        return self

    def having_reset(self) -> Self:
        self._stacks.having.reset()
        return self

    def order(self, field: str, direction: str | None = None, null_order: str | None = None) -> Self:
        try:
            order_dir = OrderDirection(direction.upper()) if direction else OrderDirection.ASC
        except ValueError:
            logger.debug("Unknown sort direction %r; using ASC", direction)
            order_dir = OrderDirection.ASC

        sql = f"{self._quoter.quote_field(field)} {order_dir.value}"

        if null_order is not None:
            try:
                sql += " " + NullOrder(null_order.upper()).value
            except ValueError:
                logger.debug("Unknown null ordering %r; ignoring", null_order)

        self._stacks.order.push(sql)
        return self

    def order_reset(self) -> Self:
        self._stacks.order.reset()
        return self

    # -- LIMIT / OFFSET -----------------------------------------------------

    def limit(self, rows: int | None) -> Self:
        self._limit = rows
        return self

    def offset(self, rows: int | None) -> Self:
        self._offset = rows
        return self

    # -- rendering ----------------------------------------------------------

    def _build(self) -> str:
        return "".join(
            (
                self._build_distinct(),
                self._build_fields(),
                self._build_from(),
                self._build_joins(),
                self._build_where(),
                self._build_list("GROUP BY", self._stacks.group),
                self._build_and("HAVING", self._stacks.having),
                self._build_list("ORDER BY", self._stacks.order),
                f"LIMIT {self._limit}\n" if self._limit is not None else "",
                f"OFFSET {self._offset}\n" if self._offset is not None else "",
            )
        )

    def _build_distinct(self) -> str:
        sql = "SELECT"
        if self._distinct:
            sql += " DISTINCT"
            if self._distinct_expression:
                sql += f" ON ({self._distinct_expression})"
        return sql + "\n"

    def _build_fields(self) -> str:
        ind = self._indenter.indent()
        if not self._stacks.fields:
            return f"{ind}*\n"
        return ind + f",\n{ind}".join(self._stacks.fields) + "\n"

    def _build_from(self) -> str:
        items = [str(item) for item in self._stacks.from_]
        return self._build_list("FROM", items)

    def _build_joins(self) -> str:
        if not self._stacks.joins:
            return ""
        ind = self._indenter.indent()
        return ind + f"\n{ind}".join(self._stacks.joins) + "\n"

    def _build_list(self, keyword: str, items: Iterable[str]) -> str:
        items = list(items)
        if not items:
            return ""
        ind = self._indenter.indent()
        return f"{keyword}\n{ind}" + f",\n{ind}".join(items) + "\n"

    def _build_and(self, keyword: str, items: Iterable[str]) -> str:
        items = list(items)
        if not items:
            return ""
        ind = self._indenter.indent()
        return f"{keyword}\n{ind}" + f"\n{ind}AND\n{ind}".join(items) + "\n"

    def _child_bindings(self) -> Iterable[Mapping[str, Any]]:
        yield from super()._child_bindings()
        for select in self._subselects:
            yield select.bindings


class _SubFrom:
    """A FROM item rendered from a sub-select at parent render time."""

    __slots__ = ("_select", "_alias", "_indenter")

    def __init__(self, select: Statement, alias: str, indenter: Indenter) -> None:
        self._select = select
        self._alias = alias
        self._indenter = indenter

    def __str__(self) -> str:
        ind = self._indenter
        return f"(\n{ind.indent_statement(self._select, 2)}{ind.indent()}) {self._alias}"
