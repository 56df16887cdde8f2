"""INSERT statement builder."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Self

from .._protocols import Statement
from .._types import BIND_CHAR, UNSET
from ..fields import FieldValue, FieldValueSet, make_field_value
from .base import ReturningStatement

logger = logging.getLogger(__name__)


class Insert(ReturningStatement):
    """Fluent INSERT builder.

    Rendered as::

        INSERT
        INTO
            <table>
            (<fields>)
        VALUES
            (<markers>)
        RETURNING
            <fields>

    A value select, when set, takes the place of the VALUES block.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._table = ""
        self._values = FieldValueSet()
        self._value_select: Statement | None = None
        self._raw_values: list[str] = []

    def table(self, name: str) -> Self:
        self._table = self._quoter.quote_table(name)
        return self

    into = table

    def field_value(self, name: str, value: str | None = None, bound_value: Any = UNSET) -> Self:
        """Add one column and its value marker; see :func:`~sqlcompose.fields.make_field_value`."""
        fv = make_field_value(self._quoter.quote_field(name), value, bound_value, labels=self._labels)
        self._values.add(fv)
        return self

    def field_values(self, values: Mapping[str, Any]) -> Self:
        """Bind every value in *values* under a generated label."""
        for name, value in values.items():
            self.field_value(name, BIND_CHAR, value)
        return self

    def add_field_value(self, field_value: FieldValue) -> Self:
        """Add a caller-built FieldValue, e.g. one with a ``point(:x, :y)`` marker."""
        self._values.add(
            FieldValue(
                self._quoter.quote_field(field_value.name),
                field_value.marker,
                field_value.bindings,
            )
        )
        return self

    def fields(self, names: Iterable[str]) -> Self:
        """Add columns without value markers, for :meth:`values` or :meth:`value_select`."""
        for name in names:
            self._values.add(FieldValue(self._quoter.quote_field(name)))
        return self

    def values(self, markers: Iterable[str]) -> Self:
        """Add verbatim VALUES markers to pair with :meth:`fields`.  No binding, no quoting."""
        self._raw_values.extend(str(m) for m in markers)
        return self

    def value_select(self, select: Statement) -> Self:
        """Take row values from *select*, rendered when this statement is."""
        self._value_select = select
        return self

    @property
    def field_value_set(self) -> FieldValueSet:
        return self._values

    def _build(self) -> str:
        sql = "INSERT\n"
        if not self._table:
            return sql

        ind = self._indenter.indent()
        sql += f"INTO\n{ind}{self._table}\n"

        if self._values:
            sql += f"{ind}({', '.join(self._values.names)})\n"

        markers = self._values.markers + self._raw_values
        if markers and self._value_select is None:
            sql += f"VALUES\n{ind}({', '.join(markers)})\n"
        elif markers:
            logger.debug("Value select present; %d VALUES markers not rendered", len(markers))

        if self._value_select is not None:
            sql += self._indenter.indent_statement(self._value_select, 1)

        return sql + self._returning.render(self._indenter)

    def _child_bindings(self) -> Iterable[Mapping[str, Any]]:
        yield self._values.bound_values
        if self._value_select is not None:
            yield self._value_select.bindings
