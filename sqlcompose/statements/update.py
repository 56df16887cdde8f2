"""UPDATE statement builder."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Self

from .._types import BIND_CHAR, UNSET
from ..fields import FieldValue, FieldValueSet, make_field_value
from .base import FilterableStatement


class Update(FilterableStatement):
    """Fluent UPDATE builder.

    Field values follow the same binding rules as :class:`~sqlcompose.statements.insert.Insert`.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._table = ""
        self._values = FieldValueSet()

    def table(self, name: str) -> Self:
        self._table = self._quoter.quote_table(name)
        return self

    def field_value(self, name: str, value: str | None = None, bound_value: Any = UNSET) -> Self:
        fv = make_field_value(self._quoter.quote_field(name), value, bound_value, labels=self._labels)
        self._values.add(fv)
        return self

    def field_values(self, values: Mapping[str, Any]) -> Self:
        for name, value in values.items():
            self.field_value(name, BIND_CHAR, value)
        return self

    def add_field_value(self, field_value: FieldValue) -> Self:
        self._values.add(
            FieldValue(
                self._quoter.quote_field(field_value.name),
                field_value.marker,
                field_value.bindings,
            )
        )
        return self

    @property
    def field_value_set(self) -> FieldValueSet:
        return self._values

    def _build(self) -> str:
        ind = self._indenter.indent()
        sql = "UPDATE\n"
        if self._table:
            sql += f"{ind}{self._table}\n"

        assignments = [f"{ind}{fv.name} = {fv.marker}" for fv in self._values if fv.marker is not None]
        if assignments:
            sql += "SET\n" + ",\n".join(assignments) + "\n"

        return sql + self._build_where() + self._returning.render(self._indenter)

    def _child_bindings(self) -> Iterable[Mapping[str, Any]]:
        yield from super()._child_bindings()
        yield self._values.bound_values
