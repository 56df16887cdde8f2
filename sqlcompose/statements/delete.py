"""DELETE statement builder."""

from __future__ import annotations

from typing import Any, Self

from .base import FilterableStatement


class Delete(FilterableStatement):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._table = ""

    def table(self, name: str) -> Self:
        self._table = self._quoter.quote_table(name)
        return self

    def _build(self) -> str:
        sql = "DELETE\n"
        if self._table:
            sql += f"FROM\n{self._indenter.indent()}{self._table}\n"
        return sql + self._build_where() + self._returning.render(self._indenter)
