"""UNION composer."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Self

from .._protocols import Statement
from .._types import UnionType
from .base import BaseStatement

logger = logging.getLogger(__name__)


class Union(BaseStatement):
    """Joins two or more statements with ``UNION ALL`` / ``UNION DISTINCT``.

    Fewer than two members render as empty text.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._members: list[tuple[UnionType | None, Statement]] = []

    def set_select(self, select: Statement, union_type: UnionType | str | None = None) -> Self:
        """Append a member.

        The type given with the first member is ignored.  Later members take
        ``ALL``, ``DISTINCT`` (any case) or ``None`` for the dialect default;
        anything else leaves the composer unchanged.
        """
        if not self._members:
            self._members.append((None, select))
            return self

        if union_type is None:
            resolved = self._rules.default_union
        else:
            try:
                resolved = UnionType(str(getattr(union_type, "value", union_type)).upper())
            except ValueError:
                logger.debug("Unknown union type %r; member not added", union_type)
                return self

        self._members.append((resolved, select))
        return self

    @property
    def member_count(self) -> int:
        return len(self._members)

    def _build(self) -> str:
        if len(self._members) < 2:
            return ""

        sql = ""
        for union_type, member in self._members:
            if union_type is not None:
                sql += f"UNION {union_type.value}\n"
            sql += member.render()
        return sql

    @property
    def bindings(self) -> dict[str, Any]:
        if len(self._members) < 2:
            return {}
        return super().bindings

    def _child_bindings(self) -> Iterable[Mapping[str, Any]]:
        for _, member in self._members:
            yield member.bindings
