"""CASE expressions built inline from a SELECT.

``select.case_field()`` opens a builder whose finished text becomes one
select-list entry; ``select.case_where()`` opens one whose text becomes a
WHERE predicate::

    (
        select.case_field()
        .when("status = ?", [1]).then("'active'")
        .when("status = ?", [2]).then("'closed'")
        .else_then("'unknown'")
        .end_case("statusName")
        .from_("accounts")
    )

References only point back up the chain: a when builder knows its case
builder and a case builder knows its SELECT until ``end_case``, never the
other way round.  A branch is handed to the case builder as finished text by
:meth:`WhenBuilder.then`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .._types import UNSET
from ..bindings import BindingRegistry, normalize_bind_values
from ..quoting import Quoter
from ..stacks import Indenter

if TYPE_CHECKING:
    from .select import Select

logger = logging.getLogger(__name__)


def _bind_and_quote(
    registry: BindingRegistry,
    quoter: Quoter,
    text: str,
    bind_values: Any,
) -> str:
    values = normalize_bind_values(bind_values) if bind_values is not UNSET else None
    return quoter.quote_field(registry.bind_positional(text, values))


class WhenBuilder:
    """One ``WHEN <criteria> THEN <result>`` branch."""

    def __init__(self, case: CaseExpressionBuilder, criteria: str, bind_values: Any = UNSET) -> None:
        self._case = case
        self._quoter = case.quoter.copy()
        self._registry = BindingRegistry(case.registry.labels)
        self._criteria = _bind_and_quote(self._registry, self._quoter, criteria, bind_values)
        self._done = False

    @property
    def quoter(self) -> Quoter:
        return self._quoter

    def enable_quoting(self, flag: bool) -> WhenBuilder:
        self._quoter.enable_quoting(flag)
        return self

    def then(self, result: str, bind_values: Any = UNSET) -> CaseExpressionBuilder:
        """Set the branch result and hand control back to the case builder."""
        if self._done:
            logger.debug("then() called twice on one WHEN branch; ignoring %r", result)
            return self._case

        result = _bind_and_quote(self._registry, self._quoter, result, bind_values)
        indent = self._case.indenter.indent(3)
        self._case.add_branch(f"WHEN {self._criteria} THEN\n{indent}{result}\n", self._registry)
        self._done = True
        return self._case


class CaseExpressionBuilder:
    """Collects WHEN branches and an optional ELSE for one CASE expression."""

    def __init__(self, parent: Select, *, as_where: bool = False) -> None:
        self._parent: Select | None = parent
        self._as_where = as_where
        self._quoter = parent.quoter.copy()
        self._indenter = Indenter(parent.indent_width)
        self._registry = BindingRegistry(parent.labels)
        self._branches: list[str] = []
        self._else: str | None = None
        self._alias: str | None = None

    @property
    def quoter(self) -> Quoter:
        return self._quoter

    @property
    def indenter(self) -> Indenter:
        return self._indenter

    @property
    def registry(self) -> BindingRegistry:
        return self._registry

    def enable_quoting(self, flag: bool) -> CaseExpressionBuilder:
        self._quoter.enable_quoting(flag)
        return self

    def when(self, criteria: str, bind_values: Any = UNSET) -> WhenBuilder:
        return WhenBuilder(self, criteria, bind_values)

    def add_branch(self, text: str, bindings: BindingRegistry) -> CaseExpressionBuilder:
        """Append a finished ``WHEN ... THEN ...`` block and its bindings."""
        self._branches.append(text)
        self._registry.merge_from(bindings)
        return self

    def else_then(self, result: str, bind_values: Any = UNSET) -> CaseExpressionBuilder:
        self._else = _bind_and_quote(self._registry, self._quoter, result, bind_values)
        return self

    def render(self) -> str:
        ind = self._indenter
        sql = "CASE\n"
        for branch in self._branches:
            sql += ind.indent(2) + branch
        if self._else is not None:
            sql += f"{ind.indent(2)}ELSE\n{ind.indent(3)}{self._else}\n"
        sql += ind.indent() + "END"
        if self._alias is not None and not self._as_where:
            sql += " AS " + self._quoter.quote_table(self._alias)
        return sql

    @property
    def bindings(self) -> dict[str, Any]:
        return self._registry.as_dict()

    def end_case(self, alias: str | None = None) -> Select | None:
        """Push the finished expression onto the parent and return the parent.

        The parent's quoting is switched off while the pre-rendered text is
        pushed and restored afterwards.  The builder then lets go of the
        parent, so a second call pushes nothing and returns ``None``.
        """
        parent = self._parent
        if parent is None:
            logger.debug("end_case called on a closed CASE builder; ignoring")
            return None

        self._alias = alias
        if self._as_where and alias is not None:
            logger.debug("CASE alias %s ignored inside WHERE", alias)

        was_enabled = parent.quoter.is_enabled()
        parent.enable_quoting(False)
        if self._as_where:
            parent.where(self.render())
        else:
            parent.field(self.render())
        parent.enable_quoting(was_enabled)

        parent.merge_bindings(self.bindings)
        self._parent = None
        return parent
