"""WHERE clause variants and the single-assignment Where wrapper.

Three predicate shapes share one render/bindings contract:

* :class:`Criteria` -- free text with positional ``?`` bindings.
* :class:`ValueMembership` -- ``field [NOT] IN (:a, :b, ...)``.
* :class:`SubqueryMembership` -- ``field [NOT] IN ( <sub-select> )``.

Quoting and positional binding happen when a variant is constructed; the
variant is immutable afterwards.  A sub-select is the exception: it is held
by reference and rendered, along with its bindings, whenever the owning
statement is rendered.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Union

from ._protocols import Statement
from ._types import BIND_CHAR, UNSET, WhereKind
from .bindings import BindingRegistry, LabelGenerator, normalize_bind_values
from .quoting import Quoter
from .stacks import Indenter

logger = logging.getLogger(__name__)


class Criteria:
    kind = WhereKind.CRITERIA

    __slots__ = ("_text", "_registry")

    def __init__(
        self,
        text: str,
        bind_values: Any = UNSET,
        *,
        quoter: Quoter,
        labels: LabelGenerator | None = None,
    ) -> None:
        self._registry = BindingRegistry(labels)
        if bind_values is not UNSET:
            text = self._registry.bind_positional(text, normalize_bind_values(bind_values))
        self._text = quoter.quote_field(text)

    def render(self) -> str:
        return self._text

    @property
    def bindings(self) -> Mapping[str, Any]:
        return self._registry.as_dict()


class ValueMembership:
    kind = WhereKind.VALUE_MEMBERSHIP

    __slots__ = ("_text", "_registry")

    def __init__(
        self,
        field: str,
        values: Sequence[Any],
        is_in: bool = True,
        *,
        quoter: Quoter,
        labels: LabelGenerator | None = None,
    ) -> None:
        self._registry = BindingRegistry(labels)
        values = list(values)
        placeholders = "(" + ", ".join([BIND_CHAR] * len(values)) + ")"
        operator = "IN" if is_in else "NOT IN"
        bound = self._registry.bind_positional(placeholders, values)
        self._text = f"{quoter.quote_field(field)} {operator} {bound}"

    def render(self) -> str:
        return self._text

    @property
    def bindings(self) -> Mapping[str, Any]:
        return self._registry.as_dict()


class SubqueryMembership:
    kind = WhereKind.SUBQUERY_MEMBERSHIP

    __slots__ = ("_field", "_select", "_is_in", "_indenter")

    def __init__(
        self,
        field: str,
        select: Statement,
        is_in: bool = True,
        *,
        quoter: Quoter,
        indenter: Indenter,
    ) -> None:
        self._field = quoter.quote_field(field)
        self._select = select
        self._is_in = bool(is_in)
        self._indenter = indenter

    def render(self) -> str:
        operator = "IN" if self._is_in else "NOT IN"
        ind = self._indenter
        return (
            f"{self._field} {operator}\n"
            f"{ind.indent()}(\n"
            f"{ind.indent_statement(self._select, 2)}"
            f"{ind.indent()})"
        )

    @property
    def bindings(self) -> Mapping[str, Any]:
        # The embedding statement merges these; nothing is stored here.
        return self._select.bindings


WhereVariant = Union[Criteria, ValueMembership, SubqueryMembership]


class Where:
    """Holds at most one WHERE clause variant.

    The first ``set_*`` call wins; any later call is ignored.
    """

    __slots__ = ("_quoter", "_indenter", "_labels", "_clause")

    def __init__(self, quoter: Quoter, indenter: Indenter, labels: LabelGenerator | None = None) -> None:
        self._quoter = quoter
        self._indenter = indenter
        self._labels = labels
        self._clause: WhereVariant | None = None

    @property
    def clause(self) -> WhereVariant | None:
        return self._clause

    @property
    def kind(self) -> WhereKind | None:
        return self._clause.kind if self._clause is not None else None

    def is_set(self) -> bool:
        return self._clause is not None

    def _already_set(self, method: str) -> bool:
        if self._clause is None:
            return False
        logger.debug("Where.%s ignored: clause already set to %s", method, self._clause.kind.value)
        return True

    def set_criteria(self, criteria: str, bind_values: Any = UNSET) -> Where:
        if not self._already_set("set_criteria"):
            self._clause = Criteria(criteria, bind_values, quoter=self._quoter, labels=self._labels)
        return self

    def set_in_list(self, field: str, values: Sequence[Any], is_in: bool = True) -> Where:
        if not self._already_set("set_in_list"):
            self._clause = ValueMembership(field, values, is_in, quoter=self._quoter, labels=self._labels)
        return self

    def set_in_select(self, field: str, select: Statement, is_in: bool = True) -> Where:
        if not self._already_set("set_in_select"):
            self._clause = SubqueryMembership(
                field, select, is_in, quoter=self._quoter, indenter=self._indenter
            )
        return self

    def render(self) -> str:
        if self._clause is None:
            return ""
        return self._clause.render()

    @property
    def bindings(self) -> Mapping[str, Any]:
        if self._clause is None:
            return {}
        return self._clause.bindings
