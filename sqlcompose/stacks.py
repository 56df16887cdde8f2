"""Clause stacks and indentation.

Each statement keeps one ordered stack per SQL section.  Stacks hold the
already-quoted text fragments (or WHERE wrappers) in the order they were
pushed; the statement decides how a section is delimited when it renders.
"""

from __future__ import annotations

import textwrap
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from ._protocols import Statement
from ._types import DEFAULT_INDENT

if TYPE_CHECKING:
    from .where import Where

T = TypeVar("T")


class ClauseStack(Generic[T]):
    """Ordered fragments of one SQL section."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[T] = []

    def push(self, item: T) -> None:
        self._items.append(item)

    def replace(self, items: list[T]) -> None:
        self._items = list(items)

    def reset(self) -> None:
        self._items = []

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


@dataclass(slots=True)
class ClauseStacks:
    """The section stacks used by SELECT/UPDATE/DELETE.

    ``where`` holds Where wrappers and ``from_`` may hold sub-select items
    rendered through ``str()``, so their text and bindings can be
    collected lazily at read time.
    """

    fields: ClauseStack[str] = field(default_factory=ClauseStack)
    from_: ClauseStack[object] = field(default_factory=ClauseStack)
    joins: ClauseStack[str] = field(default_factory=ClauseStack)
    where: ClauseStack[Where] = field(default_factory=ClauseStack)
    group: ClauseStack[str] = field(default_factory=ClauseStack)
    having: ClauseStack[str] = field(default_factory=ClauseStack)
    order: ClauseStack[str] = field(default_factory=ClauseStack)

    def reset_all(self) -> None:
        for stack in (self.fields, self.from_, self.joins, self.where, self.group, self.having, self.order):
            stack.reset()


class Indenter:
    """Fixed-width indentation, one level per nesting depth."""

    __slots__ = ("_unit",)

    def __init__(self, spaces: int = DEFAULT_INDENT) -> None:
        self._unit = " " * max(int(spaces), 0)

    @property
    def width(self) -> int:
        return len(self._unit)

    def set_width(self, spaces: int) -> None:
        self._unit = " " * max(int(spaces), 0)

    def indent(self, depth: int = 1) -> str:
        return self._unit * depth

    def indent_text(self, text: str, depth: int) -> str:
        """Prefix every non-blank line of *text* with *depth* levels."""
        return textwrap.indent(text, self.indent(depth))

    def indent_statement(self, statement: Statement, depth: int) -> str:
        return self.indent_text(statement.render(), depth)
