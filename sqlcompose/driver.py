"""Dialect-bound statement factory.

A :class:`Driver` hands out statement builders that all share one label
generator and the same indentation and quoting settings, so labels stay
unique across every statement it creates.
"""

from __future__ import annotations

from typing import ClassVar

from ._types import DEFAULT_INDENT
from .bindings import LabelGenerator, default_label_generator
from .config import Settings
from .dialects.base import DialectRules
from .statements.delete import Delete
from .statements.insert import Insert
from .statements.select import Select
from .statements.union import Union
from .statements.update import Update
from .statements.with_ import With


class Driver:
    """Creates statements for one dialect.

    Subclasses bind :attr:`rules` and the concrete builder classes.
    """

    rules: ClassVar[DialectRules]
    select_cls: ClassVar[type[Select]] = Select
    insert_cls: ClassVar[type[Insert]] = Insert
    update_cls: ClassVar[type[Update]] = Update
    delete_cls: ClassVar[type[Delete]] = Delete
    union_cls: ClassVar[type[Union]] = Union
    with_cls: ClassVar[type[With]] = With

    def __init__(
        self,
        *,
        labels: LabelGenerator | None = None,
        indent: int = DEFAULT_INDENT,
        quoting: bool = True,
    ) -> None:
        self._labels = labels if labels is not None else default_label_generator()
        self._indent = indent
        self._quoting = quoting

    @classmethod
    def from_settings(cls, settings: Settings, labels: LabelGenerator | None = None) -> Driver:
        if labels is None:
            labels = default_label_generator(settings.label_prefix)
        return cls(labels=labels, indent=settings.indent_width, quoting=settings.quoting_enabled)

    @property
    def labels(self) -> LabelGenerator:
        return self._labels

    @property
    def name(self) -> str:
        return self.rules.name

    def _options(self) -> dict:
        return {
            "rules": self.rules,
            "labels": self._labels,
            "indent": self._indent,
            "quoting": self._quoting,
        }

    def select(self) -> Select:
        return self.select_cls(**self._options())

    def insert(self) -> Insert:
        return self.insert_cls(**self._options())

    def update(self) -> Update:
        return self.update_cls(**self._options())

    def delete(self) -> Delete:
        return self.delete_cls(**self._options())

    def union(self) -> Union:
        return self.union_cls(**self._options())

    def with_(self) -> With:
        return self.with_cls(**self._options())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} dialect={self.name}>"
