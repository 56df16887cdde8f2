"""Column assignments used by INSERT and UPDATE.

A :class:`FieldValue` pairs a column name with the *value marker* placed in
the SQL text (a binding label, a literal, or any expression such as
``point(:x, :y)``) and the bindings that marker needs.  The marker is never
quoted or validated.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from ._types import BIND_CHAR, BIND_MARKER, UNSET
from .bindings import LabelGenerator, default_label_generator


class FieldValue:
    """One column assignment.

    Example::

        x, y = FieldValue.bind_key(), FieldValue.bind_key()
        pos = (
            FieldValue("position")
            .set_value_marker(f"point({x}, {y})")
            .add_binding(x, 123)
            .add_binding(y, 456)
        )
    """

    __slots__ = ("_name", "_marker", "_bindings")

    def __init__(
        self,
        name: str,
        marker: str | None = None,
        bindings: Mapping[str, Any] | None = None,
    ) -> None:
        self._name = name
        self._marker = marker
        self._bindings: dict[str, Any] = dict(bindings or {})

    @staticmethod
    def bind_key(labels: LabelGenerator | None = None) -> str:
        """Return a fresh label suitable for use inside a value marker."""
        return (labels or default_label_generator()).next_label()

    @property
    def name(self) -> str:
        return self._name

    @property
    def marker(self) -> str | None:
        return self._marker

    @property
    def bindings(self) -> dict[str, Any]:
        return dict(self._bindings)

    @property
    def bind_count(self) -> int:
        return len(self._bindings)

    def set_value_marker(self, marker: str) -> FieldValue:
        self._marker = marker
        return self

    def set_bound_values(self, bindings: Mapping[str, Any]) -> FieldValue:
        self._bindings = dict(bindings)
        return self

    def add_binding(self, label: str, value: Any) -> FieldValue:
        self._bindings[label] = value
        return self

    def __repr__(self) -> str:
        return f"FieldValue({self._name!r}, marker={self._marker!r}, bindings={self._bindings!r})"


class FieldValueSet:
    """Insertion-ordered FieldValue collection, unique by field name.

    Adding a value for a field that is already present replaces the old
    entry in place.
    """

    def __init__(self) -> None:
        self._values: dict[str, FieldValue] = {}

    def add(self, value: FieldValue) -> FieldValueSet:
        self._values[value.name] = value
        return self

    def get(self, name: str) -> FieldValue | None:
        return self._values.get(name)

    def reset(self) -> FieldValueSet:
        self._values = {}
        return self

    def __iter__(self) -> Iterator[FieldValue]:
        return iter(self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._values)

    @property
    def names(self) -> list[str]:
        return list(self._values)

    @property
    def markers(self) -> list[str]:
        """Value markers of every entry that has one, in order."""
        return [v.marker for v in self._values.values() if v.marker is not None]

    @property
    def bound_values(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for value in self._values.values():
            merged.update(value.bindings)
        return merged


def make_field_value(
    name: str,
    value: str | None = None,
    bound_value: Any = UNSET,
    *,
    labels: LabelGenerator | None = None,
) -> FieldValue:
    """Build the FieldValue for an INSERT/UPDATE column assignment.

    * *value* is ``?``, ``""`` or ``None`` and *bound_value* was passed: a
      generated label becomes the marker and is bound to *bound_value*.
    * *value* is a single ``:label`` token and *bound_value* was passed: that
      label becomes the marker and is bound to *bound_value*.
    * Anything else: *value* is the marker, verbatim.

    ``None`` is a legal bound value; only omitting the argument counts as
    "not passed".
    """
    fv = FieldValue(name)
    if bound_value is UNSET:
        return fv.set_value_marker("NULL" if value is None else value)

    if value is None or value in (BIND_CHAR, ""):
        label = FieldValue.bind_key(labels)
        return fv.set_value_marker(label).add_binding(label, bound_value)

    if value.startswith(BIND_MARKER) and " " not in value:
        return fv.set_value_marker(value).add_binding(value, bound_value)

    return fv.set_value_marker(value)
