"""Binding labels and the per-statement binding registry.

Every statement owns a :class:`BindingRegistry` mapping generated or
caller-chosen labels (``:name``) to values.  When statements are nested the
outer statement's entries win on key collision: :meth:`BindingRegistry.merge_from`
only ever adds keys that are not present yet.

Labels come from an injected :class:`LabelGenerator` so tests can make them
deterministic.  Generators hand out a strictly increasing counter under a
lock; two registries sharing a generator can never produce the same label.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from ._types import BIND_CHAR

logger = logging.getLogger(__name__)


class LabelGenerator:
    """Thread-safe source of unique binding labels of the form ``:_<prefix><n>_``."""

    def __init__(self, prefix: str = "b", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    @property
    def prefix(self) -> str:
        return self._prefix

    def next_label(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f":_{self._prefix}{n}_"

    __call__ = next_label


_default_lock = threading.Lock()
_default_generators: dict[str, LabelGenerator] = {}


def default_label_generator(prefix: str = "b") -> LabelGenerator:
    """Return the process-wide generator for *prefix*.

    Every caller asking for the same prefix shares one counter, so labels
    stay unique across statements built by different drivers.
    """
    generator = _default_generators.get(prefix)
    if generator is not None:
        return generator

    with _default_lock:
        generator = _default_generators.get(prefix)
        if generator is None:
            generator = _default_generators[prefix] = LabelGenerator(prefix)
        return generator


class BindingRegistry(Mapping[str, Any]):
    """Ordered label -> value map owned by one statement.

    Reads go through the :class:`~collections.abc.Mapping` interface; writes
    only through the explicit setters below.
    """

    def __init__(self, labels: LabelGenerator | None = None) -> None:
        self._labels = labels if labels is not None else default_label_generator()
        self._bindings: dict[str, Any] = {}

    @property
    def labels(self) -> LabelGenerator:
        return self._labels

    # -- Mapping ------------------------------------------------------------

    def __getitem__(self, label: str) -> Any:
        return self._bindings[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"BindingRegistry({self._bindings!r})"

    # -- mutation -----------------------------------------------------------

    def init(self) -> BindingRegistry:
        """Drop every binding."""
        self._bindings = {}
        return self

    def set_binding(self, label: str, value: Any) -> BindingRegistry:
        self._bindings[label] = value
        return self

    def set_bindings(self, bindings: Mapping[str, Any]) -> BindingRegistry:
        for label, value in bindings.items():
            self._bindings[label] = value
        return self

    def merge_from(self, other: Mapping[str, Any]) -> BindingRegistry:
        """Copy entries from *other* whose label is not already present."""
        for label, value in other.items():
            if label not in self._bindings:
                self._bindings[label] = value
        return self

    def generate_label(self) -> str:
        return self._labels.next_label()

    def bind_positional(self, text: str, values: Sequence[Any] | None) -> str:
        """Replace each ``?`` in *text* with a fresh label bound to the matching value.

        The text is returned untouched when *values* is ``None``, when it has
        no placeholders, or when the placeholder count differs from the number
        of values.
        """
        if values is None:
            return text

        count = text.count(BIND_CHAR)
        if count == 0:
            return text

        if count != len(values):
            logger.debug(
                "Placeholder count %d does not match %d bound values; leaving text unbound",
                count,
                len(values),
            )
            return text

        parts = text.split(BIND_CHAR)
        out = [parts[0]]
        for value, part in zip(values, parts[1:]):
            label = self.generate_label()
            self._bindings[label] = value
            out.append(label)
            out.append(part)
        return "".join(out)

    # -- snapshots ----------------------------------------------------------

    def copy(self) -> BindingRegistry:
        clone = BindingRegistry(self._labels)
        clone._bindings = dict(self._bindings)
        return clone

    def as_dict(self) -> dict[str, Any]:
        return dict(self._bindings)


def normalize_bind_values(values: Any) -> list[Any]:
    """Turn a scalar into a one-element list; sequences become lists.

    Strings and bytes count as scalars.
    """
    if isinstance(values, (list, tuple)):
        return list(values)
    return [values]
