"""sqlcompose -- fluent SQL statement builders with parallel binding maps.

Usage::

    from sqlcompose import get_driver

    db = get_driver("postgresql")
    sql = (
        db.select()
        .field("id")
        .from_("people")
        .where("lastName = ?", ["Smith"])
    )
    cursor.execute(sql.render(), sql.bindings)

PostgreSQL and MySQL builders share one behavioral contract; dialect
differences (identifier quotes, RETURNING, WITH RECURSIVE, DISTINCT ON) are
data on :class:`~sqlcompose.dialects.base.DialectRules`.
"""

from ._factory import available_dialects, get_driver, register_dialect, reset_dialects
from ._protocols import Statement, WhereClause
from ._types import (
    BIND_CHAR,
    BIND_MARKER,
    UNSET,
    Dialect,
    JoinType,
    NullOrder,
    OrderDirection,
    SqlComposeError,
    UnionType,
    UnknownDialectError,
    WhereKind,
)
from .bindings import BindingRegistry, LabelGenerator, default_label_generator
from .config import Settings, load_settings
from .dialects.base import DialectRules
from .driver import Driver
from .fields import FieldValue, FieldValueSet
from .quoting import Quoter

__all__ = [
    # Factory
    "get_driver",
    "register_dialect",
    "available_dialects",
    "reset_dialects",
    "Driver",
    # Protocols
    "Statement",
    "WhereClause",
    # Types
    "Dialect",
    "DialectRules",
    "JoinType",
    "NullOrder",
    "OrderDirection",
    "UnionType",
    "WhereKind",
    "BIND_CHAR",
    "BIND_MARKER",
    "UNSET",
    # Errors
    "SqlComposeError",
    "UnknownDialectError",
    # Building blocks
    "BindingRegistry",
    "LabelGenerator",
    "default_label_generator",
    "FieldValue",
    "FieldValueSet",
    "Quoter",
    # Config
    "Settings",
    "load_settings",
]
