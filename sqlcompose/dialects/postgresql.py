"""PostgreSQL rules and builders.

Identifiers are wrapped in double quotes.  RETURNING, WITH RECURSIVE,
DISTINCT ON and VALUES lists in FROM are all available.
"""

from __future__ import annotations

from .._types import Dialect, UnionType
from ..driver import Driver
from ..statements import Delete, Insert, Select, Union, Update, With
from .base import BASE_KEYWORDS, DialectRules

POSTGRESQL = DialectRules(
    dialect=Dialect.POSTGRESQL,
    field_open='"',
    field_close='"',
    table_open='"',
    table_close='"',
    keywords=BASE_KEYWORDS | {"ilike"},
    supports_returning=True,
    supports_recursive_cte=True,
    supports_distinct_on=True,
    supports_from_values=True,
    default_union=UnionType.DISTINCT,
)


class PostgreSQLSelect(Select):
    rules = POSTGRESQL


class PostgreSQLInsert(Insert):
    rules = POSTGRESQL


class PostgreSQLUpdate(Update):
    rules = POSTGRESQL


class PostgreSQLDelete(Delete):
    rules = POSTGRESQL


class PostgreSQLUnion(Union):
    rules = POSTGRESQL


class PostgreSQLWith(With):
    rules = POSTGRESQL


class PostgreSQLDriver(Driver):
    rules = POSTGRESQL
    select_cls = PostgreSQLSelect
    insert_cls = PostgreSQLInsert
    update_cls = PostgreSQLUpdate
    delete_cls = PostgreSQLDelete
    union_cls = PostgreSQLUnion
    with_cls = PostgreSQLWith
