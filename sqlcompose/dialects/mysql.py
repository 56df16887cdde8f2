"""MySQL rules and builders.

Identifiers are wrapped in backticks.  RETURNING, WITH RECURSIVE,
DISTINCT ON and VALUES lists in FROM are not rendered; the builders accept
those calls and ignore them.
"""

from __future__ import annotations

from .._types import Dialect, UnionType
from ..driver import Driver
from ..statements import Delete, Insert, Select, Union, Update, With
from .base import DialectRules

MYSQL = DialectRules(
    dialect=Dialect.MYSQL,
    field_open="`",
    field_close="`",
    table_open="`",
    table_close="`",
    default_union=UnionType.DISTINCT,
)


class MySQLSelect(Select):
    rules = MYSQL


class MySQLInsert(Insert):
    rules = MYSQL


class MySQLUpdate(Update):
    rules = MYSQL


class MySQLDelete(Delete):
    rules = MYSQL


class MySQLUnion(Union):
    rules = MYSQL


class MySQLWith(With):
    rules = MYSQL


class MySQLDriver(Driver):
    rules = MYSQL
    select_cls = MySQLSelect
    insert_cls = MySQLInsert
    update_cls = MySQLUpdate
    delete_cls = MySQLDelete
    union_cls = MySQLUnion
    with_cls = MySQLWith
