"""Shared enums, sentinels, and exceptions.

Everything here is dialect-agnostic.  Statement builders accept either the
enum members or their plain string values; unrecognised strings are ignored
by the builders rather than raised.
"""

from __future__ import annotations

import enum
from typing import Final

# ---------------------------------------------------------------------------
# Dialect
# ---------------------------------------------------------------------------


class Dialect(str, enum.Enum):
    """Supported SQL dialect families."""

    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


# ---------------------------------------------------------------------------
# Clause keywords
# ---------------------------------------------------------------------------


class JoinType(str, enum.Enum):
    """Directions accepted by the outer join builders."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"


class OrderDirection(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"


class NullOrder(str, enum.Enum):
    NULLS_FIRST = "NULLS FIRST"
    NULLS_LAST = "NULLS LAST"


class UnionType(str, enum.Enum):
    """Set operation flavours for :class:`~sqlcompose.statements.union.Union`."""

    ALL = "ALL"
    DISTINCT = "DISTINCT"


class WhereKind(str, enum.Enum):
    """Tag carried by every WHERE clause variant."""

    CRITERIA = "criteria"
    VALUE_MEMBERSHIP = "value_membership"
    SUBQUERY_MEMBERSHIP = "subquery_membership"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Positional placeholder replaced by generated labels.
BIND_CHAR: Final[str] = "?"

# Any token containing this character is treated as a named binding.
BIND_MARKER: Final[str] = ":"

DEFAULT_INDENT: Final[int] = 4


class _Unset(enum.Enum):
    """Sentinel type for "argument not supplied" where ``None`` is a legal value."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SqlComposeError(Exception):
    """Base exception for all sqlcompose errors."""


class UnknownDialectError(SqlComposeError, LookupError):
    """A dialect name could not be resolved to a driver."""

    def __init__(self, name: str | None, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Unknown dialect '{name}'. Available: {', '.join(available)}")
