"""Dialect rules -- the syntax facts a builder needs about its target.

A :class:`DialectRules` instance is plain data.  The quoting engine reads the
delimiters and exclusion sets from it; the statement builders read the
capability flags to decide whether a feature renders or is silently dropped.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .._types import Dialect, UnionType

# Words never wrapped in identifier quotes, compared case-insensitively.
BASE_KEYWORDS: frozenset[str] = frozenset(
    {
        "and",
        "or",
        "on",
        "in",
        "not",
        "as",
        "null",
        "true",
        "false",
        "case",
        "when",
        "then",
        "else",
        "end",
        "like",
        "between",
        "is",
        "asc",
        "desc",
        "distinct",
    }
)

# Bare operators that may appear as their own token in criteria text.
BASE_SYMBOLS: frozenset[str] = frozenset(
    {"<", "<>", "!=", ">", "=", "+", "-", "*", "/", "(", ")", "<=", ">=", "||"}
)


class DialectRules(BaseModel):
    """Immutable description of one SQL dialect."""

    model_config = ConfigDict(frozen=True)

    dialect: Dialect = Field(description="Dialect family these rules describe.")
    field_open: str = Field(description="Opening delimiter for column identifiers.")
    field_close: str = Field(description="Closing delimiter for column identifiers.")
    table_open: str = Field(description="Opening delimiter for table identifiers.")
    table_close: str = Field(description="Closing delimiter for table identifiers.")
    keywords: frozenset[str] = Field(
        default=BASE_KEYWORDS,
        description="Lower-case words the quoting engine leaves alone.",
    )
    symbols: frozenset[str] = Field(
        default=BASE_SYMBOLS,
        description="Operator tokens the quoting engine leaves alone.",
    )
    supports_returning: bool = Field(
        default=False,
        description="INSERT/UPDATE/DELETE ... RETURNING is available.",
    )
    supports_recursive_cte: bool = Field(
        default=False,
        description="WITH RECURSIVE is available to the CTE composer.",
    )
    supports_distinct_on: bool = Field(
        default=False,
        description="SELECT DISTINCT ON (...) is available.",
    )
    supports_from_values: bool = Field(
        default=False,
        description="A VALUES list may be used as a FROM item.",
    )
    default_union: UnionType = Field(
        default=UnionType.DISTINCT,
        description="Union flavour used when a member is added without one.",
    )

    @property
    def name(self) -> str:
        return self.dialect.value
