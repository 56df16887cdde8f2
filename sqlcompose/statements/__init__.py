"""Dialect-neutral statement builders.

The classes here take their :class:`~sqlcompose.dialects.base.DialectRules`
from the constructor or from a dialect subclass; see
:mod:`sqlcompose.dialects.postgresql` and :mod:`sqlcompose.dialects.mysql`.
"""

from .base import BaseStatement, FilterableStatement, ReturningStatement
from .case import CaseExpressionBuilder, WhenBuilder
from .delete import Delete
from .insert import Insert
from .select import Select
from .union import Union
from .update import Update
from .with_ import RecursiveMember, With

__all__ = [
    "BaseStatement",
    "CaseExpressionBuilder",
    "Delete",
    "FilterableStatement",
    "Insert",
    "RecursiveMember",
    "ReturningStatement",
    "Select",
    "Union",
    "Update",
    "WhenBuilder",
    "With",
]
