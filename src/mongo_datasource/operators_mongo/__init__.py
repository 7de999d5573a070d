"""
MongoDB operator transforms.

Usage::

    from mongo_datasource.operators_mongo import build_default_table

    table = build_default_table()
    node = table.apply("contains", ValueKind.STRING, "dump")
"""

from __future__ import annotations

from ..registry import OperatorTable
from .presence import PRESENCE_OPERATORS
from .set import SET_OPERATORS
from .standard import STANDARD_OPERATORS
from .string import STRING_OPERATORS


def build_default_table() -> OperatorTable:
    """Create an :class:`OperatorTable` with every built-in operator."""
    table = OperatorTable()
    table.register_all(STANDARD_OPERATORS)
    table.register_all(SET_OPERATORS)
    table.register_all(PRESENCE_OPERATORS)
    table.register_all(STRING_OPERATORS)
    return table


__all__ = [
    "PRESENCE_OPERATORS",
    "SET_OPERATORS",
    "STANDARD_OPERATORS",
    "STRING_OPERATORS",
    "build_default_table",
]
