"""Semantic type classification of filter operands."""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from numbers import Number
from typing import Any


class ValueKind(str, Enum):
    """Classified kind of an operand."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    OTHER = "other"


def _numeric_kind(value: Number) -> ValueKind:
    # NaN and infinities have no whole-number remainder
    try:
        remainder = value % 1
    except (TypeError, ArithmeticError):
        return ValueKind.FLOAT
    if isinstance(remainder, float) and math.isnan(remainder):
        return ValueKind.FLOAT
    return ValueKind.INT if remainder == 0 else ValueKind.FLOAT


def classify(value: Any) -> ValueKind:
    """Return the :class:`ValueKind` of *value*.

    Whole-valued numbers are ``int`` and fractional ones ``float``, whatever
    their Python type (``2.0`` is ``int``). Never raises; values that fit no
    other kind are ``other``.
    """
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, Number) and not isinstance(value, complex):
        return _numeric_kind(value)
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list | tuple):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return ValueKind.OTHER
