"""Presence check -> $exists."""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from ..operators import FilterOperator

if TYPE_CHECKING:
    from ..config import CompilerOptions
    from ..kinds import ValueKind
    from ..registry import OperatorTransform

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_exists_flag(val: Any) -> int:
    """Coerce an ``exists`` operand to an integer flag.

    Strings are read up to the first non-digit (``"1"`` -> 1, ``"0"`` -> 0).
    Anything that cannot be read as an integer becomes 0.
    """
    if isinstance(val, bool):
        return int(val)
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return int(val) if math.isfinite(val) else 0
    if isinstance(val, str):
        match = _LEADING_INT.match(val)
        return int(match.group(1)) if match else 0
    return 0


def compile_exists(_kind: ValueKind, val: Any, _options: CompilerOptions) -> dict[str, int]:
    return {"$exists": coerce_exists_flag(val)}


PRESENCE_OPERATORS: dict[FilterOperator, OperatorTransform] = {
    FilterOperator.EXISTS: compile_exists,
}
