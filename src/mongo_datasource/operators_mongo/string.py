"""String operators -> $regex, $options (case-insensitive by default)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..kinds import ValueKind
from ..operators import FilterOperator

if TYPE_CHECKING:
    from ..config import CompilerOptions
    from ..registry import OperatorTransform


def _pattern(val: str, options: CompilerOptions) -> str:
    return re.escape(val) if options.escape_regex else val


def _regex(pattern: str, options: CompilerOptions) -> dict[str, str]:
    return {"$regex": pattern, "$options": options.regex_options}


def compile_contains(kind: ValueKind, val: Any, options: CompilerOptions) -> Any:
    if kind != ValueKind.STRING:
        return val
    return _regex(_pattern(val, options), options)


def compile_not_contains(kind: ValueKind, val: Any, options: CompilerOptions) -> Any:
    if kind != ValueKind.STRING:
        return val
    return {"$not": _regex(_pattern(val, options), options)}


def compile_startswith(kind: ValueKind, val: Any, options: CompilerOptions) -> Any:
    if kind != ValueKind.STRING:
        return val
    return _regex("^" + _pattern(val, options), options)


def compile_endswith(kind: ValueKind, val: Any, options: CompilerOptions) -> Any:
    if kind != ValueKind.STRING:
        return val
    return _regex(_pattern(val, options) + "$", options)


STRING_OPERATORS: dict[FilterOperator, OperatorTransform] = {
    FilterOperator.CONTAINS: compile_contains,
    FilterOperator.NOT_CONTAINS: compile_not_contains,
    FilterOperator.STARTSWITH: compile_startswith,
    FilterOperator.ENDSWITH: compile_endswith,
}
