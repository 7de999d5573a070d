"""Set and range operators -> $in, $gte/$lte."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..exceptions import FilterExpressionError
from ..kinds import ValueKind
from ..operators import FilterOperator

if TYPE_CHECKING:
    from ..config import CompilerOptions
    from ..registry import OperatorTransform


def compile_in(kind: ValueKind, val: Any, _options: CompilerOptions) -> Any:
    """Compile ``in``; a non-array operand is passed through as equality."""
    if kind != ValueKind.ARRAY:
        return val
    return {"$in": list(val)}


def compile_between(kind: ValueKind, val: Any, options: CompilerOptions) -> Any:
    """Compile ``between`` to an inclusive ``$gte``/``$lte`` range."""
    if kind != ValueKind.ARRAY or len(val) != 2:
        if options.strict:
            raise FilterExpressionError(
                f"between requires a list of two values, got {val!r}"
            )
        return val
    lo, hi = val
    return {"$gte": lo, "$lte": hi}


SET_OPERATORS: dict[FilterOperator, OperatorTransform] = {
    FilterOperator.IN: compile_in,
    FilterOperator.BETWEEN: compile_between,
}
