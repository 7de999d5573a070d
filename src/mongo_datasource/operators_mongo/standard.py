"""Standard comparison operators for MongoDB filter compilation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..operators import FilterOperator

if TYPE_CHECKING:
    from ..config import CompilerOptions
    from ..kinds import ValueKind
    from ..registry import OperatorTransform

_MONGO_OP_MAP: dict[FilterOperator, str] = {
    FilterOperator.NE: "$ne",
    FilterOperator.GT: "$gt",
    FilterOperator.GE: "$gte",
    FilterOperator.LT: "$lt",
    FilterOperator.LE: "$lte",
}


def compile_eq(_kind: ValueKind, val: Any, _options: CompilerOptions) -> Any:
    """Equality is the bare value; MongoDB treats ``{field: v}`` as ``$eq``."""
    return val


def _comparison(mongo_op: str) -> OperatorTransform:
    def compile_comparison(
        _kind: ValueKind, val: Any, _options: CompilerOptions
    ) -> dict[str, Any]:
        return {mongo_op: val}

    return compile_comparison


STANDARD_OPERATORS: dict[FilterOperator, OperatorTransform] = {
    FilterOperator.EQ: compile_eq,
    **{op: _comparison(mongo_op) for op, mongo_op in _MONGO_OP_MAP.items()},
}
