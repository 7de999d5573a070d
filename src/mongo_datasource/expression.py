"""
Filter expression AST.

The boundary parser turns an API payload such as::

    {"firstname": {"contains": "dump"}, "or": [{"age": {"gt": 18}}, {"vip": True}]}

into an immutable tree of three condition variants:

- :class:`LiteralCondition` -- ``field: value`` equality shorthand
- :class:`OperatorCondition` -- ``field: {operator: operand}``
- :class:`LogicalCondition` -- ``and``/``or`` over nested expressions

so the compiler only ever dispatches over a closed set of node types.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .config import CompilerOptions
from .exceptions import FilterExpressionError
from .operators import LOGICAL_OPERATORS, FilterOperator

logger = logging.getLogger("mongo_datasource.expression")

_LOGICAL_NAMES: frozenset[str] = frozenset(op.value for op in LOGICAL_OPERATORS)


@dataclass(frozen=True)
class LiteralCondition:
    """``field`` must equal ``value``."""

    field: str
    value: Any


@dataclass(frozen=True)
class OperatorCondition:
    """``field`` compared with ``operand`` through ``operator``.

    ``operator`` is kept as the raw name so unknown operators survive parsing
    and the compile policy decides what to do with them.
    """

    field: str
    operator: str
    operand: Any


@dataclass(frozen=True)
class LogicalCondition:
    """``and``/``or`` combination of nested expressions."""

    operator: FilterOperator
    expressions: tuple[FilterExpression, ...]


Condition = LiteralCondition | OperatorCondition | LogicalCondition


@dataclass(frozen=True)
class FilterExpression:
    """Parsed filter: an ordered tuple of conditions."""

    conditions: tuple[Condition, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.conditions)

    def __len__(self) -> int:
        return len(self.conditions)


def parse_filter_expression(
    raw: Mapping[str, Any] | FilterExpression | None,
    options: CompilerOptions | None = None,
) -> FilterExpression:
    """
    Parse a raw filter mapping into a :class:`FilterExpression`.

    ``None`` parses to the empty expression. An already parsed expression is
    returned as is.

    Raises:
        FilterExpressionError: If *raw* is not a mapping, or (strict mode
            only) if an operator clause is empty, has several keys, or a
            logical combinator is not given a non-empty list of mapping
            sub-filters.
    """
    if isinstance(raw, FilterExpression):
        return raw
    options = options or CompilerOptions()
    return _parse(raw, options, path="<root>")


def _parse(raw: Any, options: CompilerOptions, *, path: str) -> FilterExpression:
    if raw is None:
        return FilterExpression()
    if not isinstance(raw, Mapping):
        raise FilterExpressionError(
            f"Filter must be a mapping, got {type(raw).__name__}", path=path
        )
    conditions = [
        _parse_condition(str(field), value, options, path=f"{path}.{field}")
        for field, value in raw.items()
    ]
    return FilterExpression(tuple(conditions))


def _parse_condition(
    field: str, value: Any, options: CompilerOptions, *, path: str
) -> Condition:
    if field in _LOGICAL_NAMES:
        if isinstance(value, list | tuple):
            return _parse_logical(FilterOperator(field), value, options, path=path)
        if options.strict:
            raise FilterExpressionError(
                f"'{field}' requires a list of filters", path=path
            )
        logger.debug("'%s' without a list of filters is treated as a field", field)

    if not isinstance(value, Mapping):
        return LiteralCondition(field=field, value=value)

    if not value:
        if options.strict:
            raise FilterExpressionError("Operator clause is empty", path=path)
        return LiteralCondition(field=field, value=value)

    operator, operand = next(iter(value.items()))
    if len(value) > 1:
        if options.strict:
            raise FilterExpressionError(
                f"Operator clause must have exactly one operator, got {list(value)}",
                path=path,
            )
        logger.debug(
            "Operator clause at %s has %d keys, using '%s'", path, len(value), operator
        )
    return OperatorCondition(field=field, operator=str(operator), operand=operand)


def _parse_logical(
    operator: FilterOperator, items: Any, options: CompilerOptions, *, path: str
) -> LogicalCondition:
    # Non-mapping branches (None included) contribute nothing in lenient mode.
    expressions: list[FilterExpression] = []
    for index, item in enumerate(items):
        item_path = f"{path}[{index}]"
        if not isinstance(item, Mapping):
            if options.strict:
                raise FilterExpressionError(
                    f"Sub-filter must be a mapping, got {type(item).__name__}",
                    path=item_path,
                )
            logger.debug("Sub-filter at %s is not a mapping, dropping it", item_path)
            continue
        expressions.append(_parse(item, options, path=item_path))
    if not expressions and options.strict:
        raise FilterExpressionError(
            f"'{operator.value}' requires a non-empty list of filters", path=path
        )
    return LogicalCondition(operator=operator, expressions=tuple(expressions))
