"""Compile filter expressions to MongoDB filter documents."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

from .config import CompilerOptions
from .expression import (
    FilterExpression,
    LiteralCondition,
    LogicalCondition,
    OperatorCondition,
    parse_filter_expression,
)
from .kinds import classify
from .operators_mongo import build_default_table

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .registry import OperatorTable

logger = logging.getLogger("mongo_datasource.compiler")


class FilterCompiler:
    """
    Turns API filter expressions into MongoDB filter documents.

    Stateless: one instance may be shared between requests, tasks and threads
    as long as its operator table is not modified while compiling.

    Usage::

        compiler = FilterCompiler()
        compiler.compile({"firstname": {"contains": "dump"}})
        # {"firstname": {"$regex": "dump", "$options": "i"}}
    """

    def __init__(
        self,
        options: CompilerOptions | None = None,
        table: OperatorTable | None = None,
    ) -> None:
        self._options = options or CompilerOptions()
        self._table = table or build_default_table()

    @property
    def options(self) -> CompilerOptions:
        return self._options

    @property
    def table(self) -> OperatorTable:
        return self._table

    def compile(
        self, expression: Mapping[str, Any] | FilterExpression | None
    ) -> dict[str, Any]:
        """Compile a raw filter mapping or a parsed :class:`FilterExpression`.

        The result never shares mutable objects with the input.
        """
        parsed = parse_filter_expression(expression, self._options)
        return self._compile_expression(parsed)

    def _compile_expression(self, expression: FilterExpression) -> dict[str, Any]:
        compiled: dict[str, Any] = {}
        for condition in expression.conditions:
            if isinstance(condition, LogicalCondition):
                # MongoDB rejects an empty $and/$or array
                if not condition.expressions:
                    logger.debug(
                        "Skipping '%s' with no sub-filters", condition.operator.value
                    )
                    continue
                key = f"${condition.operator.value}"
                compiled[key] = [
                    self._compile_expression(sub) for sub in condition.expressions
                ]
            elif isinstance(condition, OperatorCondition):
                compiled[condition.field] = self._compile_operator(condition)
            elif isinstance(condition, LiteralCondition):
                compiled[condition.field] = copy.deepcopy(condition.value)
        return compiled

    def _compile_operator(self, condition: OperatorCondition) -> Any:
        operand = copy.deepcopy(condition.operand)
        kind = classify(operand)
        node = self._table.apply(condition.operator, kind, operand, self._options)
        logger.debug(
            "Compiled %s %s (%s) -> %r",
            condition.field,
            condition.operator,
            kind.value,
            node,
        )
        return node


_DEFAULT_COMPILER = FilterCompiler()


def compile_filter(
    expression: Mapping[str, Any] | FilterExpression | None,
    options: CompilerOptions | None = None,
) -> dict[str, Any]:
    """Compile *expression* with the default operator table.

    ``compile_filter({"age": {"between": [18, 65]}})`` returns
    ``{"age": {"$gte": 18, "$lte": 65}}``; an empty or ``None`` filter
    returns ``{}``.
    """
    if options is None:
        return _DEFAULT_COMPILER.compile(expression)
    return FilterCompiler(options).compile(expression)
