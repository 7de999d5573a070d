"""
Operator table: maps a :class:`FilterOperator` to the transform that builds
its MongoDB operator node.

New operators are added by registering a transform with ``register()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import CompilerOptions
from .exceptions import UnknownOperatorError
from .operators import OPERATOR_ALIASES, FilterOperator, resolve_operator

if TYPE_CHECKING:
    from collections.abc import Callable

    from .kinds import ValueKind

    OperatorTransform = Callable[[ValueKind, Any, CompilerOptions], Any]

logger = logging.getLogger("mongo_datasource.registry")


class OperatorTable:
    """
    Registry of operator transforms keyed by :class:`FilterOperator`.

    Usage::

        table = OperatorTable()
        table.register(FilterOperator.NE, lambda kind, val, options: {"$ne": val})

        node = table.apply("ne", classify(5), 5)
    """

    def __init__(self) -> None:
        self._transforms: dict[FilterOperator, OperatorTransform] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: FilterOperator, transform: OperatorTransform) -> None:
        """Register a transform for *operator*."""
        self._transforms[operator] = transform

    def register_all(self, transforms: dict[FilterOperator, OperatorTransform]) -> None:
        """Register several transforms at once."""
        for operator, transform in transforms.items():
            self.register(operator, transform)

    def unregister(self, operator: FilterOperator) -> None:
        """Remove an operator from the table."""
        self._transforms.pop(operator, None)

    # -- look-up -------------------------------------------------------------

    def resolve(self, name: str) -> FilterOperator | None:
        """Resolve an operator name (including deprecated aliases)."""
        operator = resolve_operator(name)
        if operator is not None and name in OPERATOR_ALIASES:
            logger.warning(
                "Operator '%s' is deprecated, use '%s' instead",
                name,
                operator.value,
            )
        if operator is None or operator not in self._transforms:
            return None
        return operator

    def get(self, operator: FilterOperator) -> OperatorTransform | None:
        """Return the registered transform or ``None``."""
        return self._transforms.get(operator)

    def has(self, operator: FilterOperator) -> bool:
        """Return True if *operator* has a registered transform."""
        return operator in self._transforms

    @property
    def supported_operators(self) -> set[FilterOperator]:
        """Operators currently registered in this table."""
        return set(self._transforms.keys())

    # -- application ---------------------------------------------------------

    def apply(
        self,
        name: str,
        kind: ValueKind,
        value: Any,
        options: CompilerOptions | None = None,
    ) -> Any:
        """
        Build the MongoDB node for operator *name* applied to *value*.

        Unknown operators return *value* unchanged, or raise
        :class:`UnknownOperatorError` when ``options.strict`` is set.
        """
        options = options or CompilerOptions()
        operator = self.resolve(name)
        if operator is None:
            if options.strict:
                raise UnknownOperatorError(
                    name, [op.value for op in self._transforms]
                )
            logger.debug("Unknown operator '%s', passing value through", name)
            return value
        return self._transforms[operator](kind, value, options)
