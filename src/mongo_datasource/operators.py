"""Operator names accepted in filter expressions."""

from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """Supported operators for filter expressions.

    ``startsWith`` is the canonical name of the prefix operator. The older
    ``beginsWith`` spelling is still accepted through :data:`OPERATOR_ALIASES`
    and logs a deprecation warning when used.
    """

    # Standard comparison
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"

    # Set / range
    IN = "in"
    BETWEEN = "between"

    # Presence
    EXISTS = "exists"

    # String operations
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    STARTSWITH = "startsWith"
    ENDSWITH = "endsWith"

    # Logical operators
    AND = "and"
    OR = "or"


OPERATOR_ALIASES: dict[str, FilterOperator] = {
    "beginsWith": FilterOperator.STARTSWITH,
}

LOGICAL_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.AND, FilterOperator.OR}
)


def resolve_operator(name: str) -> FilterOperator | None:
    """Return the operator for *name* (alias-aware) or ``None`` if unknown."""
    try:
        return FilterOperator(name)
    except ValueError:
        return OPERATOR_ALIASES.get(name)
