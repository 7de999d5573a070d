"""
Exception hierarchy for mongo-datasource.

All exceptions inherit from ``DataSourceError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class DataSourceError(Exception):
    """Root exception for the whole package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterCompileError(DataSourceError):
    """Base class for filter compilation errors (strict mode only)."""


class FilterExpressionError(FilterCompileError):
    """Filter expression structure is malformed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FILTER_EXPRESSION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class UnknownOperatorError(FilterCompileError):
    """
    Unknown operator in an operator clause.

    Provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(operator, valid_operators, n=3, cutoff=0.6)

        message = f"Unknown operator: '{operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATOR_NOT_FOUND",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }


class DataSourceConfigurationError(DataSourceError):
    """Raised when a data source is constructed with invalid arguments."""


class MongoPersistenceError(DataSourceError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when connection to MongoDB fails."""


class MongoQueryError(MongoPersistenceError):
    """Raised when a query or write operation fails."""
