"""MongoDB data source with an API filter-expression compiler.

Compiles GraphQL-style filter arguments
(``{"firstname": {"contains": "dump"}}``) into MongoDB selectors and runs
them through an asyncio (Motor) collection facade.
"""

from __future__ import annotations

from .compiler import FilterCompiler, compile_filter
from .config import CompilerOptions, DataSourceOptions
from .connection import MongoConnectionManager
from .datasource import MongoDataSource
from .documents import clean_document_update, remove_empty_elements
from .exceptions import (
    DataSourceConfigurationError,
    DataSourceError,
    FilterCompileError,
    FilterExpressionError,
    MongoConnectionError,
    MongoPersistenceError,
    MongoQueryError,
    UnknownOperatorError,
)
from .expression import (
    FilterExpression,
    LiteralCondition,
    LogicalCondition,
    OperatorCondition,
    parse_filter_expression,
)
from .kinds import ValueKind, classify
from .operators import FilterOperator
from .operators_mongo import build_default_table
from .pagination import Page, PageInfo, paginate
from .query_builder import MongoQueryBuilder
from .registry import OperatorTable

__all__ = [
    # Compiler
    "FilterCompiler",
    "compile_filter",
    "CompilerOptions",
    "FilterExpression",
    "LiteralCondition",
    "LogicalCondition",
    "OperatorCondition",
    "parse_filter_expression",
    "ValueKind",
    "classify",
    "FilterOperator",
    "OperatorTable",
    "build_default_table",
    # Data source
    "MongoConnectionManager",
    "MongoDataSource",
    "DataSourceOptions",
    "MongoQueryBuilder",
    "Page",
    "PageInfo",
    "paginate",
    "clean_document_update",
    "remove_empty_elements",
    # Exceptions
    "DataSourceError",
    "FilterCompileError",
    "FilterExpressionError",
    "UnknownOperatorError",
    "DataSourceConfigurationError",
    "MongoPersistenceError",
    "MongoConnectionError",
    "MongoQueryError",
]
