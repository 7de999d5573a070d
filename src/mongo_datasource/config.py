"""Configuration containers for the compiler and the data source."""

from __future__ import annotations

from dataclasses import dataclass

PAGINATION_DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class CompilerOptions:
    """Options controlling filter compilation.

    Attributes:
        strict: Raise on unknown operators and malformed clauses instead of
            passing the value through unchanged.
        regex_options: ``$options`` flag attached to string operators
            (default ``"i"``, case-insensitive search).
        escape_regex: Escape regex metacharacters in string operands so
            ``contains: "a.b"`` matches a literal dot.
    """

    strict: bool = False
    regex_options: str = "i"
    escape_regex: bool = False


@dataclass(frozen=True)
class DataSourceOptions:
    """Options for :class:`~mongo_datasource.datasource.MongoDataSource`.

    Attributes:
        limit: Default page size for ``list`` and ``list_aggregation``.
        database: Database name; ``None`` uses the client's default database.
    """

    limit: int = PAGINATION_DEFAULT_LIMIT
    database: str | None = None
