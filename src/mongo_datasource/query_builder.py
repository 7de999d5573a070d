"""Mongo query builder: match, sort, projection and aggregation pipelines."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .compiler import FilterCompiler

if TYPE_CHECKING:
    from .expression import FilterExpression

logger = logging.getLogger("mongo_datasource.query_builder")

SortSpec = Mapping[str, Any] | list[tuple[str, Any]] | list[str] | None


class MongoQueryBuilder:
    """Builds MongoDB selectors and pipeline stages from API input."""

    def __init__(self, compiler: FilterCompiler | None = None) -> None:
        self._compiler = compiler or FilterCompiler()

    def build_match(
        self, filter_expression: Mapping[str, Any] | FilterExpression | None
    ) -> dict[str, Any]:
        """Compile an API filter expression into a MongoDB selector."""
        return self._compiler.compile(filter_expression)

    def build_sort(self, order_by: SortSpec) -> list[tuple[str, int]]:
        """Build MongoDB sort tuples.

        Accepts ``{field: 1|-1|"asc"|"desc"}``, ``[(field, "asc"|"desc")]``
        or ``["-field", "field"]``.
        """
        if not order_by:
            return []
        if isinstance(order_by, Mapping):
            return [
                (field, _direction(direction)) for field, direction in order_by.items()
            ]
        result: list[tuple[str, int]] = []
        for item in order_by:
            if isinstance(item, tuple):
                field, direction = item[0], item[1]
                result.append((field, _direction(direction)))
            elif isinstance(item, str):
                if item.startswith("-"):
                    result.append((item[1:], -1))
                else:
                    result.append((item, 1))
        return result

    def build_project(
        self, fields: Mapping[str, Any] | list[str] | None
    ) -> dict[str, Any] | None:
        """Build a projection: ``{field: 1, ...}``. None means no projection."""
        if not fields:
            return None
        if isinstance(fields, Mapping):
            return dict(fields)
        return dict.fromkeys(fields, 1)

    def build_pipeline(
        self,
        *,
        match: dict[str, Any],
        stages: list[dict[str, Any]] | None = None,
        sort_list: list[tuple[str, int]] | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Assemble ``[$match] + stages + [$sort] + [$skip, $limit]``.

        ``$match`` is only added for a non-empty selector and ``$sort`` only
        when sort fields are given.
        """
        pipeline: list[dict[str, Any]] = []
        if match:
            pipeline.append({"$match": match})
        pipeline.extend(stages or [])
        if sort_list:
            pipeline.append({"$sort": dict(sort_list)})
        if skip is not None:
            pipeline.append({"$skip": skip})
        if limit is not None:
            pipeline.append({"$limit": limit})
        logger.debug("Built aggregation pipeline with %d stages", len(pipeline))
        return pipeline


def _direction(direction: Any) -> int:
    if isinstance(direction, str):
        return -1 if direction.lower() in ("desc", "-1") else 1
    return -1 if direction == -1 else 1
