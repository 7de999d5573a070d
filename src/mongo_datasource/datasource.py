"""MongoDataSource — collection facade for GraphQL resolvers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from .config import DataSourceOptions
from .documents import clean_document_update
from .exceptions import DataSourceConfigurationError, MongoQueryError
from .pagination import Page, build_page, normalize_page, skip_for
from .query_builder import MongoQueryBuilder, SortSpec
from .serialization import document_to_dict, model_from_doc, to_object_id

if TYPE_CHECKING:
    from bson import ObjectId
    from motor.motor_asyncio import AsyncIOMotorCollection

    from .connection import MongoConnectionManager
    from .expression import FilterExpression

    FilterInput = Mapping[str, Any] | FilterExpression | None

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger("mongo_datasource.datasource")


class MongoDataSource(Generic[T]):
    """
    Read/write access to one MongoDB collection.

    ``all``, ``list_page`` and ``list_aggregation`` take API filter expressions and
    compile them; ``find_one``, ``find`` and ``delete_many`` take raw MongoDB
    selectors. Documents are returned as dicts, or as ``model_cls`` instances
    when a pydantic model class is given.
    """

    def __init__(
        self,
        connection: MongoConnectionManager,
        collection: str,
        *,
        model_cls: type[T] | None = None,
        options: DataSourceOptions | None = None,
        query_builder: MongoQueryBuilder | None = None,
    ) -> None:
        if not isinstance(collection, str) or not collection:
            raise DataSourceConfigurationError(
                "MongoDataSource needs a collection name."
            )
        self._connection = connection
        self._collection_name = collection
        self._model_cls = model_cls
        self.options = options or DataSourceOptions()
        self._query_builder = query_builder or MongoQueryBuilder()
        self.context: Any = None

    def initialize(self, config: Mapping[str, Any]) -> None:
        """Server setup hook: keep the request context for resolvers."""
        self.context = config.get("context")

    def _collection(self) -> AsyncIOMotorCollection[Any]:
        return self._connection.database(self.options.database).get_collection(
            self._collection_name
        )

    def _to_result(self, doc: Mapping[str, Any] | None) -> Any:
        if doc is None or self._model_cls is None:
            return doc
        return model_from_doc(self._model_cls, doc)

    # -- reads ---------------------------------------------------------------

    async def find_one(
        self,
        filter: Mapping[str, Any] | None = None,  # noqa: A002
        projection: Mapping[str, Any] | None = None,
    ) -> Any:
        """Return the first document matching a raw MongoDB selector."""
        try:
            doc = await self._collection().find_one(
                dict(filter or {}), self._query_builder.build_project(projection)
            )
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return self._to_result(doc)

    async def find(self, filter: Mapping[str, Any] | None = None) -> list[Any]:  # noqa: A002
        """Return all documents matching a raw MongoDB selector."""
        try:
            cursor = self._collection().find(dict(filter or {}))
            return [self._to_result(doc) async for doc in cursor]
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e

    async def all(
        self,
        filter: FilterInput = None,  # noqa: A002
        *,
        projection: Mapping[str, Any] | list[str] | None = None,
        sort: SortSpec = None,
    ) -> list[Any]:
        """Return every document matching an API filter expression."""
        match = self._query_builder.build_match(filter)
        sort_list = self._query_builder.build_sort(sort)
        try:
            cursor = self._collection().find(
                match, self._query_builder.build_project(projection)
            )
            if sort_list:
                cursor = cursor.sort(sort_list)
            return [self._to_result(doc) async for doc in cursor]
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e

    async def _count(self, match: dict[str, Any]) -> int:
        # estimated_document_count is much faster but cannot filter
        coll = self._collection()
        if not match:
            logger.debug("Counting %s without filter", self._collection_name)
            return await coll.estimated_document_count()
        return await coll.count_documents(match)

    async def list_page(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        sort: SortSpec = None,
        filter: FilterInput = None,  # noqa: A002
    ) -> Page:
        """Return one page of documents matching an API filter expression."""
        page = normalize_page(page)
        limit = self.options.limit if limit is None else max(1, limit)
        match = self._query_builder.build_match(filter)
        sort_list = self._query_builder.build_sort(sort)
        try:
            total_count = await self._count(match)
            cursor = self._collection().find(match)
            if sort_list:
                cursor = cursor.sort(sort_list)
            cursor = cursor.skip(skip_for(page, limit)).limit(limit)
            node = [self._to_result(doc) async for doc in cursor]
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return build_page(total_count, page, limit, node)

    async def list_aggregation(
        self,
        pipeline: list[dict[str, Any]] | None = None,
        *,
        page: int = 1,
        limit: int | None = None,
        sort: SortSpec = None,
        filter: FilterInput = None,  # noqa: A002
    ) -> Page:
        """Return one page of an aggregation.

        The pipeline runs as ``[$match] + pipeline + [$sort] + [$skip, $limit]``
        where ``$match`` holds the compiled filter.
        """
        page = normalize_page(page)
        limit = self.options.limit if limit is None else max(1, limit)
        match = self._query_builder.build_match(filter)
        stages = self._query_builder.build_pipeline(
            match=match,
            stages=pipeline,
            sort_list=self._query_builder.build_sort(sort),
            skip=skip_for(page, limit),
            limit=limit,
        )
        try:
            total_count = await self._count(match)
            cursor = self._collection().aggregate(stages)
            node = [self._to_result(doc) async for doc in cursor]
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return build_page(total_count, page, limit, node)

    async def get_by_id(self, id: Any) -> Any:  # noqa: A002
        """Return the document with this id, or ``None``.

        Ids that are not valid ObjectIds also return ``None``, so callers can
        treat them like a missing document.
        """
        object_id = to_object_id(id)
        if object_id is None:
            logger.debug("Invalid ObjectId %r", id)
            return None
        return await self.find_one({"_id": object_id})

    # -- writes --------------------------------------------------------------

    async def add(self, document: Mapping[str, Any] | BaseModel) -> Any:
        """Insert a new document; fails if a document with its ``_id`` exists."""
        doc = document_to_dict(document)
        try:
            result = await self._collection().insert_one(doc)
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        doc["_id"] = result.inserted_id
        return self._to_result(doc)

    async def delete(self, id: Any) -> int | None:  # noqa: A002
        """Delete one document by id; ``None`` when it does not exist."""
        object_id = to_object_id(id)
        if object_id is None:
            return None
        try:
            result = await self._collection().delete_one({"_id": object_id})
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return result.deleted_count or None

    async def delete_many_by_id(self, ids: str | list[str]) -> int:
        """Delete documents by id (a single id string or a list of them)."""
        return await self.delete_many({"_id": {"$in": _object_ids(ids)}})

    async def delete_many(self, filter: Mapping[str, Any] | None = None) -> int:  # noqa: A002
        """Delete documents matching a raw MongoDB selector."""
        try:
            result = await self._collection().delete_many(dict(filter or {}))
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return result.deleted_count

    async def update(
        self, id: Any, document_update: Mapping[str, Any] | BaseModel  # noqa: A002
    ) -> Any:
        """Apply ``document_update`` to one document; ``None`` when not found."""
        object_id = to_object_id(id)
        if object_id is None:
            return None
        changes = document_to_dict(document_update)
        changes.pop("_id", None)
        if not changes:
            return await self.find_one({"_id": object_id})
        try:
            doc = await self._collection().find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return self._to_result(doc)

    async def update_many(
        self, ids: str | list[str], document_update: Mapping[str, Any]
    ) -> int:
        """Set the non-empty fields of ``document_update`` on every listed id.

        Falsy values are dropped first so a bulk edit never clears fields.
        Returns the number of modified documents.
        """
        changes = clean_document_update(document_update)
        if not changes:
            logger.debug("update_many: nothing to set after cleaning")
            return 0
        try:
            result = await self._collection().update_many(
                {"_id": {"$in": _object_ids(ids)}},
                {"$set": changes},
            )
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return result.modified_count

    async def find_one_and_update(
        self, id: Any, document_update: Mapping[str, Any]  # noqa: A002
    ) -> Any:
        """Update or insert the document with this id.

        Plain payloads are wrapped in ``$set``; payloads that already use
        update operators are sent as is. Returns the document as it was
        before the update (``None`` if it was inserted).
        """
        object_id = to_object_id(id)
        if object_id is None:
            raise MongoQueryError(f"Invalid document id: {id!r}")
        update = dict(document_update)
        if not any(key.startswith("$") for key in update):
            update = {"$set": update}
        try:
            doc = await self._collection().find_one_and_update(
                {"_id": object_id},
                update,
                upsert=True,
                return_document=ReturnDocument.BEFORE,
            )
        except PyMongoError as e:
            raise MongoQueryError(str(e)) from e
        return self._to_result(doc)


def _object_ids(ids: str | list[str]) -> list[ObjectId]:
    if isinstance(ids, str):
        ids = [ids]
    object_ids = []
    for value in ids:
        object_id = to_object_id(value)
        if object_id is None:
            raise MongoQueryError(f"Invalid document id: {value!r}")
        object_ids.append(object_id)
    return object_ids
