"""Pydantic model <-> BSON document round-trip (ObjectId, UUID, Decimal)."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, TypeVar, cast
from uuid import UUID

from bson import Decimal128, ObjectId
from pydantic import BaseModel, ValidationError

from .exceptions import MongoPersistenceError

TModel = TypeVar("TModel", bound=BaseModel)


def _serialize_value(value: Any) -> Any:
    """Convert Python types to BSON-safe types."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, Mapping):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_serialize_value(v) for v in value]
    return value


def _deserialize_value(value: Any) -> Any:
    """Convert BSON types back to Python types."""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return {k: _deserialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_deserialize_value(v) for v in value]
    return value


def to_object_id(value: Any) -> ObjectId | None:
    """Return *value* as an ObjectId, or ``None`` if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def model_to_doc(model: BaseModel, *, use_id_field: str = "id") -> dict[str, Any]:
    """Convert a Pydantic model to a BSON-ready document.

    ``use_id_field`` becomes the document ``_id``; a missing or ``None`` id is
    left out so MongoDB generates one. Valid ObjectId strings are stored as
    ObjectId.
    """
    data = cast("dict[str, Any]", _serialize_value(model.model_dump(mode="python")))
    if use_id_field in data:
        doc_id = data.pop(use_id_field)
        if doc_id is not None:
            data["_id"] = to_object_id(doc_id) or doc_id
    return data


def document_to_dict(document: Any) -> dict[str, Any]:
    """Accept a Pydantic model or a mapping as an insert/update payload."""
    if isinstance(document, BaseModel):
        return model_to_doc(document)
    if isinstance(document, Mapping):
        return dict(document)
    raise MongoPersistenceError(
        f"Document must be a mapping or a pydantic model, got {type(document).__name__}"
    )


def model_from_doc(
    cls: type[TModel],
    doc: Mapping[str, Any],
    *,
    id_field: str = "id",
) -> TModel:
    """Convert a BSON document to a Pydantic model instance.

    Maps ``_id`` to ``id_field`` (e.g. "id") for the model.
    """
    if not isinstance(doc, Mapping):
        raise MongoPersistenceError("Document must be a mapping")
    data = dict(doc)
    if "_id" in data:
        data[id_field] = data.pop("_id")
    data = _deserialize_value(data)
    try:
        return cls.model_validate(data)
    except ValidationError as e:
        raise MongoPersistenceError(str(e)) from e
