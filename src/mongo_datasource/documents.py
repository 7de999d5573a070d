"""Helpers that strip empty values from update payloads.

Both return a new dict so the caller's payload is left untouched, and both
exist so that multi-document updates never clear fields the client did not
send.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def clean_document_update(document_update: Mapping[str, Any]) -> dict[str, Any]:
    """Drop every falsy value (``None``, ``False``, ``0``, ``""``, empty containers)."""
    return {key: value for key, value in document_update.items() if value}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str | list | tuple | Mapping):
        return len(value) == 0
    return False


def remove_empty_elements(document: Mapping[str, Any]) -> dict[str, Any]:
    """Drop ``None``, empty strings, empty lists and empty mappings.

    Unlike :func:`clean_document_update`, booleans and numbers are kept even
    when falsy, so ``{"active": False, "count": 0}`` survives.
    """
    return {key: value for key, value in document.items() if not _is_empty(value)}
