"""Identifier coercion: raw caller ids -> ``bson.ObjectId``."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from bson import ObjectId
from bson.errors import InvalidId

from .exceptions import InvalidIdentifierError
from .ordering import flatten

if TYPE_CHECKING:
    from .document import DocumentType


def _convert(document_type: DocumentType, raw: Any) -> Any:
    if isinstance(raw, ObjectId) or not isinstance(raw, str):
        return raw
    if not raw.strip():
        return None
    try:
        return ObjectId(raw)
    except InvalidId as e:
        raise InvalidIdentifierError(raw, document_type.name) from e


def coerce_id(document_type: DocumentType, raw: Any) -> Any:
    """Coerce a single raw identifier.

    Blank strings become ``None``; values of other types pass through.
    Documents that do not use object ids get ``raw`` back unchanged.

    Raises:
        InvalidIdentifierError: If ``raw`` is a malformed ObjectId string.
    """
    if not document_type.using_object_ids:
        return raw
    if isinstance(raw, (list, tuple)):
        return coerce_ids(document_type, raw)
    return _convert(document_type, raw)


def coerce_ids(document_type: DocumentType, raws: Iterable[Any]) -> list[Any]:
    """Coerce a (possibly nested) sequence of raw identifiers, dropping blanks."""
    values = list(flatten(raws))
    if not document_type.using_object_ids:
        return values
    converted = [_convert(document_type, value) for value in values]
    return [value for value in converted if value is not None]
