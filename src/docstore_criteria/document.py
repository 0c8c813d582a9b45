"""Target-type descriptor: the document class a criteria is scoped to."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from bson import ObjectId
from pydantic import BaseModel

from .identifiers import coerce_id, coerce_ids

_OBJECT_ID_ANNOTATIONS = (ObjectId, Optional[ObjectId], ObjectId | None)  # noqa: UP007


@runtime_checkable
class TargetType(Protocol):
    """What ``Criteria`` needs from the document type it is scoped to."""

    name: str
    id_field: str
    type_field: str

    def coerce_id(self, raw: Any) -> Any: ...

    def coerce_ids(self, raws: Iterable[Any]) -> list[Any]: ...


@dataclass(frozen=True)
class DocumentType:
    """
    Descriptor for a document class stored in a collection.

    Attributes:
        name: Document class name, used in error messages and ``to_dict()``.
        id_field: Reserved identifier field (``_id`` in MongoDB).
        type_field: Reserved discriminator for subtypes sharing a collection.
        using_object_ids: When ``False``, identifiers are not coerced.
    """

    name: str
    id_field: str = "_id"
    type_field: str = "_type"
    using_object_ids: bool = True

    def coerce_id(self, raw: Any) -> Any:
        return coerce_id(self, raw)

    def coerce_ids(self, raws: Iterable[Any]) -> list[Any]:
        return coerce_ids(self, raws)

    @classmethod
    def for_model(cls, model: type[BaseModel], **overrides: Any) -> DocumentType:
        """Derive a descriptor from a pydantic model class.

        The model uses object ids unless it declares an ``id`` field
        annotated with something other than ``ObjectId``.
        """
        id_info = model.model_fields.get("id")
        using_object_ids = (
            id_info is None or id_info.annotation in _OBJECT_ID_ANNOTATIONS
        )
        values: dict[str, Any] = {
            "name": model.__name__,
            "using_object_ids": using_object_ids,
        }
        values.update(overrides)
        return cls(**values)
