"""Immutable query-criteria builder for MongoDB document stores."""

from .compiler import CriteriaCompiler
from .config import CriteriaSettings
from .criteria import Criteria
from .document import DocumentType, TargetType
from .exceptions import (
    CriteriaError,
    CriteriaMergeError,
    InvalidIdentifierError,
    UnsupportedOptionError,
)
from .identifiers import coerce_id, coerce_ids
from .inclusion import any_in, where
from .options import DEFAULT_LIMIT, DEFAULT_PER_PAGE, DEFAULT_SKIP, OptionFilter
from .ordering import (
    ComplexExpression,
    ExpressionsOrder,
    MappingOrder,
    OrderSpec,
    PairsOrder,
    SortDirection,
    resolve_order_spec,
)

__all__ = [
    # Core types
    "Criteria",
    "DocumentType",
    "TargetType",
    # Ordering
    "SortDirection",
    "ComplexExpression",
    "OrderSpec",
    "MappingOrder",
    "PairsOrder",
    "ExpressionsOrder",
    "resolve_order_spec",
    # Collaborators
    "any_in",
    "where",
    "coerce_id",
    "coerce_ids",
    "OptionFilter",
    "CriteriaCompiler",
    # Configuration
    "CriteriaSettings",
    "DEFAULT_LIMIT",
    "DEFAULT_SKIP",
    "DEFAULT_PER_PAGE",
    # Exceptions
    "CriteriaError",
    "InvalidIdentifierError",
    "UnsupportedOptionError",
    "CriteriaMergeError",
]
