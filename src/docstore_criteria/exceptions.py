"""
Criteria exception hierarchy.

All exceptions inherit from ``CriteriaError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class CriteriaError(Exception):
    """Base exception for all criteria errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidIdentifierError(CriteriaError):
    """Raised when a raw identifier cannot be coerced to the store's id type."""

    def __init__(self, value: Any, document_type: str | None = None) -> None:
        self.value = value
        self.document_type = document_type
        message = f"Invalid identifier {value!r}"
        if document_type:
            message += f" for '{document_type}'"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_IDENTIFIER",
            "value": str(self.value),
            "document_type": self.document_type,
        }


class UnsupportedOptionError(CriteriaError):
    """
    Unknown driver option passed through ``extras``.

    Provides fuzzy-matched suggestions for likely intended option names.
    """

    def __init__(self, options: list[str], valid_options: list[str]) -> None:
        self.options = options
        self.valid_options = valid_options
        self.suggestions = {
            name: get_close_matches(name, valid_options, n=3, cutoff=0.6)
            for name in options
        }

        message = f"Unsupported option(s): {', '.join(repr(o) for o in options)}."
        hints = [
            f"'{name}' -> {', '.join(found)}"
            for name, found in self.suggestions.items()
            if found
        ]
        if hints:
            message += f" Did you mean: {'; '.join(hints)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPTION",
            "options": self.options,
            "suggestions": self.suggestions,
            "valid_options": sorted(self.valid_options),
        }


class CriteriaMergeError(CriteriaError):
    """Raised when merging criteria scoped to different document types."""

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot merge criteria for '{right}' into criteria for '{left}'"
        )
