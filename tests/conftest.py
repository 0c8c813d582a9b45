"""Shared fixtures for criteria tests."""

from __future__ import annotations

import pytest

from docstore_criteria import Criteria, DocumentType


@pytest.fixture
def person_type() -> DocumentType:
    return DocumentType("Person")


@pytest.fixture
def criteria(person_type: DocumentType) -> Criteria:
    """Empty criteria scoped to ``Person``."""
    return Criteria(person_type)
