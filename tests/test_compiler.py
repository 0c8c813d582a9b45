"""Unit tests for CriteriaCompiler."""

from __future__ import annotations

import pytest
from pymongo import ASCENDING, DESCENDING, ReadPreference

from docstore_criteria import ComplexExpression, CriteriaCompiler, SortDirection


@pytest.fixture
def compiler():
    return CriteriaCompiler()


def test_build_filter_copies_selector(compiler, criteria):
    c = criteria.where({"status": "active"})
    out = compiler.build_filter(c)
    out["other"] = 1
    assert dict(c.selector) == {"status": "active"}


def test_build_sort_none_when_unsorted(compiler, criteria):
    assert compiler.build_sort(criteria) is None


def test_build_sort_directions(compiler, criteria):
    c = criteria.ascending("a").descending("b")
    assert compiler.build_sort(c) == [("a", ASCENDING), ("b", DESCENDING)]


def test_build_sort_numeric_directions(compiler, criteria):
    c = criteria.order_by({"x": -1, "y": 1})
    assert compiler.build_sort(c) == [("x", DESCENDING), ("y", ASCENDING)]


def test_build_sort_complex_expressions(compiler, criteria):
    c = criteria.order_by(ComplexExpression("age", "descending"))
    assert compiler.build_sort(c) == [("age", DESCENDING)]


def test_build_find_kwargs(compiler, criteria):
    c = (
        criteria.where({"a": 1})
        .ascending("a")
        .descending("b")
        .limit(10)
        .skip(5)
        .extras({"batch_size": 100})
        .cache()
        .enslave()
    )
    assert compiler.build_find_kwargs(c) == {
        "filter": {"a": 1},
        "sort": [("a", ASCENDING), ("b", DESCENDING)],
        "limit": 10,
        "skip": 5,
        "batch_size": 100,
    }


def test_build_find_kwargs_minimal(compiler, criteria):
    assert compiler.build_find_kwargs(criteria) == {"filter": {}}


def test_read_preference(compiler, criteria):
    assert compiler.read_preference(criteria) == ReadPreference.PRIMARY
    assert (
        compiler.read_preference(criteria.enslave())
        == ReadPreference.SECONDARY_PREFERRED
    )


def test_build_sort_enum_directions_in_mapping(compiler, criteria):
    c = criteria.order_by({"a": SortDirection.DESC, "b": SortDirection.ASC})
    assert compiler.build_sort(c) == [("a", DESCENDING), ("b", ASCENDING)]


def test_build_sort_enum_direction_in_expression(compiler, criteria):
    c = criteria.order_by(ComplexExpression("a", SortDirection.DESC))
    assert compiler.build_sort(c) == [("a", DESCENDING)]
