"""Tests for identifier coercion and for_ids."""

from __future__ import annotations

import pytest
from bson import ObjectId

from docstore_criteria import (
    Criteria,
    DocumentType,
    InvalidIdentifierError,
    coerce_id,
    coerce_ids,
    inclusion,
)

OID_A = "4ab2bc4b8ad548971900005c"
OID_B = "4c454e7ebf4b98032d000001"

# -- coerce_id / coerce_ids --------------------------------------------------


def test_coerce_id_string(person_type):
    assert coerce_id(person_type, OID_A) == ObjectId(OID_A)


def test_coerce_id_object_id_passes_through(person_type):
    oid = ObjectId(OID_A)
    assert coerce_id(person_type, oid) is oid


def test_coerce_id_blank_is_none(person_type):
    assert coerce_id(person_type, "  ") is None


def test_coerce_id_other_types_pass_through(person_type):
    assert coerce_id(person_type, 42) == 42


def test_coerce_id_malformed(person_type):
    with pytest.raises(InvalidIdentifierError) as exc:
        coerce_id(person_type, "not-an-id")
    assert exc.value.value == "not-an-id"
    assert exc.value.document_type == "Person"


def test_coerce_ids_flattens_and_drops_blanks(person_type):
    result = coerce_ids(person_type, [OID_A, ["", [OID_B]], None])
    assert result == [ObjectId(OID_A), ObjectId(OID_B)]


def test_coerce_without_object_ids_is_identity():
    account = DocumentType("Account", using_object_ids=False)
    assert coerce_id(account, "acc-1") == "acc-1"
    assert coerce_ids(account, ["acc-1", ["acc-2"]]) == ["acc-1", "acc-2"]


# -- for_ids -----------------------------------------------------------------


def test_single_id_is_direct_equality(criteria):
    c = criteria.for_ids(OID_A)
    assert dict(c.selector) == {"_id": ObjectId(OID_A)}


def test_single_id_in_a_list(criteria):
    assert criteria.for_ids([OID_A]) == criteria.for_ids(OID_A)


def test_single_id_does_not_use_inclusion_filter(criteria, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("any_in must not be used for a single id")

    monkeypatch.setattr(inclusion, "any_in", fail)
    criteria.for_ids(OID_A)


def test_many_ids_use_inclusion_filter(criteria):
    c = criteria.for_ids(OID_A, OID_B)
    assert dict(c.selector) == {"_id": {"$in": [ObjectId(OID_A), ObjectId(OID_B)]}}


def test_many_ids_as_list(criteria):
    assert criteria.for_ids([OID_A, OID_B]) == criteria.for_ids(OID_A, OID_B)


def test_duplicate_ids_count_once(criteria):
    assert criteria.for_ids(OID_A, OID_A) == criteria.for_ids(OID_A)


def test_string_and_object_id_for_same_id_count_once(criteria):
    assert criteria.for_ids(OID_A, ObjectId(OID_A)) == criteria.for_ids(OID_A)


def test_blank_among_many_ids_leaves_single_equality(criteria):
    assert dict(criteria.for_ids(OID_A, "").selector) == {"_id": ObjectId(OID_A)}


def test_no_ids_matches_none(criteria):
    assert dict(criteria.for_ids().selector) == {"_id": None}


@pytest.mark.parametrize("ids", [("bogus",), ("bogus", OID_A), ([OID_A, "bogus"],)])
def test_malformed_id_is_rejected(criteria, ids):
    with pytest.raises(InvalidIdentifierError):
        criteria.for_ids(*ids)


def test_ids_without_object_ids():
    c = Criteria(DocumentType("Account", using_object_ids=False))
    assert dict(c.for_ids("a").selector) == {"_id": "a"}
    assert dict(c.for_ids("a", "b").selector) == {"_id": {"$in": ["a", "b"]}}


def test_custom_id_field():
    c = Criteria(DocumentType("Event", id_field="event_id"))
    assert dict(c.for_ids(OID_A).selector) == {"event_id": ObjectId(OID_A)}


def test_coercion_errors_from_custom_target_type_propagate():
    class Rejecting:
        name = "Strict"
        id_field = "_id"
        type_field = "_type"

        def coerce_id(self, raw):
            raise InvalidIdentifierError(raw, self.name)

        def coerce_ids(self, raws):
            raise InvalidIdentifierError(list(raws), self.name)

    c = Criteria(Rejecting())
    with pytest.raises(InvalidIdentifierError):
        c.for_ids("x")
    with pytest.raises(InvalidIdentifierError):
        c.for_ids("x", "y")
