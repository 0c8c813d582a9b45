"""Inclusion-filter primitive and equality merge on a criteria's selector."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .criteria import Criteria

IN = "$in"


def _is_operator_document(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and bool(value)
        and all(str(key).startswith("$") for key in value)
    )


def _merge_operator(
    selector: dict[str, Any], field: str, operator: str, values: list[Any]
) -> None:
    existing = selector.get(field)
    if not _is_operator_document(existing):
        selector[field] = {operator: values}
        return
    # Condition documents may be shared with the source criteria: rebuild.
    merged = dict(existing)
    if operator in merged:
        merged[operator] = list(merged[operator]) + values
    else:
        merged[operator] = values
    selector[field] = merged


def as_list(values: Any) -> list[Any]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return [values]
    return list(values)


def any_in(criteria: Criteria, conditions: Mapping[str, Any]) -> Criteria:
    """
    Require each field's value to be a member of the given values.

    A field that already carries an ``$in`` condition has the new values
    appended; other operator documents gain an ``$in`` beside them; a bare
    equality is replaced.
    """

    def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
        for field, values in conditions.items():
            _merge_operator(selector, field, IN, as_list(values))

    return criteria._clone(mutate)


def where(criteria: Criteria, conditions: Mapping[str, Any]) -> Criteria:
    """Merge ``field -> value`` equality conditions into the selector."""

    def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
        selector.update(conditions)

    return criteria._clone(mutate)
