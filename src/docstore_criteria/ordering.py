"""
Sort directions, complex expressions and the ``OrderSpec`` sum type.

``Criteria.order_by`` accepts three shapes of ordering input::

    MappingOrder({"name": "asc", "age": "desc"})
    PairsOrder((("name", "asc"), ("age", "desc")))
    ExpressionsOrder((ComplexExpression.desc("age"),))

Callers may construct the variant themselves or hand a raw mapping,
pair sequence or expressions to :func:`resolve_order_spec`, which picks
the variant once at the call boundary.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SortDirection(str, Enum):
    """Direction of a single sort entry."""

    ASC = "asc"
    DESC = "desc"


SortPair = tuple[Any, Any]


@dataclass(frozen=True)
class ComplexExpression:
    """A field key paired with an operator name, e.g. ``age`` + ``desc``."""

    key: str
    operator: str

    @classmethod
    def asc(cls, key: str) -> ComplexExpression:
        return cls(key, SortDirection.ASC.value)

    @classmethod
    def desc(cls, key: str) -> ComplexExpression:
        return cls(key, SortDirection.DESC.value)


@dataclass(frozen=True)
class MappingOrder:
    """Field -> direction mapping, appended in the mapping's own order."""

    fields: Mapping[Any, Any]

    def pairs(self) -> tuple[SortPair, ...]:
        return tuple(self.fields.items())


@dataclass(frozen=True)
class PairsOrder:
    """Already-ordered ``(field, direction)`` pairs, appended verbatim."""

    items: tuple[SortPair, ...]

    def pairs(self) -> tuple[SortPair, ...]:
        return tuple((field, direction) for field, direction in self.items)


@dataclass(frozen=True)
class ExpressionsOrder:
    """Complex expressions, appended as ``(key, operator)`` pairs."""

    expressions: tuple[ComplexExpression, ...]

    def pairs(self) -> tuple[SortPair, ...]:
        return tuple((expr.key, expr.operator) for expr in self.expressions)


OrderSpec = MappingOrder | PairsOrder | ExpressionsOrder

_ORDER_SPEC_TYPES = (MappingOrder, PairsOrder, ExpressionsOrder)


def _is_nested(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def flatten(values: Iterable[Any]) -> Iterator[Any]:
    """Yield leaf values of arbitrarily nested lists/tuples, skipping ``None``."""
    for value in values:
        if _is_nested(value):
            yield from flatten(value)
        elif value is not None:
            yield value


def _is_pair(value: Any) -> bool:
    return (
        isinstance(value, Sequence)
        and not isinstance(value, (str, bytes))
        and len(value) == 2
    )


def resolve_order_spec(*args: Any) -> OrderSpec | None:
    """
    Resolve raw ``order_by`` arguments into an ``OrderSpec``.

    Returns ``None`` when there is nothing to order by (no argument,
    ``None``, or an empty mapping/sequence).

    Raises:
        TypeError: If the argument matches none of the accepted shapes.
    """
    if not args or args[0] is None:
        return None

    first = args[0]
    if isinstance(first, _ORDER_SPEC_TYPES):
        return first if first.pairs() else None

    if isinstance(first, Mapping):
        return MappingOrder(dict(first)) if first else None

    leaves = list(flatten(args))
    if leaves and all(isinstance(leaf, ComplexExpression) for leaf in leaves):
        return ExpressionsOrder(tuple(leaves))

    if isinstance(first, Sequence) and not isinstance(first, (str, bytes)):
        if not first:
            return None
        if all(_is_pair(item) for item in first):
            return PairsOrder(tuple((item[0], item[1]) for item in first))

    raise TypeError(
        "order_by expects a mapping, a sequence of (field, direction) pairs "
        f"or complex expressions, got {type(first).__name__}"
    )
