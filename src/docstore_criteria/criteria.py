"""
Immutable query criteria for a document store.

Every builder method returns a new ``Criteria``; the receiver is never
modified, so a chain can be branched at any point::

    base = Criteria(DocumentType("Person")).where({"active": True})
    by_name = base.ascending("last_name", "first_name")
    newest = base.descending("created_at").limit(10)

``base`` is unchanged by either branch.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from . import inclusion
from .exceptions import CriteriaMergeError
from .options import DEFAULT_LIMIT, DEFAULT_PER_PAGE, DEFAULT_SKIP, OptionFilter
from .ordering import SortDirection, SortPair, flatten, resolve_order_spec

if TYPE_CHECKING:
    from .config import CriteriaSettings
    from .document import TargetType

Mutation = Callable[[dict[str, Any], dict[str, Any]], None]


def _normalise_sort(options: dict[str, Any]) -> None:
    """Resolve a raw ``sort`` option in place, as ``order_by`` would.

    Raises:
        TypeError: If the value is not an accepted ordering shape.
    """
    spec = resolve_order_spec(options["sort"])
    if spec is None:
        del options["sort"]
    else:
        options["sort"] = spec.pairs()


class Criteria:
    """
    Accumulated filter (``selector``) and execution options (``options``)
    for a query against ``target_type``.

    Recognised option keys are ``sort``, ``limit``, ``skip``, ``cache`` and
    ``enslave``; ``extras`` may add pymongo ``find()`` keywords. ``sort`` is
    absent until the first ordering call that names at least one field, and
    is then a tuple of ``(field, direction)`` pairs.
    """

    __slots__ = ("_target_type", "_selector", "_options", "_option_filter")

    def __init__(
        self,
        target_type: TargetType,
        selector: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        option_filter: OptionFilter | None = None,
    ) -> None:
        self._target_type = target_type
        self._selector: dict[str, Any] = dict(selector or {})
        self._options: dict[str, Any] = dict(options or {})
        if "sort" in self._options:
            _normalise_sort(self._options)
        self._option_filter = (
            option_filter if option_filter is not None else OptionFilter()
        )

    @classmethod
    def from_settings(
        cls, target_type: TargetType, settings: CriteriaSettings
    ) -> Criteria:
        return cls(target_type, option_filter=OptionFilter.from_settings(settings))

    # -- read access ---------------------------------------------------------

    @property
    def target_type(self) -> TargetType:
        return self._target_type

    @property
    def selector(self) -> Mapping[str, Any]:
        return MappingProxyType(self._selector)

    @property
    def options(self) -> Mapping[str, Any]:
        return MappingProxyType(self._options)

    @property
    def option_filter(self) -> OptionFilter:
        return self._option_filter

    @property
    def sort(self) -> tuple[SortPair, ...] | None:
        return self._options.get("sort")

    @property
    def is_cached(self) -> bool:
        return self._options.get("cache") is True

    @property
    def is_enslaved(self) -> bool:
        return self._options.get("enslave") is True

    # -- clone primitive -----------------------------------------------------

    def _clone(self, mutate: Mutation | None = None) -> Criteria:
        """Copy both containers, apply ``mutate`` to the copies, return the clone."""
        selector = dict(self._selector)
        options = dict(self._options)
        if mutate is not None:
            mutate(selector, options)
        clone = object.__new__(type(self))
        clone._target_type = self._target_type
        clone._selector = selector
        clone._options = options
        clone._option_filter = self._option_filter
        return clone

    def _set_option(self, key: str, value: Any) -> Criteria:
        def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
            options[key] = value

        return self._clone(mutate)

    # -- ordering ------------------------------------------------------------

    def _append_sort(self, pairs: tuple[SortPair, ...]) -> Criteria:
        if not pairs:
            return self._clone()

        def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
            current = options.get("sort")
            options["sort"] = (current if current is not None else ()) + pairs

        return self._clone(mutate)

    def ascending(self, *fields: Any) -> Criteria:
        """Sort by ``fields`` ascending, after any existing sort entries."""
        direction = SortDirection.ASC.value
        return self._append_sort(tuple((f, direction) for f in flatten(fields)))

    def descending(self, *fields: Any) -> Criteria:
        """Sort by ``fields`` descending, after any existing sort entries."""
        direction = SortDirection.DESC.value
        return self._append_sort(tuple((f, direction) for f in flatten(fields)))

    asc = ascending
    desc = descending

    def order_by(self, *args: Any) -> Criteria:
        """
        Append sort entries from a mapping, a sequence of pairs, complex
        expressions, or an ``OrderSpec``.

        Example::

            criteria.order_by({"name": "asc", "age": "desc"})
            criteria.order_by([("name", "asc"), ("age", "desc")])
            criteria.order_by(ComplexExpression.desc("age"))
        """
        spec = resolve_order_spec(*args)
        return self._append_sort(spec.pairs() if spec is not None else ())

    order = order_by

    # -- pagination ----------------------------------------------------------

    def limit(self, value: int = DEFAULT_LIMIT) -> Criteria:
        return self._set_option("limit", value)

    def skip(self, value: int = DEFAULT_SKIP) -> Criteria:
        return self._set_option("skip", value)

    def offset(self, *args: int) -> Criteria | int | None:
        """With an argument, same as ``skip(value)``; without, the current skip."""
        if args:
            return self.skip(args[0])
        return self._options.get("skip")

    def paginate(self, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> Criteria:
        """Set ``limit``/``skip`` for a 1-based ``page`` of ``per_page`` results."""

        def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
            options["limit"] = per_page
            options["skip"] = (page - 1) * per_page

        return self._clone(mutate)

    # -- flags ---------------------------------------------------------------

    def cache(self) -> Criteria:
        """Mark the resulting cursor to be cached across iterations."""
        return self._set_option("cache", True)

    def enslave(self) -> Criteria:
        """Mark the query to be read from a secondary."""
        return self._set_option("enslave", True)

    # -- passthrough options -------------------------------------------------

    def extras(self, extras: Mapping[str, Any]) -> Criteria:
        """
        Merge raw driver options, then run the option filter over them.

        Raises:
            UnsupportedOptionError: If the option filter is strict and an
                unknown key is given.
        """
        option_filter = self._option_filter

        def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
            options.update(extras)
            if "sort" in extras:
                _normalise_sort(options)
            option_filter.filter(options)

        return self._clone(mutate)

    # -- selector ------------------------------------------------------------

    def where(self, conditions: Mapping[str, Any]) -> Criteria:
        return inclusion.where(self, conditions)

    def any_in(self, conditions: Mapping[str, Any]) -> Criteria:
        return inclusion.any_in(self, conditions)

    def for_ids(self, *ids: Any) -> Criteria:
        """
        Match documents by id.

        A single id becomes a direct equality on the id field; several ids
        become an ``$in`` condition.

        Raises:
            InvalidIdentifierError: If an id is not a valid identifier.
        """
        values = list(flatten(ids))
        id_field = self._target_type.id_field
        if len(values) > 1:
            # Distinct after coercion: "abc..." and ObjectId("abc...") are one id.
            distinct = list(dict.fromkeys(self._target_type.coerce_ids(values)))
            if len(distinct) > 1:
                return self.any_in({id_field: distinct})
            coerced = distinct[0] if distinct else None
        else:
            coerced = self._target_type.coerce_id(values[0] if values else None)

        def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
            selector[id_field] = coerced

        return self._clone(mutate)

    # -- composition ---------------------------------------------------------

    def merge(self, other: Criteria) -> Criteria:
        """
        Combine with ``other``.

        - Selector entries and options of ``other`` override ``self``'s.
        - Sort entries are concatenated (``other`` appended).
        """
        if other.target_type != self._target_type:
            raise CriteriaMergeError(self._target_type.name, other.target_type.name)

        def mutate(selector: dict[str, Any], options: dict[str, Any]) -> None:
            selector.update(other._selector)
            other_options = dict(other._options)
            other_sort = other_options.pop("sort", None)
            options.update(other_options)
            if other_sort:
                current = options.get("sort")
                options["sort"] = (current if current is not None else ()) + other_sort

        return self._clone(mutate)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dictionary; empty containers are omitted."""
        result: dict[str, Any] = {"target_type": self._target_type.name}
        if self._selector:
            result["selector"] = dict(self._selector)
        options = dict(self._options)
        if options.get("sort") is not None:
            options["sort"] = [list(pair) for pair in options["sort"]]
        if options:
            result["options"] = options
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Criteria):
            return NotImplemented
        return (
            self._target_type == other._target_type
            and self._selector == other._selector
            and self._options == other._options
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Criteria(target_type={self._target_type.name!r}, "
            f"selector={self._selector!r}, options={self._options!r})"
        )

    # Shadows the builtin for the rest of the class body; keep last.
    def type(self, types: Any) -> Criteria:
        """Match documents whose type discriminator is one of ``types``."""
        return self.any_in({self._target_type.type_field: inclusion.as_list(types)})
