"""Render a ``Criteria`` into pymongo ``find()`` keyword arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pymongo import ASCENDING, DESCENDING, ReadPreference

from .options import CRITERIA_OPTIONS
from .ordering import SortDirection

if TYPE_CHECKING:
    from pymongo.read_preferences import _ServerMode

    from .criteria import Criteria

_DESCENDING_NAMES = frozenset({"desc", "descending"})


def _direction(value: Any) -> int:
    if isinstance(value, SortDirection):
        value = value.value
    if isinstance(value, int) and not isinstance(value, bool):
        return DESCENDING if value < 0 else ASCENDING
    return DESCENDING if str(value).lower() in _DESCENDING_NAMES else ASCENDING


class CriteriaCompiler:
    """Compiles a ``Criteria`` to the arguments of ``Collection.find()``."""

    def build_filter(self, criteria: Criteria) -> dict[str, Any]:
        return dict(criteria.selector)

    def build_sort(self, criteria: Criteria) -> list[tuple[str, int]] | None:
        """Build MongoDB sort tuples; ``None`` when no sort was requested."""
        if criteria.sort is None:
            return None
        return [(str(field), _direction(direction)) for field, direction in criteria.sort]

    def build_find_kwargs(self, criteria: Criteria) -> dict[str, Any]:
        """Filter, sort, limit, skip and passthrough driver options."""
        options = criteria.options
        kwargs: dict[str, Any] = {"filter": self.build_filter(criteria)}
        sort = self.build_sort(criteria)
        if sort:
            kwargs["sort"] = sort
        if options.get("limit") is not None:
            kwargs["limit"] = options["limit"]
        if options.get("skip") is not None:
            kwargs["skip"] = options["skip"]
        for key, value in options.items():
            if key not in CRITERIA_OPTIONS:
                kwargs[key] = value
        return kwargs

    def read_preference(self, criteria: Criteria) -> _ServerMode:
        """Secondary-preferred for enslaved criteria, primary otherwise."""
        if criteria.is_enslaved:
            return ReadPreference.SECONDARY_PREFERRED
        return ReadPreference.PRIMARY
