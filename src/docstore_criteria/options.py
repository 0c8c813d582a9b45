"""Option validator/filter and pagination defaults."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import UnsupportedOptionError

if TYPE_CHECKING:
    from collections.abc import Iterable, MutableMapping

    from .config import CriteriaSettings

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
DEFAULT_SKIP = 0
DEFAULT_PER_PAGE = 20

CRITERIA_OPTIONS = frozenset({"sort", "limit", "skip", "cache", "enslave"})

# Keyword arguments accepted by pymongo's Collection.find().
DRIVER_FIND_OPTIONS = frozenset(
    {
        "projection",
        "no_cursor_timeout",
        "cursor_type",
        "allow_partial_results",
        "oplog_replay",
        "batch_size",
        "collation",
        "hint",
        "max_scan",
        "max_time_ms",
        "max",
        "min",
        "return_key",
        "show_record_id",
        "snapshot",
        "comment",
        "session",
        "allow_disk_use",
        "let",
    }
)


class OptionFilter:
    """
    Normalise an options mapping in place.

    ``page``/``per_page`` are translated into ``limit``/``skip``. Keys that
    are neither criteria options nor pymongo ``find()`` keywords are
    dropped with a warning, or rejected when ``strict`` is set.
    """

    def __init__(
        self,
        *,
        strict: bool = False,
        extra_options: Iterable[str] = (),
        default_per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self.strict = strict
        self.default_per_page = default_per_page
        self.allowed = CRITERIA_OPTIONS | DRIVER_FIND_OPTIONS | frozenset(extra_options)

    @classmethod
    def from_settings(cls, settings: CriteriaSettings) -> OptionFilter:
        return cls(
            strict=settings.strict_options,
            extra_options=settings.extra_options,
            default_per_page=settings.default_per_page,
        )

    def filter(self, options: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        """Filter ``options`` in place and return it."""
        self._apply_pagination(options)

        unsupported = [key for key in options if key not in self.allowed]
        if unsupported:
            if self.strict:
                raise UnsupportedOptionError(unsupported, sorted(self.allowed))
            logger.warning("Dropping unsupported criteria options: %s", unsupported)
            for key in unsupported:
                del options[key]
        return options

    def _apply_pagination(self, options: MutableMapping[str, Any]) -> None:
        page = options.pop("page", None)
        per_page = options.pop("per_page", None)
        if page is None and per_page is None:
            return
        limit = int(per_page) if per_page is not None else self.default_per_page
        page_num = int(page) if page is not None else 1
        options["limit"] = limit
        options["skip"] = page_num * limit - limit
        logger.debug(
            "Translated page=%s per_page=%s to limit=%s skip=%s",
            page,
            per_page,
            limit,
            options["skip"],
        )
