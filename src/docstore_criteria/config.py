"""Settings for the option filter used by ``Criteria.extras``."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CriteriaSettings(BaseModel):
    """
    Attributes:
        strict_options: Raise ``UnsupportedOptionError`` on unknown option
            keys instead of dropping them with a warning.
        extra_options: Additional option keys to accept as passthrough.
        default_per_page: Page size used when only ``page`` is given.
    """

    model_config = ConfigDict(frozen=True)

    strict_options: bool = False
    extra_options: frozenset[str] = Field(default_factory=frozenset)
    default_per_page: int = Field(default=20, gt=0)
