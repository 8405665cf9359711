"""Data models for release records."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Mapping

UNCATEGORIZED = "Uncategorized"
NO_DESCRIPTION = "No description available"


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range [start, end]."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"DateRange end {self.end} precedes start {self.start}")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


DEFAULT_DATE_RANGE = DateRange(date(2022, 1, 1), date(2024, 1, 31))


@dataclass(frozen=True)
class ReleaseRecord:
    """One released feature, dated to the day.

    ``month_index`` is 0-based (January = 0), the convention used by every
    calendar query in :mod:`release_heatmap.temporal`.  ``fields`` is a
    read-only copy of the mapping passed in.
    """

    date: date
    category: str = UNCATEGORIZED
    description: str = NO_DESCRIPTION
    fields: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # datetime is a date subclass; keep day precision only
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())
        elif not isinstance(self.date, date):
            raise TypeError(f"ReleaseRecord.date must be a date, got {type(self.date).__name__}")

        category = (self.category or "").strip()
        object.__setattr__(self, "category", category or UNCATEGORIZED)
        if not self.description:
            object.__setattr__(self, "description", NO_DESCRIPTION)
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month_index(self) -> int:
        return self.date.month - 1

    @property
    def day(self) -> int:
        return self.date.day

    def with_fields(self, **extra: Any) -> ReleaseRecord:
        """Return a copy with ``extra`` merged over the existing fields."""
        return replace(self, fields={**self.fields, **extra})
