"""Data models for calendar aggregation."""

from dataclasses import dataclass, field
from datetime import date

from ..records.models import ReleaseRecord


@dataclass(frozen=True)
class DayBucket:
    date: date
    records: tuple[ReleaseRecord, ...] = ()

    @property
    def count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class CategoryWeight:
    category: str
    value: float  # release count; >= 1 when produced by category_weights
    color: str
    records: tuple[ReleaseRecord, ...] = field(default=(), compare=False, repr=False)


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    count: int  # may be 0: categories absent from the period are still listed
    color: str


@dataclass(frozen=True)
class QuarterSummary:
    year: int
    quarter: int  # 0-based
    total: int
    category_totals: tuple[CategoryTotal, ...]

    @property
    def label(self) -> str:
        return f"Q{self.quarter + 1} {self.year}"
