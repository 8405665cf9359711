"""Calendar aggregation over a RecordStore.

All queries take a 0-based month (January = 0) and a 0-based quarter
(Q1 = 0), matching the calendar grid they feed.  Day buckets are built
lazily from one store snapshot and rebuilt only when the store swaps in a
new dataset.
"""

from __future__ import annotations

import calendar
from bisect import bisect_left
from collections import defaultdict
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ..exceptions import InvalidPeriodError
from ..palette import category_color
from ..records.models import ReleaseRecord
from ..records.store import RecordStore
from .models import CategoryTotal, CategoryWeight, DayBucket, QuarterSummary

Palette = Callable[[str], str]
DayKey = tuple[int, int, int]  # (day, month, year), month 0-based


def _check_quarter(year: int, quarter: int) -> None:
    if not 0 <= quarter <= 3:
        raise InvalidPeriodError("quarter must be 0-3", year=year, quarter=quarter)


def _check_month(year: int, month: int) -> None:
    if not 0 <= month <= 11:
        raise InvalidPeriodError("month must be 0-11", year=year, month=month)


def calendar_date(day: int, month: int, year: int) -> date:
    """Real calendar date for a (day, 0-based month, year) triple."""
    _check_month(year, month)
    try:
        return date(year, month + 1, day)
    except ValueError as e:
        raise InvalidPeriodError(str(e), year=year, month=month, day=day)


def months_in_quarter(year: int, quarter: int) -> list[tuple[int, int]]:
    """``(month, year)`` pairs of the quarter's three months."""
    _check_quarter(year, quarter)
    return [(quarter * 3 + i, year) for i in range(3)]


def days_in_quarter(year: int, quarter: int) -> list[DayKey]:
    """Every calendar day in the quarter as ``(day, month, year)``."""
    days = []
    for month, y in months_in_quarter(year, quarter):
        last = calendar.monthrange(y, month + 1)[1]
        days.extend((d, month, y) for d in range(1, last + 1))
    return days


def previous_quarter(year: int, quarter: int, year_range: tuple[int, int]) -> tuple[int, int]:
    """Step one quarter back, staying put at the first quarter of the range."""
    _check_quarter(year, quarter)
    if quarter > 0:
        return year, quarter - 1
    if year > year_range[0]:
        return year - 1, 3
    return year, quarter


def next_quarter(year: int, quarter: int, year_range: tuple[int, int]) -> tuple[int, int]:
    """Step one quarter forward, staying put at the last quarter of the range."""
    _check_quarter(year, quarter)
    if quarter < 3:
        return year, quarter + 1
    if year < year_range[1]:
        return year + 1, 0
    return year, quarter


def category_weights(
    records: Iterable[ReleaseRecord], palette: Optional[Palette] = None
) -> list[CategoryWeight]:
    """Group records by category into layout weights.

    Sorted descending by count; equal counts keep first-seen order.  Only
    categories with at least one record appear.
    """
    color_for = palette or category_color
    grouped: dict[str, list[ReleaseRecord]] = {}
    for record in records:
        grouped.setdefault(record.category, []).append(record)

    weights = [
        CategoryWeight(category=name, value=len(items), color=color_for(name), records=tuple(items))
        for name, items in grouped.items()
    ]
    # sorted() is stable, so ties stay in first-seen order
    return sorted(weights, key=lambda w: -w.value)


class TemporalIndex:
    """Day/month/quarter queries over the records of a :class:`RecordStore`."""

    def __init__(self, store: RecordStore, palette: Optional[Palette] = None):
        self.store = store
        self.palette = palette or category_color
        self._cache: Optional[
            tuple[tuple[ReleaseRecord, ...], dict[date, tuple[ReleaseRecord, ...]], list[date]]
        ] = None

    def _index(self) -> tuple[tuple[ReleaseRecord, ...], dict[date, tuple[ReleaseRecord, ...]], list[date]]:
        snapshot = self.store.snapshot()
        cache = self._cache
        if cache is not None and cache[0] is snapshot:
            return cache

        by_day: dict[date, list[ReleaseRecord]] = defaultdict(list)
        for record in snapshot:
            by_day[record.date].append(record)
        days = {d: tuple(items) for d, items in by_day.items()}
        cache = (snapshot, days, sorted(days))
        # Single assignment: concurrent readers see the old or the new index
        self._cache = cache
        return cache

    # ── Day queries ─────────────────────────────────────────────

    def features_on_day(self, day: int, month: int, year: int) -> tuple[ReleaseRecord, ...]:
        """Records released on the given calendar day, in ingestion order."""
        target = calendar_date(day, month, year)
        return self._index()[1].get(target, ())

    def day_bucket(self, day: int, month: int, year: int) -> DayBucket:
        return DayBucket(calendar_date(day, month, year), self.features_on_day(day, month, year))

    def days_since_previous_release(self, day: int, month: int, year: int) -> int:
        """Whole days back to the latest release strictly before the day.

        Returns 0 when nothing was released earlier.
        """
        target = calendar_date(day, month, year)
        release_days = self._index()[2]
        pos = bisect_left(release_days, target)
        if pos == 0:
            return 0
        return (target - release_days[pos - 1]).days

    def max_daily_count_in_range(self, days: Iterable[DayKey]) -> int:
        """Busiest day's release count; 0 for an empty or release-free range."""
        return max((len(self.features_on_day(*key)) for key in days), default=0)

    # ── Period queries ──────────────────────────────────────────

    def features_in_month(self, year: int, month: int) -> list[ReleaseRecord]:
        _check_month(year, month)
        return [r for r in self._index()[0] if r.year == year and r.month_index == month]

    def features_in_quarter(self, year: int, quarter: int) -> list[ReleaseRecord]:
        """Records whose month falls in ``[quarter*3, quarter*3+2]`` of *year*."""
        _check_quarter(year, quarter)
        first = quarter * 3
        return [
            r for r in self._index()[0] if r.year == year and first <= r.month_index <= first + 2
        ]

    def max_daily_count_in_quarter(self, year: int, quarter: int) -> int:
        return self.max_daily_count_in_range(days_in_quarter(year, quarter))

    def category_weights(self, records: Sequence[ReleaseRecord]) -> list[CategoryWeight]:
        return category_weights(records, self.palette)

    def quarter_summary(self, year: int, quarter: int) -> QuarterSummary:
        """Quarter total plus a count for every category in the dataset.

        Categories with no releases in the quarter are listed with 0.
        """
        features = self.features_in_quarter(year, quarter)
        counts: dict[str, int] = {name: 0 for name in self.store.categories()}
        for record in features:
            counts[record.category] = counts.get(record.category, 0) + 1

        totals = sorted(
            (CategoryTotal(name, count, self.palette(name)) for name, count in counts.items()),
            key=lambda t: -t.count,
        )
        return QuarterSummary(year=year, quarter=quarter, total=len(features), category_totals=tuple(totals))

    def year_range(self) -> tuple[int, int]:
        return self.store.year_range()
