"""In-memory store of normalized release records.

The store owns one immutable tuple. Refreshing it swaps the whole tuple in
a single assignment, so readers holding a snapshot never observe a
partially updated dataset.
"""

from __future__ import annotations

import threading
from datetime import date
from typing import Iterable, Iterator, Optional

from ..logging_config import get_logger
from .models import DateRange, ReleaseRecord

logger = get_logger(__name__)

DEFAULT_YEAR_RANGE = (2022, 2024)


class RecordStore:
    """Owned handle on the release dataset shared by both engines."""

    def __init__(
        self,
        records: Iterable[ReleaseRecord] = (),
        date_range: Optional[DateRange] = None,
    ):
        self._date_range = date_range
        self._lock = threading.Lock()
        self._records: tuple[ReleaseRecord, ...] = self._normalize(records)

    def _normalize(self, records: Iterable[ReleaseRecord]) -> tuple[ReleaseRecord, ...]:
        items = tuple(records)
        if self._date_range is None:
            return items
        kept = tuple(r for r in items if self._date_range.contains(r.date))
        if len(kept) != len(items):
            logger.debug(
                f"Dropped {len(items) - len(kept)} records outside "
                f"{self._date_range.start}..{self._date_range.end}"
            )
        return kept

    @property
    def records(self) -> tuple[ReleaseRecord, ...]:
        return self._records

    def snapshot(self) -> tuple[ReleaseRecord, ...]:
        """Current dataset; stays valid across later ``replace`` calls."""
        return self._records

    def replace(self, records: Iterable[ReleaseRecord]) -> None:
        """Atomically swap in a new dataset."""
        normalized = self._normalize(records)
        with self._lock:
            self._records = normalized
        logger.debug(f"Record store refreshed with {len(normalized)} records")

    @property
    def date_range(self) -> Optional[DateRange]:
        return self._date_range

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ReleaseRecord]:
        return iter(self._records)

    @property
    def is_empty(self) -> bool:
        return not self._records

    def date_span(self) -> Optional[tuple[date, date]]:
        """Earliest and latest release dates, or None when empty."""
        records = self._records
        if not records:
            return None
        dates = [r.date for r in records]
        return min(dates), max(dates)

    def year_range(self, default: tuple[int, int] = DEFAULT_YEAR_RANGE) -> tuple[int, int]:
        span = self.date_span()
        if span is None:
            return default
        return span[0].year, span[1].year

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(r.category for r in self._records))
