"""Release records and the store that owns them."""

from .models import DEFAULT_DATE_RANGE, UNCATEGORIZED, DateRange, ReleaseRecord
from .store import RecordStore

__all__ = [
    "DEFAULT_DATE_RANGE",
    "UNCATEGORIZED",
    "DateRange",
    "ReleaseRecord",
    "RecordStore",
]
