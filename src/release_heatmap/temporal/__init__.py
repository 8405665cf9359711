"""Temporal aggregation -- day, month and quarter buckets over release records."""

from .index import (
    TemporalIndex,
    category_weights,
    days_in_quarter,
    months_in_quarter,
    next_quarter,
    previous_quarter,
)
from .models import CategoryTotal, CategoryWeight, DayBucket, QuarterSummary

__all__ = [
    "TemporalIndex",
    "CategoryTotal",
    "CategoryWeight",
    "DayBucket",
    "QuarterSummary",
    "category_weights",
    "days_in_quarter",
    "months_in_quarter",
    "next_quarter",
    "previous_quarter",
]
