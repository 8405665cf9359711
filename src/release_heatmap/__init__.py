"""
Release Heatmap - calendar heatmaps of feature releases.

Groups dated release records by day, month and quarter, and subdivides
each day into a squarified treemap of release categories.
"""

__version__ = "0.1.0"

from .records import DateRange, RecordStore, ReleaseRecord
from .temporal import CategoryWeight, TemporalIndex, category_weights
from .visualization import Rectangle, TreemapNode, generate_report, layout

__all__ = [
    "DateRange",
    "RecordStore",
    "ReleaseRecord",
    "TemporalIndex",
    "CategoryWeight",
    "category_weights",
    "Rectangle",
    "TreemapNode",
    "layout",
    "generate_report",
]
