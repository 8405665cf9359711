"""Visualization layer -- squarified treemap layout and HTML calendar report."""

from .calendar import build_calendar_data
from .report import generate_report
from .treemap import UNIT_BOUNDS, Rectangle, TreemapNode, layout, layout_day, worst_ratio

__all__ = [
    "UNIT_BOUNDS",
    "Rectangle",
    "TreemapNode",
    "build_calendar_data",
    "generate_report",
    "layout",
    "layout_day",
    "worst_ratio",
]
