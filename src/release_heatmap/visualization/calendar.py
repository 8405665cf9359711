"""Build JSON-ready quarterly calendar data for the HTML report.

Each day cell carries its release count, heatmap colour, the gap since
the previous release, its category mosaic as percentage boxes and the
day's features grouped by category, so the page script only has to
position ``<div>`` elements.
"""

import calendar
import math
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..palette import heatmap_color, hue_color
from ..records.models import ReleaseRecord
from ..temporal.index import TemporalIndex, months_in_quarter, next_quarter, previous_quarter
from ..temporal.models import CategoryWeight
from .treemap import DEFAULT_MIN_EXTENT, UNIT_BOUNDS, Rectangle, TreemapNode, layout

MONTH_NAMES = list(calendar.month_name)[1:]
DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Record fields shown under each feature in the day detail view, in order
DETAIL_LABELS = [
    ("impact", "Impact"),
    ("team", "Team"),
    ("contributor", "Contributor"),
    ("bug_count", "Bugs"),
    ("time_to_release", "Days to release"),
    ("complexity", "Complexity"),
    ("dependencies", "Dependencies"),
]


def quarter_key(year: int, quarter: int) -> str:
    return f"{year}-{quarter}"


def node_to_cell(node: TreemapNode, bounds: Rectangle = UNIT_BOUNDS) -> Dict[str, Any]:
    """Express a treemap node as CSS percentages of *bounds*."""
    rect = node.rect
    return {
        "category": node.category,
        "value": node.value,
        "color": node.weight.color,
        "left": round((rect.x0 - bounds.x0) / bounds.width * 100, 4),
        "top": round((rect.y0 - bounds.y0) / bounds.height * 100, 4),
        "width": round(rect.width / bounds.width * 100, 4),
        "height": round(rect.height / bounds.height * 100, 4),
    }


def _json_value(value: Any) -> Any:
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return str(value)


def feature_to_dict(record: ReleaseRecord) -> Dict[str, Any]:
    return {
        "category": record.category,
        "description": record.description,
        "details": {str(k): _json_value(v) for k, v in record.fields.items()},
    }


def weight_to_group(weight: CategoryWeight) -> Dict[str, Any]:
    """One category heading of the day detail list."""
    return {
        "category": weight.category,
        "color": weight.color,
        "count": len(weight.records),
        "features": [feature_to_dict(r) for r in weight.records],
    }


def build_calendar_data(
    index: TemporalIndex,
    year: int,
    quarter: int,
    scheme: str = "blue",
    bounds: Optional[Rectangle] = None,
    min_extent: float = DEFAULT_MIN_EXTENT,
    hue: Optional[int] = None,
    year_range: Optional[Tuple[int, int]] = None,
) -> Dict[str, Any]:
    """Calendar grid for one quarter.

    When *hue* is given, day cells are shaded on that hue instead of the
    *scheme*.  ``prev``/``next`` name the neighbouring quarters inside
    *year_range* (default: the index's year range), or None at its ends.

    Structure::

        {
            "label": "Q1 2022",
            "prev": None, "next": "2022-1",
            "max_count": 3,
            "months": [
                {
                    "name": "January",
                    "feature_count": 12,
                    "leading_blanks": 6,
                    "days": [
                        {"day": 1, "count": 2, "ratio": 0.6667, "heat": "#8DB6F3",
                         "days_since": 0, "cells": [...], "groups": [...]},
                    ],
                }
            ],
            "summary": {"total": 40, "categories": [...]},
        }
    """
    bounds = bounds or UNIT_BOUNDS
    year_range = year_range or index.year_range()
    max_count = index.max_daily_count_in_quarter(year, quarter)

    months: List[Dict[str, Any]] = []
    for month, y in months_in_quarter(year, quarter):
        first_weekday, last_day = calendar.monthrange(y, month + 1)
        days = []
        for day in range(1, last_day + 1):
            features = index.features_on_day(day, month, y)
            count = len(features)
            weights = index.category_weights(features)
            nodes = layout(weights, bounds, min_extent) if weights else []

            heat = None
            if count:
                if hue is None:
                    heat = heatmap_color(count, max_count, scheme)
                else:
                    heat = hue_color(hue, count, max_count)
            days.append(
                {
                    "day": day,
                    "count": count,
                    "ratio": round(min(1.0, count / max_count), 4) if max_count else 0.0,
                    "heat": heat,
                    "days_since": index.days_since_previous_release(day, month, y),
                    "cells": [node_to_cell(n, bounds) for n in nodes],
                    "groups": [weight_to_group(w) for w in weights],
                }
            )
        months.append(
            {
                "name": MONTH_NAMES[month],
                "month": month,
                "year": y,
                "feature_count": len(index.features_in_month(y, month)),
                # monthrange is Monday-first; the grid starts on Sunday
                "leading_blanks": (first_weekday + 1) % 7,
                "days": days,
            }
        )

    here = (year, quarter)
    prev_period = previous_quarter(year, quarter, year_range)
    next_period = next_quarter(year, quarter, year_range)

    summary = index.quarter_summary(year, quarter)
    return {
        "year": year,
        "quarter": quarter,
        "label": summary.label,
        "prev": quarter_key(*prev_period) if prev_period != here else None,
        "next": quarter_key(*next_period) if next_period != here else None,
        "scheme": scheme,
        "max_count": max_count,
        "day_names": DAY_NAMES,
        "months": months,
        "summary": {
            "total": summary.total,
            "categories": [
                {"name": t.category, "count": t.count, "color": t.color}
                for t in summary.category_totals
            ],
        },
    }
