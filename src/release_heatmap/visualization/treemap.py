"""Squarified treemap layout (Bruls, Huizing & van Wijk).

Partitions a rectangle among weighted categories so that each area is
proportional to its weight while keeping rectangles close to square.
Rows are always laid along the shorter side of the space still free, and
each row takes the prefix of the (descending) items that minimises its
worst aspect ratio.

The engine is pure geometry: it knows nothing about pixels, HTML or
colours beyond carrying the input weights through to its output.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..exceptions import InvalidLayoutInput
from ..records.models import ReleaseRecord
from ..temporal.index import Palette, category_weights
from ..temporal.models import CategoryWeight

DEFAULT_MIN_EXTENT = 1e-9


@dataclass(frozen=True)
class Rectangle:
    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        if not (self.x1 >= self.x0 and self.y1 >= self.y0):
            raise InvalidLayoutInput(
                "rectangle corners out of order", value=(self.x0, self.y0, self.x1, self.y1)
            )

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def area(self) -> float:
        return self.width * self.height


UNIT_BOUNDS = Rectangle(0.0, 0.0, 100.0, 100.0)


@dataclass(frozen=True)
class TreemapNode:
    weight: CategoryWeight
    rect: Rectangle

    @property
    def category(self) -> str:
        return self.weight.category

    @property
    def value(self) -> float:
        return self.weight.value


def worst_ratio(row_values: Sequence[float], scale: float, short_side: float) -> float:
    """Worst width:height ratio of a candidate row.

    The row is a strip along *short_side* whose thickness is
    ``sum(row_values) * scale / short_side``; each item gets a share of
    the strip's length proportional to its value.
    """
    row_sum = sum(row_values)
    if row_sum <= 0 or short_side <= 0 or scale <= 0:
        return math.inf
    thickness = row_sum * scale / short_side
    worst = 0.0
    for value in row_values:
        length = value / row_sum * short_side
        worst = max(worst, thickness / length, length / thickness)
    return worst


def _best_row_length(values: Sequence[float], scale: float, short_side: float) -> int:
    """Length of the prefix of *values* with the lowest worst ratio.

    Stops at the first prefix that does not improve on the previous one;
    the worst ratio is convex along the prefix sequence.
    """
    best = math.inf
    count = 1
    for i in range(1, len(values) + 1):
        ratio = worst_ratio(values[:i], scale, short_side)
        if ratio < best:
            best = ratio
            count = i
        else:
            break
    return count


def _validate(items: Sequence[CategoryWeight], bounds: Rectangle) -> None:
    if not (math.isfinite(bounds.width) and math.isfinite(bounds.height)):
        raise InvalidLayoutInput("bounds must be finite", value=(bounds.width, bounds.height))
    if bounds.width <= 0 or bounds.height <= 0:
        raise InvalidLayoutInput("bounds must have positive width and height", value=(bounds.width, bounds.height))
    for item in items:
        if not (math.isfinite(item.value) and item.value > 0):
            raise InvalidLayoutInput(f"weight for {item.category!r} must be positive", value=item.value)


def layout(
    items: Iterable[CategoryWeight],
    bounds: Rectangle = UNIT_BOUNDS,
    min_extent: float = DEFAULT_MIN_EXTENT,
) -> list[TreemapNode]:
    """Lay *items* out inside *bounds*.

    Returns one node per item, in the order rows were committed.  Node
    areas sum to ``bounds.area`` and no two nodes overlap.

    *min_extent* is a fraction of each side of *bounds*: once the free
    space is that thin on either axis, the items still waiting get
    zero-area rectangles at the free space's corner.

    Raises:
        InvalidLayoutInput: non-positive or non-finite bounds or weights,
            or *min_extent* outside ``[0, 1)``.
    """
    items = list(items)
    _validate(items, bounds)
    if not 0 <= min_extent < 1:
        raise InvalidLayoutInput("min_extent must be in [0, 1)", value=min_extent)
    if not items:
        return []

    remaining = sorted(items, key=lambda w: -w.value)
    x0, y0, x1, y1 = bounds.x0, bounds.y0, bounds.x1, bounds.y1
    nodes: list[TreemapNode] = []
    min_width = min_extent * bounds.width
    min_height = min_extent * bounds.height

    while remaining:
        width, height = x1 - x0, y1 - y0
        if width <= min_width or height <= min_height:
            corner = Rectangle(x0, y0, x0, y0)
            nodes.extend(TreemapNode(item, corner) for item in remaining)
            break

        horizontal = width < height
        short_side = width if horizontal else height
        values = [w.value for w in remaining]
        remaining_total = sum(values)
        scale = width * height / remaining_total

        count = _best_row_length(values, scale, short_side)
        row, remaining = remaining[:count], remaining[count:]
        row_sum = sum(values[:count])

        if horizontal:
            # Strip spans the full width; the last row takes all leftover height
            strip_end = y1 if not remaining else min(y0 + row_sum / remaining_total * height, y1)
            nodes.extend(_split_strip(row, row_sum, x0, x1, lambda a, b: Rectangle(a, y0, b, strip_end)))
            y0 = strip_end
        else:
            strip_end = x1 if not remaining else min(x0 + row_sum / remaining_total * width, x1)
            nodes.extend(_split_strip(row, row_sum, y0, y1, lambda a, b: Rectangle(x0, a, strip_end, b)))
            x0 = strip_end

    return nodes


def _split_strip(row, row_sum, start, end, make_rect) -> list[TreemapNode]:
    """Divide ``[start, end]`` among *row* proportionally to value."""
    nodes = []
    length = end - start
    position = start
    for i, item in enumerate(row):
        if i == len(row) - 1:
            stop = end
        else:
            stop = min(position + item.value / row_sum * length, end)
        nodes.append(TreemapNode(item, make_rect(position, stop)))
        position = stop
    return nodes


def layout_day(
    records: Iterable[ReleaseRecord],
    bounds: Rectangle = UNIT_BOUNDS,
    palette: Optional[Palette] = None,
    min_extent: float = DEFAULT_MIN_EXTENT,
) -> list[TreemapNode]:
    """Category mosaic for one day's (or any period's) records."""
    return layout(category_weights(records, palette), bounds, min_extent)
