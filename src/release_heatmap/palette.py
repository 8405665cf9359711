"""Category colours and heatmap colour scales.

Category lookup is case-insensitive and ignores surrounding whitespace.
Heatmap intensity uses a square-root curve so sparse days stay visible
next to a busy one.
"""

from typing import Dict, Mapping, Optional, Sequence, Union

import numpy as np

DEFAULT_CATEGORY_COLOR = "#78909C"

CATEGORY_COLORS: Dict[str, str] = {
    "Meeting": "#F5A623",
    "Chat features": "#4A90E2",
    "Contact Center features": "#5E7F9A",
    "General features": "#63A375",
    "Mail and Calendar features": "#7B68EE",
    "Phone features": "#607D8B",
    "Team Chat features": "#3F51B5",
    "Webinar features": "#8BC34A",
    "Whiteboard features": "#00BCD4",
    "Zoom Apps features": "#009688",
    "Zoom Clips": "#9C27B0",
    "Zoom Clips features": "#673AB7",
    "Zoom Mail and Calendar": "#2196F3",
    "Uncategorized": DEFAULT_CATEGORY_COLOR,
}

HEATMAP_SCHEMES: Dict[str, Dict[str, str]] = {
    "blue": {"min": "#E3F2FD", "max": "#0E71EB"},
    "green": {"min": "#E8F5E9", "max": "#2E7D32"},
    "purple": {"min": "#F3E5F5", "max": "#7B1FA2"},
    "rainbow": {"min": "#FFEBEE", "max": "#1A237E"},
}

# Upper bounds (exclusive) of each named hue band on the 0-360 wheel
_HUE_NAMES = (
    (30, "Red"),
    (60, "Orange"),
    (90, "Yellow"),
    (150, "Green"),
    (210, "Cyan"),
    (270, "Blue"),
    (330, "Purple"),
)


def _normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()


class CategoryPalette:
    """Maps category names to colours.

    Callable, so an instance can be handed straight to
    :func:`release_heatmap.temporal.index.category_weights`.
    """

    def __init__(
        self,
        colors: Optional[Mapping[str, str]] = None,
        default: str = DEFAULT_CATEGORY_COLOR,
    ):
        self._colors = dict(CATEGORY_COLORS if colors is None else colors)
        self._normalized = {_normalize(k): v for k, v in self._colors.items()}
        self.default = default

    def color(self, category: Optional[str]) -> str:
        if not category:
            return self.default
        if category in self._colors:
            return self._colors[category]
        return self._normalized.get(_normalize(category), self.default)

    __call__ = color

    def items(self):
        return self._colors.items()


DEFAULT_PALETTE = CategoryPalette()


def category_color(category: Optional[str]) -> str:
    """Colour for *category* from the default palette."""
    return DEFAULT_PALETTE.color(category)


def heatmap_intensities(
    counts: Union[Sequence[int], np.ndarray], max_count: int
) -> np.ndarray:
    """Square-root intensity in [0, 1] for each daily count.

    A zero ``max_count`` (empty period) maps every day to 0.
    """
    values = np.asarray(counts, dtype=float)
    if max_count <= 0:
        return np.zeros_like(values)
    return np.sqrt(np.clip(values / max_count, 0.0, 1.0))


def _hex_to_rgb(color: str) -> np.ndarray:
    color = color.lstrip("#")
    return np.array([int(color[i : i + 2], 16) for i in (0, 2, 4)], dtype=float)


def heatmap_color(count: int, max_count: int, scheme: str = "blue") -> str:
    """CSS colour for a day holding *count* releases.

    Non-rainbow schemes interpolate linearly in RGB between the scheme's
    min and max colours; ``rainbow`` sweeps hue from blue (240) to red (0).
    Unknown schemes fall back to blue.
    """
    colors = HEATMAP_SCHEMES.get(scheme, HEATMAP_SCHEMES["blue"])
    intensity = float(heatmap_intensities([count], max_count)[0])

    if scheme == "rainbow":
        hue = 240 - intensity * 240
        return f"hsl({hue:.0f}, 100%, {50 + intensity * 25:.0f}%)"

    low, high = _hex_to_rgb(colors["min"]), _hex_to_rgb(colors["max"])
    rgb = np.rint(low + (high - low) * intensity).astype(int)
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def hue_color(hue: int, count: int, max_count: int, saturation: int = 70) -> str:
    """HSL day-cell colour on a user-chosen hue; busier days are darker."""
    intensity = min(1.0, count / max_count) if max_count > 0 else 0.0
    lightness = 100 - intensity * 50
    return f"hsl({hue}, {saturation}%, {lightness:g}%)"


def hue_name(hue: int) -> str:
    """Human name for a hue angle in degrees."""
    for bound, name in _HUE_NAMES:
        if hue < bound:
            return name
    return "Red"
