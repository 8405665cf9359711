"""Exception hierarchy for Release Heatmap."""

from .base import ReleaseHeatmapError
from .config import ConfigurationError, InvalidConfigError
from .data import IngestionError, InvalidDateError
from .layout import InvalidLayoutInput, InvalidPeriodError

__all__ = [
    "ReleaseHeatmapError",
    "ConfigurationError",
    "InvalidConfigError",
    "IngestionError",
    "InvalidDateError",
    "InvalidLayoutInput",
    "InvalidPeriodError",
]
