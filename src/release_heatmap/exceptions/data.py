"""Data ingestion exceptions: unreadable sources, impossible dates."""

from pathlib import Path
from typing import Any

from .base import ReleaseHeatmapError


class IngestionError(ReleaseHeatmapError):
    """Raised when a release data source cannot be loaded."""

    def __init__(self, source: Path, reason: str):
        super().__init__(
            f"Cannot load release data: {source}",
            details={"source": str(source), "reason": reason},
        )
        self.source = source
        self.reason = reason


class InvalidDateError(ReleaseHeatmapError, ValueError):
    """Raised when a value does not describe a real calendar date."""

    def __init__(self, value: Any, reason: str = "not a calendar date"):
        super().__init__(
            f"Invalid release date: {value!r}",
            details={"reason": reason},
        )
        self.value = value
        self.reason = reason
