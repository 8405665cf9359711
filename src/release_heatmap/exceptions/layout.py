"""Layout and period query exceptions."""

from typing import Optional

from .base import ReleaseHeatmapError


class InvalidLayoutInput(ReleaseHeatmapError, ValueError):
    """Raised when the treemap engine receives non-positive bounds or weights."""

    def __init__(self, reason: str, value: Optional[float] = None):
        details = {"reason": reason}
        if value is not None:
            details["value"] = repr(value)
        super().__init__(f"Invalid treemap layout input: {reason}", details=details)
        self.reason = reason
        self.value = value


class InvalidPeriodError(ReleaseHeatmapError, ValueError):
    """Raised for a quarter, month or day that is not on the calendar."""

    def __init__(self, reason: str, **period: int):
        super().__init__(
            f"Invalid calendar period: {reason}",
            details={k: str(v) for k, v in period.items()},
        )
        self.reason = reason
        self.period = period
