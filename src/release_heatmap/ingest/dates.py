"""Calendar-valid release date parsing."""

import math
from datetime import date, datetime, timedelta
from typing import Any

import pandas as pd

from ..exceptions import InvalidDateError

# Day zero of spreadsheet serial dates (accounts for the 1900 leap-year bug)
EXCEL_EPOCH = date(1899, 12, 30)


def parse_release_date(value: Any) -> date:
    """Convert a spreadsheet cell to a real calendar date.

    Accepts ``date``/``datetime``/``pandas.Timestamp`` values, spreadsheet
    serial day numbers and date strings.  Impossible dates such as
    ``2022-02-30`` are rejected rather than rolled over.

    Raises:
        InvalidDateError: If the value is empty or not a calendar date.
    """
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        raise InvalidDateError(value, "empty")

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value) or value < 1:
            raise InvalidDateError(value, "serial day out of range")
        try:
            return EXCEL_EPOCH + timedelta(days=int(value))
        except OverflowError:
            raise InvalidDateError(value, "serial day out of range")

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidDateError(value, "empty")
        try:
            parsed = pd.to_datetime(text)
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(value, str(e))
        if pd.isna(parsed):
            raise InvalidDateError(value, "empty")
        return parsed.date()

    raise InvalidDateError(value, f"unsupported type {type(value).__name__}")
