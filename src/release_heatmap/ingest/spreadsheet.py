"""Load release records from a spreadsheet or CSV export.

Expected columns:

* ``Release Date`` -- required; cells that are not calendar dates are
  skipped with a warning.
* ``Group / Category`` -- optional; blank means ``Uncategorized``.
  Anything mentioning "meeting" is folded into ``Meeting``.
* ``Feature Description`` -- optional.

Every other non-empty column is kept in ``ReleaseRecord.fields``.
"""

from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

from ..exceptions import IngestionError, InvalidDateError
from ..logging_config import get_logger
from ..records.models import DEFAULT_DATE_RANGE, DateRange, ReleaseRecord
from .dates import parse_release_date
from .enrich import Enricher, NullEnricher, impact_level

logger = get_logger(__name__)

DATE_COLUMN = "Release Date"
CATEGORY_COLUMN = "Group / Category"
DESCRIPTION_COLUMN = "Feature Description"

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
CSV_SUFFIXES = {".csv"}


def normalize_category(raw: Any) -> Optional[str]:
    """Trimmed category name, ``Meeting`` for any meeting variant."""
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        return None
    category = str(raw).strip()
    if "meeting" in category.lower():
        return "Meeting"
    return category or None


def read_table(path: Path) -> pd.DataFrame:
    """Read the first sheet of a workbook, or a CSV file."""
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return pd.read_excel(path, sheet_name=0)
    if suffix in CSV_SUFFIXES:
        return pd.read_csv(path)
    raise IngestionError(path, f"unsupported file type '{suffix}'")


def rows_to_records(
    frame: pd.DataFrame,
    date_range: Optional[DateRange] = DEFAULT_DATE_RANGE,
    enricher: Optional[Enricher] = None,
) -> list[ReleaseRecord]:
    """Turn table rows into records, dropping bad dates and out-of-range rows."""
    enricher = enricher or NullEnricher()
    records: list[ReleaseRecord] = []
    skipped = 0
    out_of_range = 0

    for position, row in enumerate(frame.to_dict(orient="records")):
        try:
            released = parse_release_date(row.get(DATE_COLUMN))
        except InvalidDateError as e:
            logger.warning(f"Skipping row {position + 1}: {e}")
            skipped += 1
            continue

        if date_range is not None and not date_range.contains(released):
            out_of_range += 1
            continue

        description = row.get(DESCRIPTION_COLUMN)
        if description is not None and not isinstance(description, str) and pd.isna(description):
            description = None

        extra = {
            str(k): v
            for k, v in row.items()
            if k not in (DATE_COLUMN, CATEGORY_COLUMN, DESCRIPTION_COLUMN) and not _is_blank(v)
        }
        extra["impact"] = impact_level(description)

        record = ReleaseRecord(
            date=released,
            category=normalize_category(row.get(CATEGORY_COLUMN)),
            description=description,
            fields=extra,
        )
        records.append(enricher.enrich(record))

    if out_of_range:
        logger.debug(f"Dropped {out_of_range} rows outside the configured date range")
    logger.info(f"Loaded {len(records)} release records ({skipped} skipped)")
    return records


def _is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def load_records(
    path: Union[str, Path],
    date_range: Optional[DateRange] = DEFAULT_DATE_RANGE,
    enricher: Optional[Enricher] = None,
) -> list[ReleaseRecord]:
    """Load and normalize release records from *path*.

    Raises:
        IngestionError: If the file is missing, unreadable, empty, or has
            no ``Release Date`` column.
    """
    path = Path(path)
    if not path.is_file():
        raise IngestionError(path, "file not found")

    try:
        frame = read_table(path)
    except IngestionError:
        raise
    except Exception as e:
        raise IngestionError(path, str(e)) from e

    if frame.empty:
        raise IngestionError(path, "no rows found")
    if DATE_COLUMN not in frame.columns:
        raise IngestionError(path, f"missing '{DATE_COLUMN}' column")

    logger.debug(f"Read {len(frame)} rows from {path}")
    return rows_to_records(frame, date_range=date_range, enricher=enricher)
