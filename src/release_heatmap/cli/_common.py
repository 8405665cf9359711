"""Shared CLI helpers."""

from typing import Optional

import typer
from rich.console import Console

from ..config import HeatmapConfig
from ..exceptions import IngestionError
from ..ingest import RandomSampleEnricher, generate_sample_records, load_records
from ..logging_config import get_logger
from ..records import RecordStore
from ..visualization import Rectangle

console = Console()
logger = get_logger(__name__)


def get_config(ctx: typer.Context) -> HeatmapConfig:
    return ctx.obj["config"]


def build_store(config: HeatmapConfig) -> RecordStore:
    """Load the configured data file, falling back to sample data.

    A missing or unreadable file is not fatal: the calendar still renders
    from generated sample releases.
    """
    date_range = config.date_range
    records = None
    if config.data_file:
        try:
            records = load_records(
                config.data_file,
                date_range=date_range,
                enricher=RandomSampleEnricher(config.sample_seed),
            )
        except IngestionError as e:
            logger.warning(f"{e}; falling back to sample data")

    if not records:
        records = generate_sample_records(
            seed=config.sample_seed,
            start_year=date_range.start.year,
            end_year=date_range.end.year,
        )
        logger.info(f"Generated {len(records)} sample release records")

    return RecordStore(records, date_range=date_range)


def treemap_bounds(config: HeatmapConfig) -> Rectangle:
    """Abstract rectangle each day's treemap is laid out in."""
    return Rectangle(0.0, 0.0, config.treemap_width, config.treemap_height)


def resolve_period(
    config: HeatmapConfig,
    store: RecordStore,
    year: Optional[int] = None,
    quarter: Optional[int] = None,
) -> tuple[int, int]:
    """Pick the (year, 0-based quarter) to show.

    *quarter* is the 1-based number typed on the command line.
    """
    if year is None:
        year = config.default_year or store.year_range()[0]
    q = config.default_quarter if quarter is None else quarter - 1
    return year, q
