"""Ingestion -- spreadsheet loading, date parsing, enrichment and sample data."""

from .dates import parse_release_date
from .enrich import Enricher, NullEnricher, RandomSampleEnricher, impact_level
from .sample import generate_sample_records
from .spreadsheet import load_records, normalize_category, rows_to_records

__all__ = [
    "Enricher",
    "NullEnricher",
    "RandomSampleEnricher",
    "generate_sample_records",
    "impact_level",
    "load_records",
    "normalize_category",
    "parse_release_date",
    "rows_to_records",
]
