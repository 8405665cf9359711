"""Synthetic release data for demos and when no data file is available."""

import random
from datetime import date
from typing import Optional

from ..records.models import ReleaseRecord
from .enrich import Enricher, RandomSampleEnricher, impact_level

SAMPLE_CATEGORIES = [
    "Meeting", "Chat features", "Contact Center features",
    "General features", "Mail and Calendar features", "Phone features",
    "Team Chat features", "Webinar features", "Whiteboard features",
]


def generate_sample_records(
    seed: Optional[int] = None,
    start_year: int = 2022,
    end_year: int = 2024,
    enricher: Optional[Enricher] = None,
) -> list[ReleaseRecord]:
    """Two to five releases per month on days 1-28.

    The final year only gets January, mirroring the default date range.
    Records are sorted by date and enriched with random metadata unless
    another *enricher* is given.
    """
    rng = random.Random(seed)
    enricher = enricher or RandomSampleEnricher(seed)
    records = []

    for year in range(start_year, end_year + 1):
        last_month = 1 if year == end_year else 12
        for month in range(1, last_month + 1):
            for i in range(rng.randint(2, 5)):
                category = rng.choice(SAMPLE_CATEGORIES)
                description = f"Sample {category} feature {i + 1}"
                records.append(
                    ReleaseRecord(
                        date=date(year, month, rng.randint(1, 28)),
                        category=category,
                        description=description,
                        fields={"impact": impact_level(description)},
                    )
                )

    records.sort(key=lambda r: r.date)
    return [enricher.enrich(r) for r in records]
