"""Tests for ingest/enrich.py and ingest/sample.py."""

from datetime import date

import pytest

from release_heatmap.ingest import (
    NullEnricher,
    RandomSampleEnricher,
    generate_sample_records,
    impact_level,
)
from release_heatmap.ingest.enrich import CONTRIBUTORS, DEPENDENCIES, TEAMS
from release_heatmap.records import DEFAULT_DATE_RANGE, ReleaseRecord


@pytest.fixture
def record():
    return ReleaseRecord(date=date(2022, 4, 1), category="Phone features", description="Call parking")


class TestImpactLevel:
    @pytest.mark.parametrize(
        "description, level",
        [
            ("Major redesign of chat", "High"),
            ("New whiteboard templates", "High"),
            ("Minor fix for audio", "Low"),
            ("Small new option", "High"),
            ("Call parking", "Medium"),
            (None, "Medium"),
            ("", "Medium"),
        ],
    )
    def test_keywords(self, description, level):
        assert impact_level(description) == level


class TestEnrichers:
    def test_null_enricher_is_identity(self, record):
        assert NullEnricher().enrich(record) is record

    def test_random_enricher_fields(self, record):
        enriched = RandomSampleEnricher(seed=1).enrich(record)
        assert enriched.date == record.date
        assert enriched.category == record.category
        assert enriched.fields["team"] in TEAMS
        assert enriched.fields["contributor"] in CONTRIBUTORS
        assert 0 <= enriched.fields["bug_count"] < 5
        assert enriched.fields["complexity"] in {"Low", "Medium", "High"}
        assert 10 <= enriched.fields["time_to_release"] <= 39
        deps = enriched.fields["dependencies"]
        assert len(deps) <= 2
        assert len(set(deps)) == len(deps)
        assert set(deps) <= set(DEPENDENCIES)

    def test_seeded_enricher_is_reproducible(self, record):
        a = RandomSampleEnricher(seed=42).enrich(record)
        b = RandomSampleEnricher(seed=42).enrich(record)
        assert a.fields == b.fields


class TestSampleRecords:
    def test_shape(self):
        records = generate_sample_records(seed=7)
        months = {(r.year, r.month_index) for r in records}
        assert len(months) == 25
        assert 50 <= len(records) <= 125
        assert all(r.day <= 28 for r in records)
        assert all(DEFAULT_DATE_RANGE.contains(r.date) for r in records)

    def test_sorted_by_date(self):
        records = generate_sample_records(seed=7)
        assert [r.date for r in records] == sorted(r.date for r in records)

    def test_reproducible(self):
        assert generate_sample_records(seed=11) == generate_sample_records(seed=11)

    def test_enriched_by_default(self):
        records = generate_sample_records(seed=2)
        assert all("team" in r.fields and "impact" in r.fields for r in records)

    def test_custom_enricher(self):
        records = generate_sample_records(seed=2, enricher=NullEnricher())
        assert all(set(r.fields) == {"impact"} for r in records)
