"""Shared test fixtures for Release Heatmap tests."""

from datetime import date

import pytest

from release_heatmap.records import RecordStore, ReleaseRecord


def rec(iso: str, category: str = "General features", description: str = "") -> ReleaseRecord:
    """Shortcut to build a record from an ISO date."""
    return ReleaseRecord(date=date.fromisoformat(iso), category=category, description=description)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files and env vars out of the test."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    import os

    for key in list(os.environ):
        if key.startswith("RELEASE_HEATMAP_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def new_year_records():
    """Two releases on 2022-01-01 and one on 2022-01-02."""
    return [
        rec("2022-01-01", "Chat features", "New chat reactions"),
        rec("2022-01-01", "Meeting", "Minor meeting fix"),
        rec("2022-01-02", "Chat features", "Chat search"),
    ]


@pytest.fixture
def new_year_store(new_year_records):
    return RecordStore(new_year_records)


@pytest.fixture
def empty_store():
    return RecordStore()
