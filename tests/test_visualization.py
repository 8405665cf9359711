"""Tests for the visualization module -- calendar data and HTML report."""

import json
import re
from datetime import date

import numpy as np
import pytest

from release_heatmap.exceptions import InvalidPeriodError
from release_heatmap.records import RecordStore, ReleaseRecord
from release_heatmap.temporal import TemporalIndex
from release_heatmap.visualization import Rectangle, build_calendar_data, generate_report, layout
from release_heatmap.visualization.calendar import node_to_cell


def _embedded_data(html: str) -> dict:
    match = re.search(r"const DATA = (.*);\n", html)
    assert match is not None
    return json.loads(match.group(1))


class TestNodeToCell:
    def test_percentages_of_bounds(self, new_year_store):
        index = TemporalIndex(new_year_store)
        bounds = Rectangle(0, 0, 200, 50)
        nodes = layout(index.category_weights(index.features_on_day(1, 0, 2022)), bounds)
        cells = [node_to_cell(n, bounds) for n in nodes]
        assert sum(c["width"] * c["height"] for c in cells) == pytest.approx(10000, rel=1e-6)
        assert all(0 <= c["left"] <= 100 and 0 <= c["top"] <= 100 for c in cells)


class TestBuildCalendarData:
    def test_quarter_structure(self, new_year_store):
        data = build_calendar_data(TemporalIndex(new_year_store), 2022, 0)
        assert data["label"] == "Q1 2022"
        assert [m["name"] for m in data["months"]] == ["January", "February", "March"]
        assert [len(m["days"]) for m in data["months"]] == [31, 28, 31]
        assert data["max_count"] == 2

    def test_sunday_first_grid(self, new_year_store):
        data = build_calendar_data(TemporalIndex(new_year_store), 2022, 0)
        # 2022-01-01 was a Saturday
        assert data["months"][0]["leading_blanks"] == 6

    def test_day_cells(self, new_year_store):
        data = build_calendar_data(TemporalIndex(new_year_store), 2022, 0, scheme="green")
        january = data["months"][0]
        assert january["feature_count"] == 3
        first, second, fifth = january["days"][0], january["days"][1], january["days"][4]

        assert first["count"] == 2
        assert first["heat"] == "#2E7D32"
        assert {c["category"] for c in first["cells"]} == {"Chat features", "Meeting"}
        assert sum(c["width"] * c["height"] for c in first["cells"]) == pytest.approx(10000)

        assert second["count"] == 1
        assert second["days_since"] == 1

        assert fifth["count"] == 0
        assert fifth["heat"] is None
        assert fifth["cells"] == []
        assert fifth["days_since"] == 3
        assert fifth["groups"] == []

    def test_day_groups_follow_treemap_order(self, new_year_store):
        data = build_calendar_data(TemporalIndex(new_year_store), 2022, 0)
        first = data["months"][0]["days"][0]
        assert [g["category"] for g in first["groups"]] == [c["category"] for c in first["cells"]]
        chat = first["groups"][0]
        assert chat["count"] == 1
        assert chat["color"] == "#4A90E2"
        assert chat["features"] == [
            {"category": "Chat features", "description": "New chat reactions", "details": {}}
        ]

    def test_feature_details_are_json_ready(self):
        record = ReleaseRecord(
            date=date(2022, 1, 3),
            category="Phone features",
            description="Call parking",
            fields={
                "team": "QA",
                "bug_count": np.int64(3),
                "dependencies": ("API", "Database"),
                "shipped": date(2022, 1, 4),
                "score": float("nan"),
            },
        )
        data = build_calendar_data(TemporalIndex(RecordStore([record])), 2022, 0)
        details = data["months"][0]["days"][2]["groups"][0]["features"][0]["details"]
        assert details == {
            "team": "QA",
            "bug_count": 3,
            "dependencies": ["API", "Database"],
            "shipped": "2022-01-04",
            "score": None,
        }
        json.dumps(details)

    def test_ratio(self, new_year_store):
        days = build_calendar_data(TemporalIndex(new_year_store), 2022, 0)["months"][0]["days"]
        assert [d["ratio"] for d in days[:3]] == [1.0, 0.5, 0.0]

    def test_hue_shading(self, new_year_store):
        data = build_calendar_data(TemporalIndex(new_year_store), 2022, 0, hue=200)
        days = data["months"][0]["days"]
        assert days[0]["heat"] == "hsl(200, 70%, 50%)"
        assert days[1]["heat"] == "hsl(200, 70%, 75%)"
        assert days[2]["heat"] is None

    def test_neighbouring_quarters(self, new_year_store):
        index = TemporalIndex(new_year_store)
        first = build_calendar_data(index, 2022, 0)
        assert (first["prev"], first["next"]) == (None, "2022-1")
        last = build_calendar_data(index, 2022, 3)
        assert (last["prev"], last["next"]) == ("2022-2", None)
        wide = build_calendar_data(index, 2022, 3, year_range=(2021, 2023))
        assert wide["next"] == "2023-0"

    def test_summary(self, new_year_store):
        data = build_calendar_data(TemporalIndex(new_year_store), 2022, 0)
        assert data["summary"]["total"] == 3
        assert data["summary"]["categories"][0] == {
            "name": "Chat features",
            "count": 2,
            "color": "#4A90E2",
        }

    def test_empty_quarter(self, new_year_store):
        data = build_calendar_data(TemporalIndex(new_year_store), 2022, 3)
        assert data["max_count"] == 0
        assert all(d["count"] == 0 for m in data["months"] for d in m["days"])


class TestGenerateReport:
    def test_creates_html_file(self, new_year_store, tmp_path):
        result = generate_report(new_year_store, output_path=str(tmp_path / "report.html"))
        html = open(result, encoding="utf-8").read()
        assert "<!DOCTYPE html>" in html
        assert "Release Heatmap" in html
        assert "renderQuarter" in html
        data = _embedded_data(html)
        assert data["initial"] == "2022-0"
        assert sorted(data["quarters"]) == ["2022-0", "2022-1", "2022-2", "2022-3"]
        assert data["record_count"] == 3

    def test_requested_year_outside_data(self, new_year_store, tmp_path):
        result = generate_report(
            new_year_store, year=2023, quarter=2, output_path=str(tmp_path / "r.html")
        )
        data = _embedded_data(open(result, encoding="utf-8").read())
        assert data["initial"] == "2023-2"
        assert "2023-2" in data["quarters"]

    def test_distant_year_adds_only_that_year(self, new_year_store, tmp_path):
        result = generate_report(new_year_store, year=1, output_path=str(tmp_path / "r.html"))
        data = _embedded_data(open(result, encoding="utf-8").read())
        assert sorted(data["quarters"]) == ["1-0", "1-1", "1-2", "1-3", "2022-0", "2022-1", "2022-2", "2022-3"]
        assert data["quarters"]["1-3"]["next"] is None
        assert data["quarters"]["2022-0"]["prev"] is None

    def test_navigation_links(self, tmp_path):
        store = RecordStore(
            [ReleaseRecord(date=date(2022, 5, 1)), ReleaseRecord(date=date(2023, 2, 1))]
        )
        result = generate_report(store, output_path=str(tmp_path / "r.html"))
        quarters = _embedded_data(open(result, encoding="utf-8").read())["quarters"]
        assert quarters["2022-0"]["prev"] is None
        assert quarters["2022-3"]["next"] == "2023-0"
        assert quarters["2023-0"]["prev"] == "2022-3"
        assert quarters["2023-3"]["next"] is None

    def test_hue_slider_data(self, new_year_store, tmp_path):
        result = generate_report(new_year_store, hue=280, output_path=str(tmp_path / "r.html"))
        html = open(result, encoding="utf-8").read()
        data = _embedded_data(html)
        assert data["hue"] == 280
        assert len(data["hue_names"]) == 360
        assert data["hue_names"][280] == "Purple"
        assert data["quarters"]["2022-0"]["months"][0]["days"][0]["heat"] == "hsl(280, 70%, 50%)"
        assert 'id="hue-control"' in html

    def test_scheme_report_has_no_hue(self, new_year_store, tmp_path):
        result = generate_report(new_year_store, output_path=str(tmp_path / "r.html"))
        data = _embedded_data(open(result, encoding="utf-8").read())
        assert data["hue"] is None
        assert data["hue_names"] == []
        assert ["impact", "Impact"] in data["detail_labels"]

    def test_empty_store(self, empty_store, tmp_path):
        result = generate_report(empty_store, output_path=str(tmp_path / "r.html"))
        data = _embedded_data(open(result, encoding="utf-8").read())
        assert data["year_range"] == [2022, 2024]
        assert data["record_count"] == 0

    def test_script_tags_in_data_are_escaped(self, tmp_path):
        store = RecordStore(
            [ReleaseRecord(date=date(2022, 1, 3), description="</script><b>boom</b>")]
        )
        result = generate_report(store, output_path=str(tmp_path / "r.html"))
        html = open(result, encoding="utf-8").read()
        assert html.count("</script>") == 1

    def test_invalid_quarter(self, new_year_store, tmp_path):
        with pytest.raises(InvalidPeriodError):
            generate_report(new_year_store, quarter=4, output_path=str(tmp_path / "r.html"))
