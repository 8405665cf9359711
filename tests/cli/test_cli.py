"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from release_heatmap.cli import app

runner = CliRunner()

CSV_ROWS = """Release Date,Group / Category,Feature Description
2022-03-01,Chat features,New chat reactions
2022-03-01,Phone features,Call parking
2022-03-04,Chat features,Minor fix
"""


@pytest.fixture
def release_csv(isolated_config):
    path = isolated_config / "releases.csv"
    path.write_text(CSV_ROWS, encoding="utf-8")
    return path


class TestQuarterCommand:
    def test_json_from_data_file(self, release_csv):
        result = runner.invoke(app, ["--data", str(release_csv), "quarter", "--quarter", "1", "--json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["year"] == 2022
        assert payload["quarter"] == 1
        assert payload["total"] == 3
        assert payload["max_daily_count"] == 2
        assert payload["months"] == {"January": 0, "February": 0, "March": 3}
        assert payload["categories"] == {"Chat features": 2, "Phone features": 1}

    def test_missing_data_file_falls_back_to_sample(self, isolated_config):
        result = runner.invoke(
            app, ["--data", str(isolated_config / "missing.xlsx"), "--seed", "5", "quarter", "--json"]
        )
        assert result.exit_code == 0, result.output
        assert "\"total\":" in result.stdout
        assert "\"total\": 0" not in result.stdout

    def test_table_output(self, release_csv):
        result = runner.invoke(app, ["--data", str(release_csv), "quarter", "--year", "2022"])
        assert result.exit_code == 0, result.output
        assert "Q1 2022" in result.stdout
        assert "Chat features" in result.stdout

    def test_quarter_out_of_range(self, release_csv):
        result = runner.invoke(app, ["--data", str(release_csv), "quarter", "--quarter", "5"])
        assert result.exit_code != 0


class TestDayCommand:
    def test_day_with_releases(self, release_csv):
        result = runner.invoke(app, ["--data", str(release_csv), "day", "2022-03-04"])
        assert result.exit_code == 0, result.output
        assert "Minor fix" in result.stdout
        assert "3 days since previous release" in result.stdout

    def test_treemap_bounds_from_environment(self, release_csv, monkeypatch):
        monkeypatch.setenv("RELEASE_HEATMAP_TREEMAP_WIDTH", "200")
        result = runner.invoke(app, ["--data", str(release_csv), "day", "2022-03-01"])
        assert result.exit_code == 0, result.output
        assert "200.00" in result.stdout

    def test_day_without_releases(self, release_csv):
        result = runner.invoke(app, ["--data", str(release_csv), "day", "2022-03-02"])
        assert result.exit_code == 0, result.output
        assert "No releases on this day" in result.stdout

    def test_impossible_date(self, release_csv):
        result = runner.invoke(app, ["--data", str(release_csv), "day", "2022-02-30"])
        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestReportCommand:
    def test_writes_report(self, isolated_config):
        output = isolated_config / "out.html"
        result = runner.invoke(
            app, ["--seed", "1", "report", "--output", str(output), "--scheme", "rainbow", "-q", "2"]
        )
        assert result.exit_code == 0, result.output
        assert output.exists()
        assert '"initial": "2022-1"' in output.read_text(encoding="utf-8")


class TestVersion:
    def test_version(self, isolated_config):
        from release_heatmap import __version__

        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestHueOption:
    def test_report_with_hue(self, isolated_config):
        output = isolated_config / "hue.html"
        result = runner.invoke(app, ["--seed", "1", "report", "-o", str(output), "--hue", "280"])
        assert result.exit_code == 0, result.output
        html = output.read_text(encoding="utf-8")
        assert '"hue": 280' in html
        assert '"Purple"' in html

    def test_hue_out_of_range(self, isolated_config):
        result = runner.invoke(app, ["report", "--hue", "400"])
        assert result.exit_code != 0


class TestLogFile:
    def test_fallback_warning_written_to_log_file(self, isolated_config):
        log_path = isolated_config / "heatmap.log"
        result = runner.invoke(
            app,
            [
                "--data",
                str(isolated_config / "missing.xlsx"),
                "--log-file",
                str(log_path),
                "quarter",
                "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        log_text = log_path.read_text(encoding="utf-8")
        assert "WARNING" in log_text
        assert "falling back to sample data" in log_text
