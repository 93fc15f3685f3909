from __future__ import annotations

from typer.testing import CliRunner

from conftest import write_corrupt_archive
from fars import cli
from fars.cli import app

runner = CliRunner()


def test_filename():
    result = runner.invoke(app, ["filename", "2014"])
    assert result.exit_code == 0
    assert "accident_2014.csv.bz2" in result.output


def test_filename_rejects_non_numeric():
    result = runner.invoke(app, ["filename", "soon"])
    assert result.exit_code == 1
    assert "cannot convert year" in result.output


def test_summarize_writes_reports(archive_dir, tmp_path):
    out_dir = tmp_path / "out"
    result = runner.invoke(app, [
        "summarize", "2013", "2014", "2099",
        "--data-dir", str(archive_dir),
        "--output-dir", str(out_dir),
    ])

    assert result.exit_code == 0, result.output
    assert "1 year(s) skipped" in result.output

    csv_path = out_dir / "fars_monthly_summary.csv"
    report = (out_dir / "fars_summary_report.txt").read_text(encoding="utf-8")
    assert csv_path.exists()
    assert csv_path.read_text(encoding="utf-8").splitlines()[0] == "MONTH,2013,2014"
    assert "skipped" in report
    assert "accident_2013.csv.bz2" in report


def test_summarize_nothing_loaded(tmp_path):
    result = runner.invoke(app, ["summarize", "2013", "--data-dir", str(tmp_path)])
    assert result.exit_code == 1
    assert "No year could be loaded" in result.output


def test_map_saves_image(archive_dir, tmp_path):
    image = tmp_path / "map.html"
    result = runner.invoke(app, [
        "map", "1", "2013", "--data-dir", str(archive_dir), "--output", str(image),
    ])

    assert result.exit_code == 0, result.output
    assert image.exists()


def test_map_invalid_state(archive_dir):
    result = runner.invoke(app, ["map", "99", "2013", "--data-dir", str(archive_dir)])
    assert result.exit_code == 1
    assert "invalid STATE number: 99" in result.output


def test_map_default_name_uses_coerced_values(in_archive_dir):
    result = runner.invoke(app, ["map", "01", "2013.0"])

    assert result.exit_code == 0, result.output
    assert (in_archive_dir / "fars_map_1_2013.html").exists()
    assert not (in_archive_dir / "fars_map_01_2013.0.html").exists()


def test_map_corrupt_archive_reports_error(archive_dir):
    write_corrupt_archive(archive_dir, 2016)

    result = runner.invoke(app, ["map", "1", "2016", "--data-dir", str(archive_dir)])

    assert result.exit_code == 1
    assert not isinstance(result.exception, OSError)
    assert "✗" in result.output


def test_map_missing_year_reports_path(archive_dir, monkeypatch):
    monkeypatch.setattr(cli.console, "width", 400)
    result = runner.invoke(app, ["map", "1", "2030", "--data-dir", str(archive_dir)])

    assert result.exit_code == 1
    assert "accident_2030.csv.bz2' does not exist" in result.output
