"""Tests for the command-line interface."""

import json
import logging

import pytest

from ride_analytics.cli import main, parse_month


@pytest.fixture(autouse=True)
def restore_root_logger():
    # main() installs a console handler on the root logger
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parse_month():
    assert parse_month("2025-12") == (2025, 12)
    with pytest.raises(ValueError):
        parse_month("2025-13")
    with pytest.raises(ValueError):
        parse_month("december")


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_stats_prints_report(ledger_csv, capsys):
    assert main(["stats", str(ledger_csv), "--month", "2025-12"]) == 0
    out = capsys.readouterr().out
    assert "RIDE ANALYTICS REPORT" in out
    assert "Total rides: 4" in out


def test_stats_writes_report(ledger_csv, tmp_path):
    output = tmp_path / "report.txt"
    assert main(["stats", str(ledger_csv), "-o", str(output), "--top", "1"]) == 0
    text = output.read_text(encoding="utf-8")
    assert "Total rides: 5" in text
    assert "2. Luis" not in text


def test_missing_file(tmp_path, capsys):
    assert main(["stats", str(tmp_path / "missing.csv")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_bad_month(ledger_csv, capsys):
    assert main(["stats", str(ledger_csv), "--month", "12/2025"]) == 1
    assert "Error" in capsys.readouterr().out


def test_empty_month(ledger_csv, capsys):
    assert main(["export", str(ledger_csv), "--month", "2024-01"]) == 1
    assert "No rides scheduled in 2024-01" in capsys.readouterr().out


def test_export_json(ledger_csv, tmp_path):
    output = tmp_path / "export" / "rides.json"
    assert main(["export", str(ledger_csv), "--month", "2025-12", "-o", str(output)]) == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["total_rides"] == 4
    assert data["period"] == "2025-12"
    assert data["top_clients"][0]["key"] == "Ana"


def test_export_stdout(ledger_csv, capsys):
    assert main(["export", str(ledger_csv)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["total_rides"] == 5


def test_export_histogram_bins(ledger_csv, tmp_path):
    output = tmp_path / "rides.json"
    assert main(["export", str(ledger_csv), "--bins", "4", "-o", str(output)]) == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert len(data["ride_histogram"]) == 4
    assert sum(b["count"] for b in data["ride_histogram"]) == 4


def test_visualize_writes_charts(ledger_csv, tmp_path):
    output_dir = tmp_path / "charts"
    assert main(["visualize", str(ledger_csv), "-o", str(output_dir)]) == 0
    assert (output_dir / "rides_distribution.png").exists()
    assert (output_dir / "rides_trend.png").exists()
    assert (output_dir / "rides_transport.png").exists()
