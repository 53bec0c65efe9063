"""Tests for visualize module."""

from ride_analytics.distribution import build_histogram, generate_curve_for
from ride_analytics.report import analyze_rides
from ride_analytics.statistics import compute_statistics
from ride_analytics.visualize import plot_distribution, plot_report, plot_trend


def test_plot_distribution_saves(tmp_path):
    samples = [1.0, 2.0, 2.5, 3.0, 4.0, 7.5]
    stats = compute_statistics(samples)
    path = tmp_path / "dist.png"
    plot_distribution(build_histogram(samples, 5), generate_curve_for(stats), stats, path)
    assert path.exists()


def test_plot_distribution_without_curve(tmp_path):
    path = tmp_path / "flat.png"
    plot_distribution(build_histogram([3.0, 3.0]), [], None, path)
    assert path.exists()


def test_plot_distribution_empty_skipped(tmp_path):
    path = tmp_path / "empty.png"
    plot_distribution([], [], None, path)
    assert not path.exists()


def test_plot_trend_empty_skipped(tmp_path):
    path = tmp_path / "trend.png"
    plot_trend([], path)
    assert not path.exists()


def test_plot_report(ledger_rows, tmp_path):
    report = analyze_rides(ledger_rows, period=(2025, 12))
    written = plot_report(report, tmp_path / "charts", base_name="december")
    assert [p.name for p in written] == [
        "december_distribution.png",
        "december_trend.png",
        "december_transport.png",
    ]
    assert all(p.exists() for p in written)
