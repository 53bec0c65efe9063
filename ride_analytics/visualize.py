"""Chart rendering for ride analysis results.

This module draws the chart data produced by the analytics engine:
- Ride distance histogram with the distribution curve overlaid
- Daily trend of ride counts and average distances
- Transport usage bar chart
"""

import logging
from pathlib import Path
from typing import List, Optional

import matplotlib.pyplot as plt

from ride_analytics.config import BRAND_BLUE, BRAND_CREAM, BRAND_ORANGE, BRAND_TAUPE
from ride_analytics.distribution import CurvePoint, HistogramBin
from ride_analytics.ranking import RankingEntry
from ride_analytics.report import RideReport
from ride_analytics.statistics import Statistics
from ride_analytics.trend import TrendPoint

logger = logging.getLogger(__name__)


def _finish(fig, output_path: Optional[Path], label: str) -> None:
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        logger.info(f"✓ {label} saved to {output_path}")
    else:
        plt.show()

    plt.close(fig)


def plot_distribution(
    histogram: List[HistogramBin],
    curve: List[CurvePoint],
    stats: Optional[Statistics] = None,
    output_path: Optional[Path] = None,
    title: str = "Ride Distance Distribution"
) -> None:
    """Plot a histogram with its distribution curve on a second axis.

    Args:
        histogram: Histogram bins
        curve: Distribution curve points (may be empty)
        stats: Optional summary used to mark mean and median
        output_path: Optional path to save figure
        title: Plot title
    """
    if not histogram:
        logger.warning("No histogram data to plot!")
        return

    centers = [b.center for b in histogram]
    counts = [b.count for b in histogram]
    width = (centers[1] - centers[0]) * 0.9 if len(centers) > 1 else 1.0

    fig, ax = plt.subplots(figsize=(12, 7))

    ax.bar(
        centers,
        counts,
        width=width,
        color=BRAND_CREAM,
        edgecolor=BRAND_ORANGE,
        linewidth=1.5,
        label='Rides per bin'
    )

    if stats is not None:
        ax.axvline(stats.mean, color='red', linestyle='--', linewidth=2, label=f'Mean: {stats.mean:.2f}km')
        ax.axvline(stats.median, color=BRAND_BLUE, linestyle='-', linewidth=2, label=f'Median: {stats.median:.2f}km')

    ax.set_xlabel("Distance (km)", fontsize=12, fontweight='bold')
    ax.set_ylabel("Rides", fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold', pad=20)
    ax.grid(True, alpha=0.3, axis='y')
    ax.legend(loc='upper left')

    if curve:
        density_ax = ax.twinx()
        density_ax.plot(
            [p.x for p in curve],
            [p.y for p in curve],
            color=BRAND_TAUPE,
            linewidth=2,
        )
        density_ax.set_ylabel("Density", fontsize=12, fontweight='bold')

    _finish(fig, output_path, "Distribution plot")


def plot_trend(
    trend: List[TrendPoint],
    output_path: Optional[Path] = None,
    title: str = "Daily Ride Trend"
) -> None:
    """Plot rides per day and each day's average distances.

    Args:
        trend: Trend points sorted by date
        output_path: Optional path to save figure
        title: Plot title
    """
    if not trend:
        logger.warning("No trend data to plot!")
        return

    labels = [p.date_key for p in trend]
    positions = list(range(len(labels)))

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 10), sharex=True)

    ax1.bar(positions, [p.count for p in trend], color=BRAND_ORANGE, alpha=0.7)
    ax1.set_ylabel("Rides", fontsize=12, fontweight='bold')
    ax1.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax1.grid(True, alpha=0.3, axis='y')

    colors = [BRAND_ORANGE, BRAND_BLUE, BRAND_TAUPE]
    for i, name in enumerate(trend[0].averages):
        ax2.plot(
            positions,
            [p.averages[name] for p in trend],
            'o-',
            color=colors[i % len(colors)],
            linewidth=2,
            markersize=6,
            label=f'Avg {name} (km)'
        )

    ax2.set_ylabel("Average distance (km)", fontsize=12, fontweight='bold')
    ax2.set_xticks(positions)
    ax2.set_xticklabels(labels, rotation=45, ha='right')
    ax2.grid(True, alpha=0.3)
    ax2.legend(loc='best')

    _finish(fig, output_path, "Trend plot")


def plot_transport_usage(
    entries: List[RankingEntry],
    output_path: Optional[Path] = None,
    title: str = "Transport Usage"
) -> None:
    """Plot ride counts per transport mode, most used first."""
    if not entries:
        logger.warning("No transport data to plot!")
        return

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.barh(
        [str(e.key) for e in entries][::-1],
        [e.metrics['rides'] for e in entries][::-1],
        color=BRAND_BLUE,
        alpha=0.8,
    )
    ax.set_xlabel("Rides", fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.grid(True, alpha=0.3, axis='x')

    _finish(fig, output_path, "Transport plot")


def plot_report(report: RideReport, output_dir: Path, base_name: str = "rides") -> List[Path]:
    """Save every chart for a report.

    Args:
        report: Analysis results
        output_dir: Directory to save plots into
        base_name: Filename prefix

    Returns:
        Paths of the charts that were written
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []

    if report.ride_histogram:
        path = output_dir / f"{base_name}_distribution.png"
        plot_distribution(report.ride_histogram, report.ride_curve, report.ride_distance_stats, path)
        written.append(path)

    if report.trend:
        path = output_dir / f"{base_name}_trend.png"
        plot_trend(report.trend, path)
        written.append(path)

    if report.transport_usage:
        path = output_dir / f"{base_name}_transport.png"
        plot_transport_usage(report.transport_usage, path)
        written.append(path)

    logger.info(f"\n✓ All plots saved to {output_dir}")
    return written
