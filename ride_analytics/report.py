"""Full ride analysis pipeline and report output.

This module runs every analytics component over one ledger snapshot and
collects the results into a RideReport:
- Distance statistics, outliers, histogram and distribution curve
- Daily trend of pickup and delivery distances
- Transport, weekday, date and client leaderboards
- Most expensive and longest rides

It also renders the report as plain text and as JSON-ready data.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ride_analytics.config import (
    DEFAULT_CURVE_POINTS,
    DEFAULT_NUM_BINS,
    DEFAULT_TOP_N,
    ECO_PICKUP_THRESHOLD_KM,
    WEEKDAY_ORDER,
)
from ride_analytics.distribution import CurvePoint, HistogramBin, build_histogram, generate_curve_for
from ride_analytics.errors import EmptyDatasetError
from ride_analytics.normalize import Ride, as_row, normalize_records, present_values
from ride_analytics.outliers import OutlierReport, classify_outliers
from ride_analytics.ranking import RankingEntry, average, count, rank, total
from ride_analytics.statistics import Statistics, compute_statistics
from ride_analytics.trend import TrendPoint, compute_trend, day_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RideReport:
    """Everything computed from one ledger snapshot."""

    total_rides: int
    period: Optional[str] = None

    # Distance summaries
    pickup_stats: Optional[Statistics] = None
    delivery_stats: Optional[Statistics] = None
    total_distance_stats: Optional[Statistics] = None
    ride_distance_stats: Optional[Statistics] = None  # Rides with distance > 0

    pickup_outliers: OutlierReport = field(default_factory=OutlierReport)
    delivery_outliers: OutlierReport = field(default_factory=OutlierReport)
    ride_outliers: OutlierReport = field(default_factory=OutlierReport)

    ride_histogram: List[HistogramBin] = field(default_factory=list)
    ride_curve: List[CurvePoint] = field(default_factory=list)
    trend: List[TrendPoint] = field(default_factory=list)

    # Leaderboards
    transport_usage: List[RankingEntry] = field(default_factory=list)
    weekday_distribution: Dict[str, int] = field(default_factory=dict)
    top_registration_dates: List[RankingEntry] = field(default_factory=list)
    top_scheduled_dates: List[RankingEntry] = field(default_factory=list)
    top_clients: List[RankingEntry] = field(default_factory=list)
    least_clients: List[RankingEntry] = field(default_factory=list)
    most_expensive: List[RankingEntry] = field(default_factory=list)

    longest_pickup: Optional[Ride] = None
    longest_delivery: Optional[Ride] = None
    longest_ride: Optional[Ride] = None

    eco_pickups: int = 0
    eco_pickup_pct: float = 0.0

    @property
    def most_used_transport(self) -> Optional[RankingEntry]:
        """Transport mode with the most rides."""
        return self.transport_usage[0] if self.transport_usage else None


def filter_by_month(rides: Iterable[Ride], year: int, month: int) -> List[Ride]:
    """Keep rides scheduled in the given calendar month."""
    return [
        ride for ride in rides
        if ride.scheduled_date is not None
        and ride.scheduled_date.year == year
        and ride.scheduled_date.month == month
    ]


def _longest(rides: List[Ride], attr: str) -> Optional[Ride]:
    candidates = [r for r in rides if getattr(r, attr) is not None]
    top = rank(candidates, None, {attr: lambda g: getattr(g[0], attr)}, top_n=1)
    return top[0].key if top else None


def _weekday_distribution(rides: List[Ride]) -> Dict[str, int]:
    entries = rank(rides, lambda r: r.weekday, {"rides": count()})
    usage = {entry.key: int(entry.metrics["rides"]) for entry in entries}
    return {day: usage[day] for day in WEEKDAY_ORDER if day in usage}


def analyze_rides(
    records: Iterable[Mapping[str, Any]],
    period: Optional[Tuple[int, int]] = None,
    top_n: int = DEFAULT_TOP_N,
    num_bins: int = DEFAULT_NUM_BINS,
    num_points: int = DEFAULT_CURVE_POINTS,
) -> RideReport:
    """Run the complete analysis over a snapshot of ledger rows.

    Args:
        records: Raw ledger rows
        period: Optional (year, month) to restrict to rides scheduled then
        top_n: Leaderboard size
        num_bins: Histogram buckets for ride distances
        num_points: Distribution curve resolution

    Returns:
        RideReport for the snapshot

    Raises:
        EmptyDatasetError: If there are no rides (after period filtering)
    """
    rides = normalize_records(records)
    if not rides:
        raise EmptyDatasetError("No ride records to analyze")

    period_label = None
    if period is not None:
        year, month = period
        period_label = f"{year:04d}-{month:02d}"
        rides = filter_by_month(rides, year, month)
        if not rides:
            raise EmptyDatasetError(f"No rides scheduled in {period_label}")

    logger.info(f"Analyzing {len(rides)} rides" + (f" scheduled in {period_label}" if period_label else ""))

    pickup_stats = compute_statistics(present_values(r.pickup_distance for r in rides))
    delivery_stats = compute_statistics(present_values(r.delivery_distance for r in rides))
    total_distance_stats = compute_statistics(present_values(r.total_distance for r in rides))
    ride_distance_stats = compute_statistics(
        [r.total_distance for r in rides if r.total_distance is not None and r.total_distance > 0]
    )

    pickup_outliers = classify_outliers(rides, pickup_stats, lambda r: r.pickup_distance)
    delivery_outliers = classify_outliers(rides, delivery_stats, lambda r: r.delivery_distance)
    ride_outliers = classify_outliers(rides, ride_distance_stats, lambda r: r.total_distance)
    logger.info(
        f"Outliers - pickup: {len(pickup_outliers.mild)} mild, {len(pickup_outliers.extreme)} extreme | "
        f"delivery: {len(delivery_outliers.mild)} mild, {len(delivery_outliers.extreme)} extreme | "
        f"ride: {len(ride_outliers.mild)} mild, {len(ride_outliers.extreme)} extreme"
    )

    ride_samples = ride_distance_stats.sorted_values if ride_distance_stats else ()
    ride_histogram = build_histogram(ride_samples, num_bins)
    ride_curve = generate_curve_for(ride_distance_stats, num_points)

    trend = compute_trend(
        rides,
        lambda r: r.scheduled_date,
        {"pickup": lambda r: r.pickup_distance, "delivery": lambda r: r.delivery_distance},
    )

    transport_usage = rank(rides, lambda r: r.transport, {"rides": count()})
    top_registration_dates = rank(
        rides, lambda r: day_key(r.registered_date), {"rides": count()}, top_n=top_n
    )
    top_scheduled_dates = rank(
        rides, lambda r: day_key(r.scheduled_date), {"rides": count()}, top_n=top_n
    )

    client_metrics = {
        "rides": count(),
        "revenue": total(lambda r: r.price),
        "average_price": average(lambda r: r.price),
    }
    top_clients = rank(rides, lambda r: r.client, client_metrics, top_n=top_n)
    least_clients = rank(rides, lambda r: r.client, client_metrics, top_n=top_n, descending=False)

    priced = [r for r in rides if r.price is not None and r.price > 0 and r.total_distance is not None]
    most_expensive = rank(
        priced,
        None,
        {"price": lambda g: g[0].price, "distance": lambda g: g[0].total_distance},
        top_n=top_n,
    )

    eco_pickups = sum(
        1 for r in rides if r.pickup_distance is not None and r.pickup_distance < ECO_PICKUP_THRESHOLD_KM
    )

    return RideReport(
        total_rides=len(rides),
        period=period_label,
        pickup_stats=pickup_stats,
        delivery_stats=delivery_stats,
        total_distance_stats=total_distance_stats,
        ride_distance_stats=ride_distance_stats,
        pickup_outliers=pickup_outliers,
        delivery_outliers=delivery_outliers,
        ride_outliers=ride_outliers,
        ride_histogram=ride_histogram,
        ride_curve=ride_curve,
        trend=trend,
        transport_usage=transport_usage,
        weekday_distribution=_weekday_distribution(rides),
        top_registration_dates=top_registration_dates,
        top_scheduled_dates=top_scheduled_dates,
        top_clients=top_clients,
        least_clients=least_clients,
        most_expensive=most_expensive,
        longest_pickup=_longest(rides, "pickup_distance"),
        longest_delivery=_longest(rides, "delivery_distance"),
        longest_ride=_longest([r for r in rides if r.total_distance and r.total_distance > 0], "total_distance"),
        eco_pickups=eco_pickups,
        eco_pickup_pct=eco_pickups / len(rides) * 100,
    )


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, Ride):
        return as_row(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, dict):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, date):
        return obj.isoformat()
    return obj


def to_dict(report: RideReport) -> Dict[str, Any]:
    """JSON-ready view of a report (rides as plain rows, dates as ISO strings)."""
    data = _jsonable(report)
    data["most_used_transport"] = _jsonable(report.most_used_transport)
    return data


def _format_stats(label: str, stats: Optional[Statistics], unit: str) -> List[str]:
    if stats is None:
        return [f"\n{label}: no data"]
    return [
        f"\n{label} (n={stats.count})",
        f"   Mean: {stats.mean:.2f}{unit} ± {stats.std:.2f}{unit}",
        f"   Median: {stats.median:.2f}{unit}",
        f"   Range: [{stats.min:.2f}, {stats.max:.2f}]{unit}",
        f"   Q1-Q3: [{stats.q1:.2f}, {stats.q3:.2f}]{unit} (IQR {stats.iqr:.2f}{unit})",
    ]


def _format_outliers(label: str, outliers: OutlierReport) -> List[str]:
    lines = [
        f"\n{label}: {len(outliers.mild)} mild, {len(outliers.extreme)} extreme",
        f"   Mild fences: [{outliers.bounds.mild_lower:.2f}, {outliers.bounds.mild_upper:.2f}]",
        f"   Extreme fences: [{outliers.bounds.extreme_lower:.2f}, {outliers.bounds.extreme_upper:.2f}]",
    ]
    for kind, flagged in (("extreme", outliers.extreme), ("mild", outliers.mild)):
        for outlier in flagged:
            ride = outlier.record
            lines.append(f"   [{kind}] {ride.ride_id or '-'} {ride.client}: {outlier.value:.2f}km")
    return lines


def _banner(title: str) -> List[str]:
    return ["\n" + "=" * 80, title, "=" * 80]


def generate_report(report: RideReport, output_path: Optional[Path] = None) -> str:
    """Render a report as text.

    Args:
        report: Analysis results
        output_path: Optional path to save the report text file

    Returns:
        Report text as string
    """
    lines = ["=" * 80, "RIDE ANALYTICS REPORT", "=" * 80]
    if report.period:
        lines.append(f"\nPeriod: {report.period}")
    lines.append(f"Total rides: {report.total_rides}")
    lines.append(
        f"Pickups from ECO base: {report.eco_pickups} ({report.eco_pickup_pct:.1f}%)"
    )

    lines.extend(_banner("DISTANCE STATISTICS"))
    lines.extend(_format_stats("Pickup distance", report.pickup_stats, "km"))
    lines.extend(_format_stats("Delivery distance", report.delivery_stats, "km"))
    lines.extend(_format_stats("Total distance", report.total_distance_stats, "km"))
    lines.extend(_format_stats("Ride distance", report.ride_distance_stats, "km"))

    for label, ride, attr in (
        ("Longest pickup", report.longest_pickup, "pickup_distance"),
        ("Longest delivery", report.longest_delivery, "delivery_distance"),
        ("Longest ride", report.longest_ride, "total_distance"),
    ):
        if ride is not None:
            lines.append(f"{label}: {getattr(ride, attr):.2f}km ({ride.client}, {ride.ride_id or '-'})")

    lines.extend(_banner("OUTLIERS (IQR METHOD)"))
    lines.extend(_format_outliers("Pickup distance", report.pickup_outliers))
    lines.extend(_format_outliers("Delivery distance", report.delivery_outliers))
    lines.extend(_format_outliers("Ride distance", report.ride_outliers))

    lines.extend(_banner("TRANSPORT AND WEEKDAYS"))
    for entry in report.transport_usage:
        lines.append(f"{entry.rank}. {entry.key}: {int(entry.metrics['rides'])} rides")
    lines.append("")
    for day, rides in report.weekday_distribution.items():
        lines.append(f"{day}: {rides} rides")

    for title, entries in (
        ("BUSIEST REGISTRATION DATES", report.top_registration_dates),
        ("BUSIEST SCHEDULED DATES", report.top_scheduled_dates),
    ):
        lines.extend(_banner(title))
        for entry in entries:
            lines.append(f"{entry.rank}. {entry.key}: {int(entry.metrics['rides'])} rides")

    for title, entries in (
        ("MOST RECURRING CLIENTS", report.top_clients),
        ("LEAST RECURRING CLIENTS", report.least_clients),
    ):
        lines.extend(_banner(title))
        for entry in entries:
            lines.append(
                f"{entry.rank}. {entry.key}: {int(entry.metrics['rides'])} rides | "
                f"Revenue: {entry.metrics['revenue']:.2f} Bs | "
                f"Avg: {entry.metrics['average_price']:.2f} Bs"
            )

    lines.extend(_banner("MOST EXPENSIVE RIDES"))
    for entry in report.most_expensive:
        ride = entry.key
        lines.append(
            f"{entry.rank}. {ride.ride_id or '-'} {ride.client}: {entry.metrics['price']:.2f} Bs | "
            f"{entry.metrics['distance']:.2f}km | {ride.transport}"
        )

    lines.append("\n" + "=" * 80)

    report_text = "\n".join(lines)

    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(report_text, encoding="utf-8")
        logger.info(f"✓ Report saved to {output_path}")

    return report_text
