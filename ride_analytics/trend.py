"""Per-day trend series.

Rides are grouped by calendar day and each tracked field is averaged over
that day's present values. A day with no values for a field reports 0.0 for
it, so the chart gets a point for every day that had rides.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional


@dataclass(frozen=True)
class TrendPoint:
    """Ride count and field averages for a single day."""

    date_key: str  # ISO YYYY-MM-DD
    count: int
    averages: Dict[str, float]


def day_key(value: Optional[date]) -> Optional[str]:
    """Canonical YYYY-MM-DD key for a date or datetime (truncated to the day)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def compute_trend(
    records: Iterable[Any],
    date_fn: Callable[[Any], Optional[date]],
    metrics: Mapping[str, Callable[[Any], Optional[float]]],
) -> List[TrendPoint]:
    """Group records by day and average each metric per day.

    Args:
        records: Records to group; those without a date are skipped
        date_fn: Extracts the record's date or datetime
        metrics: Metric name -> value extractor

    Returns:
        One TrendPoint per day, sorted by date
    """
    counts: Dict[str, int] = {}
    values: Dict[str, Dict[str, List[float]]] = {}

    for record in records:
        key = day_key(date_fn(record))
        if key is None:
            continue

        if key not in counts:
            counts[key] = 0
            values[key] = {name: [] for name in metrics}
        counts[key] += 1

        for name, value_fn in metrics.items():
            value = value_fn(record)
            if value is not None:
                values[key][name].append(value)

    points = []
    for key in sorted(counts):
        averages = {
            name: (sum(day_values) / len(day_values) if day_values else 0.0)
            for name, day_values in values[key].items()
        }
        points.append(TrendPoint(date_key=key, count=counts[key], averages=averages))

    return points
