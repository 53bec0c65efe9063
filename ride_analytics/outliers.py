"""IQR-based outlier classification.

Samples outside Tukey's inner fences (1.5 x IQR beyond the quartiles) are
mild outliers; samples outside the outer fences (3 x IQR) are extreme.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional

from ride_analytics.config import EXTREME_OUTLIER_FENCE, MILD_OUTLIER_FENCE
from ride_analytics.statistics import Statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutlierBounds:
    """Lower and upper fences for mild and extreme outliers."""

    mild_lower: float = 0.0
    mild_upper: float = 0.0
    extreme_lower: float = 0.0
    extreme_upper: float = 0.0


@dataclass(frozen=True)
class Outlier:
    """A flagged value and the record it came from."""

    value: float
    record: Any = field(compare=False)


@dataclass(frozen=True)
class OutlierReport:
    """Mild and extreme outliers in record encounter order."""

    mild: List[Outlier] = field(default_factory=list)
    extreme: List[Outlier] = field(default_factory=list)
    bounds: OutlierBounds = field(default_factory=OutlierBounds)


def compute_bounds(stats: Optional[Statistics]) -> OutlierBounds:
    """Derive the outlier fences from a summary's quartiles.

    Args:
        stats: Summary of the field being checked, or None

    Returns:
        Fences; all zero when there is no summary
    """
    if stats is None:
        return OutlierBounds()

    iqr = stats.q3 - stats.q1
    return OutlierBounds(
        mild_lower=stats.q1 - MILD_OUTLIER_FENCE * iqr,
        mild_upper=stats.q3 + MILD_OUTLIER_FENCE * iqr,
        extreme_lower=stats.q1 - EXTREME_OUTLIER_FENCE * iqr,
        extreme_upper=stats.q3 + EXTREME_OUTLIER_FENCE * iqr,
    )


def classify_outliers(
    records: Iterable[Any],
    stats: Optional[Statistics],
    value_fn: Callable[[Any], Optional[float]],
) -> OutlierReport:
    """Tag each record's value as normal, mild or extreme.

    Records whose value is None are skipped. Normal values are not reported.

    Args:
        records: Full record set, in encounter order
        stats: Summary computed over the same field
        value_fn: Extracts the field from a record

    Returns:
        OutlierReport with the flagged records and the fences used
    """
    if stats is None:
        logger.debug("No summary available, skipping outlier detection")
        return OutlierReport()

    bounds = compute_bounds(stats)
    mild: List[Outlier] = []
    extreme: List[Outlier] = []

    for record in records:
        value = value_fn(record)
        if value is None:
            continue

        if value < bounds.extreme_lower or value > bounds.extreme_upper:
            extreme.append(Outlier(value=value, record=record))
        elif value < bounds.mild_lower or value > bounds.mild_upper:
            mild.append(Outlier(value=value, record=record))

    return OutlierReport(mild=mild, extreme=extreme, bounds=bounds)
