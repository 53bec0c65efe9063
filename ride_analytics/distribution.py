"""Histogram and distribution curve data for charts.

Both outputs are chart-ready point lists:
- Histogram: one (center, count) point per equal-width bucket
- Curve: a Gaussian density using the sample mean and standard deviation,
  sampled over a range clipped to exclude far outliers
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ride_analytics.config import (
    CURVE_STD_SPAN,
    DEFAULT_CURVE_POINTS,
    DEFAULT_NUM_BINS,
    MILD_OUTLIER_FENCE,
)
from ride_analytics.statistics import Statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistogramBin:
    """Bucket midpoint and the number of samples in the bucket."""

    center: float
    count: int


@dataclass(frozen=True)
class CurvePoint:
    """A single (x, density) point of the distribution curve."""

    x: float
    y: float


def build_histogram(samples: Sequence[float], num_bins: int = DEFAULT_NUM_BINS) -> List[HistogramBin]:
    """Bin samples into equal-width buckets between their min and max.

    The maximum value is clamped into the last bin. When every sample has
    the same value there is no width to split, so a single bin centred on
    that value holds all samples. A bin width that underflows to zero or
    overflows to infinity falls back to one bin centred on the range.

    Args:
        samples: Numeric values with absences already removed
        num_bins: Number of buckets

    Returns:
        Bins in ascending order, or an empty list for no samples

    Raises:
        ValueError: If num_bins is less than 1
    """
    if num_bins < 1:
        raise ValueError(f"num_bins must be at least 1, got {num_bins}")
    if len(samples) == 0:
        return []

    data = np.asarray(samples, dtype=float)
    lo = float(data.min())
    hi = float(data.max())

    if hi == lo:
        logger.debug(f"All {len(data)} samples equal {lo}, using a single bin")
        return [HistogramBin(center=lo, count=len(data))]

    bin_size = (hi - lo) / num_bins
    if bin_size == 0 or not math.isfinite(bin_size):
        logger.debug(f"Bin size {bin_size} for range [{lo}, {hi}] is unusable, using a single bin")
        return [HistogramBin(center=lo / 2 + hi / 2, count=len(data))]

    indices = np.minimum(np.floor((data - lo) / bin_size).astype(int), num_bins - 1)
    counts = np.bincount(indices, minlength=num_bins)

    return [
        HistogramBin(center=lo + i * bin_size + bin_size / 2, count=int(counts[i]))
        for i in range(num_bins)
    ]


def curve_range(
    mean: float,
    std: float,
    min_val: float,
    max_val: float,
    q1: float,
    q3: float,
) -> Tuple[float, float]:
    """Visually sane x-range for the curve.

    The range is the tighter of mean ± 3 std and the mild outlier fences,
    never below zero (distances and prices are non-negative) and never
    beyond the observed data.

    Returns:
        (range_min, range_max)
    """
    iqr = q3 - q1
    range_max = min(mean + CURVE_STD_SPAN * std, q3 + MILD_OUTLIER_FENCE * iqr, max_val)
    range_min = max(mean - CURVE_STD_SPAN * std, q1 - MILD_OUTLIER_FENCE * iqr, 0.0, min_val)
    return range_min, range_max


def generate_curve(
    mean: float,
    std: float,
    min_val: float,
    max_val: float,
    q1: float,
    q3: float,
    num_points: int = DEFAULT_CURVE_POINTS,
) -> List[CurvePoint]:
    """Sample the normal density with the given parameters.

    Emits num_points + 1 evenly spaced points, both range ends included.
    A zero (or non-finite) standard deviation has no density to draw, and a
    range whose clipped minimum lies above its maximum has nothing to cover;
    both return an empty curve.

    Args:
        mean: Sample mean
        std: Sample standard deviation
        min_val: Smallest sample
        max_val: Largest sample
        q1: First quartile
        q3: Third quartile
        num_points: Number of intervals between the range ends

    Returns:
        Curve points ordered by x

    Raises:
        ValueError: If num_points is less than 1
    """
    if num_points < 1:
        raise ValueError(f"num_points must be at least 1, got {num_points}")
    if not math.isfinite(std) or std <= 0:
        logger.debug(f"Standard deviation is {std}, skipping distribution curve")
        return []

    range_min, range_max = curve_range(mean, std, min_val, max_val, q1, q3)
    if range_max < range_min:
        logger.debug(f"Empty curve range [{range_min}, {range_max}], skipping distribution curve")
        return []

    step = (range_max - range_min) / num_points
    xs = range_min + np.arange(num_points + 1) * step
    ys = np.exp(-0.5 * ((xs - mean) / std) ** 2) / (std * math.sqrt(2 * math.pi))

    return [CurvePoint(x=float(x), y=float(y)) for x, y in zip(xs, ys)]


def generate_curve_for(stats: Optional[Statistics], num_points: int = DEFAULT_CURVE_POINTS) -> List[CurvePoint]:
    """Distribution curve for a summary; empty when there is no summary."""
    if stats is None:
        return []
    return generate_curve(
        stats.mean,
        stats.std,
        stats.min,
        stats.max,
        stats.q1,
        stats.q3,
        num_points=num_points,
    )
