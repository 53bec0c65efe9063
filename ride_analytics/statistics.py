"""Descriptive statistics for ride samples.

This module computes the summary every other chart and classifier builds on:
- Count, range, mean and population standard deviation
- Median
- Nearest-rank quartiles (Q1, Q3)

The sorted sample set is kept on the summary so histograms and outlier
checks work from exactly the same ordered values.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Statistics:
    """Statistical summary for a non-empty sample set."""

    count: int
    min: float
    max: float
    mean: float
    median: float
    std: float  # Population standard deviation
    q1: float  # Nearest-rank 25th percentile
    q3: float  # Nearest-rank 75th percentile
    sorted_values: Tuple[float, ...]

    @property
    def iqr(self) -> float:
        """Interquartile range (Q3 - Q1)."""
        return self.q3 - self.q1

    def __str__(self) -> str:
        """Human-readable summary."""
        return (
            f"Mean: {self.mean:.2f} ± {self.std:.2f} | "
            f"Median: {self.median:.2f} | "
            f"Range: [{self.min:.2f}, {self.max:.2f}] | "
            f"Q1-Q3: [{self.q1:.2f}, {self.q3:.2f}] | "
            f"N={self.count}"
        )


def compute_statistics(samples: Sequence[float]) -> Optional[Statistics]:
    """Compute summary statistics for a clean numeric sample set.

    Callers filter out absent values first. Quartiles use direct indexing
    into the sorted samples (index floor(n * 0.25) and floor(n * 0.75)),
    not interpolation.

    Args:
        samples: Numeric values

    Returns:
        Statistics object, or None if samples is empty
    """
    if len(samples) == 0:
        return None

    data = np.sort(np.asarray(samples, dtype=float), kind="stable")
    n = len(data)

    mean = float(np.mean(data))
    std = float(np.sqrt(np.mean((data - mean) ** 2)))

    if n % 2 == 0:
        median = float((data[n // 2 - 1] + data[n // 2]) / 2)
    else:
        median = float(data[n // 2])

    q1 = float(data[math.floor(n * 0.25)])
    q3 = float(data[math.floor(n * 0.75)])

    return Statistics(
        count=n,
        min=float(data[0]),
        max=float(data[-1]),
        mean=mean,
        median=median,
        std=std,
        q1=q1,
        q3=q3,
        sorted_values=tuple(float(v) for v in data),
    )
