"""Tests for statistics module."""

import random

import pytest

from ride_analytics.statistics import compute_statistics


def test_empty_has_no_summary():
    assert compute_statistics([]) is None


def test_single_sample():
    stats = compute_statistics([4.2])
    assert stats.count == 1
    assert stats.min == stats.max == stats.mean == stats.median == 4.2
    assert stats.q1 == stats.q3 == 4.2
    assert stats.std == 0.0


def test_nearest_rank_quartiles():
    stats = compute_statistics([8, 1, 7, 2, 6, 3, 5, 4])
    # floor(8 * 0.25) = 2, floor(8 * 0.75) = 6
    assert stats.q1 == 3
    assert stats.q3 == 7
    assert stats.iqr == 4


def test_median_even_and_odd():
    assert compute_statistics([1, 2, 3, 4]).median == 2.5
    assert compute_statistics([5, 1, 3]).median == 3


def test_population_standard_deviation():
    stats = compute_statistics([2, 4, 4, 4, 5, 5, 7, 9])
    assert stats.mean == pytest.approx(5.0)
    assert stats.std == pytest.approx(2.0)


def test_sorted_values_retained():
    stats = compute_statistics([3.0, 1.0, 2.0])
    assert stats.sorted_values == (1.0, 2.0, 3.0)
    assert stats.min == 1.0
    assert stats.max == 3.0


@pytest.mark.parametrize("seed", range(10))
def test_order_invariant(seed):
    rng = random.Random(seed)
    samples = [rng.uniform(-50, 500) for _ in range(rng.randint(1, 60))]
    stats = compute_statistics(samples)
    assert stats.min <= stats.q1 <= stats.median <= stats.q3 <= stats.max


def test_str_contains_summary():
    text = str(compute_statistics([1.0, 2.0, 3.0]))
    assert "Median: 2.00" in text
    assert "N=3" in text
