"""Tests for trend module."""

from datetime import date, datetime

import pytest

from ride_analytics.trend import compute_trend, day_key

METRICS = {"pickup": lambda r: r["pickup"], "delivery": lambda r: r["delivery"]}


def test_day_key_canonical():
    assert day_key(date(2025, 12, 9)) == "2025-12-09"
    assert day_key(datetime(2025, 12, 9, 23, 59)) == "2025-12-09"
    assert day_key(None) is None


def test_daily_counts_and_averages():
    records = [
        {"day": date(2025, 12, 2), "pickup": 1.0, "delivery": 4.0},
        {"day": date(2025, 12, 2), "pickup": 3.0, "delivery": None},
        {"day": date(2025, 12, 3), "pickup": 2.0, "delivery": 6.0},
    ]
    points = compute_trend(records, lambda r: r["day"], METRICS)

    assert [p.date_key for p in points] == ["2025-12-02", "2025-12-03"]
    assert [p.count for p in points] == [2, 1]
    assert points[0].averages["pickup"] == pytest.approx(2.0)
    assert points[0].averages["delivery"] == pytest.approx(4.0)


def test_day_without_values_averages_zero():
    records = [{"day": date(2025, 12, 5), "pickup": None, "delivery": 2.0}]
    points = compute_trend(records, lambda r: r["day"], METRICS)
    assert points[0].averages["pickup"] == 0.0
    assert points[0].averages["delivery"] == 2.0


def test_sorted_by_calendar_day():
    records = [
        {"day": date(2025, 12, 10), "pickup": 1.0, "delivery": 1.0},
        {"day": date(2025, 12, 9), "pickup": 1.0, "delivery": 1.0},
        {"day": date(2025, 11, 30), "pickup": 1.0, "delivery": 1.0},
    ]
    points = compute_trend(records, lambda r: r["day"], METRICS)
    assert [p.date_key for p in points] == ["2025-11-30", "2025-12-09", "2025-12-10"]


def test_datetimes_grouped_by_day():
    records = [
        {"day": datetime(2025, 12, 1, 8, 0), "pickup": 1.0, "delivery": 1.0},
        {"day": datetime(2025, 12, 1, 18, 30), "pickup": 3.0, "delivery": 1.0},
    ]
    points = compute_trend(records, lambda r: r["day"], METRICS)
    assert len(points) == 1
    assert points[0].count == 2
    assert points[0].averages["pickup"] == pytest.approx(2.0)


def test_records_without_date_skipped():
    records = [{"day": None, "pickup": 1.0, "delivery": 1.0}]
    assert compute_trend(records, lambda r: r["day"], METRICS) == []
