"""Tests for ranking module."""

import pytest

from ride_analytics.ranking import average, count, rank, total


def _orders(*clients):
    return [{"client": c} for c in clients]


def test_groups_by_count_descending():
    entries = rank(_orders("A", "B", "B", "C", "B", "C"), lambda r: r["client"], {"rides": count()})
    assert [e.key for e in entries] == ["B", "C", "A"]
    assert [e.metrics["rides"] for e in entries] == [3, 2, 1]
    assert [e.rank for e in entries] == [1, 2, 3]


def test_ties_keep_first_seen_order():
    forward = rank(_orders("Ana", "Luis", "Luis", "Ana"), lambda r: r["client"], {"rides": count()})
    backward = rank(_orders("Luis", "Ana", "Ana", "Luis"), lambda r: r["client"], {"rides": count()})
    assert [e.key for e in forward] == ["Ana", "Luis"]
    assert [e.key for e in backward] == ["Luis", "Ana"]


def test_ascending_ties_keep_first_seen_order():
    entries = rank(
        _orders("A", "B", "C", "A"), lambda r: r["client"], {"rides": count()}, descending=False
    )
    assert [e.key for e in entries] == ["B", "C", "A"]


def test_top_n_truncates():
    entries = rank(_orders(*"ABCDEFG"), lambda r: r["client"], {"rides": count()}, top_n=3)
    assert [e.key for e in entries] == ["A", "B", "C"]
    assert entries[-1].rank == 3


def test_none_keys_skipped():
    records = [{"day": None}, {"day": "2025-12-01"}, {"day": None}]
    entries = rank(records, lambda r: r["day"], {"rides": count()})
    assert [e.key for e in entries] == ["2025-12-01"]


def test_revenue_and_average_metrics():
    records = [
        {"client": "Ana", "price": 10.0},
        {"client": "Ana", "price": None},
        {"client": "Ana", "price": 20.0},
        {"client": "Luis", "price": 50.0},
    ]
    entries = rank(
        records,
        lambda r: r["client"],
        {
            "revenue": total(lambda r: r["price"]),
            "rides": count(),
            "average_price": average(lambda r: r["price"]),
        },
    )
    assert [e.key for e in entries] == ["Luis", "Ana"]
    ana = entries[1]
    assert ana.metrics == {"revenue": 30.0, "rides": 3.0, "average_price": 15.0}


def test_primary_metric_selection():
    records = [
        {"client": "Ana", "price": 10.0},
        {"client": "Ana", "price": 10.0},
        {"client": "Luis", "price": 50.0},
    ]
    metrics = {"revenue": total(lambda r: r["price"]), "rides": count()}
    by_rides = rank(records, lambda r: r["client"], metrics, primary="rides")
    assert [e.key for e in by_rides] == ["Ana", "Luis"]


def test_average_of_nothing_is_zero():
    assert average(lambda r: r)([None, None]) == 0.0


def test_identity_grouping_ranks_records():
    rides = [{"id": 1, "price": 30.0}, {"id": 2, "price": 45.0}, {"id": 3, "price": 30.0}]
    entries = rank(rides, None, {"price": lambda g: g[0]["price"]})
    assert [e.key["id"] for e in entries] == [2, 1, 3]
    assert entries[0].key is rides[1]


def test_empty_records():
    assert rank([], lambda r: r, {"rides": count()}) == []


def test_requires_metrics():
    with pytest.raises(ValueError):
        rank(_orders("A"), lambda r: r["client"], {})


def test_unknown_primary_metric():
    with pytest.raises(ValueError):
        rank(_orders("A"), lambda r: r["client"], {"rides": count()}, primary="revenue")
