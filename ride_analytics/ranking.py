"""Group-by / aggregate / sort / top-N leaderboards.

One routine serves every leaderboard in the report: busiest dates, most and
least recurring clients, transport usage and most expensive rides. Ties on
the ranking metric always keep the order in which keys were first seen.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional

Metric = Callable[[List[Any]], float]


@dataclass(frozen=True)
class RankingEntry:
    """A ranked group: its key, computed metrics and 1-based rank."""

    key: Any
    metrics: Dict[str, float]
    rank: int


def count() -> Metric:
    """Metric: number of records in the group."""
    return lambda group: float(len(group))


def total(value_fn: Callable[[Any], Optional[float]]) -> Metric:
    """Metric: sum of a value over the group, ignoring absent values."""

    def _total(group: List[Any]) -> float:
        return float(sum(v for v in map(value_fn, group) if v is not None))

    return _total


def average(value_fn: Callable[[Any], Optional[float]]) -> Metric:
    """Metric: mean of a value over the group's present values (0 if none)."""

    def _average(group: List[Any]) -> float:
        values = [v for v in map(value_fn, group) if v is not None]
        return sum(values) / len(values) if values else 0.0

    return _average


def rank(
    records: Iterable[Any],
    key_fn: Optional[Callable[[Any], Optional[Hashable]]],
    metrics: Mapping[str, Metric],
    primary: Optional[str] = None,
    top_n: Optional[int] = None,
    descending: bool = True,
) -> List[RankingEntry]:
    """Group records, aggregate each group and rank the groups.

    Args:
        records: Records to rank
        key_fn: Group key for a record; records with a None key are skipped.
            None means no grouping: each record is its own group and its key.
        metrics: Metric name -> function over the group's record list
        primary: Metric to sort by (default: the first metric)
        top_n: Number of entries to keep (default: all)
        descending: Sort largest first

    Returns:
        Ranked entries; ties keep first-seen order

    Raises:
        ValueError: If no metrics are given or primary is not one of them
    """
    if not metrics:
        raise ValueError("At least one metric is required")

    primary = primary or next(iter(metrics))
    if primary not in metrics:
        raise ValueError(f"Unknown primary metric: {primary}")

    # Each group remembers the position its key was first seen at
    keys: List[Any] = []
    groups: List[List[Any]] = []
    if key_fn is None:
        for record in records:
            keys.append(record)
            groups.append([record])
    else:
        positions: Dict[Hashable, int] = {}
        for record in records:
            key = key_fn(record)
            if key is None:
                continue
            if key not in positions:
                positions[key] = len(keys)
                keys.append(key)
                groups.append([])
            groups[positions[key]].append(record)

    computed = [
        {name: metric(group) for name, metric in metrics.items()}
        for group in groups
    ]

    sign = -1.0 if descending else 1.0
    order = sorted(range(len(keys)), key=lambda i: (sign * computed[i][primary], i))
    if top_n is not None:
        order = order[:top_n]

    return [
        RankingEntry(key=keys[i], metrics=computed[i], rank=position)
        for position, i in enumerate(order, 1)
    ]
