"""Record normalization for ledger rows.

Ledger exports are heterogeneous: the same logical field arrives under
bracketed sheet headers, accented labels or snake_case keys, numbers use a
comma as decimal separator, and failed formulas leave an "ERROR" literal in
the cell. This module resolves all of that once, producing typed ``Ride``
values where every unusable field is ``None``.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ride_analytics.config import ERROR_SENTINEL, FIELD_ALIASES, MISSING_LABEL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ride:
    """A single delivery ride with clean, typed fields."""

    ride_id: Optional[str]
    client: str
    registered_date: Optional[date]
    registered_time: Optional[str]
    scheduled_date: Optional[date]
    pickup_distance: Optional[float]
    delivery_distance: Optional[float]
    total_distance: Optional[float]
    transport: str
    price: Optional[float]
    weekday: str
    # Originating ledger row, kept for audit display only
    source: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


def parse_number(value: Any) -> Optional[float]:
    """Convert a ledger cell to a float.

    Handles comma decimal separators and the error sentinel.

    Args:
        value: Raw cell value (string, number or None)

    Returns:
        Parsed float, or None if the cell is blank, "ERROR" or not numeric
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
        return number if math.isfinite(number) else None

    text = str(value).strip().replace(",", ".", 1)
    if text == "" or text == ERROR_SENTINEL:
        return None

    try:
        number = float(text)
    except ValueError:
        return None

    return number if math.isfinite(number) else None


def parse_date(value: Any) -> Optional[date]:
    """Parse a DD/MM/YYYY ledger date.

    Args:
        value: Raw cell value; date and datetime objects are accepted as-is
            (datetimes are truncated to the day)

    Returns:
        The calendar date, or None if the value cannot be read as one
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    parts = str(value).strip().split("/")
    if len(parts) != 3:
        return None

    try:
        day, month, year = (int(part.strip()) for part in parts)
        return date(year, month, day)
    except ValueError:
        return None


def resolve_field(record: Mapping[str, Any], name: str) -> Any:
    """Look up a canonical field in a record through its aliases.

    Args:
        record: Raw ledger row
        name: Canonical field name (a key of FIELD_ALIASES)

    Returns:
        The first non-None value found under any alias, or None

    Raises:
        KeyError: If name is not a known canonical field
    """
    for alias in FIELD_ALIASES[name]:
        value = record.get(alias)
        if value is not None:
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_record(record: Mapping[str, Any]) -> Ride:
    """Build a Ride from a raw ledger row without modifying the row."""
    return Ride(
        ride_id=_text(resolve_field(record, "ride_id")),
        client=_text(resolve_field(record, "client")) or MISSING_LABEL,
        registered_date=parse_date(resolve_field(record, "registered_date")),
        registered_time=_text(resolve_field(record, "registered_time")),
        scheduled_date=parse_date(resolve_field(record, "scheduled_date")),
        pickup_distance=parse_number(resolve_field(record, "pickup_distance")),
        delivery_distance=parse_number(resolve_field(record, "delivery_distance")),
        total_distance=parse_number(resolve_field(record, "total_distance")),
        transport=_text(resolve_field(record, "transport")) or MISSING_LABEL,
        price=parse_number(resolve_field(record, "price")),
        weekday=_text(resolve_field(record, "weekday")) or MISSING_LABEL,
        source=record,
    )


def normalize_records(records: Iterable[Mapping[str, Any]]) -> List[Ride]:
    """Normalize every row of a ledger snapshot, preserving order."""
    rides = [normalize_record(record) for record in records]
    logger.debug(f"Normalized {len(rides)} ledger rows")
    return rides


def present_values(values: Iterable[Optional[float]]) -> List[float]:
    """Drop absent values, keeping order."""
    return [v for v in values if v is not None]


def as_row(ride: Ride) -> Dict[str, Any]:
    """Plain-dict view of a ride without its source row."""
    return {
        "ride_id": ride.ride_id,
        "client": ride.client,
        "registered_date": ride.registered_date.isoformat() if ride.registered_date else None,
        "registered_time": ride.registered_time,
        "scheduled_date": ride.scheduled_date.isoformat() if ride.scheduled_date else None,
        "pickup_distance": ride.pickup_distance,
        "delivery_distance": ride.delivery_distance,
        "total_distance": ride.total_distance,
        "transport": ride.transport,
        "price": ride.price,
        "weekday": ride.weekday,
    }
