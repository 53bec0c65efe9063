"""Ride analytics engine for delivery ledger snapshots.

This package turns a list of heterogeneous ride records into:
- Descriptive statistics and IQR outlier classifications
- Histogram and distribution curve data for charts
- Ranked leaderboards (dates, clients, transport, prices)
- Per-day trend series

Every component is a pure function of its input snapshot.

Quick Start:
    >>> from ride_analytics import analyze_rides, load_ledger_csv
    >>> rows = load_ledger_csv('rides.csv')
    >>> report = analyze_rides(rows, period=(2025, 12))
    >>> report.ride_distance_stats.median

Command Line:
    # Statistical report
    python -m ride_analytics stats rides.csv --month 2025-12

    # Charts
    python -m ride_analytics visualize rides.csv -o charts/

    # JSON export
    python -m ride_analytics export rides.csv -o rides.json
"""

# Normalization
from ride_analytics.normalize import (
    Ride,
    normalize_record,
    normalize_records,
    parse_date,
    parse_number,
    resolve_field,
)

# Statistics and outliers
from ride_analytics.statistics import Statistics, compute_statistics
from ride_analytics.outliers import (
    Outlier,
    OutlierBounds,
    OutlierReport,
    classify_outliers,
    compute_bounds,
)

# Chart data
from ride_analytics.distribution import (
    CurvePoint,
    HistogramBin,
    build_histogram,
    generate_curve,
    generate_curve_for,
)

# Aggregations
from ride_analytics.ranking import RankingEntry, average, count, rank, total
from ride_analytics.trend import TrendPoint, compute_trend

# Pipeline
from ride_analytics.errors import EmptyDatasetError, RideAnalyticsError
from ride_analytics.loader import load_ledger_csv
from ride_analytics.report import RideReport, analyze_rides, generate_report, to_dict

__all__ = [
    # Normalization
    'Ride',
    'parse_number',
    'parse_date',
    'resolve_field',
    'normalize_record',
    'normalize_records',
    # Statistics
    'Statistics',
    'compute_statistics',
    'Outlier',
    'OutlierBounds',
    'OutlierReport',
    'compute_bounds',
    'classify_outliers',
    # Chart data
    'HistogramBin',
    'CurvePoint',
    'build_histogram',
    'generate_curve',
    'generate_curve_for',
    # Aggregations
    'RankingEntry',
    'rank',
    'count',
    'total',
    'average',
    'TrendPoint',
    'compute_trend',
    # Pipeline
    'RideAnalyticsError',
    'EmptyDatasetError',
    'load_ledger_csv',
    'RideReport',
    'analyze_rides',
    'generate_report',
    'to_dict',
]

__version__ = '1.0.0'
