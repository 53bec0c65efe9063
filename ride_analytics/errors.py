"""Ride analytics exceptions."""


class RideAnalyticsError(Exception):
    """Base class for errors raised by the analytics engine."""


class EmptyDatasetError(RideAnalyticsError):
    """Raised when a run has no rides to analyze.

    This is the only condition that aborts a run; malformed individual
    records are treated as missing values instead.
    """
