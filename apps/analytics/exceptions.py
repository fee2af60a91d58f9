"""
Domain exceptions for analytics app.

This module defines domain-specific exceptions that are raised by the
analytics and period helpers. These exceptions represent invalid input,
separate from HTTP concerns.

Exception Hierarchy:
    AnalyticsServiceError (base)
    ├── InvalidPeriodError
    └── InvalidDateRangeError

Usage:
    from apps.analytics.exceptions import InvalidPeriodError

    if period not in VALID_PERIODS:
        raise InvalidPeriodError(f"Invalid period: {period}")
"""


class AnalyticsServiceError(Exception):
    """
    Base exception for all analytics service errors.

    All domain-specific exceptions in the analytics app inherit from this
    class, making it easy to catch all analytics errors in views:

        try:
            date_from, date_to = resolve_period('custom', today)
        except AnalyticsServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidPeriodError(AnalyticsServiceError):
    """
    Raised when a period name is unknown or a custom period lacks dates.

    Valid periods are: week, month, custom.

    Example:
        raise InvalidPeriodError("Select custom dates")
    """

    pass


class InvalidDateRangeError(AnalyticsServiceError):
    """
    Raised when date range is invalid.

    Typically when date_from is after date_to.

    Example:
        raise InvalidDateRangeError("Start date must be before end date")
    """

    pass
