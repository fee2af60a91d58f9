"""
Calendar windows used by billing and analytics.

Weeks start on Monday. All helpers accept a ``date`` or an ISO
``YYYY-MM-DD`` string.
"""

import calendar
from datetime import date, datetime, timedelta

from .exceptions import InvalidPeriodError, InvalidDateRangeError


def to_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def week_start(value):
    """Monday of the week containing ``value``."""
    day = to_date(value)
    return day - timedelta(days=day.weekday())


def week_end(value):
    """Sunday of the week containing ``value``."""
    return week_start(value) + timedelta(days=6)


def week_label(value):
    return f"{week_start(value).isoformat()}—{week_end(value).isoformat()}"


def month_key(value):
    """``YYYY-MM`` prefix of ``value``."""
    if isinstance(value, date):
        return value.isoformat()[:7]
    return str(value)[:7]


def month_start(value):
    return to_date(value).replace(day=1)


def month_end(value):
    day = to_date(value)
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


VALID_PERIODS = ('week', 'month', 'custom')


def resolve_period(period, today, date_from=None, date_to=None):
    """
    Turn a billing period choice into inclusive ``(date_from, date_to)`` dates.

    - ``week``: Monday to Sunday of the week containing ``today``
    - ``month``: first to last day of ``today``'s month
    - ``custom``: the given dates, both required

    Raises:
        InvalidPeriodError: Unknown period, or custom without both dates
        InvalidDateRangeError: Custom range with date_from after date_to
    """
    if period == 'week':
        return week_start(today), week_end(today)
    if period == 'month':
        return month_start(today), month_end(today)
    if period != 'custom':
        raise InvalidPeriodError(
            f"Invalid period: '{period}'. Valid options: {', '.join(VALID_PERIODS)}"
        )

    if not date_from or not date_to:
        raise InvalidPeriodError("Select custom dates")
    date_from, date_to = to_date(date_from), to_date(date_to)
    if date_from > date_to:
        raise InvalidDateRangeError("Start date must be before end date")
    return date_from, date_to
