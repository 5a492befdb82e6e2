"""Calendar arithmetic on reference datetimes.

Every helper keeps the time of day and tzinfo of its input; only the date
part moves. Month and year steps clamp the day to the target month, so
31 January plus one month is the last day of February.
"""
from __future__ import annotations
from datetime import datetime, timedelta
from dateutil.relativedelta import relativedelta


def week_start(value: datetime, first_week_day: int) -> datetime:
    """First day of the locale week containing *value* (0=Monday .. 6=Sunday)."""
    return value - timedelta(days=(value.weekday() - first_week_day) % 7)


def weekday_in_week(value: datetime, isoweekday: int, first_week_day: int) -> datetime:
    """The given weekday within the locale week that contains *value*."""
    start = week_start(value, first_week_day)
    return start + timedelta(days=(isoweekday - 1 - first_week_day) % 7)


def shift_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def shift_weeks_to_start(value: datetime, weeks: int, first_week_day: int) -> datetime:
    """Move by whole weeks, then back to the first day of that week."""
    return week_start(value + timedelta(weeks=weeks), first_week_day)


def shift_months_to_first(value: datetime, months: int) -> datetime:
    """Move by whole months, then to the 1st of that month."""
    return (value + relativedelta(months=months)).replace(day=1)


def shift_years_to_new_year(value: datetime, years: int) -> datetime:
    """Move by whole years, then to 1 January of that year."""
    return (value + relativedelta(years=years)).replace(month=1, day=1)
