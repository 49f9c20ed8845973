"""Calendar arithmetic for day-of-month schedules"""

import calendar
from datetime import date


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the given month"""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping day-of-month to the month's last day (Feb 31 -> Feb 28/29)"""
    return date(year, month, min(day, last_day_of_month(year, month)))


def next_occurrence(day_of_month: int, reference_date: date) -> date:
    """
    Soonest date on or after reference_date falling on day_of_month.

    The current month is tried first, then the following one. Months shorter
    than day_of_month land on their last day instead of rolling over, so a
    bill due on the 31st is due on Feb 28 (or 29), never in early March.

    Example:
        next_occurrence(31, date(2026, 2, 15)) -> date(2026, 2, 28)
        next_occurrence(10, date(2026, 2, 15)) -> date(2026, 3, 10)
    """
    this_month = clamp_day(reference_date.year, reference_date.month, day_of_month)
    if this_month >= reference_date:
        return this_month

    return add_months(this_month.replace(day=1), 1, day=day_of_month)


def add_months(start: date, months: int, day: int | None = None) -> date:
    """
    Advance a date by whole calendar months.

    The day-of-month is kept (or replaced by `day`) and clamped to the target
    month's length, so Jan 31 + 1 month is Feb 28/29 rather than Mar 3.
    """
    month_index = start.year * 12 + (start.month - 1) + months
    year, month = divmod(month_index, 12)
    return clamp_day(year, month + 1, day if day is not None else start.day)


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is before start)"""
    return (end - start).days
