"""
Date utility functions for target date handling and age arithmetic.
"""
from datetime import date
from typing import Optional
import calendar
import pandas as pd


def is_last_day_of_month(d: date) -> bool:
    """True if d is the final calendar day of its month."""
    return d.day == calendar.monthrange(d.year, d.month)[1]


def months_between(start: date, end: date) -> int:
    """
    Whole calendar months from start to end.

    A month only counts once its day-of-month has been reached again, so a
    child born on the 20th turns one month old on the 20th of the next month.
    The last day of a month completes the month for later start days
    (Jan 31 -> Feb 28 is one month). Negative when end precedes start.

    Args:
        start: Earlier date (e.g. birth date)
        end: Later date (e.g. target date)

    Returns:
        Signed number of complete months
    """
    if end < start:
        # Any partial month before start still counts as a month before it
        before = months_between(end, start)
        if add_months(end, before) != start:
            before += 1
        return -before

    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day and not is_last_day_of_month(end):
        months -= 1
    return months


def add_months(d: date, months: int) -> date:
    """
    Shift a date by whole months, clamping the day to the end of the month.

    Jan 31 + 1 month -> Feb 28 (or 29 in a leap year).
    """
    if months == 0:
        return d
    return (pd.Timestamp(d) + pd.DateOffset(months=months)).date()


def month_label(d: date) -> str:
    """Short month label used on trend charts, e.g. 'Mar 25'."""
    return d.strftime("%b %y")


def format_age_months(total_months: int) -> str:
    """
    Human readable age.

    Examples: '11 mos', '1 year', '2 years + 3 mos'
    """
    if total_months < 12:
        return f"{total_months} mos"
    years, months = divmod(total_months, 12)
    year_part = f"{years} year{'s' if years > 1 else ''}"
    if months == 0:
        return year_part
    return f"{year_part} + {months} mos"


def resolve_target_date(
    target_date: Optional[date] = None,
    offset_months: int = 0,
    today: Optional[date] = None
) -> date:
    """
    Work out the date a forecast is evaluated at.

    Args:
        target_date: Explicit anchor date (defaults to today)
        offset_months: Months to slide the anchor forward/backward
        today: Override for the current date

    Returns:
        The anchor shifted by offset_months
    """
    anchor = target_date or today or date.today()
    return add_months(anchor, offset_months)


def describe_offset(offset_months: int) -> str:
    """Slider caption for an offset relative to the anchor month."""
    if offset_months == 0:
        return "Current Month"
    if offset_months > 0:
        return f"{offset_months}mo future"
    return f"{abs(offset_months)}mo past"
