"""Date manipulation utilities"""

import math
from datetime import date, datetime


def current_year() -> int:
    """Calendar year used when no explicit reference year is given"""
    return date.today().year


def resolve_century(two_digit_year: int, reference_year: int, pivot: int = 30) -> int:
    """
    Expand a two-digit year against a sliding window.

    Years up to and including the pivot belong to the reference year's
    century, everything above it to the previous century. The window moves
    with the reference year, so the same input resolves differently once the
    calendar crosses a century boundary.
    """
    century = (reference_year // 100) * 100
    if two_digit_year <= pivot:
        return century + two_digit_year
    return century - 100 + two_digit_year


def build_date(year: int, month: int, day: int) -> date | None:
    """Return the calendar date, or None when it does not exist (Feb 30, non-leap Feb 29...)"""
    try:
        return date(year, month, day)
    except ValueError:
        return None


def days_between(start: date, end: date) -> int:
    """Whole days from start to end, rounding part days up"""
    if isinstance(start, datetime) or isinstance(end, datetime):
        return math.ceil((end - start).total_seconds() / 86_400)
    return (end - start).days
