# craftd/utils/date_utils.py

"""Date utility functions for career calculations."""

import calendar
import datetime as dt
from typing import List, Optional, Union

import pandas as pd  # type: ignore[import-untyped]
from dateutil import parser as date_parser

DateLike = Union[dt.date, dt.datetime, pd.Timestamp, str]

DAYS_PER_YEAR = 365.25


def to_date(value: Optional[DateLike]) -> Optional[dt.date]:
    """
    Coerce a date-like value to a plain ``datetime.date``.

    Accepts dates, datetimes, pandas Timestamps and strings in any format
    dateutil understands. ``None``, empty strings and NaT map to ``None``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        return date_parser.parse(value).date()
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    raise TypeError(f"Cannot interpret {value!r} as a date")


def today() -> dt.date:
    return dt.date.today()


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month, leap years included."""
    return calendar.monthrange(year, month)[1]


def years_between(start: dt.date, end: Optional[dt.date] = None) -> float:
    """
    Fractional years between two dates, using 365.25 days per year.

    Negative when ``end`` precedes ``start``; callers that need a duration
    clamp the result themselves.
    """
    end = end if end is not None else today()
    return (end - start).days / DAYS_PER_YEAR


def get_employment_years(
    start: Optional[DateLike], end: Optional[DateLike] = None, as_of: Optional[dt.date] = None
) -> List[int]:
    """
    Every calendar year touched by an employment period, inclusive.

    - Missing start returns an empty list.
    - Missing end means the period is ongoing and runs to ``as_of`` (today by default).
    """
    start_date = to_date(start)
    if start_date is None:
        return []
    end_date = to_date(end) or as_of or today()
    return list(range(start_date.year, end_date.year + 1))


def year_bounds(year: int) -> tuple:
    """First and last day of a calendar year."""
    return dt.date(year, 1, 1), dt.date(year, 12, 31)
