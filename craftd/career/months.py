# craftd/career/months.py
"""
Month-fraction durations and salary proration.

A period "from day X to day Y" is measured as a continuous fraction of months
rather than whole calendar months: a half-month start and a half-month end
both contribute proportionally.
"""

import datetime as dt
import logging
from typing import Optional

from craftd.utils.date_utils import days_in_month
from craftd.utils.money import round_half_up

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def calculate_months_worked(start: dt.date, end: dt.date) -> float:
    """
    Fractional months worked between two dates.

    The final month counts in full whenever ``end.day >= start.day``;
    otherwise only ``end.day / days_in_end_month`` of it counts. When the job
    started after the 1st, the first month is then replaced by the fraction of
    it actually worked. The two adjustments are independent and not
    symmetric.

    Args:
        start: First day of employment.
        end: Last day of employment.

    Returns:
        Months worked, never negative. ``end`` before ``start`` gives 0.
    """
    months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)

    if end.day >= start.day:
        months += 1
    else:
        months += end.day / days_in_month(end.year, end.month)

    if start.day > 1:
        dim_start = days_in_month(start.year, start.month)
        days_worked_in_start_month = dim_start - start.day + 1
        months = months - 1 + days_worked_in_start_month / dim_start

    if months < 0:
        logger.debug(f"Clamping negative duration {months:.3f} for {start} -> {end}")
    return max(0.0, float(months))


def prorate_compensation(annual_salary: Optional[int], months_worked: float) -> int:
    """
    Scale an annual amount to the months actually worked.

    Rounds once, half-up, on the final product. A full twelve months returns
    the annual amount unchanged.
    """
    if not annual_salary or annual_salary < 0 or months_worked <= 0:
        return 0
    if months_worked == MONTHS_PER_YEAR:
        return int(annual_salary)
    return round_half_up(annual_salary * months_worked / MONTHS_PER_YEAR)


def months_in_period(start: dt.date, end: Optional[dt.date], as_of: dt.date) -> float:
    """Months worked for a possibly ongoing period; ongoing runs to ``as_of``."""
    return calculate_months_worked(start, end if end is not None else as_of)
