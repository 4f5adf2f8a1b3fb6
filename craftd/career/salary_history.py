# craftd/career/salary_history.py
"""
Salary-by-year series.

Each employment period is split into its calendar years and the salary for
each year is prorated by the months actually worked in it. When periods
overlap a year, the higher prorated salary wins; the salary chart on the
dashboard consolidates its points with the same rule.
"""

import datetime as dt
import logging
from typing import Dict, Iterable, List, Sequence

import pandas as pd

from craftd.career.models import SalaryYear
from craftd.career.months import calculate_months_worked, prorate_compensation
from craftd.schema.models import EmploymentPeriod
from craftd.utils.columns import SALARY, SALARY_BY_YEAR_COLS, YEAR
from craftd.utils.date_utils import year_bounds

logger = logging.getLogger(__name__)


def build_salary_entries(periods: Iterable[EmploymentPeriod], as_of: dt.date) -> List[SalaryYear]:
    """
    One prorated entry per (period, year) the period touches.

    Every year of a period is prorated from the period's current salary, the
    one after its latest in-role adjustment, including years before that
    adjustment took effect, as the dashboard salary chart does. Periods
    without a start date or a base salary are skipped.
    """
    entries: List[SalaryYear] = []
    for period in periods:
        if period.start_date is None or not period.annual_salary:
            continue

        start = period.start_date
        end = period.resolved_end(as_of)
        annual_salary = period.current_salary()
        annual_total_comp = period.total_comp_or_salary()

        for year in range(start.year, end.year + 1):
            year_start, year_end = year_bounds(year)
            overlap_start = max(start, year_start)
            overlap_end = min(end, year_end)
            months = calculate_months_worked(overlap_start, overlap_end)

            entries.append(
                SalaryYear(
                    year=year,
                    salary=prorate_compensation(annual_salary, months),
                    total_comp=prorate_compensation(annual_total_comp, months),
                    company=period.company,
                    title=period.role,
                )
            )
    return entries


def consolidate_salary_by_year(entries: Sequence[SalaryYear]) -> List[SalaryYear]:
    """
    Collapse entries to one per year, keeping the higher salary.

    Equal salaries keep the entry seen first. The result is sorted by year.
    """
    by_year: Dict[int, SalaryYear] = {}
    for entry in entries:
        existing = by_year.get(entry.year)
        if existing is None or entry.salary > existing.salary:
            by_year[entry.year] = entry
    return [by_year[year] for year in sorted(by_year)]


def build_salary_by_year(periods: Iterable[EmploymentPeriod], as_of: dt.date) -> List[SalaryYear]:
    entries = build_salary_entries(periods, as_of)
    consolidated = consolidate_salary_by_year(entries)
    if len(consolidated) < len(entries):
        logger.debug(
            f"Consolidated {len(entries)} salary entries into {len(consolidated)} calendar years"
        )
    return consolidated


def salary_by_year_frame(entries: Sequence[SalaryYear]) -> pd.DataFrame:
    """
    DataFrame view of a salary series, consolidated and indexed by year.

    Accepts raw or already consolidated entries.
    """
    if not entries:
        return pd.DataFrame(columns=SALARY_BY_YEAR_COLS).set_index(YEAR)

    df = pd.DataFrame([entry.to_dict() for entry in entries], columns=SALARY_BY_YEAR_COLS)
    # idxmax keeps the first row on ties, matching consolidate_salary_by_year
    winners = df.groupby(YEAR, sort=True)[SALARY].idxmax()
    return df.loc[winners.values].set_index(YEAR).sort_index()
