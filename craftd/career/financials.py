# craftd/career/financials.py
"""
Financial views over employment history: per-job enrichment, career-level
metrics, salary progression points and compensation breakdowns.
"""

import datetime as dt
import logging
from typing import Iterable, List, Optional

import numpy as np

from craftd.career.models import (
    CompensationBreakdown,
    FinancialMetrics,
    JobChangeImpact,
    SalaryHistoryEntry,
    SalaryProgressionPoint,
    WorkExperienceFinancials,
)
from craftd.career.progression import find_current_period, find_first_salaried_period, sort_periods
from craftd.schema.enums import AdjustmentReason
from craftd.schema.models import BonusHistoryEntry, EmploymentPeriod
from craftd.utils.date_utils import get_employment_years, today, years_between
from craftd.utils.money import DEFAULT_CURRENCY, calculate_cagr, calculate_percentage_change, round_half_up

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365


def get_bonuses_for_year(bonus_history: Optional[Iterable[BonusHistoryEntry]], year: int) -> int:
    """Sum of bonuses paid in a calendar year."""
    if not bonus_history:
        return 0
    return sum(bonus.amount or 0 for bonus in bonus_history if bonus.date.year == year)


def get_work_experiences_with_financials(
    periods: Iterable[EmploymentPeriod], as_of: Optional[dt.date] = None
) -> List[WorkExperienceFinancials]:
    """
    Enrich each period with tenure, compensation received and raise stats.

    Periods without a start date are treated as starting on ``as_of``, so they
    contribute zero tenure.
    """
    as_of = as_of or today()
    results: List[WorkExperienceFinancials] = []

    for period in sort_periods(periods):
        start = period.start_date or as_of
        end = period.resolved_end(as_of)
        years_worked = max(0.0, years_between(start, end))

        current_salary = period.current_salary()
        total_bonuses = sum(bonus.amount or 0 for bonus in period.bonus_history)

        raise_pcts = [adj.increase_percentage or 0.0 for adj in period.salary_adjustments]
        average_annual_raise = float(np.mean(raise_pcts)) if raise_pcts else 0.0
        promotion_count = sum(
            1 for adj in period.salary_adjustments if adj.reason == AdjustmentReason.PROMOTION
        )

        results.append(
            WorkExperienceFinancials(
                company=period.company,
                role=period.role,
                start_date=period.start_date,
                end_date=period.end_date,
                total_tenure=round_half_up(years_worked * DAYS_PER_YEAR),
                current_annualized_salary=current_salary,
                total_compensation_received=round_half_up(current_salary * years_worked + total_bonuses),
                average_annual_raise=average_annual_raise,
                promotion_count=promotion_count,
                skills_acquired=[
                    *period.metadata.technologies,
                    *period.metadata.certifications_earned,
                ],
            )
        )
    return results


def build_salary_history(periods: Iterable[EmploymentPeriod], as_of: dt.date) -> List[SalaryHistoryEntry]:
    """
    One row per employment year per period, unprorated, with that year's bonuses.

    As in ``build_salary_entries``, each row carries the period's current
    (latest adjusted) salary, also for years before the adjustment.
    """
    history: List[SalaryHistoryEntry] = []
    for period in periods:
        if period.start_date is None or not period.annual_salary:
            continue
        year_salary = period.current_salary()
        for year in get_employment_years(period.start_date, period.end_date, as_of=as_of):
            history.append(
                SalaryHistoryEntry(
                    year=year,
                    base_salary=year_salary,
                    total_comp=period.total_comp_or_salary(),
                    bonuses=get_bonuses_for_year(period.bonus_history, year),
                    equity_value=period.equity_value or 0,
                    company=period.company,
                    role=period.role,
                )
            )
    return history


def calculate_job_change_impact(periods: List[EmploymentPeriod]) -> List[JobChangeImpact]:
    """Salary effect of each move between consecutive jobs with known salaries."""
    impacts: List[JobChangeImpact] = []
    for prev_exp, current_exp in zip(periods, periods[1:]):
        prev_salary = prev_exp.current_salary()
        new_salary = current_exp.current_salary()
        if prev_salary <= 0 or new_salary <= 0:
            continue
        impacts.append(
            JobChangeImpact(
                change_date=current_exp.start_date,
                from_company=prev_exp.company,
                to_company=current_exp.company,
                salary_increase=new_salary - prev_salary,
                percentage_increase=calculate_percentage_change(prev_salary, new_salary),
                total_comp_increase=current_exp.total_comp_or_salary() - prev_exp.total_comp_or_salary(),
            )
        )
    return impacts


def get_financial_metrics(
    periods: Iterable[EmploymentPeriod], as_of: Optional[dt.date] = None
) -> FinancialMetrics:
    """
    Career-level financial dashboard metrics.

    CAGR is measured from the first job's start to ``as_of``; when the first
    job has no start date a one-year span is assumed.
    """
    as_of = as_of or today()
    work_exps = sort_periods(periods)
    if not work_exps:
        return FinancialMetrics()

    current_exp = find_current_period(work_exps)
    first_exp = find_first_salaried_period(work_exps)

    current_salary = current_exp.current_salary()
    current_total_comp = current_exp.total_comp_or_salary()
    first_salary = first_exp.annual_salary if first_exp is not None else 0

    career_start = work_exps[0].start_date
    years_of_experience = years_between(career_start, as_of) if career_start else 1.0

    metrics = FinancialMetrics(
        current_salary=current_salary,
        current_total_comp=current_total_comp,
        total_career_growth=calculate_percentage_change(first_salary, current_salary),
        compound_annual_growth_rate=calculate_cagr(first_salary, current_salary, years_of_experience),
        salary_history=build_salary_history(work_exps, as_of),
        job_change_impact=calculate_job_change_impact(work_exps),
        market_comparison={"last_updated": as_of},
    )
    logger.debug(
        f"Financial metrics: growth={metrics.total_career_growth:.1f}% "
        f"cagr={metrics.compound_annual_growth_rate:.2f}%"
    )
    return metrics


def get_salary_progression_data(periods: Iterable[EmploymentPeriod]) -> List[SalaryProgressionPoint]:
    """Salary at the start of each role plus every in-role adjustment, by date."""
    points: List[SalaryProgressionPoint] = []
    for period in periods:
        if period.start_date is None or not period.annual_salary:
            continue
        points.append(
            SalaryProgressionPoint(
                date=period.start_date,
                base_salary=period.annual_salary,
                total_comp=period.total_compensation or period.annual_salary,
                company=period.company,
                title=period.role,
            )
        )
        for adj in period.salary_adjustments:
            points.append(
                SalaryProgressionPoint(
                    date=adj.effective_date,
                    base_salary=adj.new_salary,
                    total_comp=adj.new_salary,
                    company=period.company,
                    title=adj.new_title or period.role,
                )
            )
    return sorted(points, key=lambda p: p.date)


def get_compensation_breakdown(
    periods: Iterable[EmploymentPeriod], currency: str = DEFAULT_CURRENCY
) -> List[CompensationBreakdown]:
    breakdown: List[CompensationBreakdown] = []
    for period in sort_periods(periods):
        base_salary = period.current_salary()
        breakdown.append(
            CompensationBreakdown(
                company=period.company,
                role=period.role,
                start_date=period.start_date,
                end_date=period.end_date,
                base_salary=base_salary,
                signing_bonus=period.signing_bonus or 0,
                annual_bonus=period.annual_bonus or 0,
                total_bonuses=sum(bonus.amount or 0 for bonus in period.bonus_history),
                equity_value=period.equity_value or 0,
                total_compensation=period.total_compensation or base_salary,
                currency=period.currency or currency,
            )
        )
    return breakdown
