# craftd/career/progression.py
"""
Career progression summary for one user.

## QuickStart

```python
import datetime as dt
from craftd.career.progression import get_career_progression_summary
from craftd.schema.models import CareerEvent, EmploymentPeriod

periods = [
    EmploymentPeriod(company="Acme", role="Engineer", start_date="2019-03-01",
                     end_date="2021-06-30", annual_salary=9_000_000,
                     seniority_level="mid-level"),
    EmploymentPeriod(company="Globex", role="Senior Engineer", start_date="2021-07-01",
                     annual_salary=12_500_000, seniority_level="senior"),
]
events = [CareerEvent(event_type="promotion", event_date="2020-04-01", salary_increase=1_000_000)]

summary = get_career_progression_summary(periods, events, as_of=dt.date(2024, 6, 30))
print(summary.total_experience, summary.salary_growth_percentage)
print(summary.to_dict()["salary_by_year"])
```

Every function here is total: empty inputs, missing salaries and reversed
dates produce zeros rather than exceptions, so one bad record cannot take
down a dashboard.
"""

import datetime as dt
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from craftd.career.models import CareerProgressionSummary, LevelSpan, SalaryIncrease
from craftd.career.months import MONTHS_PER_YEAR, months_in_period
from craftd.career.salary_history import build_salary_by_year
from craftd.schema.enums import CareerEventType
from craftd.schema.models import CareerEvent, EmploymentPeriod
from craftd.utils.date_utils import today, years_between
from craftd.utils.money import calculate_percentage_change, round_half_up, safe_divide

logger = logging.getLogger(__name__)

JOB_CHANGE_REASON = "job_change"


def sort_periods(periods: Iterable[EmploymentPeriod]) -> List[EmploymentPeriod]:
    """Chronological order by start date; periods without a start go last."""
    return sorted(periods, key=lambda p: (p.start_date is None, p.start_date or dt.date.min))


def find_current_period(periods: Sequence[EmploymentPeriod]) -> Optional[EmploymentPeriod]:
    """The ongoing period, or the latest one when every period is closed."""
    if not periods:
        return None
    dated = [p for p in periods if p.start_date is not None]
    for period in dated:
        if period.is_ongoing:
            return period
    return dated[-1] if dated else periods[-1]


def find_first_salaried_period(periods: Sequence[EmploymentPeriod]) -> Optional[EmploymentPeriod]:
    for period in periods:
        if period.annual_salary is not None:
            return period
    return None


def calculate_total_tenure(
    periods: Iterable[EmploymentPeriod], as_of: dt.date
) -> Tuple[float, int]:
    """
    Total months worked across periods and the number of periods counted.

    Periods without a start date are not counted.
    """
    total_months = 0.0
    jobs = 0
    for period in periods:
        if period.start_date is None:
            continue
        total_months += months_in_period(period.start_date, period.end_date, as_of)
        jobs += 1
    return total_months, jobs


def _increase_key(increase: SalaryIncrease) -> Tuple[int, dt.date]:
    return increase.amount, increase.date or dt.date.min


def find_highest_salary_increase(
    events: Iterable[CareerEvent], periods: Sequence[EmploymentPeriod] = ()
) -> SalaryIncrease:
    """
    Largest positive salary delta from events or job-to-job transitions.

    Ties go to the most recent date. With no positive delta the empty
    ``SalaryIncrease`` is returned.
    """
    candidates: List[SalaryIncrease] = []

    for event in events:
        amount = event.effective_increase()
        if not amount or amount <= 0:
            continue
        if event.increase_percentage is not None:
            percentage = float(event.increase_percentage)
        elif event.previous_salary:
            percentage = calculate_percentage_change(event.previous_salary, event.previous_salary + amount)
        else:
            percentage = 0.0
        candidates.append(
            SalaryIncrease(
                amount=amount,
                percentage=percentage,
                reason=event.event_type.value,
                date=event.event_date,
            )
        )

    for prev, nxt in zip(periods, periods[1:]):
        prev_salary = prev.current_salary()
        next_salary = nxt.current_salary()
        if prev_salary <= 0 or next_salary <= prev_salary:
            continue
        candidates.append(
            SalaryIncrease(
                amount=next_salary - prev_salary,
                percentage=calculate_percentage_change(prev_salary, next_salary),
                reason=JOB_CHANGE_REASON,
                date=nxt.start_date,
            )
        )

    if not candidates:
        return SalaryIncrease()
    return max(candidates, key=_increase_key)


def build_level_progression(periods: Sequence[EmploymentPeriod], as_of: dt.date) -> List[LevelSpan]:
    """
    Seniority levels held, in order.

    A span ends at its own end date, else where the next period starts, else
    it is still open and measured up to ``as_of``.
    """
    spans: List[LevelSpan] = []
    for idx, period in enumerate(periods):
        if period.seniority_level is None or period.start_date is None:
            continue
        next_period = periods[idx + 1] if idx + 1 < len(periods) else None
        end_date = period.end_date or (next_period.start_date if next_period else None)

        years = years_between(period.start_date, end_date or as_of)
        spans.append(
            LevelSpan(
                level=period.seniority_level.value,
                start_date=period.start_date,
                end_date=end_date,
                duration=round_half_up(max(0.0, years * MONTHS_PER_YEAR)),
            )
        )
    return spans


def get_career_progression_summary(
    periods: Iterable[EmploymentPeriod],
    events: Iterable[CareerEvent],
    as_of: Optional[dt.date] = None,
) -> CareerProgressionSummary:
    """
    Aggregate a user's employment history into a career summary.

    Args:
        periods: Employment periods in any order.
        events: Career events in any order.
        as_of: Date ongoing periods run to. Defaults to today.

    Returns:
        A fresh ``CareerProgressionSummary``; all zeros for empty input.
    """
    as_of = as_of or today()
    work_exps = sort_periods(periods)
    events = list(events)

    if not work_exps:
        logger.debug("No employment periods; returning empty career summary")
        return CareerProgressionSummary()

    current_exp = find_current_period(work_exps)
    first_exp = find_first_salaried_period(work_exps)

    first_salary = first_exp.annual_salary if first_exp is not None else 0
    current_salary = current_exp.current_salary() if current_exp is not None else 0
    total_salary_growth = current_salary - first_salary
    salary_growth_percentage = calculate_percentage_change(first_salary, current_salary)

    total_months, job_count = calculate_total_tenure(work_exps, as_of)
    total_experience = total_months / MONTHS_PER_YEAR
    average_annual_growth = safe_divide(salary_growth_percentage, total_experience)
    average_tenure_per_job = safe_divide(total_experience, job_count)

    promotion_count = sum(1 for e in events if e.event_type == CareerEventType.PROMOTION)
    job_change_count = max(0, len(work_exps) - 1)

    current_level = ""
    if current_exp is not None and current_exp.seniority_level is not None:
        current_level = current_exp.seniority_level.value

    summary = CareerProgressionSummary(
        total_experience=total_experience,
        current_salary=current_salary,
        first_salary=first_salary,
        total_salary_growth=total_salary_growth,
        salary_growth_percentage=salary_growth_percentage,
        average_annual_growth=average_annual_growth,
        promotion_count=promotion_count,
        job_change_count=job_change_count,
        average_tenure_per_job=average_tenure_per_job,
        highest_salary_increase=find_highest_salary_increase(events, work_exps),
        salary_by_year=build_salary_by_year(work_exps, as_of),
        current_level=current_level,
        level_progression=build_level_progression(work_exps, as_of),
    )
    logger.debug(
        f"Career summary: {len(work_exps)} periods, {len(events)} events, "
        f"{total_experience:.2f} years experience"
    )
    return summary
