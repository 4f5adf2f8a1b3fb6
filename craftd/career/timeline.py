# craftd/career/timeline.py
"""
Chronological career timeline combining job starts/ends with career events.
"""

import logging
from typing import Iterable, List

from craftd.career.models import TimelineItem
from craftd.career.progression import sort_periods
from craftd.schema.enums import CareerEventType
from craftd.schema.models import CareerEvent, EmploymentPeriod
from craftd.utils.money import DEFAULT_CURRENCY, format_currency

logger = logging.getLogger(__name__)


def _event_title(event_type: str) -> str:
    return event_type[:1].upper() + event_type[1:]


def get_career_timeline(
    periods: Iterable[EmploymentPeriod],
    events: Iterable[CareerEvent],
    currency: str = DEFAULT_CURRENCY,
) -> List[TimelineItem]:
    """
    Build the timeline shown on the career history page.

    Items without a date are left out. Items on the same date keep their
    insertion order: job starts/ends first, then career events. Salaries are
    shown in the period's own currency, else ``currency``.
    """
    items: List[TimelineItem] = []

    for period in sort_periods(periods):
        if period.start_date is not None:
            salary = period.current_salary()
            items.append(
                TimelineItem(
                    date=period.start_date,
                    type=CareerEventType.JOB_START.value,
                    title=f"Started at {period.company}",
                    description=f"{period.role} - {format_currency(salary, period.currency or currency)}",
                    company=period.company,
                    role=period.role,
                    salary=salary,
                )
            )
        if period.end_date is not None:
            reason = period.reason_for_leaving.value if period.reason_for_leaving else None
            items.append(
                TimelineItem(
                    date=period.end_date,
                    type=CareerEventType.JOB_END.value,
                    title=f"Left {period.company}",
                    description=reason or "Job ended",
                    company=period.company,
                )
            )

    skipped = 0
    for event in events:
        if event.event_date is None:
            skipped += 1
            continue
        items.append(
            TimelineItem(
                date=event.event_date,
                type=event.event_type.value,
                title=_event_title(event.event_type.value),
                description=event.description or "",
                salary_change=event.salary_increase or 0,
                percentage=event.increase_percentage,
            )
        )
    if skipped:
        logger.debug(f"Left {skipped} undated career events out of the timeline")

    return sorted(items, key=lambda item: item.date)
