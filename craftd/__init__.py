"""Career analytics behind the Craftd portfolio and job-tracking dashboards."""

from craftd.career.months import calculate_months_worked, prorate_compensation
from craftd.career.progression import get_career_progression_summary
from craftd.career.timeline import get_career_timeline
from craftd.schema.models import CareerEvent, EmploymentPeriod, JobApplication

__version__ = "0.1.0"

__all__ = [
    "CareerEvent",
    "EmploymentPeriod",
    "JobApplication",
    "calculate_months_worked",
    "get_career_progression_summary",
    "get_career_timeline",
    "prorate_compensation",
]
