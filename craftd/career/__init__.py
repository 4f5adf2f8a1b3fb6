# craftd/career/__init__.py
from .financials import (
    get_compensation_breakdown,
    get_financial_metrics,
    get_salary_progression_data,
    get_work_experiences_with_financials,
)
from .models import CareerProgressionSummary, LevelSpan, SalaryIncrease, SalaryYear
from .months import calculate_months_worked, prorate_compensation
from .progression import get_career_progression_summary
from .salary_history import build_salary_by_year, consolidate_salary_by_year, salary_by_year_frame
from .timeline import get_career_timeline

__all__ = [
    "CareerProgressionSummary",
    "LevelSpan",
    "SalaryIncrease",
    "SalaryYear",
    "build_salary_by_year",
    "calculate_months_worked",
    "consolidate_salary_by_year",
    "get_career_progression_summary",
    "get_career_timeline",
    "get_compensation_breakdown",
    "get_financial_metrics",
    "get_salary_progression_data",
    "get_work_experiences_with_financials",
    "prorate_compensation",
    "salary_by_year_frame",
]
