# craftd/career/models.py
"""
Result types produced by the career calculators.

All of these are snapshots: computed fresh on every call and never persisted.
Amounts are integer cents, durations are noted per field.
"""

import datetime as dt
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from craftd.utils.money import DEFAULT_CURRENCY


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


class Serializable:
    """Mixin giving dataclasses a JSON-ready ``to_dict``."""

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))


@dataclass(frozen=True)
class SalaryYear(Serializable):
    """Prorated salary earned in one calendar year."""

    year: int
    salary: int
    total_comp: int
    company: str
    title: str


@dataclass(frozen=True)
class SalaryIncrease(Serializable):
    amount: int = 0
    percentage: float = 0.0
    reason: str = ""
    date: Optional[dt.date] = None


@dataclass(frozen=True)
class LevelSpan(Serializable):
    """Time spent at one seniority level; ``duration`` is in whole months."""

    level: str
    start_date: dt.date
    end_date: Optional[dt.date]
    duration: int


@dataclass(frozen=True)
class CareerProgressionSummary(Serializable):
    total_experience: float = 0.0  # years
    current_salary: int = 0
    first_salary: int = 0
    total_salary_growth: int = 0
    salary_growth_percentage: float = 0.0
    average_annual_growth: float = 0.0  # percentage points per year
    promotion_count: int = 0
    job_change_count: int = 0
    average_tenure_per_job: float = 0.0  # years
    highest_salary_increase: SalaryIncrease = field(default_factory=SalaryIncrease)
    salary_by_year: List[SalaryYear] = field(default_factory=list)
    current_level: str = ""
    level_progression: List[LevelSpan] = field(default_factory=list)


@dataclass(frozen=True)
class TimelineItem(Serializable):
    date: dt.date
    type: str
    title: str
    description: str
    company: Optional[str] = None
    role: Optional[str] = None
    salary: Optional[int] = None
    salary_change: Optional[int] = None
    percentage: Optional[float] = None


@dataclass(frozen=True)
class SalaryHistoryEntry(Serializable):
    year: int
    base_salary: int
    total_comp: int
    bonuses: int
    equity_value: int
    company: str
    role: str


@dataclass(frozen=True)
class JobChangeImpact(Serializable):
    change_date: Optional[dt.date]
    from_company: str
    to_company: str
    salary_increase: int
    percentage_increase: float
    total_comp_increase: int


@dataclass(frozen=True)
class FinancialMetrics(Serializable):
    current_salary: int = 0
    current_total_comp: int = 0
    total_career_growth: float = 0.0
    compound_annual_growth_rate: float = 0.0
    salary_history: List[SalaryHistoryEntry] = field(default_factory=list)
    job_change_impact: List[JobChangeImpact] = field(default_factory=list)
    market_comparison: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WorkExperienceFinancials(Serializable):
    company: str
    role: str
    start_date: Optional[dt.date]
    end_date: Optional[dt.date]
    total_tenure: int  # days
    current_annualized_salary: int
    total_compensation_received: int
    average_annual_raise: float
    promotion_count: int
    skills_acquired: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SalaryProgressionPoint(Serializable):
    date: dt.date
    base_salary: int
    total_comp: int
    company: str
    title: str


@dataclass(frozen=True)
class CompensationBreakdown(Serializable):
    company: str
    role: str
    start_date: Optional[dt.date]
    end_date: Optional[dt.date]
    base_salary: int
    signing_bonus: int
    annual_bonus: int
    total_bonuses: int
    equity_value: int
    total_compensation: int
    currency: str = DEFAULT_CURRENCY
