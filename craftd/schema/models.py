# craftd/schema/models.py
"""
Pydantic models for the career records consumed by the calculators.

Records arrive from the persistence layer (or a data file) as plain dicts.
Validation here coerces dates, decodes JSON columns, and rejects values that
violate the table constraints. Out-of-order employment dates are *not*
rejected: calculations clamp them to a zero duration instead.
"""

import datetime as dt
import logging
import math
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from craftd.schema.enums import (
    AdjustmentReason,
    BonusType,
    CareerEventType,
    JobApplicationStatus,
    ReasonForLeaving,
    SeniorityLevel,
)
from craftd.utils.date_utils import to_date
from craftd.utils.json_fields import parse_json_list, parse_json_model

logger = logging.getLogger(__name__)


def _blank_to_none(value: Any) -> Any:
    """Map empty strings and NaN (as read from CSV) to None."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _coerce_date(value: Any) -> Optional[dt.date]:
    """
    Validator body for date fields.

    Unsupported types (e.g. an unquoted YAML ``2020``) and overflowing
    strings are raised as ``ValueError`` so pydantic reports them as a
    ``ValidationError`` on the record instead of aborting the read.
    """
    value = _blank_to_none(value)
    if value is None:
        return None
    try:
        return to_date(value)
    except (TypeError, OverflowError) as e:
        raise ValueError(f"Invalid date {value!r}: {e}") from e


class CareerRecord(BaseModel):
    """Base for all input records."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", use_enum_values=False)


# --- JSON column models ---


class SalaryAdjustment(CareerRecord):
    """A raise or promotion within a single role."""

    effective_date: dt.date = Field(validation_alias=AliasChoices("effective_date", "effectiveDate"))
    new_salary: int = Field(..., ge=0, validation_alias=AliasChoices("new_salary", "newSalary"))
    previous_salary: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("previous_salary", "previousSalary")
    )
    increase_amount: Optional[int] = Field(
        None, validation_alias=AliasChoices("increase_amount", "increaseAmount")
    )
    increase_percentage: Optional[float] = Field(
        None, validation_alias=AliasChoices("increase_percentage", "increasePercentage")
    )
    reason: Optional[AdjustmentReason] = None
    new_title: Optional[str] = Field(None, validation_alias=AliasChoices("new_title", "newTitle"))
    notes: Optional[str] = None

    @field_validator("effective_date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Optional[dt.date]:
        return _coerce_date(v)


class BonusHistoryEntry(CareerRecord):
    type: Optional[BonusType] = None
    amount: int = 0
    date: dt.date
    description: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, v: Any) -> Any:
        v = _blank_to_none(v)
        return 0 if v is None else v

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Optional[dt.date]:
        return _coerce_date(v)


class WorkExperienceMetadata(CareerRecord):
    """Free-form metadata attached to a work experience."""

    company_size: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    certifications_earned: List[str] = Field(default_factory=list)


# --- Core records ---


class EmploymentPeriod(CareerRecord):
    """
    One job held by the user.

    Salaries are annual amounts in cents. A missing ``end_date`` means the
    job is ongoing; a missing ``currency`` means the display currency.
    """

    id: Optional[str] = None
    company: str = ""
    role: str = ""
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    annual_salary: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("annual_salary", "base_salary", "baseSalary")
    )
    total_compensation: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("total_compensation", "totalCompensation")
    )
    equity_value: Optional[int] = Field(None, validation_alias=AliasChoices("equity_value", "equityValue"))
    signing_bonus: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("signing_bonus", "signingBonus")
    )
    annual_bonus: Optional[int] = Field(
        None, ge=0, validation_alias=AliasChoices("annual_bonus", "annualBonus")
    )
    currency: Optional[str] = None
    seniority_level: Optional[SeniorityLevel] = Field(
        None, validation_alias=AliasChoices("seniority_level", "seniorityLevel")
    )
    reason_for_leaving: Optional[ReasonForLeaving] = Field(
        None, validation_alias=AliasChoices("reason_for_leaving", "reasonForLeaving")
    )
    salary_adjustments: List[SalaryAdjustment] = Field(
        default_factory=list, validation_alias=AliasChoices("salary_adjustments", "salaryAdjustments")
    )
    bonus_history: List[BonusHistoryEntry] = Field(
        default_factory=list, validation_alias=AliasChoices("bonus_history", "bonusHistory")
    )
    metadata: WorkExperienceMetadata = Field(default_factory=WorkExperienceMetadata)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, v: Any) -> Optional[dt.date]:
        return _coerce_date(v)

    @field_validator(
        "annual_salary",
        "total_compensation",
        "equity_value",
        "signing_bonus",
        "annual_bonus",
        "seniority_level",
        "reason_for_leaving",
        "currency",
        mode="before",
    )
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("salary_adjustments", mode="before")
    @classmethod
    def _decode_adjustments(cls, v: Any) -> List[SalaryAdjustment]:
        return parse_json_list(_blank_to_none(v), SalaryAdjustment)

    @field_validator("bonus_history", mode="before")
    @classmethod
    def _decode_bonuses(cls, v: Any) -> List[BonusHistoryEntry]:
        return parse_json_list(_blank_to_none(v), BonusHistoryEntry)

    @field_validator("metadata", mode="before")
    @classmethod
    def _decode_metadata(cls, v: Any) -> WorkExperienceMetadata:
        return parse_json_model(_blank_to_none(v), WorkExperienceMetadata)

    @model_validator(mode="after")
    def _warn_on_reversed_dates(self) -> "EmploymentPeriod":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            logger.warning(
                f"Employment period at {self.company or '<unknown>'} ends ({self.end_date}) "
                f"before it starts ({self.start_date}); duration will clamp to zero"
            )
        return self

    @property
    def is_ongoing(self) -> bool:
        return self.end_date is None

    def resolved_end(self, as_of: dt.date) -> dt.date:
        """End date, or ``as_of`` for an ongoing job."""
        return self.end_date if self.end_date is not None else as_of

    def current_salary(self) -> int:
        """
        Salary after the most recent in-role adjustment.

        Periods without a base salary report 0 even if adjustments exist.
        """
        if not self.annual_salary:
            return 0
        if self.salary_adjustments:
            latest = max(self.salary_adjustments, key=lambda adj: adj.effective_date)
            return latest.new_salary
        return self.annual_salary

    def total_comp_or_salary(self) -> int:
        return self.total_compensation or self.current_salary()


class CareerEvent(CareerRecord):
    """A dated career milestone: promotion, raise, job start/end and so on."""

    id: Optional[str] = None
    work_experience_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("work_experience_id", "workExperienceId")
    )
    event_type: CareerEventType = Field(validation_alias=AliasChoices("event_type", "eventType"))
    event_date: Optional[dt.date] = Field(None, validation_alias=AliasChoices("event_date", "eventDate"))
    previous_salary: Optional[int] = Field(
        None, validation_alias=AliasChoices("previous_salary", "previousSalary")
    )
    new_salary: Optional[int] = Field(None, validation_alias=AliasChoices("new_salary", "newSalary"))
    salary_increase: Optional[int] = Field(
        None, validation_alias=AliasChoices("salary_increase", "salaryIncrease")
    )
    increase_percentage: Optional[float] = Field(
        None, validation_alias=AliasChoices("increase_percentage", "increasePercentage")
    )
    previous_level: Optional[str] = Field(
        None, validation_alias=AliasChoices("previous_level", "previousLevel")
    )
    new_level: Optional[str] = Field(None, validation_alias=AliasChoices("new_level", "newLevel"))
    description: Optional[str] = None

    @field_validator("event_date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Optional[dt.date]:
        return _coerce_date(v)

    @field_validator(
        "previous_salary", "new_salary", "salary_increase", "increase_percentage", mode="before"
    )
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def effective_increase(self) -> Optional[int]:
        """Salary delta carried by the event, derived from old/new salary if not given."""
        if self.salary_increase is not None:
            return self.salary_increase
        if self.previous_salary is not None and self.new_salary is not None:
            return self.new_salary - self.previous_salary
        return None


class JobApplication(CareerRecord):
    id: Optional[str] = None
    position: str = ""
    company: str = ""
    status: JobApplicationStatus = JobApplicationStatus.APPLIED
    application_date: Optional[dt.date] = Field(
        None, validation_alias=AliasChoices("application_date", "applicationDate")
    )
    start_date: Optional[dt.date] = Field(None, validation_alias=AliasChoices("start_date", "startDate"))

    @field_validator("company", mode="before")
    @classmethod
    def _company_name(cls, v: Any) -> str:
        if isinstance(v, dict):
            return str(v.get("name") or "")
        return "" if v is None else str(v)

    @field_validator("application_date", "start_date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> Optional[dt.date]:
        return _coerce_date(v)

    @property
    def activity_date(self) -> Optional[dt.date]:
        """Date the application counts toward: applied-on, else started-on."""
        return self.application_date or self.start_date
