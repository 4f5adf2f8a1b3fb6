"""
Enumerations for career records.

These mirror the check constraints of the work-experience, career-event and
job-application tables so that values are validated where records are read.
"""

from enum import Enum


class CareerEventType(str, Enum):
    """Tags a dated career event."""

    JOB_START = "job_start"
    JOB_END = "job_end"
    PROMOTION = "promotion"
    RAISE = "raise"
    BONUS = "bonus"
    EQUITY_GRANT = "equity_grant"
    ROLE_CHANGE = "role_change"
    DEPARTMENT_CHANGE = "department_change"
    LOCATION_CHANGE = "location_change"
    PERFORMANCE_REVIEW = "performance_review"
    GOAL_ACHIEVEMENT = "goal_achievement"
    SKILL_MILESTONE = "skill_milestone"
    MANAGER_CHANGE = "manager_change"
    TEAM_EXPANSION = "team_expansion"


class SeniorityLevel(str, Enum):
    INTERN = "intern"
    ENTRY_LEVEL = "entry-level"
    MID_LEVEL = "mid-level"
    SENIOR = "senior"
    LEAD = "lead"
    PRINCIPAL = "principal"
    STAFF = "staff"
    DIRECTOR = "director"
    VP = "vp"
    C_LEVEL = "c-level"


class AdjustmentReason(str, Enum):
    """Why an in-role salary adjustment happened."""

    PROMOTION = "promotion"
    MERIT_INCREASE = "merit_increase"
    MARKET_ADJUSTMENT = "market_adjustment"
    COST_OF_LIVING = "cost_of_living"
    ROLE_CHANGE = "role_change"


class BonusType(str, Enum):
    ANNUAL = "annual"
    SIGNING = "signing"
    PERFORMANCE = "performance"
    RETENTION = "retention"
    SPOT = "spot"
    REFERRAL = "referral"
    PROJECT = "project"


class ReasonForLeaving(str, Enum):
    PROMOTION = "promotion"
    BETTER_OPPORTUNITY = "better_opportunity"
    RELOCATION = "relocation"
    LAYOFF = "layoff"
    TERMINATION = "termination"
    CONTRACT_END = "contract_end"
    CAREER_CHANGE = "career_change"
    SALARY = "salary"
    CULTURE = "culture"
    MANAGEMENT = "management"
    GROWTH = "growth"
    PERSONAL = "personal"


class JobApplicationStatus(str, Enum):
    APPLIED = "APPLIED"
    PHONE_SCREEN = "PHONE_SCREEN"
    INTERVIEW = "INTERVIEW"
    FINAL_INTERVIEW = "FINAL_INTERVIEW"
    OFFER = "OFFER"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"
