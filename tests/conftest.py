import datetime as dt
import os
import sys

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from craftd.schema.models import CareerEvent, EmploymentPeriod  # noqa: E402

AS_OF = dt.date(2024, 6, 30)


def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "career: mark a test as a career calculation test")
    config.addinivalue_line("markers", "config: mark a test as a config test")
    config.addinivalue_line("markers", "utils: mark a test as a utils test")


@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def career_periods():
    """Three jobs: two closed, one ongoing. Salaries in cents."""
    return [
        EmploymentPeriod(
            company="Acme",
            role="Junior Engineer",
            start_date="2016-09-15",
            end_date="2018-12-31",
            annual_salary=6_000_000,
            seniority_level="entry-level",
            reason_for_leaving="better_opportunity",
        ),
        EmploymentPeriod(
            company="Globex",
            role="Engineer",
            start_date="2019-01-01",
            end_date="2021-06-30",
            annual_salary=8_000_000,
            seniority_level="mid-level",
            salary_adjustments=[
                {
                    "effective_date": "2020-01-01",
                    "previous_salary": 8_000_000,
                    "new_salary": 9_000_000,
                    "increase_amount": 1_000_000,
                    "increase_percentage": 12.5,
                    "reason": "promotion",
                    "new_title": "Engineer II",
                },
            ],
            bonus_history=[
                {"type": "annual", "amount": 500_000, "date": "2019-12-15"},
                {"type": "annual", "amount": 700_000, "date": "2020-12-15"},
            ],
            metadata={"technologies": ["python", "postgres"], "certifications_earned": ["AWS SA"]},
        ),
        EmploymentPeriod(
            company="Initech",
            role="Senior Engineer",
            start_date="2021-07-01",
            annual_salary=12_000_000,
            total_compensation=15_000_000,
            seniority_level="senior",
        ),
    ]


@pytest.fixture
def career_events():
    return [
        CareerEvent(
            event_type="promotion",
            event_date="2020-01-01",
            previous_salary=8_000_000,
            new_salary=9_000_000,
            salary_increase=1_000_000,
            increase_percentage="12.5",
            description="Promoted to Engineer II",
        ),
        CareerEvent(event_type="raise", event_date="2022-07-01", salary_increase=500_000),
        CareerEvent(event_type="performance_review", event_date="2023-01-15"),
    ]
