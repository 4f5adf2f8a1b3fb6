"""
Tests for the career progression summary aggregator.
"""
import datetime as dt
import math

import pytest

from craftd.career.models import CareerProgressionSummary, SalaryIncrease
from craftd.career.progression import (
    JOB_CHANGE_REASON,
    build_level_progression,
    calculate_total_tenure,
    find_current_period,
    find_highest_salary_increase,
    get_career_progression_summary,
    sort_periods,
)
from craftd.schema.models import CareerEvent, EmploymentPeriod

ACME_MONTHS = 27 + 16 / 30
GLOBEX_MONTHS = 30
INITECH_MONTHS = 36
TOTAL_YEARS = (ACME_MONTHS + GLOBEX_MONTHS + INITECH_MONTHS) / 12


class TestEmptyAndDegenerateInput:
    def test_empty_input_returns_all_zero_summary(self, as_of):
        summary = get_career_progression_summary([], [], as_of=as_of)

        assert summary == CareerProgressionSummary()
        assert summary.total_experience == 0
        assert summary.current_salary == 0
        assert summary.first_salary == 0
        assert summary.total_salary_growth == 0
        assert summary.salary_growth_percentage == 0
        assert summary.average_annual_growth == 0
        assert summary.promotion_count == 0
        assert summary.job_change_count == 0
        assert summary.average_tenure_per_job == 0
        assert summary.highest_salary_increase == SalaryIncrease()
        assert summary.salary_by_year == []
        assert summary.level_progression == []
        assert summary.current_level == ""

    def test_missing_salary_does_not_produce_nan(self, as_of):
        periods = [EmploymentPeriod(company="Acme", role="Engineer", start_date="2020-01-01")]
        summary = get_career_progression_summary(periods, [], as_of=as_of)

        assert summary.salary_growth_percentage == 0
        assert summary.average_annual_growth == 0
        assert not math.isnan(summary.average_annual_growth)
        assert not math.isinf(summary.salary_growth_percentage)
        assert summary.salary_by_year == []

    def test_zero_first_salary_reports_zero_growth_percentage(self, as_of):
        periods = [
            EmploymentPeriod(company="Volunteer", start_date="2018-01-01", end_date="2018-12-31", annual_salary=0),
            EmploymentPeriod(company="Acme", start_date="2019-01-01", annual_salary=5_000_000),
        ]
        summary = get_career_progression_summary(periods, [], as_of=as_of)

        assert summary.first_salary == 0
        assert summary.total_salary_growth == 5_000_000
        assert summary.salary_growth_percentage == 0
        assert summary.average_annual_growth == 0

    def test_reversed_dates_clamp_instead_of_failing(self, as_of):
        periods = [
            EmploymentPeriod(company="Typo", start_date="2020-06-01", end_date="2019-06-01", annual_salary=5_000_000),
            EmploymentPeriod(company="Acme", start_date="2021-01-01", end_date="2021-12-31", annual_salary=6_000_000),
        ]
        summary = get_career_progression_summary(periods, [], as_of=as_of)

        assert summary.total_experience == pytest.approx(1.0)
        assert summary.job_change_count == 1
        assert [entry.year for entry in summary.salary_by_year] == [2021]

    def test_periods_without_start_date_are_not_counted(self, as_of):
        periods = [
            EmploymentPeriod(company="Unknown", annual_salary=4_000_000),
            EmploymentPeriod(company="Acme", start_date="2023-07-01", end_date="2024-06-30", annual_salary=6_000_000),
        ]
        total_months, jobs = calculate_total_tenure(periods, as_of)
        assert jobs == 1
        assert total_months == pytest.approx(12)

        summary = get_career_progression_summary(periods, [], as_of=as_of)
        assert summary.average_tenure_per_job == pytest.approx(1.0)


class TestFullCareer:
    def test_experience_and_tenure(self, career_periods, career_events, as_of):
        summary = get_career_progression_summary(career_periods, career_events, as_of=as_of)

        assert summary.total_experience == pytest.approx(TOTAL_YEARS)
        assert summary.average_tenure_per_job == pytest.approx(TOTAL_YEARS / 3)
        assert summary.job_change_count == 2

    def test_salary_growth(self, career_periods, career_events, as_of):
        summary = get_career_progression_summary(career_periods, career_events, as_of=as_of)

        assert summary.first_salary == 6_000_000
        assert summary.current_salary == 12_000_000
        assert summary.total_salary_growth == 6_000_000
        assert summary.salary_growth_percentage == pytest.approx(100.0)
        assert summary.average_annual_growth == pytest.approx(100.0 / TOTAL_YEARS)

    def test_input_order_is_irrelevant(self, career_periods, career_events, as_of):
        forward = get_career_progression_summary(career_periods, career_events, as_of=as_of)
        backward = get_career_progression_summary(
            list(reversed(career_periods)), list(reversed(career_events)), as_of=as_of
        )
        assert forward == backward

    def test_counts_promotions(self, career_periods, career_events, as_of):
        summary = get_career_progression_summary(career_periods, career_events, as_of=as_of)
        assert summary.promotion_count == 1

    def test_current_level(self, career_periods, career_events, as_of):
        summary = get_career_progression_summary(career_periods, career_events, as_of=as_of)
        assert summary.current_level == "senior"

    def test_salary_by_year_is_one_entry_per_year(self, career_periods, career_events, as_of):
        summary = get_career_progression_summary(career_periods, career_events, as_of=as_of)
        by_year = {entry.year: entry for entry in summary.salary_by_year}

        assert sorted(by_year) == list(range(2016, 2025))
        assert by_year[2016].salary == 1_766_667
        assert by_year[2017].salary == 6_000_000
        # Globex reports its post-adjustment salary for every year
        assert by_year[2019].salary == 9_000_000
        # Globex (half of 9M) and Initech (half of 12M) overlap 2021; the higher wins
        assert by_year[2021].salary == 6_000_000
        assert by_year[2021].company == "Initech"
        assert by_year[2021].total_comp == 7_500_000
        assert by_year[2024].salary == 6_000_000

    def test_to_dict_is_json_ready(self, career_periods, career_events, as_of):
        data = get_career_progression_summary(career_periods, career_events, as_of=as_of).to_dict()

        assert data["highest_salary_increase"]["date"] == "2021-07-01"
        assert data["level_progression"][0]["start_date"] == "2016-09-15"
        assert data["level_progression"][-1]["end_date"] is None
        assert data["salary_by_year"][0] == {
            "year": 2016,
            "salary": 1_766_667,
            "total_comp": 1_766_667,
            "company": "Acme",
            "title": "Junior Engineer",
        }


class TestSalaryByYearConsolidation:
    def test_higher_salary_wins_for_overlapping_year(self, as_of):
        periods = [
            EmploymentPeriod(company="Day job", start_date="2020-01-01", end_date="2020-12-31", annual_salary=100),
            EmploymentPeriod(company="Side gig", start_date="2020-01-01", end_date="2020-12-31", annual_salary=150),
        ]
        summary = get_career_progression_summary(periods, [], as_of=as_of)

        assert len(summary.salary_by_year) == 1
        assert summary.salary_by_year[0].year == 2020
        assert summary.salary_by_year[0].salary == 150
        assert summary.salary_by_year[0].company == "Side gig"

    def test_higher_salary_wins_regardless_of_order(self, as_of):
        periods = [
            EmploymentPeriod(company="Side gig", start_date="2020-01-01", end_date="2020-12-31", annual_salary=150),
            EmploymentPeriod(company="Day job", start_date="2020-01-01", end_date="2020-12-31", annual_salary=100),
        ]
        summary = get_career_progression_summary(periods, [], as_of=as_of)
        assert summary.salary_by_year[0].salary == 150


class TestHighestSalaryIncrease:
    def test_picks_largest_event(self):
        events = [
            CareerEvent(event_type="raise", event_date="2021-01-01", salary_increase=200_000),
            CareerEvent(event_type="promotion", event_date="2020-01-01", salary_increase=900_000,
                        increase_percentage=15),
        ]
        best = find_highest_salary_increase(events)
        assert best == SalaryIncrease(amount=900_000, percentage=15.0, reason="promotion",
                                      date=dt.date(2020, 1, 1))

    def test_ties_go_to_most_recent(self):
        events = [
            CareerEvent(event_type="raise", event_date="2019-01-01", salary_increase=500_000),
            CareerEvent(event_type="promotion", event_date="2022-03-01", salary_increase=500_000),
            CareerEvent(event_type="raise", event_date="2020-05-01", salary_increase=500_000),
        ]
        best = find_highest_salary_increase(events)
        assert best.date == dt.date(2022, 3, 1)
        assert best.reason == "promotion"

    def test_derives_increase_from_previous_and_new_salary(self):
        events = [CareerEvent(event_type="raise", event_date="2021-01-01",
                              previous_salary=1_000_000, new_salary=1_100_000)]
        best = find_highest_salary_increase(events)
        assert best.amount == 100_000
        assert best.percentage == pytest.approx(10.0)

    def test_job_transitions_count(self, career_periods):
        best = find_highest_salary_increase([], sort_periods(career_periods))
        assert best.amount == 3_000_000
        assert best.reason == JOB_CHANGE_REASON
        assert best.date == dt.date(2021, 7, 1)
        assert best.percentage == pytest.approx(100 / 3)

    def test_no_positive_increase(self):
        events = [
            CareerEvent(event_type="raise", event_date="2021-01-01", salary_increase=-100),
            CareerEvent(event_type="bonus", event_date="2021-02-01"),
        ]
        assert find_highest_salary_increase(events) == SalaryIncrease()


class TestLevelProgression:
    def test_durations_in_months(self, career_periods, as_of):
        spans = build_level_progression(sort_periods(career_periods), as_of)

        assert [s.level for s in spans] == ["entry-level", "mid-level", "senior"]
        assert [s.duration for s in spans] == [27, 30, 36]
        assert spans[-1].end_date is None

    def test_open_span_ends_at_next_start(self, as_of):
        periods = [
            EmploymentPeriod(company="A", start_date="2020-01-01", seniority_level="mid-level"),
            EmploymentPeriod(company="B", start_date="2021-01-01", end_date="2022-01-01", seniority_level="senior"),
        ]
        spans = build_level_progression(sort_periods(periods), as_of)
        assert spans[0].end_date == dt.date(2021, 1, 1)
        assert spans[0].duration == 12

    def test_periods_without_level_are_skipped(self, as_of):
        periods = [EmploymentPeriod(company="A", start_date="2020-01-01")]
        assert build_level_progression(periods, as_of) == []


def test_current_period_prefers_ongoing_job(career_periods):
    current = find_current_period(sort_periods(career_periods))
    assert current.company == "Initech"


def test_current_period_falls_back_to_latest_closed_job():
    periods = sort_periods([
        EmploymentPeriod(company="B", start_date="2021-01-01", end_date="2022-01-01"),
        EmploymentPeriod(company="A", start_date="2019-01-01", end_date="2020-01-01"),
    ])
    assert find_current_period(periods).company == "B"
