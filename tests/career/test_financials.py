"""
Tests for the financial views over employment history.
"""
import datetime as dt

import pytest

from craftd.career.financials import (
    build_salary_history,
    calculate_job_change_impact,
    get_bonuses_for_year,
    get_compensation_breakdown,
    get_financial_metrics,
    get_salary_progression_data,
    get_work_experiences_with_financials,
)
from craftd.career.models import FinancialMetrics
from craftd.career.progression import sort_periods
from craftd.schema.models import EmploymentPeriod


def years(start, end):
    return (end - start).days / 365.25


class TestBonuses:
    def test_sums_bonuses_in_year(self, career_periods):
        bonuses = career_periods[1].bonus_history
        assert get_bonuses_for_year(bonuses, 2019) == 500_000
        assert get_bonuses_for_year(bonuses, 2020) == 700_000
        assert get_bonuses_for_year(bonuses, 2021) == 0

    def test_missing_history(self):
        assert get_bonuses_for_year(None, 2020) == 0
        assert get_bonuses_for_year([], 2020) == 0


class TestWorkExperiencesWithFinancials:
    def test_tenure_in_days(self, career_periods, as_of):
        acme, globex, initech = get_work_experiences_with_financials(career_periods, as_of=as_of)

        assert acme.total_tenure == 836
        assert initech.total_tenure == 1094
        assert initech.end_date is None

    def test_compensation_received(self, career_periods, as_of):
        acme, globex, _ = get_work_experiences_with_financials(career_periods, as_of=as_of)

        acme_years = years(dt.date(2016, 9, 15), dt.date(2018, 12, 31))
        globex_years = years(dt.date(2019, 1, 1), dt.date(2021, 6, 30))
        assert acme.total_compensation_received == pytest.approx(6_000_000 * acme_years, abs=1)
        assert globex.total_compensation_received == pytest.approx(
            9_000_000 * globex_years + 1_200_000, abs=1
        )

    def test_raise_and_promotion_stats(self, career_periods, as_of):
        acme, globex, _ = get_work_experiences_with_financials(career_periods, as_of=as_of)

        assert acme.average_annual_raise == 0
        assert acme.promotion_count == 0
        assert globex.average_annual_raise == pytest.approx(12.5)
        assert globex.promotion_count == 1
        assert globex.current_annualized_salary == 9_000_000
        assert globex.skills_acquired == ["python", "postgres", "AWS SA"]

    def test_reversed_dates_give_zero_tenure(self, as_of):
        period = EmploymentPeriod(company="Typo", start_date="2022-01-01", end_date="2021-01-01",
                                  annual_salary=5_000_000)
        (result,) = get_work_experiences_with_financials([period], as_of=as_of)
        assert result.total_tenure == 0
        assert result.total_compensation_received == 0

    def test_missing_start_counts_from_as_of(self, as_of):
        period = EmploymentPeriod(company="Unknown", annual_salary=5_000_000)
        (result,) = get_work_experiences_with_financials([period], as_of=as_of)
        assert result.total_tenure == 0


class TestFinancialMetrics:
    def test_empty(self, as_of):
        assert get_financial_metrics([], as_of=as_of) == FinancialMetrics()

    def test_headline_numbers(self, career_periods, as_of):
        metrics = get_financial_metrics(career_periods, as_of=as_of)

        assert metrics.current_salary == 12_000_000
        assert metrics.current_total_comp == 15_000_000
        assert metrics.total_career_growth == pytest.approx(100.0)
        career_years = years(dt.date(2016, 9, 15), as_of)
        assert metrics.compound_annual_growth_rate == pytest.approx((2 ** (1 / career_years) - 1) * 100)
        assert metrics.market_comparison == {"last_updated": as_of}

    def test_salary_history_has_one_row_per_job_year(self, career_periods, as_of):
        history = get_financial_metrics(career_periods, as_of=as_of).salary_history

        assert [(h.company, h.year) for h in history] == [
            ("Acme", 2016), ("Acme", 2017), ("Acme", 2018),
            ("Globex", 2019), ("Globex", 2020), ("Globex", 2021),
            ("Initech", 2021), ("Initech", 2022), ("Initech", 2023), ("Initech", 2024),
        ]
        globex = {h.year: h for h in history if h.company == "Globex"}
        assert globex[2019].bonuses == 500_000
        assert globex[2020].bonuses == 700_000
        assert globex[2021].base_salary == 9_000_000

    def test_job_change_impact(self, career_periods):
        impacts = calculate_job_change_impact(sort_periods(career_periods))

        assert [(i.from_company, i.to_company) for i in impacts] == [("Acme", "Globex"), ("Globex", "Initech")]
        assert impacts[0].salary_increase == 3_000_000
        assert impacts[0].percentage_increase == pytest.approx(50.0)
        assert impacts[0].change_date == dt.date(2019, 1, 1)
        assert impacts[1].total_comp_increase == 6_000_000

    def test_job_change_skips_unknown_salaries(self):
        periods = [
            EmploymentPeriod(company="A", start_date="2019-01-01", end_date="2019-12-31"),
            EmploymentPeriod(company="B", start_date="2020-01-01", annual_salary=5_000_000),
        ]
        assert calculate_job_change_impact(periods) == []

    def test_missing_first_start_assumes_one_year(self, as_of):
        periods = [EmploymentPeriod(company="A", annual_salary=100)]
        metrics = get_financial_metrics(periods, as_of=as_of)
        assert metrics.compound_annual_growth_rate == 0
        assert metrics.salary_history == []

    def test_to_dict(self, career_periods, as_of):
        data = get_financial_metrics(career_periods, as_of=as_of).to_dict()
        assert data["market_comparison"] == {"last_updated": "2024-06-30"}
        assert data["job_change_impact"][0]["change_date"] == "2019-01-01"


def test_build_salary_history_skips_unsalaried(as_of):
    periods = [EmploymentPeriod(company="A", start_date="2020-01-01")]
    assert build_salary_history(periods, as_of) == []


def test_salary_progression_points(career_periods):
    points = get_salary_progression_data(career_periods)

    assert [(p.date.isoformat(), p.base_salary, p.title) for p in points] == [
        ("2016-09-15", 6_000_000, "Junior Engineer"),
        ("2019-01-01", 8_000_000, "Engineer"),
        ("2020-01-01", 9_000_000, "Engineer II"),
        ("2021-07-01", 12_000_000, "Senior Engineer"),
    ]
    assert points[-1].total_comp == 15_000_000


def test_compensation_breakdown(career_periods):
    acme, globex, initech = get_compensation_breakdown(career_periods)

    assert globex.base_salary == 9_000_000
    assert globex.total_bonuses == 1_200_000
    assert globex.total_compensation == 9_000_000
    assert initech.total_compensation == 15_000_000
    assert acme.signing_bonus == 0
    assert acme.currency == "USD"


def test_compensation_breakdown_carries_bonus_fields():
    period = EmploymentPeriod(company="A", start_date="2022-01-01", annual_salary=10_000_000,
                              signing_bonus=1_000_000, annual_bonus=1_500_000, equity_value=4_000_000,
                              currency="EUR")
    (row,) = get_compensation_breakdown([period])
    assert (row.signing_bonus, row.annual_bonus, row.equity_value) == (1_000_000, 1_500_000, 4_000_000)
    assert row.currency == "EUR"


def test_compensation_breakdown_display_currency(career_periods):
    rows = get_compensation_breakdown(career_periods, currency="CAD")
    assert {row.currency for row in rows} == {"CAD"}
