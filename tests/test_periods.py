"""Tests for calendar periods and period filters."""

import pytest
from datetime import date

from plantbook.domain.periods import Period, PeriodFilter, month_number, parse_salary_month


class TestPeriod:
    """Tests for Period parsing and keys."""

    @pytest.mark.parametrize(
        "text",
        ["2025-02", "2025-2", "Feb-25", "February 2025", "Feb 2025", "february 2025"],
    )
    def test_parse_accepts_supported_forms(self, text):
        assert Period.parse(text) == Period(2025, 2)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            Period.parse("sometime in spring")

    def test_parse_rejects_month_out_of_range(self):
        with pytest.raises(ValueError):
            Period.parse("2025-13")

    def test_key_and_label(self):
        period = Period(2025, 2)
        assert period.key == "Feb-25"
        assert period.label == "February 2025"
        assert period.month_name == "February"
        assert str(period) == "2025-02"

    def test_first_and_last_day(self):
        assert Period(2024, 2).first_day == date(2024, 2, 1)
        assert Period(2024, 2).last_day == date(2024, 2, 29)
        assert Period(2025, 2).last_day == date(2025, 2, 28)

    def test_ordering_is_chronological_across_decades(self):
        periods = [Period(2030, 1), Period(2029, 12), Period(2025, 2)]
        assert sorted(periods) == [Period(2025, 2), Period(2029, 12), Period(2030, 1)]
        # Display keys do not sort chronologically
        assert sorted(p.key for p in periods) != [p.key for p in sorted(periods)]

    def test_from_month_name(self):
        assert Period.from_month_name(2025, "March") == Period(2025, 3)

    def test_month_number_rejects_unknown(self):
        assert month_number("sep") == 9
        with pytest.raises(ValueError):
            month_number("Smarch")


class TestPeriodFilter:
    """Tests for PeriodFilter matching."""

    def test_empty_filter_matches_everything(self):
        period_filter = PeriodFilter()
        assert period_filter.matches(date(2020, 1, 1))
        assert period_filter.date_range() == (None, None)

    def test_month_only_filter_matches_every_year(self):
        period_filter = PeriodFilter(month=2)
        assert period_filter.matches(date(2024, 2, 10))
        assert period_filter.matches(date(2025, 2, 10))
        assert not period_filter.matches(date(2025, 3, 1))
        assert period_filter.date_range() == (None, None)

    def test_month_and_year_filter(self):
        period_filter = PeriodFilter(month=2, year=2025)
        assert period_filter.matches(date(2025, 2, 28))
        assert not period_filter.matches(date(2024, 2, 28))
        assert period_filter.date_range() == (date(2025, 2, 1), date(2025, 2, 28))

    def test_year_filter_range(self):
        assert PeriodFilter(year=2025).date_range() == (date(2025, 1, 1), date(2025, 12, 31))

    def test_missing_date_only_matches_empty_filter(self):
        assert not PeriodFilter(year=2025).matches(None)


def test_parse_salary_month():
    assert parse_salary_month("2025-02") == date(2025, 2, 1)
    assert parse_salary_month("2025-13") is None
    assert parse_salary_month("Feb 2025") is None
    assert parse_salary_month(None) is None
