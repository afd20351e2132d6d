"""Tests for fiscal period resolution."""

import pytest
from datetime import date

from procureflow.domain.errors import ValidationError


class TestCreatePeriod:
    """Tests for creating fiscal periods."""

    def test_create_period(self, period_service):
        period_id = period_service.create_period("Q1 2025", date(2025, 1, 1), date(2025, 4, 1))

        period = period_service.db.get_fiscal_period(period_id)
        assert period.name == "Q1 2025"
        assert period.start_date == date(2025, 1, 1)
        assert period.end_date == date(2025, 4, 1)

    def test_name_is_stripped(self, period_service):
        period_id = period_service.create_period("  H1  ", date(2025, 1, 1), date(2025, 7, 1))
        assert period_service.db.get_fiscal_period(period_id).name == "H1"

    def test_blank_name_rejected(self, period_service):
        with pytest.raises(ValidationError, match="name is required"):
            period_service.create_period("  ", date(2025, 1, 1), date(2025, 4, 1))

    @pytest.mark.parametrize(
        "start,end",
        [
            (date(2025, 4, 1), date(2025, 1, 1)),
            (date(2025, 1, 1), date(2025, 1, 1)),
        ],
    )
    def test_start_must_precede_end(self, period_service, start, end):
        with pytest.raises(ValidationError, match="must be before"):
            period_service.create_period("Bad", start, end)


class TestResolvePeriods:
    """Tests for resolve_periods."""

    def test_no_period(self, period_service):
        """Test a date outside every period resolves to nothing."""
        period_service.create_period("FY 2025", date(2025, 1, 1), date(2026, 1, 1))

        assert period_service.resolve_periods(date(2024, 12, 31)) == []

    def test_single_period(self, period_service, fiscal_year):
        periods = period_service.resolve_periods(date(2025, 3, 15))

        assert [p.id for p in periods] == [fiscal_year.id]

    def test_boundaries_are_half_open(self, period_service):
        """Test a date on the boundary belongs only to the period starting there."""
        first = period_service.create_period("H1", date(2025, 1, 1), date(2025, 7, 1))
        second = period_service.create_period("H2", date(2025, 7, 1), date(2026, 1, 1))

        assert [p.id for p in period_service.resolve_periods(date(2025, 6, 30))] == [first]
        assert [p.id for p in period_service.resolve_periods(date(2025, 7, 1))] == [second]
        assert [p.id for p in period_service.resolve_periods(date(2025, 1, 1))] == [first]
        assert period_service.resolve_periods(date(2026, 1, 1)) == []

    def test_overlapping_periods_all_returned(self, period_service):
        """Test overlaps are reported, never silently resolved."""
        period_service.create_period("FY 2025", date(2025, 1, 1), date(2026, 1, 1))
        period_service.create_period("Q1 2025", date(2025, 1, 1), date(2025, 4, 1))
        period_service.create_period("March 2025", date(2025, 3, 1), date(2025, 4, 1))

        periods = period_service.resolve_periods(date(2025, 3, 15))

        assert len(periods) == 3

    def test_most_specific_first(self, period_service):
        """Test ordering is shortest span first, regardless of creation order."""
        period_service.create_period("FY 2025", date(2025, 1, 1), date(2026, 1, 1))
        period_service.create_period("Q1 2025", date(2025, 1, 1), date(2025, 4, 1))
        period_service.create_period("March 2025", date(2025, 3, 1), date(2025, 4, 1))

        names = [p.name for p in period_service.resolve_periods(date(2025, 3, 15))]

        assert names == ["March 2025", "Q1 2025", "FY 2025"]

    def test_same_span_ordered_by_start(self, period_service):
        period_service.create_period("B", date(2025, 2, 1), date(2025, 3, 1))
        period_service.create_period("A", date(2025, 1, 15), date(2025, 2, 12))

        names = [p.name for p in period_service.resolve_periods(date(2025, 2, 5))]

        assert names == ["A", "B"]
