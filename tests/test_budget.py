"""Tests for budget validation."""

import pytest
from decimal import Decimal

from procureflow.domain.entities import BudgetStatus
from procureflow.domain.errors import ConflictError, InvalidAmountError, NotFoundError, ValidationError
from conftest import ACCOUNT_CODE_ID, COST_CENTER_ID


class TestCreateAllocation:
    """Tests for creating budget allocations."""

    def test_create_allocation(self, budget_service, fiscal_year):
        allocation_id = budget_service.create_allocation(
            fiscal_period_id=fiscal_year.id,
            cost_center_id=COST_CENTER_ID,
            account_code_id=ACCOUNT_CODE_ID,
            allocated_amount="5000.00",
        )

        allocation = budget_service.db.find_budget_allocation(
            fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID
        )
        assert allocation.id == allocation_id
        assert allocation.allocated_amount == Decimal("5000.00")
        assert allocation.status == BudgetStatus.ACTIVE

    def test_unknown_period(self, budget_service):
        with pytest.raises(NotFoundError, match="Fiscal period 99 not found"):
            budget_service.create_allocation(99, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("1"))

    def test_negative_amount(self, budget_service, fiscal_year):
        with pytest.raises(InvalidAmountError):
            budget_service.create_allocation(fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("-1"))

    def test_unknown_status(self, budget_service, fiscal_year):
        with pytest.raises(ValidationError, match="Unknown budget status"):
            budget_service.create_allocation(
                fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("1"), status="Open"
            )

    def test_amount_scale(self, budget_service, fiscal_year):
        with pytest.raises(InvalidAmountError, match="more than 2 decimal places"):
            budget_service.create_allocation(fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, "10.005")

    def test_duplicate_coordinate_rejected(self, budget_service, fiscal_year):
        """A second allocation for a coordinate cannot shadow the first."""
        frozen_id = budget_service.create_allocation(
            fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("100"), status=BudgetStatus.FROZEN
        )

        with pytest.raises(ConflictError, match="already exists"):
            budget_service.create_allocation(fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("500"))

        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID)
        assert not check.ok
        assert check.allocation.id == frozen_id

    def test_duplicate_with_sub_cost_center_rejected(self, budget_service, fiscal_year):
        budget_service.create_allocation(
            fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("10"), sub_cost_center_id=3
        )

        with pytest.raises(ConflictError, match="sub cost center 3"):
            budget_service.create_allocation(
                fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("20"), sub_cost_center_id=3
            )

    def test_same_coordinate_in_other_period_allowed(self, budget_service, period_service, fiscal_year, budget):
        next_year_id = period_service.create_period(
            "FY 2026", fiscal_year.end_date, fiscal_year.end_date.replace(year=2027)
        )

        budget_service.create_allocation(next_year_id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("10"))

        assert budget_service.validate(next_year_id, COST_CENTER_ID, None, ACCOUNT_CODE_ID).ok


class TestValidate:
    """Tests for BudgetService.validate."""

    def test_budget_available(self, budget_service, fiscal_year, budget):
        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID)

        assert check.ok
        assert check.reason is None
        assert check.allocation.id == budget

    def test_no_allocation(self, budget_service, fiscal_year):
        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID)

        assert not check.ok
        assert "No budget is set up" in check.reason
        assert check.allocation is None

    def test_wrong_account_code(self, budget_service, fiscal_year, budget):
        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID + 1)
        assert not check.ok

    def test_sub_cost_center_must_match_exactly(self, budget_service, fiscal_year, budget):
        """A budget without a sub cost center does not cover one with it."""
        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, 3, ACCOUNT_CODE_ID)
        assert not check.ok

        budget_service.create_allocation(
            fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("10"), sub_cost_center_id=3
        )
        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, 3, ACCOUNT_CODE_ID)
        assert check.ok
        assert check.allocation.sub_cost_center_id == 3

    @pytest.mark.parametrize("status", [BudgetStatus.FROZEN, BudgetStatus.CLOSED])
    def test_inactive_budget(self, budget_service, fiscal_year, status):
        budget_service.create_allocation(
            fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("100"), status=status
        )

        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID)

        assert not check.ok
        assert status.value.lower() in check.reason

    def test_zero_allocation(self, budget_service, fiscal_year):
        budget_service.create_allocation(fiscal_year.id, COST_CENTER_ID, ACCOUNT_CODE_ID, Decimal("0"))

        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID)

        assert not check.ok
        assert "no allocated amount" in check.reason

    def test_validation_does_not_consume_budget(self, budget_service, fiscal_year, budget):
        """Test validating twice leaves the allocated amount unchanged."""
        budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID)
        check = budget_service.validate(fiscal_year.id, COST_CENTER_ID, None, ACCOUNT_CODE_ID)

        assert check.ok
        assert check.allocation.allocated_amount == Decimal("100000.00")
