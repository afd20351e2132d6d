"""Budget domain service."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from procureflow.database.base import Database
from procureflow.domain.entities import BudgetAllocation, BudgetStatus
from procureflow.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_budget,
    fiscal_period_not_found,
)
from procureflow.domain.money import MONEY_PLACES, to_amount


@dataclass(frozen=True)
class BudgetCheck:
    """Outcome of a budget validation."""

    ok: bool
    reason: Optional[str] = None
    allocation: Optional[BudgetAllocation] = None


class BudgetService:
    """Service for budget allocations.

    Validation only confirms that a usable allocation exists for the
    coordinate. Nothing is reserved or deducted, so finalizing an invoice
    never consumes budget.
    """

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_allocation(
        self,
        fiscal_period_id: int,
        cost_center_id: int,
        account_code_id: int,
        allocated_amount: Any,
        sub_cost_center_id: Optional[int] = None,
        status: BudgetStatus | str = BudgetStatus.ACTIVE,
    ) -> int:
        """Create a budget allocation.

        A coordinate (period, cost center, sub cost center, account code) has
        at most one allocation. An empty sub cost center counts as a value.

        Args:
            fiscal_period_id: Fiscal period the budget belongs to
            cost_center_id: Cost center ID
            account_code_id: Account code ID
            allocated_amount: Allocated amount (non-negative)
            sub_cost_center_id: Optional sub cost center ID
            status: Active, Frozen or Closed

        Returns:
            Allocation ID

        Raises:
            NotFoundError: If the fiscal period doesn't exist
            ValidationError: If the amount or status is invalid
            ConflictError: If the coordinate already has an allocation
        """
        if self.db.get_fiscal_period(fiscal_period_id) is None:
            raise NotFoundError(fiscal_period_not_found(fiscal_period_id))
        amount = to_amount(allocated_amount, "allocated amount", MONEY_PLACES)
        try:
            budget_status = BudgetStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown budget status '{status}'")
        existing = self.db.find_budget_allocation(
            fiscal_period_id=fiscal_period_id,
            cost_center_id=cost_center_id,
            sub_cost_center_id=sub_cost_center_id,
            account_code_id=account_code_id,
        )
        if existing is not None:
            raise ConflictError(
                duplicate_budget(fiscal_period_id, cost_center_id, sub_cost_center_id, account_code_id)
            )

        return self.db.create_budget_allocation(
            fiscal_period_id=fiscal_period_id,
            cost_center_id=cost_center_id,
            account_code_id=account_code_id,
            allocated_amount=amount,
            sub_cost_center_id=sub_cost_center_id,
            status=budget_status,
        )

    def validate(
        self,
        fiscal_period_id: int,
        cost_center_id: int,
        sub_cost_center_id: Optional[int],
        account_code_id: int,
    ) -> BudgetCheck:
        """Check that a usable budget allocation exists for a coordinate.

        Args:
            fiscal_period_id: Resolved fiscal period ID
            cost_center_id: Cost center ID
            sub_cost_center_id: Sub cost center ID, or None for none
            account_code_id: Account code ID

        Returns:
            BudgetCheck with ok=False and a reason when no usable allocation exists
        """
        allocation = self.db.find_budget_allocation(
            fiscal_period_id=fiscal_period_id,
            cost_center_id=cost_center_id,
            sub_cost_center_id=sub_cost_center_id,
            account_code_id=account_code_id,
        )
        if allocation is None:
            return BudgetCheck(
                ok=False,
                reason="No budget is set up for this fiscal period, cost center and account code",
            )
        if allocation.status != BudgetStatus.ACTIVE:
            return BudgetCheck(
                ok=False,
                reason=f"The budget for this cost center and account code is {allocation.status.value.lower()}",
                allocation=allocation,
            )
        if allocation.allocated_amount <= Decimal("0"):
            return BudgetCheck(
                ok=False,
                reason="The budget for this cost center and account code has no allocated amount",
                allocation=allocation,
            )
        return BudgetCheck(ok=True, allocation=allocation)
