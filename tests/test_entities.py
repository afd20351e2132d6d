"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date, datetime
from decimal import Decimal

from procureflow.domain.entities import (
    ApprovalProcess,
    ApprovalStep,
    BudgetAllocation,
    BudgetStatus,
    Document,
    DocumentStatus,
    DocumentType,
    FiscalPeriod,
    LineItem,
    Urgency,
)
from procureflow.domain.errors import InvalidAmountError


def test_line_item_subtotal_rounds_half_up():
    """Test line item subtotal."""
    item = LineItem(quantity=Decimal("3"), unit_price=Decimal("0.335"))
    assert item.subtotal == Decimal("1.01")


def test_line_item_breakdown_empty_until_finalized():
    item = LineItem(quantity=Decimal("1"), unit_price=Decimal("10"))
    assert item.discount_share is None
    assert item.total is None


def test_line_item_immutable():
    """Test that line items are immutable."""
    item = LineItem(quantity=Decimal("1"), unit_price=Decimal("10"))
    with pytest.raises(FrozenInstanceError):
        item.quantity = Decimal("2")


def test_document_defaults():
    """Test document snapshot fields default to empty."""
    document = Document(
        id=1,
        document_type=DocumentType.INVOICE,
        document_date=date(2025, 3, 15),
        discount_amount=Decimal("0"),
        vat_rate=Decimal("15"),
        status=DocumentStatus.DRAFT,
        created_by=7,
        cost_center_id=10,
        sub_cost_center_id=None,
        account_code_id=400,
        created_at=datetime(2025, 3, 15, 8, 0),
    )
    assert document.line_items == ()
    assert document.total is None
    assert document.fiscal_period_id is None


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(2025, 1, 1), True),
        (date(2025, 6, 30), True),
        (date(2025, 12, 31), True),
        (date(2026, 1, 1), False),
        (date(2024, 12, 31), False),
    ],
)
def test_fiscal_period_is_half_open(day, expected):
    """Test start is included and end is excluded."""
    period = FiscalPeriod(id=1, name="FY 2025", start_date=date(2025, 1, 1), end_date=date(2026, 1, 1))
    assert period.contains(day) is expected


@pytest.mark.parametrize(
    "status,amount,usable",
    [
        (BudgetStatus.ACTIVE, Decimal("100"), True),
        (BudgetStatus.ACTIVE, Decimal("0"), False),
        (BudgetStatus.FROZEN, Decimal("100"), False),
        (BudgetStatus.CLOSED, Decimal("100"), False),
    ],
)
def test_budget_allocation_is_usable(status, amount, usable):
    allocation = BudgetAllocation(
        id=1,
        fiscal_period_id=1,
        cost_center_id=10,
        sub_cost_center_id=None,
        account_code_id=400,
        allocated_amount=amount,
        status=status,
    )
    assert allocation.is_usable is usable


def test_approval_process_steps_default_empty():
    process = ApprovalProcess(id=1, title="RFQ Approval")
    assert process.steps == ()

    step = ApprovalStep(id=5, process_id=1, order=1, description="Manager Review")
    process = ApprovalProcess(id=1, title="RFQ Approval", steps=(step,))
    assert process.steps[0].description == "Manager Review"


def test_enum_values_match_stored_strings():
    """Stored status and type strings round-trip through the enums."""
    assert DocumentType("rfq") is DocumentType.RFQ
    assert DocumentStatus("PendingApproval") is DocumentStatus.PENDING_APPROVAL
    assert BudgetStatus("Frozen") is BudgetStatus.FROZEN
    assert Urgency("ASAP") is Urgency.ASAP
    assert DocumentStatus.DRAFT == "Draft"


def test_line_item_subtotal_shares_money_rounding():
    """LineItem.subtotal uses the same rounding, including its overflow error."""
    item = LineItem(quantity=Decimal("1e30"), unit_price=Decimal("1"))
    with pytest.raises(InvalidAmountError, match="too large"):
        item.subtotal
