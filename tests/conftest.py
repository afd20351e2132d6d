"""Shared pytest fixtures for procureflow tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from procureflow.database.factories import create_sqlite_database
from procureflow.domain.approval import ApprovalProcessService, ApprovalRouter
from procureflow.domain.budget import BudgetService
from procureflow.domain.document import DocumentService
from procureflow.domain.finalization import FinalizationService
from procureflow.domain.fiscal_period import FiscalPeriodService

REQUESTER_ID = 7
INVOICE_APPROVER_ID = 42
RFQ_APPROVER_ID = 43
COST_CENTER_ID = 10
ACCOUNT_CODE_ID = 400
FIXED_NOW = datetime(2025, 3, 15, 9, 30, tzinfo=UTC)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def period_service(temp_db):
    """Create a FiscalPeriodService with a temporary database."""
    return FiscalPeriodService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def process_service(temp_db):
    """Create an ApprovalProcessService with a temporary database."""
    return ApprovalProcessService(temp_db)


@pytest.fixture
def router(temp_db):
    """Create an ApprovalRouter with a temporary database."""
    return ApprovalRouter(temp_db)


@pytest.fixture
def document_service(temp_db):
    """Create a DocumentService with a temporary database."""
    return DocumentService(temp_db)


@pytest.fixture
def finalization_service(temp_db):
    """Create a FinalizationService with a fixed clock."""
    return FinalizationService(temp_db, clock=lambda: FIXED_NOW)


@pytest.fixture
def fiscal_year(period_service):
    """Create fiscal year 2025 and return it."""
    period_id = period_service.create_period("FY 2025", date(2025, 1, 1), date(2026, 1, 1))
    return period_service.db.get_fiscal_period(period_id)


@pytest.fixture
def budget(budget_service, fiscal_year):
    """Create an active budget for the standard cost center and account code."""
    allocation_id = budget_service.create_allocation(
        fiscal_period_id=fiscal_year.id,
        cost_center_id=COST_CENTER_ID,
        account_code_id=ACCOUNT_CODE_ID,
        allocated_amount=Decimal("100000.00"),
    )
    return allocation_id


@pytest.fixture
def approval_processes(process_service):
    """Configure both approval processes with a first step routed for REQUESTER_ID.

    Returns a dict of step IDs keyed by process title.
    """
    steps = {}
    for title, description, approver_id in [
        ("Maharat Invoice Approval", "Finance Manager Review", INVOICE_APPROVER_ID),
        ("RFQ Approval", "Procurement Manager Review", RFQ_APPROVER_ID),
    ]:
        process_service.create_process(title)
        step_id = process_service.add_step(title, 1, description)
        process_service.assign_approver(step_id, REQUESTER_ID, approver_id)
        steps[title] = step_id
    return steps


@pytest.fixture
def draft_invoice(document_service):
    """Create a draft invoice: items 2x100 and 1x50, discount 20, VAT 15%."""
    document_id = document_service.create_document(
        document_type="invoice",
        document_date=date(2025, 3, 15),
        created_by=REQUESTER_ID,
        cost_center_id=COST_CENTER_ID,
        account_code_id=ACCOUNT_CODE_ID,
        discount_amount=Decimal("20"),
        vat_rate=Decimal("15"),
    )
    document_service.add_line_item(document_id, Decimal("2"), Decimal("100"), description="Printer toner")
    document_service.add_line_item(document_id, Decimal("1"), Decimal("50"), description="Paper")
    return document_id


@pytest.fixture
def routable_invoice(draft_invoice, budget, approval_processes):
    """A draft invoice whose period, budget and approver are all configured."""
    return draft_invoice


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
