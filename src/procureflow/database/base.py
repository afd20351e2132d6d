"""Abstract database interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from procureflow.domain.entities import (
    ApprovalProcess,
    ApprovalStep,
    ApprovalTransaction,
    BudgetAllocation,
    BudgetStatus,
    Document,
    DocumentType,
    FiscalPeriod,
    Task,
    Urgency,
)
from procureflow.domain.money import ItemBreakdown, Totals


@dataclass(frozen=True)
class FinalizationRecord:
    """Everything written in one transaction when a document is finalized.

    items pairs each line item ID with its computed breakdown.
    """

    document_id: int
    fiscal_period_id: int
    totals: Totals
    items: tuple[tuple[int, ItemBreakdown], ...]
    rounding_difference: Decimal
    finalized_at: datetime
    requester_id: int
    approver_id: int
    process_id: int
    step_id: int
    step_order: int
    step_description: str
    urgency: Urgency = Urgency.NORMAL
    deadline: Optional[datetime] = None


class Database(ABC):
    """Abstract database interface for procureflow."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Document operations
    @abstractmethod
    def create_document(
        self,
        document_type: DocumentType,
        document_date: date,
        created_by: int,
        cost_center_id: int,
        account_code_id: int,
        sub_cost_center_id: Optional[int] = None,
        discount_amount: Decimal = Decimal("0"),
        vat_rate: Decimal = Decimal("0"),
    ) -> int:
        """Create a draft document. Returns document ID."""
        pass

    @abstractmethod
    def get_document(self, document_id: int) -> Optional[Document]:
        """Get document by ID, including its line items in order."""
        pass

    @abstractmethod
    def add_line_item(
        self,
        document_id: int,
        quantity: Decimal,
        unit_price: Decimal,
        description: Optional[str] = None,
        tax_rate: Optional[Decimal] = None,
    ) -> int:
        """Append a line item to a draft document. Returns line item ID."""
        pass

    # Fiscal period operations
    @abstractmethod
    def create_fiscal_period(self, name: str, start_date: date, end_date: date) -> int:
        """Create a fiscal period. Returns period ID."""
        pass

    @abstractmethod
    def get_fiscal_period(self, period_id: int) -> Optional[FiscalPeriod]:
        """Get fiscal period by ID."""
        pass

    @abstractmethod
    def find_fiscal_periods_containing(self, day: date) -> list[FiscalPeriod]:
        """List every period with start_date <= day < end_date."""
        pass

    # Budget operations
    @abstractmethod
    def create_budget_allocation(
        self,
        fiscal_period_id: int,
        cost_center_id: int,
        account_code_id: int,
        allocated_amount: Decimal,
        sub_cost_center_id: Optional[int] = None,
        status: BudgetStatus = BudgetStatus.ACTIVE,
    ) -> int:
        """Create a budget allocation. Returns allocation ID."""
        pass

    @abstractmethod
    def find_budget_allocation(
        self,
        fiscal_period_id: int,
        cost_center_id: int,
        sub_cost_center_id: Optional[int],
        account_code_id: int,
    ) -> Optional[BudgetAllocation]:
        """Find the allocation for an exact coordinate."""
        pass

    # Approval configuration
    @abstractmethod
    def create_approval_process(self, title: str) -> int:
        """Create an approval process. Returns process ID."""
        pass

    @abstractmethod
    def get_approval_process_by_title(self, title: str) -> Optional[ApprovalProcess]:
        """Get approval process by exact title, with its steps."""
        pass

    @abstractmethod
    def add_approval_step(self, process_id: int, order: int, description: str) -> int:
        """Add a step to a process. Returns step ID."""
        pass

    @abstractmethod
    def get_approval_step(self, step_id: int) -> Optional[ApprovalStep]:
        """Get approval step by ID."""
        pass

    @abstractmethod
    def create_step_assignment(self, step_id: int, requester_id: int, approver_id: int) -> int:
        """Assign an approver for a requester at a step. Returns assignment ID."""
        pass

    @abstractmethod
    def find_step_approver(self, step_id: int, requester_id: int) -> Optional[int]:
        """Return the approver user ID for a requester at a step."""
        pass

    # Finalization
    @abstractmethod
    def record_finalization(self, record: FinalizationRecord) -> tuple[int, int]:
        """Atomically write the financial snapshot, approval transaction and task.

        The document moves from Draft to PendingApproval in the same
        transaction. Nothing is written if any part fails.

        Returns:
            (approval transaction ID, task ID)

        Raises:
            ConflictError: If the document is no longer Draft
            PersistenceError: If the store rejected the write
        """
        pass

    @abstractmethod
    def list_approval_transactions(self, document_id: int) -> list[ApprovalTransaction]:
        """List approval transactions for a document."""
        pass

    @abstractmethod
    def list_tasks(
        self, document_id: Optional[int] = None, assigned_to: Optional[int] = None
    ) -> list[Task]:
        """List tasks with optional filters."""
        pass
