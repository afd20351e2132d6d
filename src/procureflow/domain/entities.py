"""Domain model entities for procureflow.

These are pure data classes representing procurement documents and the
approval configuration they are routed through, independent of the database
schema. Money is always carried as Decimal.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from procureflow.domain.rounding import round2


class DocumentType(str, Enum):
    """Kind of procurement document."""

    INVOICE = "invoice"
    RFQ = "rfq"


class DocumentStatus(str, Enum):
    """Document lifecycle status."""

    DRAFT = "Draft"
    PENDING_APPROVAL = "PendingApproval"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class BudgetStatus(str, Enum):
    """Budget allocation status."""

    ACTIVE = "Active"
    FROZEN = "Frozen"
    CLOSED = "Closed"


class Urgency(str, Enum):
    """Task urgency levels."""

    NORMAL = "Normal"
    MEDIUM = "Medium"
    HIGH = "High"
    LOW = "Low"
    ASAP = "ASAP"


PENDING = "Pending"


@dataclass(frozen=True)
class LineItem:
    """Line item of a document.

    The finalized breakdown fields stay None until the owning document is
    finalized.
    """

    quantity: Decimal
    unit_price: Decimal
    tax_rate: Optional[Decimal] = None
    description: Optional[str] = None
    position: int = 0
    id: Optional[int] = None
    document_id: Optional[int] = None
    discount_share: Optional[Decimal] = None
    discounted_amount: Optional[Decimal] = None
    vat_amount: Optional[Decimal] = None
    total: Optional[Decimal] = None

    @property
    def subtotal(self) -> Decimal:
        """Quantity times unit price, rounded half-up to cents."""
        return round2(self.quantity * self.unit_price)


@dataclass(frozen=True)
class Document:
    """Invoice or request for quotation."""

    id: int
    document_type: DocumentType
    document_date: date
    discount_amount: Decimal
    vat_rate: Decimal
    status: DocumentStatus
    created_by: int
    cost_center_id: int
    sub_cost_center_id: Optional[int]
    account_code_id: int
    created_at: datetime
    line_items: tuple[LineItem, ...] = ()
    fiscal_period_id: Optional[int] = None
    subtotal: Optional[Decimal] = None
    discounted_subtotal: Optional[Decimal] = None
    vat_amount: Optional[Decimal] = None
    total: Optional[Decimal] = None
    rounding_difference: Optional[Decimal] = None
    finalized_at: Optional[datetime] = None


@dataclass(frozen=True)
class FiscalPeriod:
    """Accounting period covering the half-open range [start_date, end_date)."""

    id: int
    name: str
    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        """Return True if the day falls within the period."""
        return self.start_date <= day < self.end_date


@dataclass(frozen=True)
class BudgetAllocation:
    """Budget set up for a (period, cost center, account) coordinate."""

    id: int
    fiscal_period_id: int
    cost_center_id: int
    sub_cost_center_id: Optional[int]
    account_code_id: int
    allocated_amount: Decimal
    status: BudgetStatus

    @property
    def is_usable(self) -> bool:
        return self.status == BudgetStatus.ACTIVE and self.allocated_amount > 0


@dataclass(frozen=True)
class ApprovalStep:
    """One stage of an approval process."""

    id: int
    process_id: int
    order: int
    description: str


@dataclass(frozen=True)
class ApprovalProcess:
    """Named, ordered approval workflow."""

    id: int
    title: str
    steps: tuple[ApprovalStep, ...] = ()


@dataclass(frozen=True)
class StepAssignment:
    """Maps a requester to the approver acting for them at a step."""

    id: int
    step_id: int
    requester_id: int
    approver_id: int


@dataclass(frozen=True)
class ApprovalTransaction:
    """Approval tracking record created when a document is finalized."""

    id: int
    document_id: int
    requester_id: int
    assigned_to: int
    order: int
    description: str
    status: str
    created_at: datetime


@dataclass(frozen=True)
class Task:
    """Work item for the approver of a finalized document."""

    id: int
    process_step_id: int
    process_id: int
    document_id: int
    assigned_from_user_id: int
    assigned_to_user_id: int
    order_no: int
    urgency: Urgency
    assigned_at: datetime
    deadline: Optional[datetime]
    read_status: Optional[datetime]
    status: str
    created_at: datetime
