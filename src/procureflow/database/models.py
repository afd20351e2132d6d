"""SQLAlchemy models for procureflow database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Document(Base):
    """Invoice or RFQ header with its finalized financial snapshot."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True)
    document_type = Column(String, nullable=False)
    document_date = Column(Date, nullable=False)
    discount_amount = Column(Numeric(14, 2), nullable=False, default=0)
    vat_rate = Column(Numeric(5, 2), nullable=False, default=0)
    status = Column(String, nullable=False, default="Draft")
    created_by = Column(Integer, nullable=False)
    cost_center_id = Column(Integer, nullable=False)
    sub_cost_center_id = Column(Integer, nullable=True)
    account_code_id = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Snapshot, written by finalization
    fiscal_period_id = Column(Integer, ForeignKey("fiscal_periods.id"), nullable=True)
    subtotal = Column(Numeric(14, 2), nullable=True)
    discounted_subtotal = Column(Numeric(14, 2), nullable=True)
    vat_amount = Column(Numeric(14, 2), nullable=True)
    total = Column(Numeric(14, 2), nullable=True)
    rounding_difference = Column(Numeric(14, 2), nullable=True)
    finalized_at = Column(DateTime, nullable=True)

    # Relationships
    line_items = relationship(
        "LineItem",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="LineItem.position",
    )


class LineItem(Base):
    """Document line item model."""

    __tablename__ = "line_items"

    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(String, nullable=True)
    quantity = Column(Numeric(14, 3), nullable=False)
    unit_price = Column(Numeric(14, 2), nullable=False)
    tax_rate = Column(Numeric(5, 2), nullable=True)
    discount_share = Column(Numeric(14, 2), nullable=True)
    discounted_amount = Column(Numeric(14, 2), nullable=True)
    vat_amount = Column(Numeric(14, 2), nullable=True)
    total = Column(Numeric(14, 2), nullable=True)

    __table_args__ = (UniqueConstraint("document_id", "position", name="uq_line_item_position"),)

    # Relationships
    document = relationship("Document", back_populates="line_items")


class FiscalPeriod(Base):
    """Fiscal period model, half-open [start_date, end_date)."""

    __tablename__ = "fiscal_periods"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


class BudgetAllocation(Base):
    """Budget allocation model.

    SQLite treats NULLs as distinct, so rows without a sub cost center are
    kept unique by BudgetService.create_allocation.
    """

    __tablename__ = "budget_allocations"
    __table_args__ = (
        UniqueConstraint(
            "fiscal_period_id",
            "cost_center_id",
            "sub_cost_center_id",
            "account_code_id",
            name="uq_budget_coordinate",
        ),
    )

    id = Column(Integer, primary_key=True)
    fiscal_period_id = Column(Integer, ForeignKey("fiscal_periods.id"), nullable=False)
    cost_center_id = Column(Integer, nullable=False)
    sub_cost_center_id = Column(Integer, nullable=True)
    account_code_id = Column(Integer, nullable=False)
    allocated_amount = Column(Numeric(14, 2), nullable=False)
    status = Column(String, nullable=False, default="Active")
    created_at = Column(DateTime, default=_now, nullable=False)


class ApprovalProcess(Base):
    """Approval process model."""

    __tablename__ = "approval_processes"

    id = Column(Integer, primary_key=True)
    title = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    steps = relationship(
        "ApprovalStep",
        back_populates="process",
        cascade="all, delete-orphan",
        order_by="ApprovalStep.order",
    )


class ApprovalStep(Base):
    """Approval process step model."""

    __tablename__ = "approval_steps"

    id = Column(Integer, primary_key=True)
    process_id = Column(Integer, ForeignKey("approval_processes.id"), nullable=False)
    order = Column(Integer, nullable=False)
    description = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("process_id", "order", name="uq_process_step_order"),)

    # Relationships
    process = relationship("ApprovalProcess", back_populates="steps")
    assignments = relationship(
        "StepAssignment", back_populates="step", cascade="all, delete-orphan"
    )


class StepAssignment(Base):
    """Requester to approver mapping for a step."""

    __tablename__ = "step_assignments"

    id = Column(Integer, primary_key=True)
    step_id = Column(Integer, ForeignKey("approval_steps.id"), nullable=False)
    requester_id = Column(Integer, nullable=False)
    approver_id = Column(Integer, nullable=False)

    __table_args__ = (UniqueConstraint("step_id", "requester_id", name="uq_step_requester"),)

    # Relationships
    step = relationship("ApprovalStep", back_populates="assignments")


class ApprovalTransaction(Base):
    """Approval transaction model."""

    __tablename__ = "approval_transactions"

    id = Column(Integer, primary_key=True)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    requester_id = Column(Integer, nullable=False)
    assigned_to = Column(Integer, nullable=False)
    order = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    status = Column(String, nullable=False, default="Pending")
    created_at = Column(DateTime, default=_now, nullable=False)


class Task(Base):
    """Approver work item model."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    process_step_id = Column(Integer, ForeignKey("approval_steps.id"), nullable=False)
    process_id = Column(Integer, ForeignKey("approval_processes.id"), nullable=False)
    document_id = Column(Integer, ForeignKey("documents.id"), nullable=False)
    assigned_from_user_id = Column(Integer, nullable=False)
    assigned_to_user_id = Column(Integer, nullable=False)
    order_no = Column(Integer, nullable=False, default=1)
    urgency = Column(String, nullable=False, default="Normal")
    assigned_at = Column(DateTime, nullable=False)
    deadline = Column(DateTime, nullable=True)
    read_status = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default="Pending")
    created_at = Column(DateTime, default=_now, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
