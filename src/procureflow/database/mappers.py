"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain keeps its enums and
tuples while the schema stores plain strings and rows.
"""

from procureflow.domain import entities as domain
from procureflow.database.models import (
    Document as ORMDocument,
    LineItem as ORMLineItem,
    FiscalPeriod as ORMFiscalPeriod,
    BudgetAllocation as ORMBudgetAllocation,
    ApprovalProcess as ORMApprovalProcess,
    ApprovalStep as ORMApprovalStep,
    ApprovalTransaction as ORMApprovalTransaction,
    Task as ORMTask,
)


def line_item_to_domain(orm_item: ORMLineItem) -> domain.LineItem:
    """Convert SQLAlchemy LineItem model to domain LineItem entity."""
    return domain.LineItem(
        id=orm_item.id,
        document_id=orm_item.document_id,
        position=orm_item.position,
        description=orm_item.description,
        quantity=orm_item.quantity,
        unit_price=orm_item.unit_price,
        tax_rate=orm_item.tax_rate,
        discount_share=orm_item.discount_share,
        discounted_amount=orm_item.discounted_amount,
        vat_amount=orm_item.vat_amount,
        total=orm_item.total,
    )


def document_to_domain(orm_document: ORMDocument) -> domain.Document:
    """Convert SQLAlchemy Document model to domain Document entity."""
    return domain.Document(
        id=orm_document.id,
        document_type=domain.DocumentType(orm_document.document_type),
        document_date=orm_document.document_date,
        discount_amount=orm_document.discount_amount,
        vat_rate=orm_document.vat_rate,
        status=domain.DocumentStatus(orm_document.status),
        created_by=orm_document.created_by,
        cost_center_id=orm_document.cost_center_id,
        sub_cost_center_id=orm_document.sub_cost_center_id,
        account_code_id=orm_document.account_code_id,
        created_at=orm_document.created_at,
        line_items=tuple(line_item_to_domain(item) for item in orm_document.line_items),
        fiscal_period_id=orm_document.fiscal_period_id,
        subtotal=orm_document.subtotal,
        discounted_subtotal=orm_document.discounted_subtotal,
        vat_amount=orm_document.vat_amount,
        total=orm_document.total,
        rounding_difference=orm_document.rounding_difference,
        finalized_at=orm_document.finalized_at,
    )


def fiscal_period_to_domain(orm_period: ORMFiscalPeriod) -> domain.FiscalPeriod:
    """Convert SQLAlchemy FiscalPeriod model to domain FiscalPeriod entity."""
    return domain.FiscalPeriod(
        id=orm_period.id,
        name=orm_period.name,
        start_date=orm_period.start_date,
        end_date=orm_period.end_date,
    )


def budget_allocation_to_domain(orm_budget: ORMBudgetAllocation) -> domain.BudgetAllocation:
    """Convert SQLAlchemy BudgetAllocation model to domain BudgetAllocation entity."""
    return domain.BudgetAllocation(
        id=orm_budget.id,
        fiscal_period_id=orm_budget.fiscal_period_id,
        cost_center_id=orm_budget.cost_center_id,
        sub_cost_center_id=orm_budget.sub_cost_center_id,
        account_code_id=orm_budget.account_code_id,
        allocated_amount=orm_budget.allocated_amount,
        status=domain.BudgetStatus(orm_budget.status),
    )


def approval_step_to_domain(orm_step: ORMApprovalStep) -> domain.ApprovalStep:
    """Convert SQLAlchemy ApprovalStep model to domain ApprovalStep entity."""
    return domain.ApprovalStep(
        id=orm_step.id,
        process_id=orm_step.process_id,
        order=orm_step.order,
        description=orm_step.description,
    )


def approval_process_to_domain(orm_process: ORMApprovalProcess) -> domain.ApprovalProcess:
    """Convert SQLAlchemy ApprovalProcess model to domain ApprovalProcess entity."""
    return domain.ApprovalProcess(
        id=orm_process.id,
        title=orm_process.title,
        steps=tuple(approval_step_to_domain(step) for step in orm_process.steps),
    )


def approval_transaction_to_domain(
    orm_transaction: ORMApprovalTransaction,
) -> domain.ApprovalTransaction:
    """Convert SQLAlchemy ApprovalTransaction model to domain entity."""
    return domain.ApprovalTransaction(
        id=orm_transaction.id,
        document_id=orm_transaction.document_id,
        requester_id=orm_transaction.requester_id,
        assigned_to=orm_transaction.assigned_to,
        order=orm_transaction.order,
        description=orm_transaction.description,
        status=orm_transaction.status,
        created_at=orm_transaction.created_at,
    )


def task_to_domain(orm_task: ORMTask) -> domain.Task:
    """Convert SQLAlchemy Task model to domain Task entity."""
    return domain.Task(
        id=orm_task.id,
        process_step_id=orm_task.process_step_id,
        process_id=orm_task.process_id,
        document_id=orm_task.document_id,
        assigned_from_user_id=orm_task.assigned_from_user_id,
        assigned_to_user_id=orm_task.assigned_to_user_id,
        order_no=orm_task.order_no,
        urgency=domain.Urgency(orm_task.urgency),
        assigned_at=orm_task.assigned_at,
        deadline=orm_task.deadline,
        read_status=orm_task.read_status,
        status=orm_task.status,
        created_at=orm_task.created_at,
    )
