"""Document finalization: validate, route and persist a submitted document.

A submission runs Validating -> Routing -> Persisting and stops at the first
stage that fails. Expected business outcomes come back as a
FinalizationFailure value; only storage faults travel as exceptions, and
those are caught at the transaction boundary.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import Callable, Mapping, Optional

from procureflow.database.base import Database, FinalizationRecord
from procureflow.domain.approval import ApprovalRouter, RoutingFailure, RoutingFailureCode
from procureflow.domain.budget import BudgetService
from procureflow.domain.entities import DocumentStatus, DocumentType, FiscalPeriod, Urgency
from procureflow.domain.errors import ConflictError, InvalidAmountError, PersistenceError
from procureflow.domain.fiscal_period import FiscalPeriodService
from procureflow.domain.money import (
    ItemBreakdown,
    Totals,
    compute_totals,
    distribute_discount,
    rounding_difference,
)

logger = logging.getLogger(__name__)

DEFAULT_PROCESS_TITLES: dict[DocumentType, str] = {
    DocumentType.RFQ: "RFQ Approval",
    DocumentType.INVOICE: "Maharat Invoice Approval",
}


class Stage(str, Enum):
    VALIDATING = "Validating"
    ROUTING = "Routing"
    PERSISTING = "Persisting"


class FailureCode(str, Enum):
    DOCUMENT_NOT_FOUND = "DocumentNotFound"
    DOCUMENT_NOT_DRAFT = "DocumentNotDraft"
    MISSING_LINE_ITEMS = "MissingLineItems"
    INVALID_AMOUNT = "InvalidAmount"
    NO_FISCAL_PERIOD = "NoFiscalPeriod"
    AMBIGUOUS_FISCAL_PERIOD = "AmbiguousFiscalPeriod"
    PERIOD_NOT_APPLICABLE = "PeriodNotApplicable"
    BUDGET_UNAVAILABLE = "BudgetUnavailable"
    PROCESS_NOT_CONFIGURED = "ProcessNotConfigured"
    APPROVER_NOT_ASSIGNED = "ApproverNotAssigned"
    PERSISTENCE_FAILURE = "PersistenceFailure"


_ROUTING_CODES = {
    RoutingFailureCode.PROCESS_NOT_CONFIGURED: FailureCode.PROCESS_NOT_CONFIGURED,
    RoutingFailureCode.APPROVER_NOT_ASSIGNED: FailureCode.APPROVER_NOT_ASSIGNED,
}


@dataclass(frozen=True)
class FinalizationFailure:
    """Why a submission stopped, and whether the submitter can fix it.

    candidates lists the fiscal periods to choose from when the date was
    ambiguous or the selected period did not contain it.
    """

    stage: Stage
    code: FailureCode
    reason: str
    correctable: bool
    candidates: tuple[FiscalPeriod, ...] = ()

    @property
    def is_configuration_error(self) -> bool:
        """True when an administrator, not the submitter, has to act."""
        return self.stage == Stage.ROUTING

    def user_message(self) -> str:
        """Message suitable for showing to the submitting user."""
        if self.is_configuration_error:
            return (
                "This document cannot be routed for approval because the approval "
                "workflow is not fully configured. Please contact an administrator."
            )
        if self.code == FailureCode.AMBIGUOUS_FISCAL_PERIOD:
            names = ", ".join(period.name for period in self.candidates)
            return f"Select one of these {len(self.candidates)} fiscal periods: {names}"
        if self.code == FailureCode.PERSISTENCE_FAILURE:
            return "The document could not be saved. Nothing was changed; please try again."
        return self.reason


@dataclass(frozen=True)
class FinalizationResult:
    """A document that is now pending approval."""

    document_id: int
    transaction_id: int
    task_id: int
    approver_id: int
    fiscal_period: FiscalPeriod
    totals: Totals
    items: tuple[ItemBreakdown, ...]
    rounding_difference: Decimal


class FinalizationService:
    """Finalizes draft documents and routes them to their first approver."""

    def __init__(
        self,
        db: Database,
        process_titles: Optional[Mapping[DocumentType, str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize finalization service.

        Args:
            db: Database instance
            process_titles: Approval process title per document type,
                overriding DEFAULT_PROCESS_TITLES
            clock: Returns the current time; defaults to UTC now
        """
        self.db = db
        self.process_titles = {**DEFAULT_PROCESS_TITLES, **(process_titles or {})}
        self.clock = clock or (lambda: datetime.now(UTC))
        self.periods = FiscalPeriodService(db)
        self.budgets = BudgetService(db)
        self.router = ApprovalRouter(db)

    def finalize(
        self,
        document_id: int,
        submitted_by: int,
        fiscal_period_id: Optional[int] = None,
    ) -> FinalizationResult | FinalizationFailure:
        """Submit a draft document for approval.

        Args:
            document_id: Draft document ID
            submitted_by: Authenticated requester user ID
            fiscal_period_id: Explicit fiscal period choice, needed when the
                document date falls in more than one period

        Returns:
            FinalizationResult on success, FinalizationFailure otherwise. On
            failure nothing has been written and the document is still Draft.
        """
        logger.info("Finalizing document %s for user %s", document_id, submitted_by)

        # Validating
        document = self.db.get_document(document_id)
        if document is None:
            return self._fail(
                Stage.VALIDATING, FailureCode.DOCUMENT_NOT_FOUND, f"Document {document_id} not found", False
            )
        if document.status != DocumentStatus.DRAFT:
            return self._fail(
                Stage.VALIDATING,
                FailureCode.DOCUMENT_NOT_DRAFT,
                f"Document {document_id} has already been submitted ({document.status.value})",
                False,
            )
        if not document.line_items:
            return self._fail(
                Stage.VALIDATING,
                FailureCode.MISSING_LINE_ITEMS,
                "Add at least one line item before submitting",
                True,
            )

        try:
            totals = compute_totals(document.line_items, document.discount_amount, document.vat_rate)
            items = distribute_discount(document.line_items, document.discount_amount, document.vat_rate)
        except InvalidAmountError as e:
            return self._fail(Stage.VALIDATING, FailureCode.INVALID_AMOUNT, str(e), True)

        candidates = tuple(self.periods.resolve_periods(document.document_date))
        period_or_failure = self._select_period(document.document_date, candidates, fiscal_period_id)
        if isinstance(period_or_failure, FinalizationFailure):
            return period_or_failure
        period = period_or_failure

        budget = self.budgets.validate(
            fiscal_period_id=period.id,
            cost_center_id=document.cost_center_id,
            sub_cost_center_id=document.sub_cost_center_id,
            account_code_id=document.account_code_id,
        )
        if not budget.ok:
            return self._fail(Stage.VALIDATING, FailureCode.BUDGET_UNAVAILABLE, budget.reason, True)

        # Routing
        process_title = self.process_titles[document.document_type]
        routing = self.router.resolve_approver(process_title, submitted_by)
        if isinstance(routing, RoutingFailure):
            return self._fail(Stage.ROUTING, _ROUTING_CODES[routing.code], routing.reason, False)

        # Persisting
        difference = rounding_difference(totals, items)
        if difference:
            logger.info(
                "Document %s: item totals differ from document total by %s (rounding)",
                document_id,
                difference,
            )

        record = FinalizationRecord(
            document_id=document.id,
            fiscal_period_id=period.id,
            totals=totals,
            items=tuple((item.id, breakdown) for item, breakdown in zip(document.line_items, items)),
            rounding_difference=difference,
            finalized_at=self.clock(),
            requester_id=submitted_by,
            approver_id=routing.approver_id,
            process_id=routing.process.id,
            step_id=routing.step.id,
            step_order=routing.step.order,
            step_description=routing.step.description,
            urgency=Urgency.NORMAL,
        )
        try:
            transaction_id, task_id = self.db.record_finalization(record)
        except ConflictError as e:
            return self._fail(Stage.PERSISTING, FailureCode.DOCUMENT_NOT_DRAFT, str(e), False)
        except PersistenceError as e:
            return self._fail(Stage.PERSISTING, FailureCode.PERSISTENCE_FAILURE, str(e), False)

        logger.info(
            "Document %s pending approval: transaction %s, task %s for approver %s",
            document_id,
            transaction_id,
            task_id,
            routing.approver_id,
        )
        return FinalizationResult(
            document_id=document.id,
            transaction_id=transaction_id,
            task_id=task_id,
            approver_id=routing.approver_id,
            fiscal_period=period,
            totals=totals,
            items=tuple(items),
            rounding_difference=difference,
        )

    def _select_period(
        self,
        document_date: date,
        candidates: tuple[FiscalPeriod, ...],
        fiscal_period_id: Optional[int],
    ) -> FiscalPeriod | FinalizationFailure:
        if fiscal_period_id is not None:
            for period in candidates:
                if period.id == fiscal_period_id:
                    return period
            return self._fail(
                Stage.VALIDATING,
                FailureCode.PERIOD_NOT_APPLICABLE,
                f"The selected fiscal period does not contain the document date {document_date}",
                True,
                candidates,
            )
        if not candidates:
            return self._fail(
                Stage.VALIDATING,
                FailureCode.NO_FISCAL_PERIOD,
                f"The document date {document_date} is outside every fiscal period",
                True,
            )
        if len(candidates) > 1:
            return self._fail(
                Stage.VALIDATING,
                FailureCode.AMBIGUOUS_FISCAL_PERIOD,
                f"The document date {document_date} falls in {len(candidates)} fiscal periods",
                True,
                candidates,
            )
        return candidates[0]

    def _fail(
        self,
        stage: Stage,
        code: FailureCode,
        reason: str,
        correctable: bool,
        candidates: tuple[FiscalPeriod, ...] = (),
    ) -> FinalizationFailure:
        # A lost Draft race also stops at Persisting; only storage faults are errors
        log = logger.error if code == FailureCode.PERSISTENCE_FAILURE else logger.warning
        log("Finalization stopped at %s: %s (%s)", stage.value, code.value, reason)
        return FinalizationFailure(
            stage=stage, code=code, reason=reason, correctable=correctable, candidates=candidates
        )
