"""Approval process configuration and approver routing."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from procureflow.database.base import Database
from procureflow.domain.entities import ApprovalProcess, ApprovalStep
from procureflow.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_assignment,
    duplicate_process_title,
    duplicate_step_order,
    process_not_found,
    step_not_found,
)

logger = logging.getLogger(__name__)


class RoutingFailureCode(str, Enum):
    PROCESS_NOT_CONFIGURED = "ProcessNotConfigured"
    APPROVER_NOT_ASSIGNED = "ApproverNotAssigned"


@dataclass(frozen=True)
class Routing:
    """Resolved first step and approver for a requester."""

    process: ApprovalProcess
    step: ApprovalStep
    approver_id: int


@dataclass(frozen=True)
class RoutingFailure:
    """Routing could not find an approver; an administrator has to fix configuration."""

    code: RoutingFailureCode
    reason: str


def first_step(process: ApprovalProcess) -> Optional[ApprovalStep]:
    """Return the step with the lowest order index.

    Routing always begins there, whatever order the steps were loaded in.
    """
    if not process.steps:
        return None
    return min(process.steps, key=lambda step: (step.order, step.id))


class ApprovalRouter:
    """Resolves who approves a requester's document at the first step."""

    def __init__(self, db: Database):
        self.db = db

    def resolve_approver(self, process_title: str, requester_id: int) -> Routing | RoutingFailure:
        """Find the first step of a process and the approver assigned to the requester.

        Args:
            process_title: Exact process title (e.g. "RFQ Approval")
            requester_id: Submitting user ID

        Returns:
            Routing, or RoutingFailure when the process is missing, has no
            steps, or nobody is assigned to the requester at the first step
        """
        process = self.db.get_approval_process_by_title(process_title)
        step = first_step(process) if process is not None else None
        if process is None or step is None:
            logger.warning("Approval process '%s' is missing or has no steps", process_title)
            return RoutingFailure(
                code=RoutingFailureCode.PROCESS_NOT_CONFIGURED,
                reason=f"No approval process or steps found for {process_title}",
            )

        approver_id = self.db.find_step_approver(step.id, requester_id)
        if approver_id is None:
            logger.warning(
                "No approver assigned for requester %s at step %s of '%s'",
                requester_id,
                step.order,
                process_title,
            )
            return RoutingFailure(
                code=RoutingFailureCode.APPROVER_NOT_ASSIGNED,
                reason=f"No approver assigned for this process step ({step.description})",
            )

        return Routing(process=process, step=step, approver_id=approver_id)


class ApprovalProcessService:
    """Service for maintaining approval processes, steps and assignments."""

    def __init__(self, db: Database):
        """Initialize approval process service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_process(self, title: str) -> int:
        """Create an approval process.

        Raises:
            ValidationError: If the title is blank
            ConflictError: If a process with this title already exists
        """
        if not title or not title.strip():
            raise ValidationError("Approval process title is required")
        title = title.strip()
        if self.db.get_approval_process_by_title(title) is not None:
            raise ConflictError(duplicate_process_title(title))
        return self.db.create_approval_process(title)

    def get_process(self, title: str) -> Optional[ApprovalProcess]:
        return self.db.get_approval_process_by_title(title)

    def add_step(self, process_title: str, order: int, description: str) -> int:
        """Add a step to a process.

        Args:
            process_title: Title of the process
            order: Order index, unique within the process (1 is the first step)
            description: Step description copied onto transactions and tasks

        Returns:
            Step ID

        Raises:
            NotFoundError: If the process doesn't exist
            ValidationError: If order is below 1
            ConflictError: If the process already has a step with this order
        """
        process = self.db.get_approval_process_by_title(process_title)
        if process is None:
            raise NotFoundError(process_not_found(process_title))
        if order < 1:
            raise ValidationError(f"Step order must be 1 or greater, got {order}")
        if any(step.order == order for step in process.steps):
            raise ConflictError(duplicate_step_order(process_title, order))
        return self.db.add_approval_step(process.id, order, description)

    def assign_approver(self, step_id: int, requester_id: int, approver_id: int) -> int:
        """Route a requester's documents to an approver at a step.

        Raises:
            NotFoundError: If the step doesn't exist
            ConflictError: If the requester already has an approver at this step
        """
        if self.db.get_approval_step(step_id) is None:
            raise NotFoundError(step_not_found(step_id))
        if self.db.find_step_approver(step_id, requester_id) is not None:
            raise ConflictError(duplicate_assignment(step_id, requester_id))
        return self.db.create_step_assignment(step_id, requester_id, approver_id)
