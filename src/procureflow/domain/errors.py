"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Money input that is negative, not numeric, or too large or precise to store."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or a stale status."""


class PersistenceError(DomainError):
    """Storage fault while writing; the write was rolled back."""


def invalid_amount(field: str, value: object) -> str:
    """Return message for an amount that is negative or not a number."""
    return f"Invalid {field}: {value!r} must be a non-negative number"


def too_many_places(field: str, value: object, places: int) -> str:
    """Return message for an amount finer than its stored scale."""
    return f"Invalid {field}: {value!r} has more than {places} decimal places"


def amount_too_large(field: str, value: object) -> str:
    return f"Invalid {field}: {value!r} is too large"


def document_not_found(document_id: int) -> str:
    """Return message for missing document."""
    return f"Document {document_id} not found"


def document_not_draft(document_id: int, status: str) -> str:
    """Return message when a document is no longer editable."""
    return f"Document {document_id} is {status}; only Draft documents can be changed"


def fiscal_period_not_found(period_id: int) -> str:
    """Return message for missing fiscal period."""
    return f"Fiscal period {period_id} not found"


def process_not_found(title: str) -> str:
    """Return message for missing approval process."""
    return f"Approval process '{title}' not found"


def step_not_found(step_id: int) -> str:
    """Return message for missing approval step."""
    return f"Approval step {step_id} not found"


def duplicate_process_title(title: str) -> str:
    return f"Approval process '{title}' already exists"


def duplicate_step_order(title: str, order: int) -> str:
    return f"Approval process '{title}' already has a step with order {order}"


def duplicate_assignment(step_id: int, requester_id: int) -> str:
    return f"Step {step_id} already has an approver for requester {requester_id}"


def duplicate_budget(fiscal_period_id: int, cost_center_id: int, sub_cost_center_id, account_code_id: int) -> str:
    sub = "" if sub_cost_center_id is None else f", sub cost center {sub_cost_center_id}"
    return (
        f"A budget already exists for fiscal period {fiscal_period_id}, "
        f"cost center {cost_center_id}{sub} and account code {account_code_id}"
    )
