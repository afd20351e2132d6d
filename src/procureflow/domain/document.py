"""Document domain service."""

from datetime import date
from typing import Any, Optional

from procureflow.database.base import Database
from procureflow.domain.entities import Document, DocumentStatus, DocumentType
from procureflow.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    document_not_draft,
    document_not_found,
)
from procureflow.domain.money import (
    MONEY_PLACES,
    QUANTITY_PLACES,
    RATE_PLACES,
    Totals,
    compute_totals,
    optional_amount,
    to_amount,
)


class DocumentService:
    """Service for building draft invoices and RFQs."""

    def __init__(self, db: Database):
        """Initialize document service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_document(
        self,
        document_type: DocumentType | str,
        document_date: date,
        created_by: int,
        cost_center_id: int,
        account_code_id: int,
        sub_cost_center_id: Optional[int] = None,
        discount_amount: Any = 0,
        vat_rate: Any = 0,
    ) -> int:
        """Create a draft document.

        Args:
            document_type: "invoice" or "rfq"
            document_date: Date used to pick the fiscal period
            created_by: Owning user ID
            cost_center_id: Cost center ID
            account_code_id: Account code ID
            sub_cost_center_id: Optional sub cost center ID
            discount_amount: Absolute discount for the whole document
            vat_rate: VAT percentage

        Returns:
            Document ID

        Raises:
            ValidationError: If the type is unknown or an amount is invalid
        """
        try:
            doc_type = DocumentType(document_type)
        except ValueError:
            raise ValidationError(f"Unknown document type '{document_type}'")

        return self.db.create_document(
            document_type=doc_type,
            document_date=document_date,
            created_by=created_by,
            cost_center_id=cost_center_id,
            account_code_id=account_code_id,
            sub_cost_center_id=sub_cost_center_id,
            discount_amount=to_amount(discount_amount, "discount", MONEY_PLACES),
            vat_rate=to_amount(vat_rate, "VAT rate", RATE_PLACES),
        )

    def add_line_item(
        self,
        document_id: int,
        quantity: Any,
        unit_price: Any,
        description: Optional[str] = None,
        tax_rate: Any = None,
    ) -> int:
        """Append a line item to a draft document.

        Args:
            document_id: Document ID
            quantity: Non-negative quantity
            unit_price: Non-negative unit price
            description: Optional description
            tax_rate: Optional VAT percentage overriding the document rate for this item

        Returns:
            Line item ID

        Raises:
            NotFoundError: If the document doesn't exist
            ConflictError: If the document is no longer Draft
            InvalidAmountError: If quantity, price or rate is negative, not numeric,
                too large, or finer than its stored scale (three places for
                quantity, two for price and rate)
        """
        document = self.db.get_document(document_id)
        if document is None:
            raise NotFoundError(document_not_found(document_id))
        if document.status != DocumentStatus.DRAFT:
            raise ConflictError(document_not_draft(document_id, document.status.value))

        return self.db.add_line_item(
            document_id=document_id,
            quantity=to_amount(quantity, "quantity", QUANTITY_PLACES),
            unit_price=to_amount(unit_price, "unit price", MONEY_PLACES),
            description=description,
            tax_rate=optional_amount(tax_rate, "tax rate", RATE_PLACES),
        )

    def get_document(self, document_id: int) -> Optional[Document]:
        """Get document by ID.

        Args:
            document_id: Document ID

        Returns:
            Document entity or None if not found
        """
        return self.db.get_document(document_id)

    def preview_totals(self, document_id: int) -> Totals:
        """Compute the document's current totals without saving anything."""
        document = self.db.get_document(document_id)
        if document is None:
            raise NotFoundError(document_not_found(document_id))
        return compute_totals(document.line_items, document.discount_amount, document.vat_rate)
