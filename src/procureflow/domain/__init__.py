"""Domain layer for procureflow application.

Services live in their own modules (procureflow.domain.finalization and
friends) and are imported from there; this package only re-exports the
dependency-free parts so that the database layer can import entities
without a cycle.
"""

from procureflow.domain.entities import (
    Document,
    DocumentStatus,
    DocumentType,
    FiscalPeriod,
    LineItem,
)
from procureflow.domain.money import Totals, compute_totals

__all__ = [
    "Document",
    "DocumentStatus",
    "DocumentType",
    "FiscalPeriod",
    "LineItem",
    "Totals",
    "compute_totals",
]
