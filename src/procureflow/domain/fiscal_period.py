"""Fiscal period domain service."""

import logging
from datetime import date

from procureflow.database.base import Database
from procureflow.domain.entities import FiscalPeriod
from procureflow.domain.errors import ValidationError

logger = logging.getLogger(__name__)


def _specificity(period: FiscalPeriod) -> tuple[int, date, int]:
    return ((period.end_date - period.start_date).days, period.start_date, period.id)


class FiscalPeriodService:
    """Service for fiscal periods and for classifying dates into them."""

    def __init__(self, db: Database):
        """Initialize fiscal period service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_period(self, name: str, start_date: date, end_date: date) -> int:
        """Create a fiscal period covering [start_date, end_date).

        Overlapping periods are allowed; resolve_periods reports them all.

        Returns:
            Fiscal period ID

        Raises:
            ValidationError: If the name is blank or start_date is not before end_date
        """
        if not name or not name.strip():
            raise ValidationError("Fiscal period name is required")
        if start_date >= end_date:
            raise ValidationError(
                f"Fiscal period start {start_date} must be before its end {end_date}"
            )
        return self.db.create_fiscal_period(name=name.strip(), start_date=start_date, end_date=end_date)

    def resolve_periods(self, document_date: date) -> list[FiscalPeriod]:
        """Find every fiscal period containing a date.

        The result is ordered most specific first (shortest span, then
        earliest start). No period is picked here: an empty list means the
        date is outside every period and more than one entry means the
        caller has to choose.

        Args:
            document_date: Date to classify

        Returns:
            Containing fiscal periods
        """
        periods = sorted(self.db.find_fiscal_periods_containing(document_date), key=_specificity)
        logger.debug("Date %s falls in %d fiscal period(s)", document_date, len(periods))
        return periods
