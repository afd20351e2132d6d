"""Monetary calculations for documents and their line items.

Everything here is pure Decimal arithmetic rounded half-up to two places, so
recomputing a draft any number of times produces identical figures.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from procureflow.domain.entities import LineItem
from procureflow.domain.errors import InvalidAmountError, amount_too_large, invalid_amount, too_many_places
from procureflow.domain.rounding import round2

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

# Scales of the stored columns
QUANTITY_PLACES = 3
MONEY_PLACES = 2
RATE_PLACES = 2

# Money columns hold twelve integer digits
MAX_AMOUNT = Decimal("1e12")


@dataclass(frozen=True)
class Totals:
    """Document-level figures."""

    subtotal: Decimal
    discount_amount: Decimal
    discounted_subtotal: Decimal
    vat_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class ItemBreakdown:
    """Per-item figures after the discount has been spread across items."""

    subtotal: Decimal
    discount_share: Decimal
    discounted_amount: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal


def to_amount(value: Any, field: str = "amount", places: Optional[int] = None) -> Decimal:
    """Convert user input to a non-negative Decimal.

    Floats go through their string form so the binary representation never
    reaches the arithmetic (0.1 becomes Decimal("0.1")).

    Args:
        value: Decimal, int, float or numeric string
        field: Field name used in the error message
        places: Most decimal places allowed; trailing zeros don't count.
            None allows any scale.

    Returns:
        Decimal value

    Raises:
        InvalidAmountError: If the value is missing, not numeric, not finite,
            negative, at least MAX_AMOUNT, or finer than places
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(invalid_amount(field, value))

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmountError(invalid_amount(field, value))
    else:
        raise InvalidAmountError(invalid_amount(field, value))

    if not amount.is_finite() or amount < 0:
        raise InvalidAmountError(invalid_amount(field, value))
    if amount >= MAX_AMOUNT:
        raise InvalidAmountError(amount_too_large(field, value))
    if places is not None and amount != amount.quantize(Decimal(1).scaleb(-places)):
        raise InvalidAmountError(too_many_places(field, value, places))
    return amount


def line_subtotal(quantity: Any, unit_price: Any) -> Decimal:
    """Return round2(quantity * unit_price) after validating both inputs."""
    return round2(to_amount(quantity, "quantity") * to_amount(unit_price, "unit price"))


def compute_totals(line_items: Sequence[LineItem], discount_amount: Any, vat_rate: Any) -> Totals:
    """Compute subtotal, discount, VAT and total for a document.

    The discount is absolute and never drives the total below zero.

    Args:
        line_items: Items with quantity and unit_price
        discount_amount: Absolute discount for the whole document
        vat_rate: VAT percentage (15 means 15%)

    Returns:
        Totals

    Raises:
        InvalidAmountError: If any quantity, price, discount or rate is
            negative, not numeric or too large to hold
    """
    discount = to_amount(discount_amount, "discount")
    rate = to_amount(vat_rate, "VAT rate")

    subtotal = sum((line_subtotal(item.quantity, item.unit_price) for item in line_items), ZERO)
    discounted = round2(max(subtotal - discount, ZERO))
    vat_amount = round2(discounted * rate / HUNDRED)

    return Totals(
        subtotal=subtotal,
        discount_amount=discount,
        discounted_subtotal=discounted,
        vat_amount=vat_amount,
        total=discounted + vat_amount,
    )


def distribute_discount(
    line_items: Sequence[LineItem], discount_amount: Any, vat_rate: Any
) -> list[ItemBreakdown]:
    """Spread the document discount equally across items.

    Every item gets discount / count regardless of its value. An item's
    tax_rate overrides the document VAT rate for that item. The sum of item
    totals may differ from the document total by rounding; see
    rounding_difference().
    """
    discount = to_amount(discount_amount, "discount")
    rate = to_amount(vat_rate, "VAT rate")
    if not line_items:
        return []

    share = discount / len(line_items)
    breakdown = []
    for item in line_items:
        subtotal = line_subtotal(item.quantity, item.unit_price)
        item_rate = rate if item.tax_rate is None else to_amount(item.tax_rate, "tax rate")
        discounted = round2(max(subtotal - share, ZERO))
        vat_amount = round2(discounted * item_rate / HUNDRED)
        breakdown.append(
            ItemBreakdown(
                subtotal=subtotal,
                discount_share=round2(share),
                discounted_amount=discounted,
                vat_rate=item_rate,
                vat_amount=vat_amount,
                total=discounted + vat_amount,
            )
        )
    return breakdown


def rounding_difference(totals: Totals, breakdown: Sequence[ItemBreakdown]) -> Decimal:
    """Return document total minus the sum of item totals."""
    return totals.total - sum((item.total for item in breakdown), ZERO)


def optional_amount(value: Any, field: str, places: Optional[int] = None) -> Optional[Decimal]:
    """Like to_amount but passes None through."""
    if value is None:
        return None
    return to_amount(value, field, places)
