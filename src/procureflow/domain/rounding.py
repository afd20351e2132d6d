"""Cent rounding shared by entities and the money calculator."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from procureflow.domain.errors import InvalidAmountError

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Round to cents, half-up.

    Raises:
        InvalidAmountError: If the value has too many digits to be held to
            the cent
    """
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidAmountError(f"Amount {value} is too large")
