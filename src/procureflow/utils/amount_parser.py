"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "SAR 123.45", "$123.45"
    - "1,234.56"

    Sign is preserved; rejecting negatives is left to the money rules.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols and codes
    cleaned = re.sub(r"(?i)sar|[$€£¥﷼]", "", amount_str)
    cleaned = cleaned.replace(",", "").strip()

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")


def parse_line_item(item_str: str) -> tuple[Decimal, Decimal]:
    """Parse "QUANTITYxPRICE" (e.g. "2x100" or "1.5 x 40.00") into a pair.

    Raises:
        ValueError: If the string is not in QUANTITYxPRICE form
    """
    parts = re.split(r"\s*[xX*]\s*", item_str.strip(), maxsplit=1)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Expected QUANTITYxPRICE, got '{item_str}'")
    return parse_amount(parts[0]), parse_amount(parts[1])
