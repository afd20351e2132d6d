"""Tests for amount and line item parsing."""

import pytest
from decimal import Decimal

from procureflow.utils.amount_parser import parse_amount, parse_line_item


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("SAR 123.45", Decimal("123.45")),
        ("sar1,234.50", Decimal("1234.50")),
        ("$99", Decimal("99")),
        ("  7  ", Decimal("7")),
        ("-5.00", Decimal("-5.00")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2x100", (Decimal("2"), Decimal("100"))),
        ("1.5 x 40.00", (Decimal("1.5"), Decimal("40.00"))),
        ("3X1,000", (Decimal("3"), Decimal("1000"))),
        ("4*2.5", (Decimal("4"), Decimal("2.5"))),
    ],
)
def test_parse_line_item(text, expected):
    assert parse_line_item(text) == expected


@pytest.mark.parametrize("text", ["100", "x100", "2x", "2 by 100"])
def test_parse_line_item_invalid(text):
    """Test malformed items are rejected."""
    with pytest.raises(ValueError):
        parse_line_item(text)
