"""Utility functions for procureflow."""

from procureflow.utils.date_parser import parse_date
from procureflow.utils.amount_parser import parse_amount, parse_line_item
from procureflow.utils.logging import configure_logging

__all__ = ["parse_date", "parse_amount", "parse_line_item", "configure_logging"]
