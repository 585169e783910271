"""Utility functions for drivetally."""

from drivetally.utils.date_parser import parse_date, get_date_range
from drivetally.utils.amount_parser import parse_amount, to_decimal

__all__ = ["parse_date", "get_date_range", "parse_amount", "to_decimal"]
