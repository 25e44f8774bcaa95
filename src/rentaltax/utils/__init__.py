"""Utility functions for rentaltax."""

from rentaltax.utils.date_parser import parse_date
from rentaltax.utils.amount_parser import parse_amount, parse_percentage, parse_rate

__all__ = ["parse_date", "parse_amount", "parse_percentage", "parse_rate"]
