"""Amount and rate parsing utilities."""

import re


def _clean(value_str: str) -> str:
    if value_str is None or not value_str.strip():
        raise ValueError("Empty amount string")
    return value_str.strip()


def parse_amount(amount_str: str) -> float:
    """Parse an amount string into a float.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Amount as float

    Raises:
        ValueError: If amount string cannot be parsed
    """
    amount_str = _clean(amount_str)

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols, including a leading "AUD"
    amount_str = re.sub(r"[$€£¥]|^AUD", "", amount_str.strip(), flags=re.IGNORECASE)

    # Remove commas
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = float(amount_str)
    except ValueError as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    return -amount if is_negative else amount


def parse_rate(rate_str: str) -> float:
    """Parse a rate into a decimal.

    "6%" and "6.5 %" are read as percentages (0.06, 0.065). A bare number
    is taken as already decimal ("0.06").

    Raises:
        ValueError: If rate string cannot be parsed
    """
    rate_str = _clean(rate_str)
    is_percent = rate_str.endswith("%")
    if is_percent:
        rate_str = rate_str[:-1].strip()

    try:
        rate = float(rate_str)
    except ValueError as e:
        raise ValueError(f"Could not parse rate '{rate_str}': {e}")
    return rate / 100 if is_percent else rate


def parse_percentage(pct_str: str) -> float:
    """Parse a 0-100 percentage such as ownership ("50", "50%") into a number."""
    pct_str = _clean(pct_str)
    if pct_str.endswith("%"):
        pct_str = pct_str[:-1].strip()
    try:
        return float(pct_str)
    except ValueError as e:
        raise ValueError(f"Could not parse percentage '{pct_str}': {e}")
