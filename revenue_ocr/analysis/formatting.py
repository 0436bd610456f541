"""
Number Formatting Helpers.

Rounding and thousands-grouped rendering shared by the scorer (which
looks numbers up in OCR text by their grouped form) and by the display
helper used by the CLI.
"""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up.

    Python's round() is half-to-even; dashboard figures use half-up.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


def format_grouped(value: float) -> str:
    """
    Render a number with comma thousands grouping and at most three
    fraction digits, trailing zeros dropped.

    Example:
        >>> format_grouped(12450.0)
        '12,450'
        >>> format_grouped(1234.56)
        '1,234.56'
    """
    text = f"{value:,.3f}"
    return text.rstrip('0').rstrip('.')


def format_currency(amount: float, currency: str) -> str:
    """
    Format an amount for display, e.g. "AED 12,450".

    Args:
        amount: Amount to format.
        currency: Currency code.

    Returns:
        Currency code followed by the grouped amount.
    """
    return f"{currency} {format_grouped(amount)}"
