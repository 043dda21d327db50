"""
Naira display and input helpers.

Inputs on the calculator forms are typed with thousands separators
(e.g. "1,200,000"); these helpers format figures for display and strip the
separators back out before the numbers reach the tax engines.
"""

import re
from decimal import Decimal, ROUND_HALF_UP

NAIRA_SYMBOL = "₦"

_NON_DIGITS = re.compile(r"\D")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def _as_text(value: str | float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def format_currency(amount: float) -> str:
    """Format an amount as whole Naira, e.g. ``₦1,234,567``."""
    whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if whole < 0 else ""
    return f"{sign}{NAIRA_SYMBOL}{abs(whole):,}"


def format_percent(rate: float) -> str:
    return f"{rate:.2f}%"


def format_number_with_commas(value: str | float | int | None) -> str:
    if value is None or value == "":
        return ""
    digits = _NON_DIGITS.sub("", _as_text(value))
    if not digits:
        return ""
    return _THOUSANDS.sub(",", digits)


def parse_formatted_number(value: str | float | int | None) -> float:
    """Parse a comma-formatted input back into a number. Anything that is not a digit is dropped."""
    if value is None or value == "":
        return 0.0
    digits = _NON_DIGITS.sub("", _as_text(value))
    return float(digits) if digits else 0.0
