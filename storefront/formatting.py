# storefront/formatting.py
import html
import math
from decimal import Decimal
from numbers import Real
from typing import Any, Union

from .config import NAIRA_TO_USD

Number = Union[int, float]


def as_number(value: Any) -> Number:
    """
    Coerce an untrusted value to a finite number, 0 when that is not possible.

    Integral results come back as ``int`` so they serialize without ``.0``.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return 0
        try:
            value = float(text)
        except ValueError:
            return 0
    if not isinstance(value, (Real, Decimal)):
        return 0

    number = float(value)
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def format_naira(amount: Any) -> str:
    """110000 -> "110,000"; at most three fraction digits."""
    number = as_number(amount)
    try:
        if isinstance(number, int):
            return f"{number:,}"
        text = f"{number:,.3f}".rstrip("0").rstrip(".")
    except ValueError:
        # Integer too long to render as text
        return "0"
    return "0" if text in ("-0", "") else text


def naira_to_usd(amount: Any) -> str:
    return f"{as_number(amount) / NAIRA_TO_USD:.2f}"


def escape_html(value: Any) -> str:
    if value is None:
        return ""
    return html.escape(str(value), quote=True)
