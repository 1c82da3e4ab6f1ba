"""
Invoice arithmetic.
Derives subtotal, tax and total from line items and compares amounts
within a fixed currency tolerance.
"""

import math
from typing import Iterable, Optional

from .models import InvoiceTotals, LineItem

# Two amounts closer than this are treated as equal (currency units)
TOLERANCE = 0.01


def sum_line_items(items: Optional[Iterable[LineItem]]) -> float:
    """Sum quantity * unit_price over all items, in input order."""
    if not items:
        return 0.0
    subtotal = 0.0
    for item in items:
        subtotal += item.quantity * item.unit_price
    return subtotal


def apply_tax_rate(subtotal: float, tax_rate_percent: float) -> float:
    """Tax on ``subtotal`` for a percentage rate (10 means 10%)."""
    return subtotal * tax_rate_percent / 100


def sum_subtotal_and_tax(subtotal: float, tax: float) -> float:
    return subtotal + tax


def round_currency(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return math.copysign(math.floor(abs(value) * 100 + 0.5), value) / 100


def derive_totals(items: Optional[Iterable[LineItem]], tax_rate_percent: float) -> InvoiceTotals:
    """
    Calculate all invoice totals at once.

    Each amount is rounded on its own; tax and total are computed from the
    unrounded subtotal.
    """
    subtotal = sum_line_items(items)
    tax_amount = apply_tax_rate(subtotal, tax_rate_percent)
    total = sum_subtotal_and_tax(subtotal, tax_amount)

    return InvoiceTotals(
        subtotal=round_currency(subtotal),
        tax_amount=round_currency(tax_amount),
        total=round_currency(total),
    )


def approx_equal(a: float, b: float, tolerance: float = TOLERANCE) -> bool:
    """True when ``a`` and ``b`` differ by no more than ``tolerance``."""
    return abs(a - b) <= tolerance
