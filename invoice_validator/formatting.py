"""
Display helpers for amounts, dates and validation reports.
"""

from datetime import date, datetime
from typing import Union

from .dates import parse_date
from .models import Severity, ValidationReport

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "AUD": "A$",
    "CAD": "C$",
}


def format_number(value: float, decimals: int = 2) -> str:
    """Format a number with fixed decimals and thousands separators."""
    return f"{value:,.{decimals}f}"


def format_currency(amount: float, currency: str = "USD") -> str:
    """Format an amount with its currency symbol, or the code when unknown."""
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol}{format_number(amount, 2)}"


def format_date(value: Union[date, datetime, str, None]) -> str:
    """Format a date as YYYY-MM-DD."""
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")

    parsed = parse_date(value)
    if parsed is None:
        return "Invalid Date"
    return parsed.strftime("%Y-%m-%d")


def format_validation_report(report: ValidationReport) -> str:
    """Render a report as numbered, human-readable lines."""
    if not report.errors:
        return "✓ Validation passed - No errors found"

    lines = [f"✗ Validation failed - {report.error_count} error(s) found:", ""]
    for index, finding in enumerate(report.errors, start=1):
        icon = "❌" if finding.severity is Severity.ERROR else "⚠️"
        lines.append(f"{index}. {icon} [{finding.field}]")
        lines.append(f"   {finding.message}")
        lines.append("")

    return "\n".join(lines)
