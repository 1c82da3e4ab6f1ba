# invoice_validator/__init__.py
"""
Invoice Validator - Check invoice data against business and arithmetic rules.
"""

__version__ = "1.0.0"

from .validator import validate_invoices, InvoiceValidator
from .calculations import derive_totals, round_currency, approx_equal
from .dates import check_invoice_date
from .models import (
    Invoice,
    LineItem,
    Severity,
    ValidationFinding,
    ValidationReport,
    ValidationSummary,
    InvoiceValidationResult,
    BatchValidationReport,
    InvoiceTotals,
    DateCheck,
)

__all__ = [
    'validate_invoices',
    'InvoiceValidator',
    'derive_totals',
    'round_currency',
    'approx_equal',
    'check_invoice_date',
    'Invoice',
    'LineItem',
    'Severity',
    'ValidationFinding',
    'ValidationReport',
    'ValidationSummary',
    'InvoiceValidationResult',
    'BatchValidationReport',
    'InvoiceTotals',
    'DateCheck',
]
