"""
Validation module for invoices.
Implements required-field, date, line item and arithmetic rules.
"""

import logging
import re
from collections import Counter
from datetime import datetime
from typing import List

from .calculations import TOLERANCE, apply_tax_rate, approx_equal, sum_line_items, sum_subtotal_and_tax
from .dates import Clock, check_invoice_date
from .models import (
    BatchValidationReport,
    Invoice,
    InvoiceValidationResult,
    Severity,
    ValidationFinding,
    ValidationReport,
    ValidationSummary,
)

logger = logging.getLogger(__name__)

# (wire name, attribute name)
REQUIRED_FIELDS = [
    ("invoiceNumber", "invoice_number"),
    ("invoiceDate", "invoice_date"),
    ("vendorName", "vendor_name"),
    ("customerName", "customer_name"),
]

_INDEX_RE = re.compile(r"\[\d+\]")


class InvoiceValidator:
    """Validates invoices against business rules."""

    def __init__(self, clock: Clock = datetime.now, tolerance: float = TOLERANCE):
        """
        Initialize validator.

        Args:
            clock: Source of the current time for the future-date rule
            tolerance: Largest difference at which amounts still match
        """
        self.clock = clock
        self.tolerance = tolerance

    def validate(self, invoice: Invoice) -> ValidationReport:
        """
        Validate a single invoice against all rules.

        Every pass runs regardless of earlier findings.

        Args:
            invoice: Invoice object to validate

        Returns:
            ValidationReport with findings in pass order
        """
        findings: List[ValidationFinding] = []

        findings.extend(self._check_required_fields(invoice))
        findings.extend(self._check_date(invoice))
        findings.extend(self._check_line_items(invoice))
        findings.extend(self._check_calculations(invoice))

        report = ValidationReport.from_findings(findings)
        logger.debug(
            "Validated invoice %s: %d finding(s)",
            invoice.invoice_number or "UNKNOWN",
            report.error_count,
        )
        return report

    def validate_batch(self, invoices: List[Invoice]) -> BatchValidationReport:
        """
        Validate a batch of invoices.

        Args:
            invoices: List of Invoice objects to validate

        Returns:
            BatchValidationReport with summary and individual results
        """
        results = []
        error_counts: Counter = Counter()

        for invoice in invoices:
            report = self.validate(invoice)
            results.append(InvoiceValidationResult(
                invoice_id=invoice.invoice_number or "UNKNOWN",
                report=report
            ))

            # Count per field, collapsing line item indexes
            for finding in report.errors:
                error_counts[_INDEX_RE.sub("[]", finding.field)] += 1

        valid_count = sum(1 for r in results if r.report.is_valid)

        summary = ValidationSummary(
            total_invoices=len(results),
            valid_invoices=valid_count,
            invalid_invoices=len(results) - valid_count,
            error_counts=dict(error_counts)
        )
        logger.info(
            "Validated %d invoice(s): %d valid, %d invalid",
            summary.total_invoices,
            summary.valid_invoices,
            summary.invalid_invoices,
        )

        return BatchValidationReport(
            summary=summary,
            results=results,
            timestamp=self.clock().isoformat()
        )

    def _check_required_fields(self, invoice: Invoice) -> List[ValidationFinding]:
        """Check that identifying text fields are present and not blank."""
        findings = []

        for name, attr in REQUIRED_FIELDS:
            value = getattr(invoice, attr)
            if value is None or value.strip() == "":
                findings.append(ValidationFinding(
                    field=name,
                    message=f"{name} is required",
                    severity=Severity.ERROR
                ))

        logger.debug("Required field pass: %d finding(s)", len(findings))
        return findings

    def _check_date(self, invoice: Invoice) -> List[ValidationFinding]:
        """Check that the invoice date is real and not in the future."""
        result = check_invoice_date(invoice.invoice_date, clock=self.clock)
        if result.is_valid:
            return []

        logger.debug("Date pass rejected %r: %s", invoice.invoice_date, result.message)
        return [ValidationFinding(
            field="invoiceDate",
            message=result.message,
            severity=Severity.ERROR
        )]

    def _check_line_items(self, invoice: Invoice) -> List[ValidationFinding]:
        """Check that line items exist and each one is well formed."""
        if not invoice.line_items:
            return [ValidationFinding(
                field="lineItems",
                message="Invoice must have at least one line item",
                severity=Severity.ERROR
            )]

        findings = []
        for index, item in enumerate(invoice.line_items):
            position = index + 1

            if not item.description or item.description.strip() == "":
                findings.append(ValidationFinding(
                    field=f"lineItems[{index}].description",
                    message=f"Line item {position} missing description",
                    severity=Severity.ERROR
                ))

            if not item.quantity > 0:
                findings.append(ValidationFinding(
                    field=f"lineItems[{index}].quantity",
                    message=f"Line item {position} must have quantity greater than 0",
                    severity=Severity.ERROR
                ))

            if not item.unit_price >= 0:
                findings.append(ValidationFinding(
                    field=f"lineItems[{index}].unitPrice",
                    message=f"Line item {position} cannot have negative price",
                    severity=Severity.ERROR
                ))

        logger.debug("Line item pass: %d finding(s)", len(findings))
        return findings

    def _check_calculations(self, invoice: Invoice) -> List[ValidationFinding]:
        """
        Check subtotal, tax and total against values derived from line items.

        The expected subtotal is the raw sum, not rounded to cents. A tax
        mismatch is only a warning.
        """
        findings = []

        expected_subtotal = sum_line_items(invoice.line_items)
        if not approx_equal(invoice.subtotal, expected_subtotal, self.tolerance):
            findings.append(ValidationFinding(
                field="subtotal",
                message=(
                    f"Subtotal mismatch. Expected: {expected_subtotal:.2f}, "
                    f"Got: {invoice.subtotal:.2f}"
                ),
                severity=Severity.ERROR
            ))

        expected_tax = apply_tax_rate(expected_subtotal, invoice.tax_rate)
        if not approx_equal(invoice.tax_amount, expected_tax, self.tolerance):
            findings.append(ValidationFinding(
                field="taxAmount",
                message=(
                    f"Tax calculation incorrect. Expected: {expected_tax:.2f}, "
                    f"Got: {invoice.tax_amount:.2f}"
                ),
                severity=Severity.WARNING
            ))

        expected_total = sum_subtotal_and_tax(expected_subtotal, expected_tax)
        if not approx_equal(invoice.total, expected_total, self.tolerance):
            findings.append(ValidationFinding(
                field="total",
                message=(
                    f"Total mismatch. Expected: {expected_total:.2f}, "
                    f"Got: {invoice.total:.2f}"
                ),
                severity=Severity.ERROR
            ))

        logger.debug("Calculation pass: %d finding(s)", len(findings))
        return findings


def validate_invoices(invoices: List[Invoice], clock: Clock = datetime.now) -> BatchValidationReport:
    """
    Convenience function to validate a list of invoices.

    Args:
        invoices: List of Invoice objects
        clock: Source of the current time

    Returns:
        BatchValidationReport with summary and results
    """
    validator = InvoiceValidator(clock=clock)
    return validator.validate_batch(invoices)
