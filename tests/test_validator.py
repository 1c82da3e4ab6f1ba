from datetime import datetime

from invoice_validator.models import Invoice, LineItem, Severity
from invoice_validator.validator import InvoiceValidator, validate_invoices


def _fields(findings):
    return [f.field for f in findings]


def test_valid_invoice_passes(valid_invoice, fixed_clock):
    report = InvoiceValidator(clock=fixed_clock).validate(valid_invoice)

    assert report.is_valid
    assert report.errors == []
    assert report.error_count == 0


def test_invalid_invoice_reports_every_pass_in_order(fixed_clock):
    invoice = Invoice(
        invoice_number="",
        invoice_date="2024-01-15",
        vendor_name="ABC Company",
        customer_name="",
        line_items=[
            LineItem(description="Laptop", quantity=2, unit_price=1000, line_total=2000),
            LineItem(description="", quantity=-1, unit_price=25, line_total=125),
        ],
        subtotal=2125,
        tax_rate=10,
        tax_amount=100,
        total=1099,
        currency="USD",
    )

    report = InvoiceValidator(clock=fixed_clock).validate(invoice)

    assert not report.is_valid
    assert report.error_count == 7
    assert _fields(report.errors) == [
        "invoiceNumber",
        "customerName",
        "lineItems[1].description",
        "lineItems[1].quantity",
        "subtotal",
        "taxAmount",
        "total",
    ]
    severities = {f.field: f.severity for f in report.errors}
    assert severities["taxAmount"] is Severity.WARNING
    assert severities["subtotal"] is Severity.ERROR
    assert severities["total"] is Severity.ERROR
    assert report.has_errors and report.has_warnings


def test_missing_and_blank_required_fields(fixed_clock):
    invoice = Invoice(invoice_number="   ", vendor_name="ABC Company")

    findings = InvoiceValidator(clock=fixed_clock)._check_required_fields(invoice)

    assert _fields(findings) == ["invoiceNumber", "invoiceDate", "customerName"]
    assert findings[0].message == "invoiceNumber is required"
    assert all(f.severity is Severity.ERROR for f in findings)


def test_required_fields_present(valid_invoice, fixed_clock):
    assert InvoiceValidator(clock=fixed_clock)._check_required_fields(valid_invoice) == []


def test_date_pass_rejects_future_date(valid_invoice, fixed_clock):
    invoice = valid_invoice.model_copy(update={"invoice_date": "2024-06-16"})

    report = InvoiceValidator(clock=fixed_clock).validate(invoice)

    assert _fields(report.errors) == ["invoiceDate"]
    assert report.errors[0].message == "Invoice date cannot be in the future"


def test_date_pass_rejects_invalid_date(valid_invoice, fixed_clock):
    invoice = valid_invoice.model_copy(update={"invoice_date": "2024-02-30"})

    report = InvoiceValidator(clock=fixed_clock).validate(invoice)

    assert _fields(report.errors) == ["invoiceDate"]
    assert "not a valid date" in report.errors[0].message


def test_missing_date_reported_by_required_and_date_passes(valid_invoice, fixed_clock):
    invoice = valid_invoice.model_copy(update={"invoice_date": None})

    report = InvoiceValidator(clock=fixed_clock).validate(invoice)

    assert _fields(report.errors) == ["invoiceDate", "invoiceDate"]
    assert report.errors[0].message == "invoiceDate is required"
    assert report.errors[1].message == "Invoice date is not a valid date"


def test_empty_line_items_stop_item_checks_but_calculations_run(fixed_clock):
    invoice = Invoice(
        invoice_number="INV-002",
        invoice_date="2024-01-15",
        vendor_name="ABC Company",
        customer_name="XYZ Corp",
        line_items=[],
        subtotal=50,
    )

    report = InvoiceValidator(clock=fixed_clock).validate(invoice)

    assert _fields(report.errors) == ["lineItems", "subtotal"]
    assert "at least one line item" in report.errors[0].message
    assert report.errors[1].message == "Subtotal mismatch. Expected: 0.00, Got: 50.00"


def test_empty_line_items_with_zero_amounts(fixed_clock):
    invoice = Invoice(
        invoice_number="INV-002",
        invoice_date="2024-01-15",
        vendor_name="ABC Company",
        customer_name="XYZ Corp",
    )

    report = InvoiceValidator(clock=fixed_clock).validate(invoice)

    assert report.error_count == 1
    assert report.errors[0].field == "lineItems"


def test_line_item_checks_are_independent(fixed_clock):
    invoice = Invoice(line_items=[
        LineItem(description="Item", quantity=1, unit_price=10),
        LineItem(description=" ", quantity=0, unit_price=-10),
    ])

    findings = InvoiceValidator(clock=fixed_clock)._check_line_items(invoice)

    assert _fields(findings) == [
        "lineItems[1].description",
        "lineItems[1].quantity",
        "lineItems[1].unitPrice",
    ]
    assert findings[0].message == "Line item 2 missing description"
    assert "greater than 0" in findings[1].message
    assert "negative" in findings[2].message


def test_calculations_detect_incorrect_subtotal(fixed_clock):
    invoice = Invoice(
        line_items=[LineItem(description="Item", quantity=2, unit_price=50)],
        subtotal=90,
        tax_rate=10,
        tax_amount=10,
        total=110,
    )

    findings = InvoiceValidator(clock=fixed_clock)._check_calculations(invoice)

    assert _fields(findings) == ["subtotal"]
    assert findings[0].message == "Subtotal mismatch. Expected: 100.00, Got: 90.00"


def test_calculations_tax_mismatch_is_warning(fixed_clock):
    invoice = Invoice(
        line_items=[LineItem(description="Item", quantity=2, unit_price=50)],
        subtotal=100,
        tax_rate=10,
        tax_amount=5,
        total=110,
    )

    findings = InvoiceValidator(clock=fixed_clock)._check_calculations(invoice)

    assert _fields(findings) == ["taxAmount"]
    assert findings[0].severity is Severity.WARNING
    assert findings[0].message == "Tax calculation incorrect. Expected: 10.00, Got: 5.00"


def test_calculations_within_tolerance(valid_invoice, fixed_clock):
    invoice = valid_invoice.model_copy(update={"subtotal": 2125.005, "total": 2337.495})

    assert InvoiceValidator(clock=fixed_clock)._check_calculations(invoice) == []


def test_calculations_compare_against_unrounded_subtotal(fixed_clock):
    # Raw subtotal is 1.005; rounded to 1.01 it would fall outside the tolerance
    invoice = Invoice(
        line_items=[LineItem(description="Item", quantity=3, unit_price=0.335)],
        subtotal=1.00,
        total=1.00,
    )

    assert InvoiceValidator(clock=fixed_clock)._check_calculations(invoice) == []


def test_validate_does_not_mutate_invoice(valid_invoice, fixed_clock):
    before = valid_invoice.model_dump()
    InvoiceValidator(clock=fixed_clock).validate(valid_invoice)
    assert valid_invoice.model_dump() == before


def test_validate_batch_summary(valid_invoice, fixed_clock):
    bad = valid_invoice.model_copy(update={
        "invoice_number": "INV-BAD",
        "line_items": [
            LineItem(description="", quantity=0, unit_price=10),
            LineItem(description="Ok", quantity=-2, unit_price=10),
        ],
    })

    report = InvoiceValidator(clock=fixed_clock).validate_batch([valid_invoice, bad])

    assert report.summary.total_invoices == 2
    assert report.summary.valid_invoices == 1
    assert report.summary.invalid_invoices == 1
    assert report.summary.error_counts["lineItems[].quantity"] == 2
    assert report.summary.error_counts["lineItems[].description"] == 1
    assert [r.invoice_id for r in report.results] == ["INV-001", "INV-BAD"]
    assert report.timestamp == "2024-06-15T14:30:00"


def test_validate_invoices_unknown_id(fixed_clock):
    report = validate_invoices([Invoice()], clock=fixed_clock)

    assert report.results[0].invoice_id == "UNKNOWN"
    assert not report.results[0].report.is_valid


def test_validator_is_reusable(valid_invoice):
    validator = InvoiceValidator(clock=lambda: datetime(2024, 6, 15))
    first = validator.validate(valid_invoice)
    second = validator.validate(valid_invoice)
    assert first == second


def test_nan_amounts_are_reported(fixed_clock):
    nan = float("nan")
    invoice = Invoice.model_construct(
        invoice_number="INV-NAN",
        invoice_date="2024-01-15",
        vendor_name="ABC Company",
        customer_name="XYZ Corp",
        line_items=[LineItem.model_construct(description="Item", quantity=nan, unit_price=nan, line_total=0)],
        subtotal=nan,
        tax_rate=10,
        tax_amount=nan,
        total=nan,
    )

    report = InvoiceValidator(clock=fixed_clock).validate(invoice)

    assert not report.is_valid
    assert _fields(report.errors) == [
        "lineItems[0].quantity",
        "lineItems[0].unitPrice",
        "subtotal",
        "taxAmount",
        "total",
    ]
