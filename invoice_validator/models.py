"""
Data models for invoice validation.
Uses Pydantic for data normalization and serialization.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


class LineItem(_WireModel):
    """Represents a single billable line on an invoice."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "description": "Laptop",
                "quantity": 2,
                "unitPrice": 1000.0,
                "lineTotal": 2000.0
            }
        },
    )

    description: str = Field(default="", description="Item description")
    quantity: float = Field(default=0, description="Quantity billed")
    unit_price: float = Field(default=0, description="Price per unit")
    line_total: float = Field(default=0, description="Line total as printed, not trusted")

    def calculate_total(self) -> float:
        """Line total recomputed from quantity and unit price."""
        return self.quantity * self.unit_price


class Invoice(_WireModel):
    """Represents a complete invoice as supplied by the caller."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "invoiceNumber": "INV-001",
                "invoiceDate": "2024-01-15",
                "vendorName": "ABC Company",
                "customerName": "XYZ Corp",
                "lineItems": [
                    {"description": "Laptop", "quantity": 2, "unitPrice": 1000, "lineTotal": 2000},
                    {"description": "Mouse", "quantity": 5, "unitPrice": 25, "lineTotal": 125}
                ],
                "subtotal": 2125.0,
                "taxRate": 10.0,
                "taxAmount": 212.5,
                "total": 2337.5,
                "currency": "USD"
            }
        },
    )

    # Identifiers and parties; None means the field was never supplied
    invoice_number: Optional[str] = Field(default=None, description="Invoice identifier")
    invoice_date: Optional[str] = Field(default=None, description="Invoice date (ISO format)")
    vendor_name: Optional[str] = Field(default=None, description="Vendor name")
    customer_name: Optional[str] = Field(default=None, description="Customer name")

    line_items: List[LineItem] = Field(default_factory=list, description="Billed line items")

    # Financial
    subtotal: float = Field(default=0, description="Total before tax")
    tax_rate: float = Field(default=0, description="Tax percentage, e.g. 10 for 10%")
    tax_amount: float = Field(default=0, description="Tax amount")
    total: float = Field(default=0, description="Total including tax")

    currency: str = Field(default="AUD", description="Currency code, informational only")
    payment_terms: str = Field(default="", description="Payment terms, informational only")


class Severity(str, Enum):
    """Severity levels for validation findings."""

    ERROR = "error"
    WARNING = "warning"


class ValidationFinding(_WireModel):
    """A single detected validation issue."""

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Offending field, e.g. 'subtotal' or 'lineItems[0].quantity'")
    message: str = Field(description="Human-readable explanation")
    severity: Severity = Field(default=Severity.ERROR, description="error or warning")


class ValidationReport(_WireModel):
    """Validation outcome for a single invoice."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "isValid": False,
                "errors": [
                    {
                        "field": "customerName",
                        "message": "customerName is required",
                        "severity": "error"
                    }
                ],
                "errorCount": 1
            }
        },
    )

    is_valid: bool = Field(description="True when no findings were produced")
    errors: List[ValidationFinding] = Field(default_factory=list, description="Findings in pass order")
    error_count: int = Field(default=0, description="Number of findings")

    @classmethod
    def from_findings(cls, findings: List[ValidationFinding]) -> "ValidationReport":
        return cls(is_valid=not findings, errors=list(findings), error_count=len(findings))

    @property
    def has_errors(self) -> bool:
        return any(f.severity is Severity.ERROR for f in self.errors)

    @property
    def has_warnings(self) -> bool:
        return any(f.severity is Severity.WARNING for f in self.errors)


class InvoiceTotals(_WireModel):
    """Subtotal, tax and total derived from line items, rounded to cents."""

    subtotal: float
    tax_amount: float
    total: float


class DateCheck(_WireModel):
    """Outcome of the invoice date business rule."""

    is_valid: bool
    message: str


class InvoiceValidationResult(_WireModel):
    """Validation result for one invoice within a batch."""

    invoice_id: str = Field(description="Invoice identifier")
    report: ValidationReport


class ValidationSummary(_WireModel):
    """Summary statistics for batch validation."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "totalInvoices": 3,
                "validInvoices": 2,
                "invalidInvoices": 1,
                "errorCounts": {
                    "customerName": 1,
                    "lineItems[].quantity": 1
                }
            }
        },
    )

    total_invoices: int = Field(description="Total number of invoices processed")
    valid_invoices: int = Field(description="Number of valid invoices")
    invalid_invoices: int = Field(description="Number of invalid invoices")
    error_counts: Dict[str, int] = Field(default_factory=dict, description="Findings per field")


class BatchValidationReport(_WireModel):
    """Complete batch report with summary and individual results."""

    summary: ValidationSummary
    results: List[InvoiceValidationResult]
    timestamp: str = Field(description="When the batch was validated (ISO format)")
