from datetime import datetime

import pytest

from invoice_validator.models import Invoice, LineItem

FIXED_NOW = datetime(2024, 6, 15, 14, 30)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def valid_invoice():
    return Invoice(
        invoice_number="INV-001",
        invoice_date="2024-01-15",
        vendor_name="ABC Company",
        customer_name="XYZ Corp",
        line_items=[
            LineItem(description="Laptop", quantity=2, unit_price=1000, line_total=2000),
            LineItem(description="Mouse", quantity=5, unit_price=25, line_total=125),
        ],
        subtotal=2125,
        tax_rate=10,
        tax_amount=212.50,
        total=2337.50,
        currency="USD",
    )
