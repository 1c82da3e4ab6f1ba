"""
FastAPI application for the Invoice Validator.
Provides REST API endpoints for invoice validation.
"""

import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from invoice_validator import __version__
from invoice_validator.calculations import derive_totals
from invoice_validator.models import BatchValidationReport, Invoice, InvoiceTotals, ValidationReport
from invoice_validator.settings import configure_logging, get_settings
from invoice_validator.validator import InvoiceValidator

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="Invoice Validator",
    description="API for validating invoice data against business and arithmetic rules",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_validator = InvoiceValidator()


def get_validator() -> InvoiceValidator:
    return _validator


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Invoice Validator",
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "validate": "POST /validate",
            "validate_json": "POST /validate-json",
            "totals": "POST /totals",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "Invoice Validator",
        "version": __version__
    }


@app.post("/validate", response_model=ValidationReport)
async def validate(invoice: Invoice, validator: InvoiceValidator = Depends(get_validator)):
    """
    Validate a single invoice.

    Example request body:
    ```json
    {
        "invoiceNumber": "INV-001",
        "invoiceDate": "2024-01-15",
        "vendorName": "ABC Company",
        "customerName": "XYZ Corp",
        "lineItems": [{"description": "Laptop", "quantity": 2, "unitPrice": 1000}],
        "subtotal": 2000,
        "taxRate": 10,
        "taxAmount": 200,
        "total": 2200
    }
    ```
    """
    return validator.validate(invoice)


@app.post("/validate-json", response_model=BatchValidationReport)
async def validate_json(invoices: List[Invoice], validator: InvoiceValidator = Depends(get_validator)):
    """
    Validate a list of invoice JSON objects.

    Returns:
        BatchValidationReport with summary and per-invoice results
    """
    try:
        return validator.validate_batch(invoices)
    except Exception as e:
        logger.exception("Batch validation failed")
        raise HTTPException(
            status_code=500,
            detail=f"Validation error: {str(e)}"
        )


@app.post("/totals", response_model=InvoiceTotals)
async def totals(invoice: Invoice):
    """Derive subtotal, tax and total from the invoice's line items and tax rate."""
    return derive_totals(invoice.line_items, invoice.tax_rate)


@app.get("/api/info")
async def api_info():
    """Get information about the API and its capabilities."""
    return {
        "service": "Invoice Validator API",
        "version": __version__,
        "description": "Validate invoice data against business and arithmetic rules",
        "features": [
            "Required field checks",
            "Invoice date rules",
            "Line item checks",
            "Subtotal, tax and total reconciliation",
            "Multi-invoice batch validation"
        ],
        "validation_rules": {
            "required_fields": 4,
            "date": 2,
            "line_items": 4,
            "calculations": 3
        }
    }


# Error handlers
@app.exception_handler(404)
async def not_found_handler(request, exc):
    """Custom 404 handler."""
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "message": "The requested endpoint does not exist",
            "available_endpoints": [
                "/",
                "/health",
                "/validate",
                "/validate-json",
                "/totals",
                "/api/info",
                "/docs"
            ]
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
