"""
Command-line interface for the invoice validator.
Provides validate and totals commands.
"""

import argparse
import json
import sys
from typing import List, Optional

from pydantic import ValidationError

from .calculations import derive_totals
from .formatting import format_currency, format_validation_report
from .models import BatchValidationReport, Invoice
from .settings import configure_logging, get_settings
from .validator import validate_invoices


def load_invoices(path: str) -> List[Invoice]:
    """Load one invoice object or a list of them from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = [data]
    return [Invoice.model_validate(item) for item in data]


def validate_command(args):
    """Validate invoices from JSON and print a report."""
    print(f"🔍 Validating invoices from: {args.input}")
    print("-" * 50)

    try:
        invoices = load_invoices(args.input)
    except FileNotFoundError:
        print(f"\n❌ Error: Input file not found: {args.input}")
        return 1
    except json.JSONDecodeError:
        print("\n❌ Error: Invalid JSON in input file")
        return 1
    except ValidationError as e:
        print(f"\n❌ Error: Malformed invoice data:\n{e}")
        return 1

    report = validate_invoices(invoices)
    print_validation_summary(report)

    if args.report:
        with open(args.report, 'w', encoding='utf-8') as f:
            json.dump(
                report.model_dump(mode='json', by_alias=True),
                f,
                indent=get_settings().report_indent,
                ensure_ascii=False
            )
        print(f"\n💾 Full report saved to: {args.report}")

    # Exit with error code if any invalid invoices
    return 1 if report.summary.invalid_invoices > 0 else 0


def totals_command(args):
    """Print subtotal, tax and total derived from each invoice's line items."""
    try:
        invoices = load_invoices(args.input)
    except (FileNotFoundError, json.JSONDecodeError, ValidationError) as e:
        print(f"\n❌ Error: Could not load invoices from {args.input}: {e}")
        return 1

    for invoice in invoices:
        totals = derive_totals(invoice.line_items, invoice.tax_rate)
        print(f"\nInvoice: {invoice.invoice_number or 'UNKNOWN'}")
        for item in invoice.line_items:
            print(
                f"  - {item.description}: {item.quantity:g} × "
                f"{format_currency(item.unit_price, invoice.currency)}"
            )
        print(f"  Subtotal: {format_currency(totals.subtotal, invoice.currency)}")
        print(f"  Tax ({invoice.tax_rate:g}%): {format_currency(totals.tax_amount, invoice.currency)}")
        print(f"  Total: {format_currency(totals.total, invoice.currency)}")

    return 0


def print_validation_summary(report: BatchValidationReport):
    """Print a human-readable validation summary."""
    summary = report.summary

    print(f"\n{'=' * 50}")
    print("📊 VALIDATION SUMMARY")
    print("=" * 50)
    print(f"Total invoices:   {summary.total_invoices}")
    print(f"✅ Valid:         {summary.valid_invoices}")
    print(f"❌ Invalid:       {summary.invalid_invoices}")

    if summary.error_counts:
        print("\n📋 Findings by field:")
        sorted_errors = sorted(
            summary.error_counts.items(),
            key=lambda x: x[1],
            reverse=True
        )
        for field, count in sorted_errors[:10]:
            print(f"  • {field}: {count}")

    for result in report.results:
        if not result.report.is_valid:
            print(f"\n  Invoice: {result.invoice_id}")
            print(format_validation_report(result.report))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invoice-validator",
        description="Invoice Validator - Check invoice data against business rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate and print findings
  invoice-validator validate --input invoices.json

  # Validate and save the JSON report
  invoice-validator validate --input invoices.json --report report.json

  # Show totals derived from line items
  invoice-validator totals --input invoices.json
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    validate_parser = subparsers.add_parser(
        'validate',
        help='Validate invoice JSON against business rules'
    )
    validate_parser.add_argument(
        '--input',
        required=True,
        help='Input JSON file with one invoice or a list of invoices'
    )
    validate_parser.add_argument(
        '--report',
        help='Output JSON file for the validation report'
    )
    validate_parser.set_defaults(func=validate_command)

    totals_parser = subparsers.add_parser(
        'totals',
        help='Derive subtotal, tax and total from line items'
    )
    totals_parser.add_argument(
        '--input',
        required=True,
        help='Input JSON file with one invoice or a list of invoices'
    )
    totals_parser.set_defaults(func=totals_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(get_settings())
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
