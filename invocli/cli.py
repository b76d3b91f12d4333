"""
invocli command line.

Commands:
    quote       totals for a single-item invoice given on the command line
    summary     totals for an invoice data file (JSON)
    currencies  supported currency codes
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from invocli.config import InvocliConfig, load_config
from invocli.core.domain import InvoiceData, Party
from invocli.core.math.currency_formatter import (
    CURRENCY_RULES,
    POPULAR_CURRENCIES,
    format_currency,
    is_currency_supported,
)
from invocli.core.math.pricing_engine import InvalidInput
from invocli.invoice.inputs import (
    InvoiceDataError,
    items_from_flags,
    load_invoice_data,
    normalize_rate,
    parse_tax_mode,
)
from invocli.invoice.view import build_invoice_view

logger = logging.getLogger("invocli")

EPILOG = """\
Notes on options:
  --tax: for a tax rate of 20%, enter either '20' or '0.20'.
  --discount: for a discount of 10%, enter '10' or '0.10'.
  --currency: use 3-letter ISO currency codes (e.g. TRY, USD, EUR).
"""


def build_parser(config: InvocliConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invocli",
        description="Compute invoice totals and render them in the invoice currency.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    quote = sub.add_parser(
        "quote",
        help="Totals for a single-item invoice",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    quote.add_argument("--from", dest="sender", default="Sender", help="Sender name")
    quote.add_argument("--to", dest="recipient", default="Recipient", help="Recipient name")
    quote.add_argument("--item", required=True, help="Item description")
    quote.add_argument("--quantity", type=float, required=True, help="Item quantity")
    quote.add_argument("--rate", type=float, required=True, help="Item unit price")
    quote.add_argument("--tax", type=float, default=0.0, help="Tax rate (20 or 0.20 for 20%%)")
    quote.add_argument(
        "--discount", type=float, default=0.0, help="Discount rate (10 or 0.10 for 10%%)"
    )
    quote.add_argument(
        "--tax-type",
        choices=["exclusive", "inclusive"],
        default=config.default_tax_mode.value,
        help="Whether the rate excludes or includes tax",
    )
    quote.add_argument("--currency", default=config.default_currency, help="Currency code")
    quote.add_argument("--invoice-number", help="Invoice number")
    quote.add_argument("--note", help="Note printed under the totals")

    summary = sub.add_parser("summary", help="Totals for an invoice data file")
    summary.add_argument("path", help="Path to the JSON data file")

    sub.add_parser("currencies", help="List supported currency codes")
    return parser


def _print_view(invoice: InvoiceData) -> None:
    view = build_invoice_view(invoice)
    for row in view.as_lines():
        print(row)
    if not is_currency_supported(invoice.currency):
        logger.warning(
            "currency %s is not in the built-in table, using plain formatting",
            invoice.currency,
        )


def _run_quote(args: argparse.Namespace) -> None:
    items = items_from_flags(args.item, args.quantity, args.rate)
    if not items:
        raise InvalidInput("please provide item details via --item, --quantity and --rate")

    try:
        invoice = InvoiceData(
            sender=Party(name=args.sender),
            recipient=Party(name=args.recipient),
            items=tuple(items),
            tax_rate=normalize_rate(args.tax),
            discount_rate=normalize_rate(args.discount),
            tax_mode=parse_tax_mode(args.tax_type),
            currency=args.currency,
            invoice_number=args.invoice_number,
            note=args.note,
        )
    except ValidationError as e:
        raise InvalidInput(f"invoice is invalid: {e}") from e
    _print_view(invoice)


def _run_summary(args: argparse.Namespace, config: InvocliConfig) -> None:
    invoice = load_invoice_data(
        args.path,
        default_currency=config.default_currency,
        default_tax_mode=config.default_tax_mode,
    )
    _print_view(invoice)


def _run_currencies() -> None:
    print("Popular:")
    for label, _ in POPULAR_CURRENCIES:
        print(f"  {label}")
    print("Supported:")
    for code in sorted(CURRENCY_RULES):
        print(f"  {code}  {format_currency(1234.5, code)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = load_config()
    except ValueError as e:
        print(f"invocli: {e}", file=sys.stderr)
        return 2

    args = build_parser(config).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "quote":
            _run_quote(args)
        elif args.command == "summary":
            _run_summary(args, config)
        else:
            _run_currencies()
    except (InvalidInput, InvoiceDataError) as e:
        logger.error("Error generating invoice: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
