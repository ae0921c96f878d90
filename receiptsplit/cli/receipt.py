"""Receipt command handlers used by the unified CLI."""

import argparse
import datetime
import json
import sys
from pathlib import Path

from receiptsplit.application.receipts import (
    GENERIC_FAILURE_MESSAGE,
    ReceiptProcessingError,
    SplitRequest,
    process_receipt_pdf,
    run_receipt_split,
)
from receiptsplit.domain.receipt import ParsedReceipt
from receiptsplit.runtime import get_logger

logger = get_logger(__name__)


def parse_assignment(text: str) -> tuple[int, tuple[str, ...]]:
    """
    Parse an "--assign" value.

    "0=Ana,Rui" -> (0, ("Ana", "Rui")); item indexes are 0-based.

    Raises:
        ValueError: if the value is malformed.
    """
    index_text, sep, people_text = text.partition("=")
    if not sep:
        raise ValueError(f"Expected IDX=NAME[,NAME], got {text!r}")
    try:
        index = int(index_text.strip())
    except ValueError as e:
        raise ValueError(f"Invalid item index in {text!r}") from e
    people = tuple(person.strip() for person in people_text.split(",") if person.strip())
    if not people:
        raise ValueError(f"No people given in {text!r}")
    return index, people


def parse_assignments(values: list[str]) -> dict[int, tuple[str, ...]]:
    """
    Parse repeated "--assign" values into item index -> people.

    Raises:
        ValueError: if a value is malformed or an item index is given twice.
    """
    assignments: dict[int, tuple[str, ...]] = {}
    for value in values:
        index, people = parse_assignment(value)
        if index in assignments:
            raise ValueError(f"Item {index} assigned more than once")
        assignments[index] = people
    return assignments


def _load_receipt(pdf: str) -> ParsedReceipt:
    receipt_path = Path(pdf)
    if not receipt_path.exists():
        print(f"Error: Receipt file not found: {receipt_path}")
        sys.exit(1)

    try:
        return process_receipt_pdf(receipt_path)
    except ReceiptProcessingError:
        print(GENERIC_FAILURE_MESSAGE)
        sys.exit(1)


def _print_receipt(receipt: ParsedReceipt) -> None:
    print("\n" + "=" * 60)
    print("PARSED RECEIPT")
    print("=" * 60)
    print(f"\nItems ({len(receipt.items)}):")
    for i, item in enumerate(receipt.items):
        print(f"  {i}. {item.description} - €{item.price:.2f}")
    print()
    subtotal = f"€{receipt.subtotal:.2f}" if receipt.subtotal is not None else "UNKNOWN"
    print(f"Subtotal: {subtotal}")
    print(f"Card discount: -€{receipt.discount:.2f}")
    print(f"Total: €{receipt.total:.2f}")
    print("=" * 60)


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse a receipt PDF and print its items and summary."""
    receipt = _load_receipt(args.pdf)

    if args.json:
        print(json.dumps(receipt.to_dict(), indent=2, ensure_ascii=False))
        return

    _print_receipt(receipt)
    if not receipt.items:
        print("No items found. The receipt layout may not be supported.")


def cmd_split(args: argparse.Namespace) -> None:
    """Parse a receipt PDF and split its items among people."""
    try:
        assignments = parse_assignments(args.assign or [])
        txn_date = datetime.date.fromisoformat(args.date) if args.date else datetime.date.today()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    receipt = _load_receipt(args.pdf)
    request = SplitRequest(
        people=tuple(args.person or []),
        assignments=assignments,
        even=frozenset(args.even or []),
        all_even=args.all_even,
    )

    try:
        result = run_receipt_split(receipt.items, receipt.discount, request)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    _print_receipt(receipt)
    if result is None:
        print("Nothing to split: need at least one item and one person.")
        sys.exit(1)

    print("\nSplit results:")
    for person, amount in result.totals.items():
        print(f"  {person}'s share: €{amount:.2f}")
    print(f"Final total: €{result.final_total:.2f}")

    if args.beancount:
        from receiptsplit.receipt.formatter import format_split_transaction

        print()
        print(format_split_transaction(receipt, result, txn_date, payer_account=args.payer))


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for receipt uploads."""
    import uvicorn

    from receiptsplit.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/upload | /split | /health")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
