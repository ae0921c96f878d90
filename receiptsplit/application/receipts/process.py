"""Receipt PDF processing workflow."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from receiptsplit.receipt.pdf_text import extract_page_fragments
from receiptsplit.receipt.receipt_parser import parse_receipt_pages
from receiptsplit.runtime import get_logger, load_receipt_grammar

if TYPE_CHECKING:
    from receiptsplit.domain.receipt import ParsedReceipt
    from receiptsplit.receipt.grammar import ReceiptGrammar

logger = get_logger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to process the receipt. Please make sure it's a valid PDF receipt."


class ReceiptProcessingError(RuntimeError):
    """Raised when a receipt PDF cannot be read."""


def process_receipt_pdf(source: bytes | Path, grammar: ReceiptGrammar | None = None) -> ParsedReceipt:
    """
    Extract the text layer of a receipt PDF and parse it.

    Args:
        source: Raw PDF bytes or a path to the PDF
        grammar: Sentinels/patterns; loaded from project config when None

    Raises:
        ReceiptProcessingError: if the PDF cannot be opened or read. The
            reader's exception is chained as the cause.
    """
    try:
        pages = extract_page_fragments(source)
    except Exception as e:
        logger.error("Error reading receipt PDF: %s", e)
        raise ReceiptProcessingError(GENERIC_FAILURE_MESSAGE) from e

    if grammar is None:
        grammar = load_receipt_grammar()

    receipt = parse_receipt_pages(pages, grammar)
    logger.info(
        "Parsed receipt: %d item(s), total %s, card discount %s",
        len(receipt.items),
        receipt.total,
        receipt.discount,
    )
    return receipt
